"""
Failure taxonomy for the client registry engine.

Every error carries a stable ``kind`` so the presentation boundary can map it
without inspecting messages. None of these are retried internally.
"""
from __future__ import annotations

from typing import Any, Optional


class RegistryError(Exception):
    kind = "registry_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidChecksum(RegistryError):
    kind = "invalid_checksum"

    WRONG_LENGTH = "wrong_length"
    REPEATED_DIGITS = "repeated_digits"
    CHECK_DIGIT_MISMATCH = "check_digit_mismatch"

    _DESCRIPTIONS = {
        WRONG_LENGTH: "must contain 11 digits",
        REPEATED_DIGITS: "digits cannot all be the same",
        CHECK_DIGIT_MISMATCH: "check digits do not match",
    }

    def __init__(self, value: Optional[str], reason: str):
        self.value = value
        self.reason = reason
        detail = self._DESCRIPTIONS.get(reason, reason)
        super().__init__(f"Invalid tax id '{value}': {detail}")


class DuplicateTaxId(RegistryError):
    kind = "duplicate_tax_id"

    def __init__(self, tax_id: Optional[str], message: Optional[str] = None):
        self.tax_id = tax_id
        super().__init__(message or f"Tax id {tax_id} is already registered")


class DuplicateValue(RegistryError):
    kind = "duplicate_value"

    def __init__(self, collection: str, owner_id: Any, key: str, message: Optional[str] = None):
        self.collection = collection
        self.owner_id = owner_id
        self.key = key
        super().__init__(message or f"{collection.capitalize()} '{key}' already registered for client {owner_id}")


class MinimumCardinalityViolation(RegistryError):
    kind = "minimum_cardinality"

    def __init__(self, collection: str, owner_id: Any = None):
        self.collection = collection
        self.owner_id = owner_id
        super().__init__(f"Client must have at least one {collection}")


class NotFound(RegistryError):
    kind = "not_found"

    def __init__(self, resource: str, identifier: Any):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource.capitalize()} {identifier} not found")


class StorageUnavailable(RegistryError):
    """Opaque wrapper for transient storage failures surfaced by the persistence layer."""

    kind = "storage_unavailable"

    def __init__(self, message: str = "Storage is unavailable"):
        super().__init__(message)
