"""
Business-rule engine for client records.

Pure logic: tax id checksum, per-client uniqueness and minimum-cardinality
guards, and principal election. Persistence is reached only through the store
protocols in :mod:`client_registry.engine.collection` and
:mod:`client_registry.engine.coordinator`.
"""

from .errors import (
    RegistryError,
    InvalidChecksum,
    DuplicateTaxId,
    DuplicateValue,
    MinimumCardinalityViolation,
    NotFound,
    StorageUnavailable,
)
from .checksum import normalize_tax_id, format_tax_id, is_valid_tax_id, validate_tax_id_or_fail
from .guards import UniqueFieldGuard, MinimumCardinalityGuard
from .principal import CollectionState, PrincipalElectionManager
from .coordinator import ClientAggregateCoordinator, ContactCollection

__all__ = [
    "RegistryError",
    "InvalidChecksum",
    "DuplicateTaxId",
    "DuplicateValue",
    "MinimumCardinalityViolation",
    "NotFound",
    "StorageUnavailable",
    "normalize_tax_id",
    "format_tax_id",
    "is_valid_tax_id",
    "validate_tax_id_or_fail",
    "UniqueFieldGuard",
    "MinimumCardinalityGuard",
    "CollectionState",
    "PrincipalElectionManager",
    "ClientAggregateCoordinator",
    "ContactCollection",
]
