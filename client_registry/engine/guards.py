"""Uniqueness and minimum-cardinality guards for client sub-collections."""
from __future__ import annotations

from typing import Any, Optional

from client_registry.engine.collection import CollectionStore
from client_registry.engine.errors import DuplicateValue, MinimumCardinalityViolation


class UniqueFieldGuard:
    """Reject a value already bound to another member of the same owner."""

    def __init__(self, store: CollectionStore):
        self.store = store

    def assert_not_duplicate(self, owner_id: Any, key: str, exclude_element_id: Optional[Any] = None) -> None:
        existing = self.store.find_by_key(owner_id, key)
        if existing is None:
            return
        if exclude_element_id is not None and existing.id == exclude_element_id:
            return
        raise DuplicateValue(self.store.name, owner_id, key)


class MinimumCardinalityGuard:
    """Block removal of the last member of a collection."""

    def __init__(self, store: CollectionStore):
        self.store = store

    def assert_not_last(self, owner_id: Any, current_count: int) -> None:
        if current_count <= 1:
            raise MinimumCardinalityViolation(self.store.name, owner_id)
