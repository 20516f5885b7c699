"""
Principal election for client sub-collections.

Keeps a non-empty collection with exactly one member flagged principal across
insert, update, explicit designation and delete. This is the only place that
writes ``is_principal``.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Generic, List, Optional, TypeVar

from client_registry.engine.collection import CollectionMember, CollectionStore
from client_registry.engine.errors import NotFound
from client_registry.engine.guards import MinimumCardinalityGuard

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=CollectionMember)


class CollectionState(str, Enum):
    EMPTY = "empty"
    ONE_PRINCIPAL = "one_principal"
    # Not reachable through insert/delete/designate; reported for diagnosis.
    NO_PRINCIPAL = "no_principal"
    MULTIPLE_PRINCIPALS = "multiple_principals"


def classify(members: List[CollectionMember]) -> CollectionState:
    if not members:
        return CollectionState.EMPTY
    principals = sum(1 for m in members if m.is_principal)
    if principals == 1:
        return CollectionState.ONE_PRINCIPAL
    if principals == 0:
        return CollectionState.NO_PRINCIPAL
    return CollectionState.MULTIPLE_PRINCIPALS


class PrincipalElectionManager(Generic[M]):
    """State machine over one collection kind, applied per owner.

    Promotion after deleting the principal picks the remaining member with
    the lowest id, i.e. the earliest inserted one.
    """

    def __init__(
        self,
        store: CollectionStore[M],
        cardinality_guard: Optional[MinimumCardinalityGuard] = None,
        repair_on_update: Optional[Callable[[], bool]] = None,
    ):
        self.store = store
        self.cardinality_guard = cardinality_guard or MinimumCardinalityGuard(store)
        self._repair_on_update = repair_on_update or (lambda: False)

    def state(self, owner_id: Any) -> CollectionState:
        return classify(self.store.list_for_owner(owner_id))

    def principal_of(self, owner_id: Any) -> Optional[M]:
        for member in self.store.list_for_owner(owner_id):
            if member.is_principal:
                return member
        return None

    def insert(self, element: M, requested_principal: Optional[bool] = False) -> M:
        owner_id = element.owner_id
        if self.store.count(owner_id) == 0:
            # First member is always principal, whatever was requested.
            element.is_principal = True
        elif requested_principal:
            self._clear_siblings(owner_id)
            element.is_principal = True
        else:
            element.is_principal = False
        return self.store.add(element)

    def update(self, element: M, requested_principal: Optional[bool] = None) -> M:
        if requested_principal is None:
            return self.store.save(element)
        if requested_principal:
            if not element.is_principal:
                self._clear_siblings(element.owner_id, keep=element)
                element.is_principal = True
            return self.store.save(element)

        was_principal = element.is_principal
        element.is_principal = False
        saved = self.store.save(element)
        if was_principal:
            if self._repair_on_update():
                self._promote_survivor(element.owner_id, exclude=element)
            else:
                logger.warning(
                    "%s %s of owner %s unflagged as principal; collection left without principal",
                    self.store.name, element.id, element.owner_id,
                )
        return saved

    def designate(self, element_id: Any) -> M:
        element = self.store.get(element_id)
        if element is None:
            raise NotFound(self.store.name, element_id)
        self._clear_siblings(element.owner_id, keep=element)
        element.is_principal = True
        return self.store.save(element)

    def delete(self, element: M) -> Optional[M]:
        """Remove ``element``; return the member promoted in its place, if any."""
        owner_id = element.owner_id
        self.cardinality_guard.assert_not_last(owner_id, self.store.count(owner_id))
        was_principal = element.is_principal
        self.store.remove(element)
        if not was_principal:
            return None
        return self._promote_survivor(owner_id)

    def _promote_survivor(self, owner_id: Any, exclude: Optional[M] = None) -> Optional[M]:
        remaining = self.store.list_for_owner(owner_id)
        if not remaining:
            return None
        candidates = [m for m in remaining if exclude is None or m.id != exclude.id] or remaining
        survivor = min(candidates, key=lambda m: m.id)
        self._clear_siblings(owner_id, keep=survivor)
        survivor.is_principal = True
        logger.info("Promoted %s %s to principal for owner %s", self.store.name, survivor.id, owner_id)
        return self.store.save(survivor)

    def _clear_siblings(self, owner_id: Any, keep: Optional[M] = None) -> None:
        for member in self.store.list_for_owner(owner_id):
            if keep is not None and member.id == keep.id:
                continue
            if member.is_principal:
                member.is_principal = False
                self.store.save(member)
