"""
Capabilities the engine needs from a client's sub-collection.

Phones and emails both satisfy :class:`CollectionMember`; their persistence
adapters satisfy :class:`CollectionStore`. The guards and the principal
election manager only ever talk to these protocols.
"""
from __future__ import annotations

from typing import Any, List, Optional, Protocol, TypeVar


class CollectionMember(Protocol):
    id: Any
    owner_id: Any
    is_principal: bool

    @property
    def comparison_key(self) -> str: ...


M = TypeVar("M", bound=CollectionMember)


class CollectionStore(Protocol[M]):
    """Persistence operations for one kind of sub-collection.

    All calls made during one mutation must share the same unit of work.
    ``list_for_owner`` must return members in ascending id order.
    """

    name: str

    def normalize_key(self, raw: str) -> str: ...

    def get(self, element_id: Any) -> Optional[M]: ...

    def find_by_key(self, owner_id: Any, key: str) -> Optional[M]: ...

    def count(self, owner_id: Any) -> int: ...

    def list_for_owner(self, owner_id: Any) -> List[M]: ...

    def add(self, element: M) -> M: ...

    def save(self, element: M) -> M: ...

    def remove(self, element: M) -> None: ...
