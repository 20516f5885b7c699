"""
Aggregate-level orchestration for a client and its contact collections.

The coordinator applies the tax id rules to the client itself and routes
every phone/email mutation through the same generic guards and principal
election manager. It never commits: the caller owns the unit of work.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterable, List, Optional, Protocol, Sequence, TypeVar

from client_registry.engine.checksum import format_tax_id, validate_tax_id_or_fail
from client_registry.engine.collection import CollectionMember, CollectionStore
from client_registry.engine.errors import DuplicateTaxId, MinimumCardinalityViolation, NotFound
from client_registry.engine.guards import MinimumCardinalityGuard, UniqueFieldGuard
from client_registry.engine.principal import PrincipalElectionManager

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=CollectionMember)


class ClientRecord(Protocol):
    id: Any
    tax_id: str


class ClientStore(Protocol):
    def get(self, client_id: Any) -> Optional[ClientRecord]: ...

    def lock(self, client_id: Any) -> Optional[ClientRecord]:
        """Load the client and hold it for the rest of the unit of work."""
        ...

    def find_by_tax_id(self, tax_id: str) -> Optional[ClientRecord]: ...

    def add(self, client: ClientRecord) -> ClientRecord: ...

    def save(self, client: ClientRecord) -> ClientRecord: ...

    def remove(self, client: ClientRecord) -> None: ...


class ContactCollection(Generic[M]):
    """Guards and principal manager bound to one collection store."""

    def __init__(self, store: CollectionStore[M], repair_on_update: Optional[Callable[[], bool]] = None):
        self.store = store
        self.unique_guard = UniqueFieldGuard(store)
        self.cardinality_guard = MinimumCardinalityGuard(store)
        self.principals: PrincipalElectionManager[M] = PrincipalElectionManager(
            store, self.cardinality_guard, repair_on_update
        )

    @property
    def name(self) -> str:
        return self.store.name

    def get_or_fail(self, element_id: Any) -> M:
        element = self.store.get(element_id)
        if element is None:
            raise NotFound(self.name, element_id)
        return element

    def insert(self, owner_id: Any, element: M, requested_principal: Optional[bool]) -> M:
        element.owner_id = owner_id
        self.unique_guard.assert_not_duplicate(owner_id, element.comparison_key)
        return self.principals.insert(element, requested_principal)


class ClientAggregateCoordinator:
    def __init__(
        self,
        clients: ClientStore,
        phones: CollectionStore,
        emails: CollectionStore,
        repair_on_update: Optional[Callable[[], bool]] = None,
    ):
        self.clients = clients
        self.phones: ContactCollection = ContactCollection(phones, repair_on_update)
        self.emails: ContactCollection = ContactCollection(emails, repair_on_update)

    # Clients
    def get_client_or_fail(self, client_id: Any, lock: bool = False) -> ClientRecord:
        client = self.clients.lock(client_id) if lock else self.clients.get(client_id)
        if client is None:
            raise NotFound("client", client_id)
        return client

    def create_client(self, client: ClientRecord, phones: Sequence[Any], emails: Sequence[Any]) -> ClientRecord:
        """Validate and persist a new client with its initial contacts.

        Each contact's ``is_principal`` is read as the caller's request; the
        election rules decide the final flags (the first of each collection is
        always principal).
        """
        client.tax_id = self._checked_tax_id(client.tax_id, client_id=None)
        if not phones:
            raise MinimumCardinalityViolation(self.phones.name)
        if not emails:
            raise MinimumCardinalityViolation(self.emails.name)

        self.clients.add(client)
        self._insert_all(self.phones, client.id, phones)
        self._insert_all(self.emails, client.id, emails)
        logger.info("Client %s created with %d phone(s) and %d email(s)", client.id, len(phones), len(emails))
        return client

    def update_tax_id(self, client_id: Any, raw_tax_id: str) -> ClientRecord:
        client = self.get_client_or_fail(client_id, lock=True)
        client.tax_id = self._checked_tax_id(raw_tax_id, client_id=client.id)
        return self.clients.save(client)

    def replace_contacts(
        self,
        client_id: Any,
        phones: Optional[Sequence[Any]] = None,
        emails: Optional[Sequence[Any]] = None,
    ) -> ClientRecord:
        """Swap whole collections; ``None`` leaves a collection untouched."""
        client = self.get_client_or_fail(client_id, lock=True)
        for collection, elements in ((self.phones, phones), (self.emails, emails)):
            if elements is None:
                continue
            if not elements:
                raise MinimumCardinalityViolation(collection.name, client.id)
            for existing in collection.store.list_for_owner(client.id):
                collection.store.remove(existing)
            self._insert_all(collection, client.id, elements)
        return client

    def delete_client(self, client_id: Any) -> None:
        client = self.get_client_or_fail(client_id, lock=True)
        self.clients.remove(client)

    # Phones
    def add_phone(self, client_id: Any, phone: Any, requested_principal: Optional[bool] = False):
        return self._add_member(self.phones, client_id, phone, requested_principal)

    def update_phone(
        self,
        phone_id: Any,
        new_key: Optional[str] = None,
        apply: Optional[Callable[[Any], None]] = None,
        requested_principal: Optional[bool] = None,
    ):
        return self._update_member(self.phones, phone_id, new_key, apply, requested_principal)

    def delete_phone(self, phone_id: Any):
        return self._delete_member(self.phones, phone_id)

    def designate_principal_phone(self, phone_id: Any):
        return self._designate_member(self.phones, phone_id)

    # Emails
    def add_email(self, client_id: Any, email: Any, requested_principal: Optional[bool] = False):
        return self._add_member(self.emails, client_id, email, requested_principal)

    def update_email(
        self,
        email_id: Any,
        new_key: Optional[str] = None,
        apply: Optional[Callable[[Any], None]] = None,
        requested_principal: Optional[bool] = None,
    ):
        return self._update_member(self.emails, email_id, new_key, apply, requested_principal)

    def delete_email(self, email_id: Any):
        return self._delete_member(self.emails, email_id)

    def designate_principal_email(self, email_id: Any):
        return self._designate_member(self.emails, email_id)

    # Generic collection operations
    def _checked_tax_id(self, raw: str, client_id: Any) -> str:
        digits = validate_tax_id_or_fail(raw)
        existing = self.clients.find_by_tax_id(digits)
        if existing is not None and (client_id is None or existing.id != client_id):
            raise DuplicateTaxId(format_tax_id(digits))
        return digits

    def _insert_all(self, collection: ContactCollection, owner_id: Any, elements: Iterable[Any]) -> List[Any]:
        return [collection.insert(owner_id, element, bool(element.is_principal)) for element in elements]

    def _add_member(self, collection: ContactCollection, client_id: Any, element: Any, requested_principal):
        client = self.get_client_or_fail(client_id, lock=True)
        return collection.insert(client.id, element, requested_principal)

    def _update_member(self, collection: ContactCollection, element_id, new_key, apply, requested_principal):
        element = collection.get_or_fail(element_id)
        self.get_client_or_fail(element.owner_id, lock=True)
        if new_key is not None and new_key != element.comparison_key:
            collection.unique_guard.assert_not_duplicate(element.owner_id, new_key, exclude_element_id=element.id)
        if apply is not None:
            apply(element)
        return collection.principals.update(element, requested_principal)

    def _delete_member(self, collection: ContactCollection, element_id):
        element = collection.get_or_fail(element_id)
        self.get_client_or_fail(element.owner_id, lock=True)
        return collection.principals.delete(element)

    def _designate_member(self, collection: ContactCollection, element_id):
        element = collection.get_or_fail(element_id)
        self.get_client_or_fail(element.owner_id, lock=True)
        return collection.principals.designate(element.id)
