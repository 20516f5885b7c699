"""
Client registry service: one unit of work per mutation.

Builds the SQLAlchemy stores, hands them to the aggregate coordinator and
owns commit/rollback. Storage failures are surfaced as registry errors so the
API layer only has one taxonomy to translate.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from client_registry.db import models, schemas
from client_registry.db.repositories import clients as clients_repo
from client_registry.db.repositories.clients import ClientStore
from client_registry.db.repositories.contacts import EmailStore, PhoneStore
from client_registry.engine import (
    ClientAggregateCoordinator,
    DuplicateTaxId,
    DuplicateValue,
    NotFound,
    RegistryError,
    StorageUnavailable,
    format_tax_id,
    normalize_tax_id,
)
from client_registry.utils.feature_flags import principal_repair_on_update_enabled
from client_registry.utils.formatting import normalize_phone, normalize_postal_code

logger = logging.getLogger(__name__)

_RACE_MESSAGE = "Conflicting value was written concurrently; retry the request"

# Table names appear in both SQLite and PostgreSQL unique-violation messages.
_CONFLICT_COLLECTIONS = (
    ("phone_numbers", "phone"),
    ("email_addresses", "email"),
)


def _conflict_from_integrity_error(exc: IntegrityError, tax_id: Optional[str] = None) -> RegistryError:
    """Map a unique-constraint violation to the registry error for that constraint."""
    detail = str(exc.orig)
    if "tax_id" in detail:
        digits = normalize_tax_id(tax_id) if tax_id else None
        return DuplicateTaxId(format_tax_id(digits) if digits else None, message=_RACE_MESSAGE)
    for table, collection in _CONFLICT_COLLECTIONS:
        if table in detail:
            return DuplicateValue(collection, None, "", message=_RACE_MESSAGE)
    return DuplicateValue("record", None, "", message=_RACE_MESSAGE)


class ClientRegistryService:
    """Service class for client, address, phone and email operations."""

    def __init__(self, db: Session):
        self.db = db
        self.phone_store = PhoneStore(db)
        self.email_store = EmailStore(db)
        self.coordinator = ClientAggregateCoordinator(
            ClientStore(db),
            self.phone_store,
            self.email_store,
            repair_on_update=principal_repair_on_update_enabled,
        )

    @contextmanager
    def _storage_errors(self, operation: str, tax_id: Optional[str] = None):
        """Translate SQLAlchemy failures raised inside the block into registry errors."""
        try:
            yield
        except IntegrityError as exc:
            # A concurrent writer won the race past the guards.
            self.db.rollback()
            logger.warning("%s hit a storage constraint: %s", operation, exc.orig)
            raise _conflict_from_integrity_error(exc, tax_id) from exc
        except (DBAPIError, SQLAlchemyError) as exc:
            self.db.rollback()
            logger.error("%s failed on storage: %s", operation, exc)
            raise StorageUnavailable() from exc

    @contextmanager
    def _unit_of_work(self, operation: str, tax_id: Optional[str] = None):
        with self._storage_errors(operation, tax_id):
            try:
                yield
                self.db.commit()
            except RegistryError as exc:
                self.db.rollback()
                logger.warning("%s rejected (%s): %s", operation, exc.kind, exc.message)
                raise

    def _refresh(self, instance, operation: str):
        with self._storage_errors(operation):
            self.db.refresh(instance)
        return instance

    # ==================== CLIENTS ====================

    def create_client(self, data: schemas.ClientCreate) -> models.Client:
        logger.info("Creating client '%s'", data.name)
        client = models.Client(name=data.name, tax_id=data.tax_id)
        if data.address is not None:
            client.address = self._build_address(data.address)
        with self._unit_of_work("create_client", tax_id=data.tax_id):
            self.coordinator.create_client(
                client,
                [self._build_phone(p) for p in data.phones],
                [self._build_email(e) for e in data.emails],
            )
        return self._refresh(client, "create_client")

    def get_client(self, client_id: int) -> models.Client:
        with self._storage_errors("get_client"):
            client = clients_repo.get_client(self.db, client_id)
        if client is None:
            raise NotFound("client", client_id)
        return client

    def get_client_by_tax_id(self, tax_id: str) -> models.Client:
        """Accepts the tax id with or without its display mask."""
        with self._storage_errors("get_client_by_tax_id"):
            client = clients_repo.get_client_by_tax_id(self.db, normalize_tax_id(tax_id))
        if client is None:
            raise NotFound("client with tax id", format_tax_id(tax_id))
        return client

    def list_clients(self, skip: int = 0, limit: int = 100) -> List[models.Client]:
        with self._storage_errors("list_clients"):
            return clients_repo.get_clients(self.db, skip=skip, limit=limit)

    def update_client(self, client_id: int, data: schemas.ClientUpdate) -> models.Client:
        logger.info("Updating client %s", client_id)
        with self._unit_of_work("update_client", tax_id=data.tax_id):
            client = self.coordinator.get_client_or_fail(client_id, lock=True)
            if data.tax_id is not None and normalize_tax_id(data.tax_id) != client.tax_id:
                self.coordinator.update_tax_id(client_id, data.tax_id)
            if data.name is not None:
                client.name = data.name
            if data.address is not None:
                self._apply_address(client, data.address)
        return self._refresh(client, "update_client")

    def replace_client(self, client_id: int, data: schemas.ClientReplace) -> models.Client:
        logger.info("Replacing client %s", client_id)
        with self._unit_of_work("replace_client", tax_id=data.tax_id):
            client = self.coordinator.update_tax_id(client_id, data.tax_id)
            client.name = data.name
            if data.address is not None:
                self._apply_address(client, data.address)
            self.coordinator.replace_contacts(
                client_id,
                phones=[self._build_phone(p) for p in data.phones],
                emails=[self._build_email(e) for e in data.emails],
            )
        # Collections were rewritten underneath the loaded relationships.
        self.db.expire(client)
        return self._refresh(client, "replace_client")

    def delete_client(self, client_id: int) -> None:
        logger.info("Deleting client %s", client_id)
        with self._unit_of_work("delete_client"):
            self.coordinator.delete_client(client_id)

    # ==================== ADDRESS ====================

    def get_address(self, client_id: int) -> models.Address:
        self.get_client(client_id)
        with self._storage_errors("get_address"):
            address = clients_repo.get_address(self.db, client_id)
        if address is None:
            raise NotFound("address of client", client_id)
        return address

    def set_address(self, client_id: int, data: schemas.AddressIn) -> models.Address:
        with self._unit_of_work("set_address"):
            client = self.coordinator.get_client_or_fail(client_id, lock=True)
            address = self._apply_address(client, data)
        return self._refresh(address, "set_address")

    def delete_address(self, client_id: int) -> None:
        with self._unit_of_work("delete_address"):
            self.coordinator.get_client_or_fail(client_id, lock=True)
            address = clients_repo.get_address(self.db, client_id)
            if address is None:
                raise NotFound("address of client", client_id)
            self.db.delete(address)

    # ==================== PHONES ====================

    def add_phone(self, client_id: int, data: schemas.PhoneCreate) -> models.PhoneNumber:
        logger.info("Adding phone to client %s", client_id)
        with self._unit_of_work("add_phone"):
            phone = self.coordinator.add_phone(client_id, self._build_phone(data), data.principal)
        return self._refresh(phone, "add_phone")

    def get_phone(self, phone_id: int) -> models.PhoneNumber:
        with self._storage_errors("get_phone"):
            return self.coordinator.phones.get_or_fail(phone_id)

    def list_phones(self, client_id: int) -> List[models.PhoneNumber]:
        self.get_client(client_id)
        with self._storage_errors("list_phones"):
            return self.phone_store.list_for_owner(client_id)

    def count_phones(self, client_id: int) -> int:
        with self._storage_errors("count_phones"):
            return self.phone_store.count(client_id)

    def get_principal_phone(self, client_id: int) -> Optional[models.PhoneNumber]:
        self.get_client(client_id)
        with self._storage_errors("get_principal_phone"):
            return self.phone_store.principal_for_owner(client_id)

    def update_phone(self, phone_id: int, data: schemas.PhoneUpdate) -> models.PhoneNumber:
        logger.info("Updating phone %s", phone_id)
        new_digits = normalize_phone(data.number) if data.number is not None else None

        def apply(phone: models.PhoneNumber) -> None:
            if new_digits is not None:
                phone.digits = new_digits
            if data.kind is not None:
                phone.kind = data.kind

        with self._unit_of_work("update_phone"):
            phone = self.coordinator.update_phone(phone_id, new_digits, apply, data.principal)
        return self._refresh(phone, "update_phone")

    def delete_phone(self, phone_id: int) -> Optional[models.PhoneNumber]:
        """Delete a phone; return the phone promoted to principal, if any."""
        logger.info("Deleting phone %s", phone_id)
        with self._unit_of_work("delete_phone"):
            promoted = self.coordinator.delete_phone(phone_id)
        return promoted

    def designate_principal_phone(self, phone_id: int) -> models.PhoneNumber:
        logger.info("Designating phone %s as principal", phone_id)
        with self._unit_of_work("designate_principal_phone"):
            phone = self.coordinator.designate_principal_phone(phone_id)
        return self._refresh(phone, "designate_principal_phone")

    # ==================== EMAILS ====================

    def add_email(self, client_id: int, data: schemas.EmailCreate) -> models.EmailAddress:
        logger.info("Adding email to client %s", client_id)
        with self._unit_of_work("add_email"):
            email = self.coordinator.add_email(client_id, self._build_email(data), data.principal)
        return self._refresh(email, "add_email")

    def get_email(self, email_id: int) -> models.EmailAddress:
        with self._storage_errors("get_email"):
            return self.coordinator.emails.get_or_fail(email_id)

    def list_emails(self, client_id: int) -> List[models.EmailAddress]:
        self.get_client(client_id)
        with self._storage_errors("list_emails"):
            return self.email_store.list_for_owner(client_id)

    def count_emails(self, client_id: int) -> int:
        with self._storage_errors("count_emails"):
            return self.email_store.count(client_id)

    def get_principal_email(self, client_id: int) -> Optional[models.EmailAddress]:
        self.get_client(client_id)
        with self._storage_errors("get_principal_email"):
            return self.email_store.principal_for_owner(client_id)

    def update_email(self, email_id: int, data: schemas.EmailUpdate) -> models.EmailAddress:
        logger.info("Updating email %s", email_id)
        new_key = self.email_store.normalize_key(data.address) if data.address is not None else None

        def apply(email: models.EmailAddress) -> None:
            if data.address is not None:
                email.address = data.address.strip()

        with self._unit_of_work("update_email"):
            email = self.coordinator.update_email(email_id, new_key, apply, data.principal)
        return self._refresh(email, "update_email")

    def delete_email(self, email_id: int) -> Optional[models.EmailAddress]:
        """Delete an email; return the email promoted to principal, if any."""
        logger.info("Deleting email %s", email_id)
        with self._unit_of_work("delete_email"):
            promoted = self.coordinator.delete_email(email_id)
        return promoted

    def designate_principal_email(self, email_id: int) -> models.EmailAddress:
        logger.info("Designating email %s as principal", email_id)
        with self._unit_of_work("designate_principal_email"):
            email = self.coordinator.designate_principal_email(email_id)
        return self._refresh(email, "designate_principal_email")

    # ==================== HELPERS ====================

    @staticmethod
    def _build_phone(data: schemas.PhoneCreate) -> models.PhoneNumber:
        return models.PhoneNumber(digits=normalize_phone(data.number), kind=data.kind, is_principal=data.principal)

    @staticmethod
    def _build_email(data: schemas.EmailCreate) -> models.EmailAddress:
        return models.EmailAddress(address=data.address.strip(), is_principal=data.principal)

    @staticmethod
    def _build_address(data: schemas.AddressIn) -> models.Address:
        return models.Address(
            postal_code=normalize_postal_code(data.postal_code),
            street=data.street,
            complement=data.complement,
            district=data.district,
            city=data.city,
            state=data.state.upper(),
        )

    def _apply_address(self, client: models.Client, data: schemas.AddressIn) -> models.Address:
        address = clients_repo.get_address(self.db, client.id)
        if address is None:
            address = self._build_address(data)
            address.client_id = client.id
            self.db.add(address)
        else:
            address.postal_code = normalize_postal_code(data.postal_code)
            address.street = data.street
            address.complement = data.complement
            address.district = data.district
            address.city = data.city
            address.state = data.state.upper()
        self.db.flush()
        return address
