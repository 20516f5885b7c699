"""
Phone and email stores.

Both collections share one implementation parameterized by the model and the
column that holds the comparison key. Every write flushes immediately so the
per-client unique indexes see changes in the order the engine makes them.
"""
from __future__ import annotations

from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from client_registry.db import models
from client_registry.utils.formatting import normalize_email, normalize_phone


class ContactStore:
    name = "contact"
    model = None
    key_field = None
    _normalizer: Callable[[str], str] = staticmethod(lambda raw: raw)

    def __init__(self, db: Session):
        self.db = db

    def normalize_key(self, raw: str) -> str:
        return self._normalizer(raw)

    def get(self, element_id):
        return self.db.query(self.model).filter(self.model.id == element_id).first()

    def find_by_key(self, owner_id, key: str):
        return (
            self.db.query(self.model)
            .filter(self.model.client_id == owner_id, getattr(self.model, self.key_field) == self.normalize_key(key))
            .first()
        )

    def count(self, owner_id) -> int:
        return self.db.query(self.model).filter(self.model.client_id == owner_id).count()

    def list_for_owner(self, owner_id) -> List:
        return (
            self.db.query(self.model)
            .filter(self.model.client_id == owner_id)
            .order_by(self.model.id.asc())
            .all()
        )

    def principal_for_owner(self, owner_id) -> Optional[object]:
        return (
            self.db.query(self.model)
            .filter(self.model.client_id == owner_id, self.model.is_principal.is_(True))
            .first()
        )

    def add(self, element):
        self.db.add(element)
        self.db.flush()
        return element

    def save(self, element):
        self.db.add(element)
        self.db.flush()
        return element

    def remove(self, element) -> None:
        self.db.delete(element)
        self.db.flush()


class PhoneStore(ContactStore):
    name = "phone"
    model = models.PhoneNumber
    key_field = "digits"
    _normalizer = staticmethod(normalize_phone)


class EmailStore(ContactStore):
    name = "email"
    model = models.EmailAddress
    key_field = "address_normalized"
    _normalizer = staticmethod(normalize_email)
