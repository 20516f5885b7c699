"""In-memory stores satisfying the engine protocols, for tests that need no database."""
from dataclasses import dataclass
from itertools import count
from typing import Optional

import pytest

from client_registry.engine import ClientAggregateCoordinator


@dataclass
class FakeMember:
    owner_id: Optional[int]
    value: str
    is_principal: Optional[bool] = False
    id: Optional[int] = None

    @property
    def comparison_key(self) -> str:
        return self.value.lower()


@dataclass
class FakeClient:
    name: str
    tax_id: str
    id: Optional[int] = None


class FakeStore:
    def __init__(self, name: str):
        self.name = name
        self.items = {}
        self._ids = count(1)
        self.saves = 0

    def normalize_key(self, raw: str) -> str:
        return raw.lower()

    def get(self, element_id):
        return self.items.get(element_id)

    def find_by_key(self, owner_id, key):
        wanted = self.normalize_key(key)
        for item in self.items.values():
            if item.owner_id == owner_id and item.comparison_key == wanted:
                return item
        return None

    def count(self, owner_id):
        return sum(1 for item in self.items.values() if item.owner_id == owner_id)

    def list_for_owner(self, owner_id):
        return sorted((i for i in self.items.values() if i.owner_id == owner_id), key=lambda i: i.id)

    def add(self, element):
        element.id = next(self._ids)
        self.items[element.id] = element
        return element

    def save(self, element):
        self.saves += 1
        return element

    def remove(self, element):
        del self.items[element.id]

    def principals(self, owner_id):
        return [i for i in self.list_for_owner(owner_id) if i.is_principal]


class FakeClientStore:
    def __init__(self):
        self.items = {}
        self._ids = count(1)
        self.locked = []

    def get(self, client_id):
        return self.items.get(client_id)

    def lock(self, client_id):
        self.locked.append(client_id)
        return self.items.get(client_id)

    def find_by_tax_id(self, tax_id):
        for client in self.items.values():
            if client.tax_id == tax_id:
                return client
        return None

    def add(self, client):
        client.id = next(self._ids)
        self.items[client.id] = client
        return client

    def save(self, client):
        return client

    def remove(self, client):
        del self.items[client.id]


@pytest.fixture
def phone_store():
    return FakeStore("phone")


@pytest.fixture
def email_store():
    return FakeStore("email")


@pytest.fixture
def client_store():
    return FakeClientStore()


@pytest.fixture
def member():
    def _member(value, owner_id=1, principal=False):
        return FakeMember(owner_id=owner_id, value=value, is_principal=principal)

    return _member


@pytest.fixture
def new_client():
    def _client(tax_id="529.982.247-25", name="Maria Silva"):
        return FakeClient(name=name, tax_id=tax_id)

    return _client


@pytest.fixture
def coordinator(client_store, phone_store, email_store):
    return ClientAggregateCoordinator(client_store, phone_store, email_store)
