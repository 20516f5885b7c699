import pytest
from sqlalchemy.exc import IntegrityError

from client_registry.db import models
from client_registry.db.repositories import clients as clients_repo
from client_registry.db.repositories.clients import ClientStore
from client_registry.db.repositories.contacts import EmailStore, PhoneStore


@pytest.fixture
def client(db_session):
    c = models.Client(name="Maria Silva", tax_id="52998224725")
    ClientStore(db_session).add(c)
    return c


def _phone(client_id, digits, principal=False):
    return models.PhoneNumber(client_id=client_id, digits=digits, is_principal=principal)


def test_list_for_owner_is_ordered_by_id(db_session, client):
    store = PhoneStore(db_session)
    added = [store.add(_phone(client.id, d)) for d in ("3333333333", "1111111111", "2222222222")]
    assert [p.id for p in store.list_for_owner(client.id)] == sorted(p.id for p in added)
    assert store.count(client.id) == 3
    assert store.count(client.id + 1) == 0


def test_phone_lookup_accepts_mask(db_session, client):
    store = PhoneStore(db_session)
    phone = store.add(_phone(client.id, "11987654321"))
    assert store.find_by_key(client.id, "(11) 98765-4321") is phone
    assert store.find_by_key(client.id + 1, "11987654321") is None


def test_email_lookup_is_case_insensitive(db_session, client):
    store = EmailStore(db_session)
    email = store.add(models.EmailAddress(client_id=client.id, address="Maria@Example.com"))
    assert email.address_normalized == "maria@example.com"
    assert store.find_by_key(client.id, " MARIA@example.COM ") is email


def test_principal_for_owner(db_session, client):
    store = PhoneStore(db_session)
    store.add(_phone(client.id, "1111111111"))
    principal = store.add(_phone(client.id, "2222222222", principal=True))
    assert store.principal_for_owner(client.id) is principal


def test_database_rejects_second_principal(db_session, client):
    store = PhoneStore(db_session)
    store.add(_phone(client.id, "1111111111", principal=True))
    with pytest.raises(IntegrityError):
        store.add(_phone(client.id, "2222222222", principal=True))
    db_session.rollback()


def test_database_rejects_duplicate_email_per_client(db_session, client):
    store = EmailStore(db_session)
    store.add(models.EmailAddress(client_id=client.id, address="a@example.com"))
    with pytest.raises(IntegrityError):
        store.add(models.EmailAddress(client_id=client.id, address="A@example.com"))
    db_session.rollback()


def test_client_store_lock_and_lookup(db_session, client):
    store = ClientStore(db_session)
    assert store.lock(client.id) is client
    assert store.find_by_tax_id("52998224725") is client
    assert store.find_by_tax_id("11144477735") is None
    assert clients_repo.count_clients(db_session) == 1


def test_duplicate_tax_id_rejected_by_database(db_session, client):
    with pytest.raises(IntegrityError):
        ClientStore(db_session).add(models.Client(name="Other", tax_id="52998224725"))
    db_session.rollback()


def test_key_lookup_works_on_every_store_instance(db_session, client):
    PhoneStore(db_session).add(_phone(client.id, "11987654321"))
    EmailStore(db_session).add(models.EmailAddress(client_id=client.id, address="a@example.com"))

    assert PhoneStore(db_session).find_by_key(client.id, "11987654321").digits == "11987654321"
    assert EmailStore(db_session).find_by_key(client.id, "A@EXAMPLE.COM").address == "a@example.com"
    assert PhoneStore(db_session).find_by_key(client.id, "1134567890") is None
