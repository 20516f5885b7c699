import logging
import random

import pytest

from client_registry.engine import (
    CollectionState,
    MinimumCardinalityViolation,
    NotFound,
    PrincipalElectionManager,
)


@pytest.fixture
def manager(phone_store):
    return PrincipalElectionManager(phone_store)


@pytest.fixture
def repairing_manager(phone_store):
    return PrincipalElectionManager(phone_store, repair_on_update=lambda: True)


def test_first_insert_is_forced_principal(manager, phone_store, member):
    first = manager.insert(member("1111"), requested_principal=False)
    assert first.is_principal is True
    assert manager.state(1) == CollectionState.ONE_PRINCIPAL


def test_later_insert_without_request_is_not_principal(manager, phone_store, member):
    first = manager.insert(member("1111"))
    second = manager.insert(member("2222"))
    assert first.is_principal is True
    assert second.is_principal is False


def test_insert_requested_principal_clears_siblings(manager, phone_store, member):
    first = manager.insert(member("1111"))
    manager.insert(member("2222"))
    third = manager.insert(member("3333"), requested_principal=True)

    assert first.is_principal is False
    assert phone_store.principals(1) == [third]


def test_principal_flag_on_element_is_ignored_without_request(manager, phone_store, member):
    manager.insert(member("1111"))
    second = manager.insert(member("2222", principal=True), requested_principal=False)
    assert second.is_principal is False
    assert len(phone_store.principals(1)) == 1


def test_collections_are_independent_per_owner(manager, phone_store, member):
    manager.insert(member("1111", owner_id=1))
    other = manager.insert(member("1111", owner_id=2))
    assert other.is_principal is True
    assert len(phone_store.principals(1)) == 1


def test_update_true_moves_principal(manager, phone_store, member):
    first = manager.insert(member("1111"))
    second = manager.insert(member("2222"))

    manager.update(second, requested_principal=True)

    assert first.is_principal is False
    assert phone_store.principals(1) == [second]


def test_update_true_on_current_principal_is_noop(manager, phone_store, member):
    first = manager.insert(member("1111"))
    manager.insert(member("2222"))
    manager.update(first, requested_principal=True)
    assert phone_store.principals(1) == [first]


def test_update_none_leaves_flag_untouched(manager, phone_store, member):
    first = manager.insert(member("1111"))
    second = manager.insert(member("2222"))
    saves = phone_store.saves

    manager.update(second, requested_principal=None)

    assert phone_store.saves == saves + 1
    assert first.is_principal is True
    assert second.is_principal is False


def test_update_false_on_principal_leaves_no_principal(manager, phone_store, member, caplog):
    first = manager.insert(member("1111"))
    manager.insert(member("2222"))

    with caplog.at_level(logging.WARNING, logger="client_registry.engine.principal"):
        manager.update(first, requested_principal=False)

    assert phone_store.principals(1) == []
    assert manager.state(1) == CollectionState.NO_PRINCIPAL
    assert "left without principal" in caplog.text


def test_update_false_on_non_principal_keeps_principal(manager, phone_store, member):
    first = manager.insert(member("1111"))
    second = manager.insert(member("2222"))
    manager.update(second, requested_principal=False)
    assert phone_store.principals(1) == [first]


def test_update_false_with_repair_promotes_lowest_other(repairing_manager, phone_store, member):
    first = repairing_manager.insert(member("1111"))
    second = repairing_manager.insert(member("2222"))
    repairing_manager.insert(member("3333"))

    repairing_manager.update(first, requested_principal=False)

    assert phone_store.principals(1) == [second]


def test_update_false_with_repair_on_single_member_keeps_it(repairing_manager, phone_store, member):
    only = repairing_manager.insert(member("1111"))
    repairing_manager.update(only, requested_principal=False)
    assert phone_store.principals(1) == [only]


def test_designate(manager, phone_store, member):
    manager.insert(member("1111"))
    second = manager.insert(member("2222"))
    manager.designate(second.id)
    assert phone_store.principals(1) == [second]


def test_designate_missing_element(manager):
    with pytest.raises(NotFound) as exc:
        manager.designate(999)
    assert exc.value.resource == "phone"


def test_delete_principal_promotes_lowest_id(manager, phone_store, member):
    first = manager.insert(member("1111"))
    second = manager.insert(member("2222"))
    third = manager.insert(member("3333"))

    promoted = manager.delete(first)

    assert promoted is second
    assert phone_store.principals(1) == [second]
    assert third.is_principal is False


def test_delete_non_principal_keeps_principal(manager, phone_store, member):
    first = manager.insert(member("1111"))
    second = manager.insert(member("2222"))
    assert manager.delete(second) is None
    assert phone_store.principals(1) == [first]


def test_delete_last_member_rejected(manager, phone_store, member):
    only = manager.insert(member("1111"))
    with pytest.raises(MinimumCardinalityViolation):
        manager.delete(only)
    assert phone_store.get(only.id) is only
    assert only.is_principal is True


def test_principal_of(manager, member):
    assert manager.principal_of(1) is None
    assert manager.state(1) == CollectionState.EMPTY
    first = manager.insert(member("1111"))
    assert manager.principal_of(1) is first


@pytest.mark.parametrize("seed", range(20))
def test_random_operations_keep_exactly_one_principal(phone_store, member, seed):
    rng = random.Random(seed)
    manager = PrincipalElectionManager(phone_store)
    manager.insert(member("seed"))
    counter = 0

    for _ in range(60):
        members = phone_store.list_for_owner(1)
        action = rng.choice(["insert", "delete", "designate", "promote"])
        if action == "insert":
            counter += 1
            manager.insert(member(f"n{counter}"), requested_principal=rng.random() < 0.3)
        elif action == "delete":
            target = rng.choice(members)
            if len(members) == 1:
                with pytest.raises(MinimumCardinalityViolation):
                    manager.delete(target)
            else:
                manager.delete(target)
        elif action == "designate":
            manager.designate(rng.choice(members).id)
        else:
            manager.update(rng.choice(members), requested_principal=True)

        assert len(phone_store.list_for_owner(1)) >= 1
        assert len(phone_store.principals(1)) == 1
