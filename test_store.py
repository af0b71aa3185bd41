import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from models import ContactIn
from store import ContactStore


@pytest.fixture(scope="function")
def store():
    return ContactStore()


def test_create(store):
    contact = store.create("Alice", "alice@example.com", "111")

    assert contact.id == 1
    assert contact.name == "Alice"
    assert store.list() == [contact]
    assert len(store) == 1


def test_list_insertion_order(store):
    names = ["Alice", "Bob", "Carol"]
    for name in names:
        store.create(name, f"{name.lower()}@example.com", "1")

    assert [c.name for c in store.list()] == names


def test_list_is_a_copy(store):
    store.create("Alice", "alice@example.com", "111")
    store.list().clear()

    assert len(store) == 1


def test_find_by_id(store):
    contact = store.create("Alice", "alice@example.com", "111")

    assert store.find_by_id(contact.id) == contact
    assert store.find_by_id(-1) is None


def test_update_in_place(store):
    contact = store.create("Alice", "alice@example.com", "111")

    updated = store.update(contact.id, ContactIn(email="new@example.com", phone=""))

    assert updated.id == 1
    assert updated.name == "Alice"
    assert updated.email == "new@example.com"
    assert updated.phone == "111"
    assert store.list() == [updated]


def test_update_missing(store):
    assert store.update(3, ContactIn(name="Nobody")) is None


def test_delete(store):
    a = store.create("Alice", "alice@example.com", "111")
    b = store.create("Bob", "bob@example.com", "222")
    c = store.create("Carol", "carol@example.com", "333")

    assert store.delete(b.id) is True
    assert store.list() == [a, c]
    assert store.delete(b.id) is False
    assert store.list() == [a, c]


def test_ids_never_reused(store):
    first = store.create("Alice", "alice@example.com", "111")
    store.delete(first.id)

    assert store.create("Bob", "bob@example.com", "222").id == first.id + 1


def test_concurrent_creates_get_unique_ids(store):
    with ThreadPoolExecutor(max_workers=8) as pool:
        contacts = list(pool.map(lambda i: store.create(f"c{i}", "x@example.com", str(i)), range(500)))

    assert sorted(c.id for c in contacts) == list(range(1, 501))
    assert len(store) == 500


def test_returned_records_are_snapshots(store):
    contact = store.create("Alice", "alice@example.com", "111")
    found = store.find_by_id(contact.id)

    updated = store.update(contact.id, ContactIn(name="Alicia"))
    store.update(contact.id, ContactIn(name="Ali"))

    assert contact.name == "Alice"
    assert found.name == "Alice"
    assert updated.name == "Alicia"
    assert store.find_by_id(contact.id).name == "Ali"


def test_mutations_are_logged(store, caplog):
    caplog.set_level(logging.DEBUG, logger="store")

    store.create("Alice", "alice@example.com", "111")
    store.update(1, ContactIn(name="Alicia"))
    store.delete(1)

    assert caplog.messages == ["Created contact 1", "Updated contact 1", "Deleted contact 1"]


def test_failed_mutations_are_not_logged(store, caplog):
    caplog.set_level(logging.DEBUG, logger="store")

    store.update(1, ContactIn(name="Nobody"))
    store.delete(1)

    assert caplog.messages == []
