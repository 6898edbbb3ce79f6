import threading

import pytest

from app.core.errors import InvalidInputError
from app.database.memory_store import InMemoryStore
from app.schemas.reminder_schema import Reminder, ReminderStatusEnum


def _reminder(reminder_id, loan_id="loan_1", status=ReminderStatusEnum.scheduled):
    return Reminder(
        id=reminder_id,
        loan_id=loan_id,
        type="sms",
        trigger_type="on_due",
        status=status,
        last_sent_at=None,
        created_at="2024-05-01T00:00:00.000Z",
    )


@pytest.fixture
def store():
    return InMemoryStore("rem_", "reminder")


def test_add_assigns_prefixed_sequential_ids(store):
    first = store.add(_reminder)
    second = store.add(_reminder)
    assert (first.id, second.id) == ("rem_1", "rem_2")
    assert len(store) == 2


def test_get(store):
    created = store.add(_reminder)
    assert store.get("rem_1") is created
    assert store.get("rem_2") is None


def test_all_is_a_snapshot_in_insertion_order(store):
    for _ in range(3):
        store.add(_reminder)
    snapshot = store.all()
    snapshot.clear()
    assert [r.id for r in store.all()] == ["rem_1", "rem_2", "rem_3"]


def test_filter_matches_all_criteria(store):
    store.add(lambda i: _reminder(i, loan_id="loan_1"))
    store.add(lambda i: _reminder(i, loan_id="loan_2"))
    store.add(lambda i: _reminder(i, loan_id="loan_1", status=ReminderStatusEnum.sent))

    assert [r.id for r in store.filter(loan_id="loan_1")] == ["rem_1", "rem_3"]
    assert [r.id for r in store.filter(loan_id="loan_1", status="sent")] == ["rem_3"]
    assert [r.id for r in store.filter(loan_id=None, status="")] == ["rem_1", "rem_2", "rem_3"]


def test_failed_build_does_not_consume_an_id(store):
    def broken(_id):
        raise InvalidInputError("nope")

    with pytest.raises(InvalidInputError):
        store.add(broken)
    assert store.add(_reminder).id == "rem_1"
    assert len(store) == 1


def test_concurrent_adds_get_unique_ids(store):
    def worker():
        for _ in range(200):
            store.add(_reminder)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ids = [r.id for r in store.all()]
    assert len(ids) == 1600
    assert len(set(ids)) == 1600
    assert ids == [f"rem_{n}" for n in range(1, 1601)]
