"""Pending/invoiced workflow rules, exercised against the in-memory store."""

from datetime import timedelta
from decimal import Decimal

import pytest

from canteen.core.exceptions import NotFoundError, ValidationError
from canteen.services import registration_service
from canteen.services.audit_service import list_audit_log
from canteen.services.session_service import SessionContext
from canteen.utils.time import utc_now

CLERK = SessionContext(session_id="s-1", user_id="u-1", username="clerk", is_approved=True, is_admin=False)


def _payload(**overrides):
    payload = {
        "name": "Anna",
        "company": "X",
        "meal": "Lunch",
        "amount": "125.00",
        "representative": "Maria",
    }
    payload.update(overrides)
    return payload


def test_submit_creates_pending_entry_without_audit(memory_store) -> None:
    before = utc_now()
    entry = registration_service.submit_entry(memory_store, _payload())

    assert entry.invoiced is False
    assert before <= entry.created_at <= utc_now()
    assert entry.amount == Decimal("125.00")
    assert registration_service.list_pending(memory_store) == [entry]
    assert registration_service.list_invoiced(memory_store) == []
    assert list_audit_log(memory_store) == []


def test_submit_trims_text_fields(memory_store) -> None:
    entry = registration_service.submit_entry(memory_store, _payload(name="  Anna  ", meal=" Dinner"))
    assert entry.name == "Anna"
    assert entry.meal == "Dinner"


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"company": "   "},
        {"meal": None},
        {"representative": ""},
        {"amount": "abc"},
        {"amount": "0"},
        {"amount": "-5"},
        {"amount": "1.234"},
        {"amount": ""},
    ],
)
def test_submit_rejects_invalid_fields(memory_store, overrides) -> None:
    with pytest.raises(ValidationError):
        registration_service.submit_entry(memory_store, _payload(**overrides))
    assert registration_service.list_entries(memory_store) == []


def test_mark_invoiced_moves_entry_and_writes_one_audit_record(memory_store) -> None:
    entry = registration_service.submit_entry(memory_store, _payload())

    moved = registration_service.mark_invoiced(memory_store, entry.id, actor=CLERK)

    assert moved.invoiced is True
    assert registration_service.list_pending(memory_store) == []
    assert registration_service.list_invoiced(memory_store) == [entry]
    records = list_audit_log(memory_store)
    assert len(records) == 1
    record = records[0]
    assert record.action == "moved_to_invoiced"
    assert record.entry_id == entry.id
    assert record.person_name == "Anna"
    assert record.company == "X"
    assert record.meal == "Lunch"
    assert record.amount == Decimal("125.00")
    assert record.representative == "Maria"
    assert record.actor_username == "clerk"


def test_round_trip_restores_original_fields(memory_store) -> None:
    entry = registration_service.submit_entry(memory_store, _payload())
    original = (entry.id, entry.name, entry.company, entry.meal, entry.amount, entry.representative, entry.created_at)

    registration_service.mark_invoiced(memory_store, entry.id, actor=CLERK)
    back = registration_service.mark_pending(memory_store, entry.id, actor=CLERK)

    assert back.invoiced is False
    assert (back.id, back.name, back.company, back.meal, back.amount, back.representative, back.created_at) == original
    actions = [record.action for record in list_audit_log(memory_store)]
    assert actions == ["moved_to_registrations", "moved_to_invoiced"]


def test_set_invoiced_dispatches_on_flag(memory_store) -> None:
    entry = registration_service.submit_entry(memory_store, _payload())

    registration_service.set_invoiced(memory_store, entry.id, True, actor=CLERK)
    assert entry.invoiced is True
    registration_service.set_invoiced(memory_store, entry.id, False, actor=CLERK)
    assert entry.invoiced is False


def test_repeated_transition_still_logs_each_attempt(memory_store) -> None:
    entry = registration_service.submit_entry(memory_store, _payload())

    registration_service.mark_invoiced(memory_store, entry.id, actor=CLERK)
    registration_service.mark_invoiced(memory_store, entry.id, actor=CLERK)

    assert entry.invoiced is True
    assert len(list_audit_log(memory_store)) == 2


def test_unknown_entry_is_not_found(memory_store) -> None:
    with pytest.raises(NotFoundError):
        registration_service.mark_invoiced(memory_store, "missing", actor=CLERK)
    with pytest.raises(NotFoundError):
        registration_service.mark_pending(memory_store, "missing", actor=CLERK)
    assert list_audit_log(memory_store) == []


def test_pending_and_invoiced_partition_all_entries(memory_store) -> None:
    entries = [registration_service.submit_entry(memory_store, _payload(name=f"Person {i}")) for i in range(6)]
    for step, index in enumerate([0, 2, 4, 2, 5, 0, 3]):
        if step % 2 == 0:
            registration_service.mark_invoiced(memory_store, entries[index].id, actor=CLERK)
        else:
            registration_service.mark_pending(memory_store, entries[index].id, actor=CLERK)

        pending = {entry.id for entry in registration_service.list_pending(memory_store)}
        invoiced = {entry.id for entry in registration_service.list_invoiced(memory_store)}
        assert pending.isdisjoint(invoiced)
        assert pending | invoiced == {entry.id for entry in entries}


def test_lists_are_newest_first(memory_store) -> None:
    older = registration_service.build_entry(_payload(name="Older"), created_at=utc_now() - timedelta(days=1))
    memory_store.entries.add(older)
    newer = registration_service.submit_entry(memory_store, _payload(name="Newer"))

    assert [entry.name for entry in registration_service.list_entries(memory_store)] == ["Newer", "Older"]

    registration_service.mark_invoiced(memory_store, older.id, actor=CLERK)
    registration_service.mark_invoiced(memory_store, newer.id, actor=CLERK)
    assert [record.person_name for record in list_audit_log(memory_store)] == ["Newer", "Older"]
