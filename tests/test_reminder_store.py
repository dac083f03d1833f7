from datetime import datetime

import pytest

from app.models import CourtDateReminder
from app.services.exceptions import ReminderNotFound, ReminderStateError, StoreFailure
from app.services.reminder_policy import ReminderKind, ReminderPriority
from app.services.stores import SqlClientLookup, SqlCourtDateSource, SqlReminderStore


def new_reminder(court_date_id, reminder_type, scheduled_for):
    return CourtDateReminder(court_date_id=court_date_id, reminder_type=ReminderKind(reminder_type), scheduled_for=scheduled_for)


@pytest.fixture
def court(make_client, make_court_date):
    client = make_client(full_name="John Doe")
    return make_court_date(client, datetime(2026, 4, 9, 10, 0))


def test_create_assigns_id_and_defaults(db, court):
    store = SqlReminderStore(db)

    reminder = store.create(new_reminder(court.id, "initial", datetime(2026, 4, 2, 9, 0)))

    assert reminder.id is not None
    assert reminder.sent is False
    assert reminder.confirmed is False
    assert reminder.created_at is not None
    assert reminder.reminder_type is ReminderKind.INITIAL
    assert reminder.kind == ReminderKind.INITIAL
    assert reminder.priority == ReminderPriority.MEDIUM


def test_list_by_court_date_is_ordered_by_schedule(db, court, make_client, make_court_date):
    other = make_court_date(make_client(), datetime(2026, 5, 1, 10, 0))
    store = SqlReminderStore(db)
    store.create(new_reminder(court.id, "final", datetime(2026, 4, 9, 9, 0)))
    store.create(new_reminder(court.id, "initial", datetime(2026, 4, 2, 9, 0)))
    store.create(new_reminder(other.id, "initial", datetime(2026, 4, 24, 9, 0)))

    listed = store.list_by_court_date(court.id)

    assert [r.reminder_type for r in listed] == ["initial", "final"]
    assert len(store.list_all()) == 3


def test_duplicate_kind_for_a_court_date_is_a_store_failure(db, court):
    store = SqlReminderStore(db)
    store.create(new_reminder(court.id, "initial", datetime(2026, 4, 2, 9, 0)))

    with pytest.raises(StoreFailure):
        store.create(new_reminder(court.id, "initial", datetime(2026, 4, 2, 9, 0)))

    # The session is usable again after the rollback
    assert len(store.list_by_court_date(court.id)) == 1


def test_mark_sent_then_confirm(db, court):
    store = SqlReminderStore(db)
    reminder = store.create(new_reminder(court.id, "followup_2", datetime(2026, 4, 8, 9, 0)))

    store.mark_sent(reminder.id, None)
    confirmed_at = datetime(2026, 4, 8, 12, 0)
    confirmed = store.mark_confirmed(reminder.id, "agent.kealoha", confirmed_at)

    assert confirmed.sent is True
    assert confirmed.confirmed is True
    assert confirmed.confirmed_by == "agent.kealoha"
    assert confirmed.confirmed_at == confirmed_at


def test_confirm_before_sent_is_rejected(db, court):
    store = SqlReminderStore(db)
    reminder = store.create(new_reminder(court.id, "initial", datetime(2026, 4, 2, 9, 0)))

    with pytest.raises(ReminderStateError):
        store.mark_confirmed(reminder.id, "agent.kealoha")


def test_unknown_reminder_raises_not_found(db):
    store = SqlReminderStore(db)

    with pytest.raises(ReminderNotFound):
        store.mark_sent(12345, None)
    with pytest.raises(ReminderNotFound):
        store.mark_confirmed(12345, "agent.kealoha")


def test_deleting_a_court_date_removes_its_reminders(db, court):
    store = SqlReminderStore(db)
    store.create(new_reminder(court.id, "initial", datetime(2026, 4, 2, 9, 0)))

    db.delete(court)
    db.commit()

    assert store.list_all() == []


def test_court_date_source_and_client_lookup(db, court):
    source = SqlCourtDateSource(db)
    lookup = SqlClientLookup(db)

    assert [c.id for c in source.list_all()] == [court.id]
    assert source.get_by_id(court.id).case_number == "CR-2026-001"
    assert source.get_by_id(court.id + 100) is None

    contact = lookup.get_by_id(court.client_id)
    assert contact.display_name == "John Doe"
    assert contact.external_id == "CLT-001"
    assert contact.phone_number == "808-555-0123"
    assert lookup.get_by_id(999) is None
