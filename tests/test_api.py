from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from app.database import get_db
from app.models import CourtDateReminder
from app.services.reminder_policy import ReminderKind
from app.services.scheduler import court_reminder_scheduler
from main import app


@pytest.fixture
def client(session_factory, monkeypatch):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr(court_reminder_scheduler, "session_factory", session_factory)
    # No context manager: startup would create tables on the real engine and start the scheduler
    yield TestClient(app)
    app.dependency_overrides.clear()


def at(days, hour=10):
    when = (datetime.now() + timedelta(days=days)).replace(hour=hour, minute=0, second=0, microsecond=0)
    return when.isoformat()


def create_client(client, client_id="CLT-001", full_name="John Doe", **extra):
    response = client.post("/clients/", json={"client_id": client_id, "full_name": full_name, **extra})
    assert response.status_code == 201
    return response.json()


def create_court_date(client, client_pk, court_date, **extra):
    response = client.post("/court-dates/", json={"client_id": client_pk, "court_date": court_date, **extra})
    assert response.status_code == 201
    return response.json()


def test_root_and_health(client):
    assert client.get("/").json() == {"message": "Court Reminder API"}
    assert client.get("/health").json() == {"status": "ok"}


def test_scheduler_status_when_stopped(client):
    response = client.get("/scheduler/status")

    assert response.status_code == 200
    assert response.json() == {"status": "stopped", "jobs": []}


def test_client_crud(client):
    created = create_client(client, phone_number="808-555-0123")

    assert client.get(f"/clients/{created['id']}").json()["client_id"] == "CLT-001"
    assert client.get("/clients/999").status_code == 404
    duplicate = client.post("/clients/", json={"client_id": "CLT-001", "full_name": "Someone Else"})
    assert duplicate.status_code == 409
    assert len(client.get("/clients/").json()) == 1


def test_creating_a_court_date_schedules_its_reminders(client):
    owner = create_client(client)
    court_date = create_court_date(client, owner["id"], at(30), case_number="CR-2026-001")

    reminders = client.get(f"/court-dates/{court_date['id']}/reminders").json()

    assert [r["reminder_type"] for r in reminders] == ["initial", "followup_1", "followup_2", "final"]
    assert [r["priority"] for r in reminders] == ["medium", "medium", "high", "urgent"]
    assert all(not r["sent"] for r in reminders)

    # Scheduling again adds nothing
    again = client.post(f"/court-dates/{court_date['id']}/reminders/schedule")
    assert again.status_code == 200
    assert again.json() == []


def test_court_date_without_a_date_gets_no_reminders(client):
    owner = create_client(client)
    court_date = create_court_date(client, owner["id"], None)

    assert client.get(f"/court-dates/{court_date['id']}/reminders").json() == []


def test_court_date_for_unknown_client_is_rejected(client):
    response = client.post("/court-dates/", json={"client_id": 404, "court_date": at(10)})

    assert response.status_code == 400


def test_timezone_aware_court_date_is_stored_as_local_time(client):
    owner = create_client(client)
    aware = (datetime.now().astimezone() + timedelta(days=10)).replace(microsecond=0)

    court_date = create_court_date(client, owner["id"], aware.isoformat())

    assert court_date["court_date"] == aware.astimezone().replace(tzinfo=None).isoformat()


def test_upcoming_court_dates(client):
    owner = create_client(client, full_name="John Doe")
    soon = create_court_date(client, owner["id"], at(10), court_location="Maui Circuit Court")
    create_court_date(client, owner["id"], at(45))

    upcoming = client.get("/court-dates/upcoming").json()

    assert [u["id"] for u in upcoming] == [soon["id"]]
    assert upcoming[0]["client_name"] == "John Doe"
    assert upcoming[0]["client_id"] == "CLT-001"
    assert upcoming[0]["court_location"] == "Maui Circuit Court"
    assert upcoming[0]["days_until"] in (10, 11)

    assert len(client.get("/court-dates/upcoming", params={"days": 60}).json()) == 2
    assert client.get("/court-dates/upcoming", params={"days": -1}).status_code == 422


def test_overdue_court_dates_until_completed(client):
    owner = create_client(client)
    missed = create_court_date(client, owner["id"], at(-5))

    overdue = client.get("/court-dates/overdue").json()
    assert [o["id"] for o in overdue] == [missed["id"]]
    assert overdue[0]["days_overdue"] >= 4

    assert client.post("/scheduler/trigger/overdue").json()["overdue"] == 1

    client.patch(f"/court-dates/{missed['id']}/complete")
    assert client.get("/court-dates/overdue").json() == []


def test_approve_and_acknowledge(client):
    owner = create_client(client)
    court_date = create_court_date(client, owner["id"], at(12))
    assert [c["id"] for c in client.get("/court-dates/pending").json()] == [court_date["id"]]

    approved = client.patch(f"/court-dates/{court_date['id']}/approve", json={"approved_by": "admin"}).json()
    acknowledged = client.patch(f"/court-dates/{court_date['id']}/acknowledge").json()

    assert approved["admin_approved"] is True
    assert approved["approved_by"] == "admin"
    assert acknowledged["client_acknowledged"] is True
    assert client.get("/court-dates/pending").json() == []
    approved_only = client.get(f"/court-dates/client/{owner['id']}", params={"approved_only": True}).json()
    assert [c["id"] for c in approved_only] == [court_date["id"]]


def test_deleting_a_court_date_removes_its_reminders(client):
    owner = create_client(client)
    court_date = create_court_date(client, owner["id"], at(20))

    assert client.delete(f"/court-dates/{court_date['id']}").status_code == 204
    assert client.get(f"/court-dates/{court_date['id']}").status_code == 404
    assert client.get("/reminders/", params={"court_date_id": court_date["id"]}).json() == []


def test_dispatch_then_confirm(client, session_factory):
    owner = create_client(client, client_id="CLT-007", full_name="Jane Smith")
    court_date = create_court_date(client, owner["id"], at(2))

    # A reminder that fell due an hour ago
    db = session_factory()
    due = CourtDateReminder(
        court_date_id=court_date["id"],
        reminder_type=ReminderKind.INITIAL,
        scheduled_for=datetime.now() - timedelta(hours=1),
    )
    db.add(due)
    db.commit()
    due_id = due.id
    db.close()

    result = client.post("/scheduler/trigger/process-reminders").json()
    assert result["sent"] == 1
    assert result["failed"] == 0

    reminder = client.get(f"/reminders/{due_id}").json()
    assert reminder["sent"] is True
    assert reminder["notification_id"] is not None

    notifications = client.get("/notifications/", params={"user_id": "CLT-007"}).json()
    assert [n["id"] for n in notifications] == [reminder["notification_id"]]
    assert notifications[0]["notification_type"] == "court_reminder"
    assert notifications[0]["related_entity_id"] == court_date["id"]

    confirmed = client.patch(f"/reminders/{due_id}/confirm", json={"confirmed_by": "Jane Smith"})
    assert confirmed.status_code == 200
    assert confirmed.json()["confirmed_by"] == "Jane Smith"

    unsent = client.get("/reminders/", params={"sent": False}).json()
    assert unsent
    conflict = client.patch(f"/reminders/{unsent[0]['id']}/confirm", json={"confirmed_by": "Jane Smith"})
    assert conflict.status_code == 409
    assert client.patch("/reminders/999/confirm", json={"confirmed_by": "x"}).status_code == 404


def test_schedule_reminders_trigger(client, session_factory):
    owner = create_client(client)
    court_date = create_court_date(client, owner["id"], at(30))

    db = session_factory()
    db.query(CourtDateReminder).delete()
    db.commit()
    db.close()

    result = client.post("/scheduler/trigger/schedule-reminders").json()

    assert result["created"] == 4
    assert len(client.get(f"/court-dates/{court_date['id']}/reminders").json()) == 4


def test_notification_read_confirm_and_delete(client, db):
    from app.utils.notifications import create_notification

    first = create_notification(db, "CLT-001", "Upcoming Court Date", "See you in court")
    second = create_notification(db, "CLT-001", "Payment due", "Premium payment due")
    create_notification(db, "CLT-002", "Other", "Someone else")

    listed = client.get("/notifications/", params={"user_id": "CLT-001"}).json()
    assert [n["id"] for n in listed] == [second.id, first.id]

    read = client.put(f"/notifications/{first.id}/read").json()
    assert read["read"] is True
    assert read["read_at"] is not None
    unread = client.get("/notifications/", params={"user_id": "CLT-001", "unread_only": True}).json()
    assert [n["id"] for n in unread] == [second.id]

    marked = client.put("/notifications/mark-all-read", json={"user_id": "CLT-001"}).json()
    assert marked["updated_count"] == 1

    confirmed = client.put(f"/notifications/{first.id}/confirm", json={"confirmed_by": "John Doe"}).json()
    assert confirmed["confirmed"] is True
    assert confirmed["confirmed_by"] == "John Doe"

    assert client.delete(f"/notifications/{first.id}").status_code == 200
    assert client.get(f"/notifications/{first.id}").status_code == 404
    assert client.delete("/notifications/9999").status_code == 200
