# app/services/stores.py
"""
Persistence collaborators for the court reminder service.

The service only depends on the Protocol classes below; the Sql*
implementations back them with a SQLAlchemy session.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import Client, CourtDate, CourtDateReminder
from app.services.exceptions import ReminderNotFound, ReminderStateError, StoreFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientContact:
    id: int
    display_name: str
    external_id: str
    phone_number: Optional[str] = None
    email: Optional[str] = None


class ReminderStore(Protocol):
    def create(self, reminder: CourtDateReminder) -> CourtDateReminder: ...

    def list_by_court_date(self, court_date_id: int) -> List[CourtDateReminder]: ...

    def list_all(self) -> List[CourtDateReminder]: ...

    def mark_sent(self, reminder_id: int, notification_id: Optional[int]) -> CourtDateReminder: ...

    def mark_confirmed(self, reminder_id: int, actor: str, confirmed_at: Optional[datetime] = None) -> CourtDateReminder: ...


class CourtDateSource(Protocol):
    def list_all(self) -> List[CourtDate]: ...

    def get_by_id(self, court_date_id: int) -> Optional[CourtDate]: ...


class ClientLookup(Protocol):
    def get_by_id(self, client_id: int) -> Optional[ClientContact]: ...


class SqlReminderStore:
    """Reminder store backed by the court_date_reminders table"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, reminder: CourtDateReminder) -> CourtDateReminder:
        try:
            self.db.add(reminder)
            self.db.commit()
            self.db.refresh(reminder)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreFailure(
                f"Could not create {reminder.reminder_type} reminder for court date {reminder.court_date_id}: {e}"
            ) from e
        return reminder

    def get(self, reminder_id: int) -> Optional[CourtDateReminder]:
        return self.db.query(CourtDateReminder).filter(CourtDateReminder.id == reminder_id).first()

    def list_by_court_date(self, court_date_id: int) -> List[CourtDateReminder]:
        return (
            self.db.query(CourtDateReminder)
            .filter(CourtDateReminder.court_date_id == court_date_id)
            .order_by(CourtDateReminder.scheduled_for.asc())
            .all()
        )

    def list_all(self) -> List[CourtDateReminder]:
        return self.db.query(CourtDateReminder).order_by(CourtDateReminder.scheduled_for.asc()).all()

    def mark_sent(self, reminder_id: int, notification_id: Optional[int]) -> CourtDateReminder:
        reminder = self._get_or_raise(reminder_id)
        reminder.sent = True
        reminder.notification_id = notification_id
        self._commit(reminder, "mark sent")
        return reminder

    def mark_confirmed(self, reminder_id: int, actor: str, confirmed_at: Optional[datetime] = None) -> CourtDateReminder:
        reminder = self._get_or_raise(reminder_id)
        if not reminder.sent:
            raise ReminderStateError(f"Reminder {reminder_id} has not been sent yet")
        reminder.confirmed = True
        reminder.confirmed_by = actor
        reminder.confirmed_at = confirmed_at or datetime.now()
        self._commit(reminder, "confirm")
        return reminder

    def _get_or_raise(self, reminder_id: int) -> CourtDateReminder:
        reminder = self.get(reminder_id)
        if reminder is None:
            raise ReminderNotFound(f"Reminder {reminder_id} not found")
        return reminder

    def _commit(self, reminder: CourtDateReminder, action: str) -> None:
        try:
            self.db.commit()
            self.db.refresh(reminder)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreFailure(f"Could not {action} reminder {reminder.id}: {e}") from e


class SqlCourtDateSource:
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[CourtDate]:
        return self.db.query(CourtDate).all()

    def get_by_id(self, court_date_id: int) -> Optional[CourtDate]:
        return self.db.query(CourtDate).filter(CourtDate.id == court_date_id).first()


class SqlClientLookup:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, client_id: int) -> Optional[ClientContact]:
        client = self.db.query(Client).filter(Client.id == client_id).first()
        if client is None:
            return None
        return ClientContact(
            id=client.id,
            display_name=client.full_name,
            external_id=client.client_id,
            phone_number=client.phone_number,
            email=client.email,
        )
