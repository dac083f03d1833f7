# app/services/court_reminder_service.py
"""
Court date reminder service

Turns reminder policy output into stored reminders, sends the ones that
fall due, and answers the upcoming / overdue court date queries used by
the agent dashboard.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Callable, Dict, List, Optional, Protocol

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.models import CourtDate, CourtDateReminder
from app.schemas.court_date import OverdueCourtDate, UpcomingCourtDate
from app.services.exceptions import DispatchError, StoreFailure
from app.services.notification_service import NotificationService
from app.services.reminder_policy import (
    DEFAULT_REMINDER_TIME,
    PRIORITY_RANK,
    compute_reminder_candidates,
)
from app.services.stores import (
    ClientContact,
    ClientLookup,
    CourtDateSource,
    ReminderStore,
    SqlClientLookup,
    SqlCourtDateSource,
    SqlReminderStore,
)

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

Clock = Callable[[], datetime]


class NotificationDispatcher(Protocol):
    async def send(self, reminder: CourtDateReminder, court_date: CourtDate, client: ClientContact) -> int: ...


@dataclass
class DispatchSummary:
    sent: int = 0
    failed: int = 0
    skipped: int = 0


class CourtReminderService:
    """Schedules, dispatches and reports on court date reminders"""

    def __init__(
        self,
        reminders: ReminderStore,
        court_dates: CourtDateSource,
        clients: ClientLookup,
        dispatcher: Optional[NotificationDispatcher] = None,
        clock: Clock = datetime.now,
        reminder_time: time = DEFAULT_REMINDER_TIME,
    ):
        self.reminders = reminders
        self.court_dates = court_dates
        self.clients = clients
        self.dispatcher = dispatcher
        self.clock = clock
        self.reminder_time = reminder_time

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    def schedule_reminders(self, court_date: CourtDate) -> List[CourtDateReminder]:
        """
        Create the reminders the policy still allows for a court date.

        Kinds already stored for the court date are skipped. A court date
        without a scheduled instant is a no-op. StoreFailure propagates.
        """
        if court_date.court_date is None:
            logger.debug(f"Court date {court_date.id} has no scheduled instant, skipping reminders")
            return []

        now = self.clock()
        candidates = compute_reminder_candidates(court_date.court_date, now, self.reminder_time)
        if not candidates:
            return []

        existing = {r.reminder_type for r in self.reminders.list_by_court_date(court_date.id)}

        created = []
        for candidate in candidates:
            if candidate.kind in existing:
                continue
            reminder = CourtDateReminder(
                court_date_id=court_date.id,
                reminder_type=candidate.kind,
                scheduled_for=candidate.scheduled_for,
                sent=False,
                confirmed=False,
                confirmed_by=None,
                confirmed_at=None,
                notification_id=None,
                created_at=now,
            )
            created.append(self.reminders.create(reminder))

        if created:
            kinds = ", ".join(r.kind.value for r in created)
            logger.info(f"Scheduled {len(created)} reminders for court date {court_date.id}: {kinds}")
        return created

    def schedule_all(self) -> int:
        """Scheduling pass over every future, non-completed court date"""
        now = self.clock()
        created = 0
        for court_date in self.court_dates.list_all():
            if court_date.completed or court_date.court_date is None or court_date.court_date <= now:
                continue
            try:
                created += len(self.schedule_reminders(court_date))
            except StoreFailure as e:
                logger.error(f"Failed to schedule reminders for court date {court_date.id}: {e}")
        logger.info(f"Scheduling pass created {created} reminders")
        return created

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    async def process_pending_reminders(self) -> DispatchSummary:
        """
        Send every unsent reminder whose time has come.

        Failures are isolated per reminder: a failed reminder stays unsent
        and is picked up again by the next pass.
        """
        if self.dispatcher is None:
            raise RuntimeError("CourtReminderService was built without a notification dispatcher")

        now = self.clock()
        due = [r for r in self.reminders.list_all() if not r.sent and r.scheduled_for <= now]
        due.sort(key=self._dispatch_order)

        summary = DispatchSummary()
        for reminder in due:
            try:
                reminder.kind
            except ValueError:
                logger.error(f"Reminder {reminder.id} has unknown type {reminder.reminder_type!r}, not sending")
                summary.failed += 1
                continue

            try:
                court_date = self.court_dates.get_by_id(reminder.court_date_id)
                if court_date is None or court_date.completed:
                    logger.info(f"Skipping reminder {reminder.id}: court date {reminder.court_date_id} is gone or completed")
                    summary.skipped += 1
                    continue

                client = self.clients.get_by_id(court_date.client_id)
                if client is None:
                    logger.warning(f"Skipping reminder {reminder.id}: client {court_date.client_id} not found")
                    summary.skipped += 1
                    continue

                notification_id = await self.dispatcher.send(reminder, court_date, client)
                self.reminders.mark_sent(reminder.id, notification_id)
                summary.sent += 1
            except (DispatchError, StoreFailure) as e:
                logger.error(f"Failed to send reminder {reminder.id}: {e}")
                summary.failed += 1
            except Exception:
                logger.exception(f"Unexpected error sending reminder {reminder.id}")
                summary.failed += 1

        if due:
            logger.info(
                f"Dispatch pass: {summary.sent} sent, {summary.failed} failed, {summary.skipped} skipped"
            )
        return summary

    @staticmethod
    def _dispatch_order(reminder: CourtDateReminder):
        try:
            rank = PRIORITY_RANK[reminder.priority]
        except ValueError:
            # Unknown kinds go last
            rank = len(PRIORITY_RANK)
        return rank, reminder.scheduled_for

    def confirm_reminder(self, reminder_id: int, actor: str) -> CourtDateReminder:
        return self.reminders.mark_confirmed(reminder_id, actor, self.clock())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_upcoming_court_dates(self, window_days: int) -> List[UpcomingCourtDate]:
        if window_days < 0:
            raise ValueError("window_days must be non-negative")

        now = self.clock()
        horizon = now + timedelta(days=window_days)
        lookup = self._client_cache()

        results = []
        for court_date in self.court_dates.list_all():
            if court_date.completed or court_date.court_date is None:
                continue
            if not (now <= court_date.court_date <= horizon):
                continue
            client = lookup(court_date.client_id)
            if client is None:
                continue
            results.append(
                UpcomingCourtDate(
                    **self._enrich(court_date, client),
                    days_until=math.ceil((court_date.court_date - now) / ONE_DAY),
                )
            )

        results.sort(key=lambda r: r.court_date)
        return results

    def get_overdue_court_dates(self) -> List[OverdueCourtDate]:
        now = self.clock()
        lookup = self._client_cache()

        results = []
        for court_date in self.court_dates.list_all():
            if court_date.completed or court_date.court_date is None:
                continue
            if court_date.court_date >= now:
                continue
            client = lookup(court_date.client_id)
            if client is None:
                continue
            results.append(
                OverdueCourtDate(
                    **self._enrich(court_date, client),
                    days_overdue=max(0, math.floor((now - court_date.court_date) / ONE_DAY)),
                )
            )

        results.sort(key=lambda r: r.court_date)
        return results

    def _client_cache(self) -> Callable[[int], Optional[ClientContact]]:
        cache: Dict[int, Optional[ClientContact]] = {}

        def lookup(client_id: int) -> Optional[ClientContact]:
            if client_id not in cache:
                cache[client_id] = self.clients.get_by_id(client_id)
                if cache[client_id] is None:
                    logger.warning(f"Client {client_id} not found, omitting their court dates")
            return cache[client_id]

        return lookup

    @staticmethod
    def _enrich(court_date: CourtDate, client: ClientContact) -> dict:
        return {
            "id": court_date.id,
            "court_date": court_date.court_date,
            "court_type": court_date.court_type,
            "court_location": court_date.court_location,
            "case_number": court_date.case_number,
            "admin_approved": bool(court_date.admin_approved),
            "client_acknowledged": bool(court_date.client_acknowledged),
            "client_name": client.display_name,
            "client_id": client.external_id,
        }


def build_court_reminder_service(db: Session, clock: Clock = datetime.now) -> CourtReminderService:
    """Wire the service to SQL-backed stores and the notification dispatcher"""
    return CourtReminderService(
        reminders=SqlReminderStore(db),
        court_dates=SqlCourtDateSource(db),
        clients=SqlClientLookup(db),
        dispatcher=NotificationService(db),
        clock=clock,
        reminder_time=settings.reminder_time(),
    )
