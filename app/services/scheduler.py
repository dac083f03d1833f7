# app/services/scheduler.py
"""
Scheduler service for court date reminder passes and overdue checks
"""

from datetime import datetime
from typing import Any, Callable, Dict, Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.orm import Session
import logging

from app.config.settings import settings
from app.database import SessionLocal
from app.services.court_reminder_service import (
    CourtReminderService,
    DispatchSummary,
    build_court_reminder_service,
)

logger = logging.getLogger(__name__)

class CourtReminderScheduler:
    """Periodic driver for the reminder scheduling and dispatch passes"""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        service_factory: Callable[[Session], CourtReminderService] = build_court_reminder_service,
    ):
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.session_factory = session_factory
        self.service_factory = service_factory
        self.is_running = False

    def start(self):
        """Start the scheduler"""
        if self.is_running:
            return

        config = settings.SCHEDULER
        self.scheduler = AsyncIOScheduler()

        # Send due reminders every few minutes
        self.scheduler.add_job(
            self.process_pending_reminders,
            trigger=IntervalTrigger(minutes=config['dispatch_interval_minutes']),
            id='process_pending_reminders',
            name='Process Pending Court Reminders',
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        # Re-evaluate every future court date once a day
        self.scheduler.add_job(
            self.schedule_all_reminders,
            trigger=CronTrigger(hour=config['scheduling_sweep_hour'], minute=0),
            id='schedule_all_reminders',
            name='Daily Court Reminder Scheduling Pass',
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        # Surface missed court dates
        self.scheduler.add_job(
            self.check_overdue_court_dates,
            trigger=IntervalTrigger(minutes=config['overdue_check_interval_minutes']),
            id='check_overdue_court_dates',
            name='Check Overdue Court Dates',
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        self.scheduler.start()
        self.is_running = True
        logger.info("Court reminder scheduler started successfully")

    def stop(self):
        """Stop the scheduler"""
        if self.is_running:
            self.scheduler.shutdown(wait=False)
            self.is_running = False
            logger.info("Court reminder scheduler stopped")

    async def process_pending_reminders(self) -> DispatchSummary:
        """Send every due, unsent reminder"""
        db = self.session_factory()
        try:
            service = self.service_factory(db)
            return await service.process_pending_reminders()
        finally:
            db.close()

    async def schedule_all_reminders(self) -> int:
        """Create missing reminders for all future court dates"""
        db = self.session_factory()
        try:
            service = self.service_factory(db)
            return service.schedule_all()
        finally:
            db.close()

    async def check_overdue_court_dates(self) -> int:
        """Log court dates that passed without being marked completed"""
        db = self.session_factory()
        try:
            service = self.service_factory(db)
            overdue = service.get_overdue_court_dates()
            for entry in overdue:
                logger.warning(
                    f"Court date {entry.id} for {entry.client_name} ({entry.client_id}) "
                    f"is {entry.days_overdue} days overdue, case {entry.case_number or 'n/a'}"
                )
            logger.info(f"Found {len(overdue)} overdue court dates")
            return len(overdue)
        finally:
            db.close()

    async def get_scheduler_status(self) -> Dict[str, Any]:
        """Get scheduler status and job information"""
        if not self.is_running:
            return {"status": "stopped", "jobs": []}

        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
                "trigger": str(job.trigger)
            })

        return {
            "status": "running",
            "checked_at": datetime.now().isoformat(),
            "jobs": jobs
        }

# Process-wide scheduler, started and stopped with the FastAPI app
court_reminder_scheduler = CourtReminderScheduler()
