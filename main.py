from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from app.config.settings import settings
from app.database import Base, engine
from app.routers import clients, court_dates, reminder, notification
from app.schemas import DispatchSummaryOut, ScheduleSummaryOut
from app.services.scheduler import court_reminder_scheduler

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="[%(asctime)s][%(levelname)s][%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Court Reminder API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Route registration
app.include_router(clients.router, tags=["Clients"])
app.include_router(court_dates.router, tags=["Court Dates"])
app.include_router(reminder.router, tags=["Reminders"])
app.include_router(notification.router, tags=["Notifications"])

# Startup and shutdown events
@app.on_event("startup")
async def startup_event():
    """Create tables and start the reminder scheduler when the application starts"""
    logger.info("Starting Court Reminder API...")
    Base.metadata.create_all(bind=engine)
    if settings.SCHEDULER['enabled']:
        court_reminder_scheduler.start()
    else:
        logger.info("Reminder scheduler disabled by SCHEDULER_ENABLED")

@app.on_event("shutdown")
async def shutdown_event():
    """Stop the reminder scheduler when the application shuts down"""
    logger.info("Shutting down Court Reminder API...")
    court_reminder_scheduler.stop()

# Root route
@app.get("/")
def read_root():
    return {"message": "Court Reminder API"}

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/scheduler/status")
async def get_scheduler_status():
    """Get scheduler status and job information"""
    return await court_reminder_scheduler.get_scheduler_status()

@app.post("/scheduler/trigger/process-reminders", response_model=DispatchSummaryOut)
async def trigger_process_reminders():
    """Manually run a dispatch pass over due reminders"""
    summary = await court_reminder_scheduler.process_pending_reminders()
    return DispatchSummaryOut(
        message="Reminder dispatch pass completed",
        sent=summary.sent,
        failed=summary.failed,
        skipped=summary.skipped,
    )

@app.post("/scheduler/trigger/schedule-reminders", response_model=ScheduleSummaryOut)
async def trigger_schedule_reminders():
    """Manually run a scheduling pass over all future court dates"""
    created = await court_reminder_scheduler.schedule_all_reminders()
    return ScheduleSummaryOut(message="Reminder scheduling pass completed", created=created)

@app.post("/scheduler/trigger/overdue")
async def trigger_overdue_check():
    """Manually run the overdue court date check"""
    overdue = await court_reminder_scheduler.check_overdue_court_dates()
    return {"message": "Overdue check completed", "overdue": overdue}
