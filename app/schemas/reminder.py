# app/schemas/reminder.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from app.services.reminder_policy import ReminderKind, ReminderPriority

class ReminderConfirm(BaseModel):
    confirmed_by: str = Field(..., min_length=1)

class ReminderOut(BaseModel):
    id: int
    court_date_id: int
    reminder_type: ReminderKind
    priority: ReminderPriority  # Derived from reminder_type
    scheduled_for: datetime
    sent: bool
    confirmed: bool
    confirmed_by: Optional[str] = None
    confirmed_at: Optional[datetime] = None
    notification_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True

class DispatchSummaryOut(BaseModel):
    message: str
    sent: int
    failed: int
    skipped: int

class ScheduleSummaryOut(BaseModel):
    message: str
    created: int
