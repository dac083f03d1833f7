# app/routers/reminder.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models import CourtDateReminder
from app.schemas import ReminderConfirm, ReminderOut
from app.services.court_reminder_service import CourtReminderService
from app.services.exceptions import ReminderNotFound, ReminderStateError, StoreFailure
from app.utils.dependencies import get_court_reminder_service

router = APIRouter(prefix="/reminders", tags=["reminders"])

@router.get("/", response_model=List[ReminderOut])
def get_all_reminders(
    skip: int = 0,
    limit: int = 100,
    sent: Optional[bool] = None,
    confirmed: Optional[bool] = None,
    court_date_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """Get all reminders with optional filtering"""
    query = db.query(CourtDateReminder)

    # Apply filters
    if sent is not None:
        query = query.filter(CourtDateReminder.sent == sent)
    if confirmed is not None:
        query = query.filter(CourtDateReminder.confirmed == confirmed)
    if court_date_id:
        query = query.filter(CourtDateReminder.court_date_id == court_date_id)

    return query.order_by(CourtDateReminder.scheduled_for.asc()).offset(skip).limit(limit).all()

@router.get("/{reminder_id}", response_model=ReminderOut)
def get_reminder(reminder_id: int, db: Session = Depends(get_db)):
    """Get a specific reminder by ID"""
    reminder = db.query(CourtDateReminder).filter(CourtDateReminder.id == reminder_id).first()

    if not reminder:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reminder not found"
        )

    return reminder

@router.patch("/{reminder_id}/confirm", response_model=ReminderOut)
def confirm_reminder(
    reminder_id: int,
    confirmation: ReminderConfirm,
    service: CourtReminderService = Depends(get_court_reminder_service)
):
    """Record that a sent reminder was confirmed by the client or an agent"""
    try:
        return service.confirm_reminder(reminder_id, confirmation.confirmed_by)
    except ReminderNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reminder not found"
        )
    except ReminderStateError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    except StoreFailure as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )
