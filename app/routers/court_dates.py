# app/routers/court_dates.py
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List
from datetime import datetime
import logging

from app.config.settings import settings
from app.database import get_db
from app.models import Client, CourtDate
from app.schemas import (
    CourtDateCreate,
    CourtDateApprove,
    CourtDateOut,
    UpcomingCourtDate,
    OverdueCourtDate,
    ReminderOut,
)
from app.services.court_reminder_service import CourtReminderService
from app.services.exceptions import StoreFailure
from app.utils.dependencies import get_court_reminder_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/court-dates", tags=["court-dates"])

def _get_court_date_or_404(db: Session, court_date_id: int) -> CourtDate:
    court_date = db.query(CourtDate).filter(CourtDate.id == court_date_id).first()
    if not court_date:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Court date not found"
        )
    return court_date

@router.get("/upcoming", response_model=List[UpcomingCourtDate])
def get_upcoming_court_dates(
    days: int = Query(settings.REMINDERS['upcoming_window_days'], ge=0, le=365),
    service: CourtReminderService = Depends(get_court_reminder_service)
):
    """Court dates within the next `days` days that are not completed"""
    return service.get_upcoming_court_dates(days)

@router.get("/overdue", response_model=List[OverdueCourtDate])
def get_overdue_court_dates(
    service: CourtReminderService = Depends(get_court_reminder_service)
):
    """Past court dates that were never marked completed"""
    return service.get_overdue_court_dates()

@router.get("/pending", response_model=List[CourtDateOut])
def get_pending_court_dates(db: Session = Depends(get_db)):
    """Court dates awaiting admin approval"""
    return db.query(CourtDate).filter(
        CourtDate.admin_approved == False
    ).order_by(CourtDate.created_at.desc()).all()

@router.get("/client/{client_id}", response_model=List[CourtDateOut])
def get_client_court_dates(
    client_id: int,
    approved_only: bool = False,
    db: Session = Depends(get_db)
):
    """Court dates for a client, latest first"""
    query = db.query(CourtDate).filter(CourtDate.client_id == client_id)
    if approved_only:
        query = query.filter(CourtDate.admin_approved == True)
    return query.order_by(CourtDate.court_date.desc()).all()

@router.get("/{court_date_id}", response_model=CourtDateOut)
def get_court_date(court_date_id: int, db: Session = Depends(get_db)):
    """Get a specific court date by ID"""
    return _get_court_date_or_404(db, court_date_id)

@router.post("/", response_model=CourtDateOut, status_code=status.HTTP_201_CREATED)
def create_court_date(
    court_date: CourtDateCreate,
    db: Session = Depends(get_db),
    service: CourtReminderService = Depends(get_court_reminder_service)
):
    """Create a court date and schedule its reminders"""
    client = db.query(Client).filter(Client.id == court_date.client_id).first()
    if not client:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Client not found"
        )

    db_court_date = CourtDate(**court_date.model_dump())
    db.add(db_court_date)
    db.commit()
    db.refresh(db_court_date)

    # The daily scheduling pass retries anything that fails here
    try:
        service.schedule_reminders(db_court_date)
    except StoreFailure as e:
        logger.error(f"Court date {db_court_date.id} created but reminder scheduling failed: {e}")

    return db_court_date

@router.patch("/{court_date_id}/approve", response_model=CourtDateOut)
def approve_court_date(
    court_date_id: int,
    approval: CourtDateApprove,
    db: Session = Depends(get_db)
):
    """Mark a court date as approved by an admin"""
    court_date = _get_court_date_or_404(db, court_date_id)
    court_date.admin_approved = True
    court_date.approved_by = approval.approved_by
    court_date.approved_at = datetime.now()
    db.commit()
    db.refresh(court_date)
    return court_date

@router.patch("/{court_date_id}/acknowledge", response_model=CourtDateOut)
def acknowledge_court_date(court_date_id: int, db: Session = Depends(get_db)):
    """Record that the client has acknowledged the court date"""
    court_date = _get_court_date_or_404(db, court_date_id)
    court_date.client_acknowledged = True
    court_date.acknowledged_at = datetime.now()
    db.commit()
    db.refresh(court_date)
    return court_date

@router.patch("/{court_date_id}/complete", response_model=CourtDateOut)
def complete_court_date(court_date_id: int, db: Session = Depends(get_db)):
    """Mark a court date as completed; it stops appearing as upcoming or overdue"""
    court_date = _get_court_date_or_404(db, court_date_id)
    court_date.completed = True
    db.commit()
    db.refresh(court_date)
    return court_date

@router.delete("/{court_date_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_court_date(court_date_id: int, db: Session = Depends(get_db)):
    """Delete a court date together with its reminders"""
    court_date = _get_court_date_or_404(db, court_date_id)
    db.delete(court_date)
    db.commit()

@router.get("/{court_date_id}/reminders", response_model=List[ReminderOut])
def get_court_date_reminders(
    court_date_id: int,
    db: Session = Depends(get_db),
    service: CourtReminderService = Depends(get_court_reminder_service)
):
    """Reminders scheduled for a court date"""
    _get_court_date_or_404(db, court_date_id)
    return service.reminders.list_by_court_date(court_date_id)

@router.post("/{court_date_id}/reminders/schedule", response_model=List[ReminderOut])
def schedule_court_date_reminders(
    court_date_id: int,
    db: Session = Depends(get_db),
    service: CourtReminderService = Depends(get_court_reminder_service)
):
    """Create any reminders still missing for a court date"""
    court_date = _get_court_date_or_404(db, court_date_id)
    try:
        return service.schedule_reminders(court_date)
    except StoreFailure as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )
