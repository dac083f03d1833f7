# app/utils/dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.court_reminder_service import CourtReminderService, build_court_reminder_service

def get_court_reminder_service(db: Session = Depends(get_db)) -> CourtReminderService:
    """Request-scoped reminder service sharing the request's DB session"""
    return build_court_reminder_service(db)
