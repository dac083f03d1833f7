# app/routers/notification.py
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import List, Optional
from datetime import datetime

from app.database import get_db
from app.models import Notification, NotificationType, NotificationPriority
from app.schemas import NotificationOut, NotificationConfirm, NotificationMarkAllRead

router = APIRouter(prefix="/notifications", tags=["notifications"])

def _get_notification_or_404(db: Session, notification_id: int) -> Notification:
    notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if not notification:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found"
        )
    return notification

@router.get("/", response_model=List[NotificationOut])
def get_user_notifications(
    user_id: str,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    unread_only: bool = Query(False),
    notification_type: Optional[NotificationType] = Query(None),
    priority: Optional[NotificationPriority] = Query(None),
    db: Session = Depends(get_db)
):
    """Get notifications for a client or staff user, newest first"""

    query = db.query(Notification).filter(Notification.user_id == user_id)

    # Apply filters
    if unread_only:
        query = query.filter(Notification.read == False)

    if notification_type:
        query = query.filter(Notification.notification_type == notification_type)

    if priority:
        query = query.filter(Notification.priority == priority)

    # Ties on created_at fall back to insertion order
    query = query.order_by(desc(Notification.created_at), desc(Notification.id))

    return query.offset(skip).limit(limit).all()

@router.get("/{notification_id}", response_model=NotificationOut)
def get_notification(notification_id: int, db: Session = Depends(get_db)):
    """Get a specific notification by ID"""
    return _get_notification_or_404(db, notification_id)

@router.put("/mark-all-read", response_model=dict)
def mark_all_notifications_read(
    mark_all: NotificationMarkAllRead,
    db: Session = Depends(get_db)
):
    """Mark all notifications as read for a user"""

    query = db.query(Notification).filter(
        Notification.user_id == mark_all.user_id,
        Notification.read == False
    )

    if mark_all.notification_type:
        query = query.filter(Notification.notification_type == mark_all.notification_type)

    notifications = query.all()

    now = datetime.now()
    for notification in notifications:
        notification.read = True
        notification.read_at = now

    db.commit()

    return {
        "message": f"Successfully marked {len(notifications)} notifications as read",
        "updated_count": len(notifications)
    }

@router.put("/{notification_id}/read", response_model=NotificationOut)
def mark_notification_read(notification_id: int, db: Session = Depends(get_db)):
    """Mark a specific notification as read"""

    notification = _get_notification_or_404(db, notification_id)

    if not notification.read:
        notification.read = True
        notification.read_at = datetime.now()
        db.commit()
        db.refresh(notification)

    return notification

@router.put("/{notification_id}/confirm", response_model=NotificationOut)
def confirm_notification(
    notification_id: int,
    confirmation: NotificationConfirm,
    db: Session = Depends(get_db)
):
    """Record who confirmed a notification and when"""

    notification = _get_notification_or_404(db, notification_id)
    notification.confirmed = True
    notification.confirmed_by = confirmation.confirmed_by
    notification.confirmed_at = datetime.now()
    db.commit()
    db.refresh(notification)

    return notification

@router.delete("/{notification_id}")
def delete_notification(notification_id: int, db: Session = Depends(get_db)):
    """Delete a specific notification; unknown ids are ignored"""

    notification = db.query(Notification).filter(Notification.id == notification_id).first()

    if notification:
        db.delete(notification)
        db.commit()

    return {"message": "Notification deleted successfully"}
