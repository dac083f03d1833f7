# app/utils/notifications.py
"""
Utility functions for creating notifications and building reminder messages
"""

from sqlalchemy.orm import Session
from app.models import CourtDate, Notification, NotificationType, NotificationPriority
from app.services.reminder_policy import ReminderKind, ReminderPriority, reminder_priority
from typing import Dict, Optional

def create_notification(
    db: Session,
    user_id: str,
    title: str,
    message: str,
    notification_type: NotificationType = NotificationType.SYSTEM_ALERT,
    priority: NotificationPriority = NotificationPriority.MEDIUM,
    related_entity_type: Optional[str] = None,
    related_entity_id: Optional[int] = None,
) -> Notification:
    """
    Create a new in-app notification

    Args:
        db: Database session
        user_id: External id of the client (or staff user) to notify
        title: Notification title
        message: Notification message
        notification_type: Type of notification
        priority: Priority level
        related_entity_type: Type of related entity (e.g., 'court_date')
        related_entity_id: ID of related entity

    Returns:
        Created notification object
    """

    notification = Notification(
        user_id=user_id,
        title=title,
        message=message,
        notification_type=notification_type,
        priority=priority,
        related_entity_type=related_entity_type,
        related_entity_id=related_entity_id,
    )

    db.add(notification)
    db.commit()
    db.refresh(notification)

    return notification

def format_court_date(court_date: CourtDate) -> str:
    if court_date.court_date is None:
        return "a date to be confirmed"
    return court_date.court_date.strftime("%A, %B %d, %Y at %I:%M %p")

def court_reminder_content(
    kind: ReminderKind,
    court_date: CourtDate,
    client_name: str,
) -> Dict[str, str]:
    """
    Build the title and message for a court date reminder

    The wording escalates with the kind's priority: urgent reminders are
    prefixed with URGENT, high priority ones with Reminder.
    """
    when = format_court_date(court_date)
    where = court_date.court_location or "the courthouse"
    case = f" (Case {court_date.case_number})" if court_date.case_number else ""

    lead = {
        ReminderKind.INITIAL: f"you have a court date in one week on {when}",
        ReminderKind.FOLLOWUP_1: f"your court date is in 3 days on {when}",
        ReminderKind.FOLLOWUP_2: f"your court date is TOMORROW, {when}",
        ReminderKind.FINAL: f"your court date is TODAY, {when}",
    }[ReminderKind(kind)]

    message = f"Hi {client_name}, {lead} at {where}{case}. Failure to appear may result in a warrant and forfeiture of your bond."

    priority = reminder_priority(kind)
    if priority == ReminderPriority.URGENT:
        title = "URGENT: Court Appearance Today"
        message = f"URGENT: {message}"
    elif priority == ReminderPriority.HIGH:
        title = "Reminder: Court Appearance Tomorrow"
        message = f"Reminder: {message}"
    else:
        title = "Upcoming Court Date"
        message = f"{message} Please confirm you will attend."

    return {"title": title, "message": message}
