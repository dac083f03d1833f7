# app/models/notification.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, Enum
from app.database import Base
import enum

class NotificationType(str, enum.Enum):
    COURT_REMINDER = "court_reminder"
    SYSTEM_ALERT = "system_alert"

class NotificationPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(50), nullable=False, index=True)  # External client id or staff user id
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    notification_type = Column(Enum(NotificationType), nullable=False, default=NotificationType.SYSTEM_ALERT)
    priority = Column(Enum(NotificationPriority), nullable=False, default=NotificationPriority.MEDIUM)
    read = Column(Boolean, default=False, nullable=False)

    # Confirmation by staff or client
    confirmed = Column(Boolean, default=False, nullable=False)
    confirmed_by = Column(String, nullable=True)
    confirmed_at = Column(DateTime, nullable=True)

    # Related entity references (optional)
    related_entity_type = Column(String(50), nullable=True)  # 'court_date', 'court_date_reminder', ...
    related_entity_id = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=datetime.now, nullable=False)
    read_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Notification(id={self.id}, user_id='{self.user_id}', title='{self.title}', type='{self.notification_type}')>"
