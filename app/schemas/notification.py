# app/schemas/notification.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.models.notification import NotificationType, NotificationPriority

class NotificationBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    notification_type: NotificationType = NotificationType.SYSTEM_ALERT
    priority: NotificationPriority = NotificationPriority.MEDIUM
    related_entity_type: Optional[str] = Field(None, max_length=50)
    related_entity_id: Optional[int] = None

class NotificationOut(NotificationBase):
    id: int
    user_id: str
    read: bool
    confirmed: bool
    confirmed_by: Optional[str] = None
    confirmed_at: Optional[datetime] = None
    created_at: datetime
    read_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class NotificationConfirm(BaseModel):
    confirmed_by: str = Field(..., min_length=1)

class NotificationMarkAllRead(BaseModel):
    user_id: str
    notification_type: Optional[NotificationType] = None
