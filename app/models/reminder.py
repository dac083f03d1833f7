# app/models/reminder.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean, Enum, UniqueConstraint
from sqlalchemy.orm import relationship

from app.database import Base
from app.services.reminder_policy import ReminderKind, reminder_priority

class CourtDateReminder(Base):
    __tablename__ = "court_date_reminders"
    __table_args__ = (
        UniqueConstraint("court_date_id", "reminder_type", name="uq_court_date_reminder_kind"),
    )

    id = Column(Integer, primary_key=True, index=True)
    court_date_id = Column(Integer, ForeignKey("court_dates.id", ondelete="CASCADE"), nullable=False, index=True)
    reminder_type = Column(Enum(ReminderKind), nullable=False)
    scheduled_for = Column(DateTime, nullable=False, index=True)

    # Delivery
    sent = Column(Boolean, default=False, nullable=False)
    notification_id = Column(Integer, ForeignKey("notifications.id", ondelete="SET NULL"), nullable=True)

    # Confirmation
    confirmed = Column(Boolean, default=False, nullable=False)
    confirmed_by = Column(String, nullable=True)
    confirmed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    # Relationships
    court_date = relationship("CourtDate", back_populates="reminders")

    @property
    def kind(self) -> ReminderKind:
        return ReminderKind(self.reminder_type)

    @property
    def priority(self):
        # Derived from the kind on every read, never stored
        return reminder_priority(self.kind)

    def __repr__(self):
        return f"<CourtDateReminder(id={self.id}, court_date_id={self.court_date_id}, type='{self.reminder_type}', sent={self.sent})>"
