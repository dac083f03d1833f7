# app/models/court_date.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base

class CourtDate(Base):
    __tablename__ = "court_dates"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)

    # Scheduled appearance; null until the court sets a date
    court_date = Column(DateTime, nullable=True, index=True)
    court_type = Column(String(50), nullable=True)  # hearing, trial, arraignment, ...
    court_location = Column(String, nullable=True)
    case_number = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    # Status
    completed = Column(Boolean, default=False, nullable=False)

    # Admin approval
    admin_approved = Column(Boolean, default=False, nullable=False)
    approved_by = Column(String, nullable=True)
    approved_at = Column(DateTime, nullable=True)

    # Client acknowledgment
    client_acknowledged = Column(Boolean, default=False, nullable=False)
    acknowledged_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="court_dates")
    reminders = relationship("CourtDateReminder", back_populates="court_date", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<CourtDate(id={self.id}, client_id={self.client_id}, court_date={self.court_date}, case='{self.case_number}')>"
