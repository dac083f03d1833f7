# app/models/client.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from app.database import Base

class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(String(50), unique=True, index=True, nullable=False)  # External identifier, e.g. CLT-001
    full_name = Column(String, nullable=False)
    phone_number = Column(String(30), nullable=True)
    email = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    court_dates = relationship("CourtDate", back_populates="client", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Client(id={self.id}, client_id='{self.client_id}', full_name='{self.full_name}')>"
