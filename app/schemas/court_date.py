# app/schemas/court_date.py
from pydantic import BaseModel, Field, validator
from datetime import datetime
from typing import Optional

class CourtDateCreate(BaseModel):
    client_id: int
    court_date: Optional[datetime] = None  # Null until the court sets a date
    court_type: Optional[str] = Field(None, max_length=50)
    court_location: Optional[str] = None
    case_number: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None

    @validator("court_date")
    def normalize_court_date(cls, v):
        # Stored as naive local time, matching the scheduler clock
        if v is not None and v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

class CourtDateApprove(BaseModel):
    approved_by: str = Field(..., min_length=1)

class CourtDateOut(BaseModel):
    id: int
    client_id: int
    court_date: Optional[datetime] = None
    court_type: Optional[str] = None
    court_location: Optional[str] = None
    case_number: Optional[str] = None
    notes: Optional[str] = None
    completed: bool
    admin_approved: bool
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    client_acknowledged: bool
    acknowledged_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True

# Court dates enriched with the owning client, for agent dashboards
class EnrichedCourtDate(BaseModel):
    id: int
    court_date: datetime
    court_type: Optional[str] = None
    court_location: Optional[str] = None
    case_number: Optional[str] = None
    admin_approved: bool = False
    client_acknowledged: bool = False
    client_name: str
    client_id: str  # External client identifier

class UpcomingCourtDate(EnrichedCourtDate):
    days_until: int

class OverdueCourtDate(EnrichedCourtDate):
    days_overdue: int
