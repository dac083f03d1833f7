# app/schemas/client.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class ClientCreate(BaseModel):
    client_id: str = Field(..., min_length=1, max_length=50)
    full_name: str = Field(..., min_length=1)
    phone_number: Optional[str] = Field(None, max_length=30)
    email: Optional[str] = None

class ClientOut(BaseModel):
    id: int
    client_id: str
    full_name: str
    phone_number: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
