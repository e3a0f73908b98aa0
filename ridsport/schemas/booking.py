"""
schemas/booking.py
------------------
Pydantic models for the booking ledger.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ridsport.models.enums import BookingStatus
from ridsport.schemas.common import ReadModel


class BookingCreate(BaseModel):
    lesson_id: str
    status: BookingStatus = BookingStatus.confirmed
    notes: Optional[str] = Field(default=None, max_length=2000)


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingRead(ReadModel):
    id: str
    tenant_id: str
    lesson_id: str
    rider_id: str
    status: BookingStatus
    notes: Optional[str] = None
    created_at: datetime
