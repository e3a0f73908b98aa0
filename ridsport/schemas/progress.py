"""
schemas/progress.py
-------------------
Pydantic models for progress reports.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ridsport.models.enums import ProgressCategory
from ridsport.schemas.common import ReadModel

MIN_RATING = 1
MAX_RATING = 5


class ProgressReportCreate(BaseModel):
    rider_id: str
    lesson_id: Optional[str] = None
    category: ProgressCategory
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING, strict=True)
    notes: Optional[str] = Field(default=None, max_length=4000)


class ProgressReportRead(ReadModel):
    id: str
    tenant_id: str
    rider_id: str
    trainer_id: str
    lesson_id: Optional[str] = None
    category: ProgressCategory
    rating: int
    notes: Optional[str] = None
    created_at: datetime
