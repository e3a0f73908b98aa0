"""
schemas/lesson.py
-----------------
Pydantic models for the lesson catalog.

LessonCreate rejects an empty or inverted time window and a capacity
below one before anything reaches the database.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ridsport.models.enums import LessonType
from ridsport.schemas.common import PartialUpdate, ReadModel, normalise_datetime


class LessonCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, examples=["Hoppning nivå 2"])
    description: Optional[str] = None
    lesson_type: LessonType
    start_time: datetime
    end_time: datetime
    max_participants: int = Field(default=1, ge=1)
    trainer_id: Optional[str] = Field(
        default=None,
        description="Only honoured for admins; trainers always own their lessons",
    )

    @field_validator("start_time", "end_time")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        return normalise_datetime(v)

    @model_validator(mode="after")
    def check_window(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class LessonUpdate(PartialUpdate):
    NON_NULLABLE = frozenset(
        {"title", "lesson_type", "start_time", "end_time", "max_participants"}
    )

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    lesson_type: Optional[LessonType] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    max_participants: Optional[int] = Field(default=None, ge=1)

    @field_validator("start_time", "end_time")
    @classmethod
    def to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return normalise_datetime(v) if v is not None else v


class LessonRead(ReadModel):
    id: str
    tenant_id: str
    trainer_id: str
    title: str
    description: Optional[str] = None
    lesson_type: LessonType
    start_time: datetime
    end_time: datetime
    max_participants: int
    created_at: datetime
