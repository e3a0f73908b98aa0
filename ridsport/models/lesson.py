"""
models/lesson.py
----------------
Lesson offered by a trainer: a time window with a participant cap.

max_participants is informational only; bookings are not counted against it.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ridsport.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Lesson(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "lessons"
    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_lessons_time_window"),
        CheckConstraint("max_participants >= 1", name="ck_lessons_capacity"),
    )

    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("riding_schools.id"),
        nullable=False,
        index=True,
    )
    trainer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    lesson_type: Mapped[str] = mapped_column(String(40), nullable=False)
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    max_participants: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def __repr__(self) -> str:
        return f"<Lesson id={self.id} title={self.title} start={self.start_time}>"
