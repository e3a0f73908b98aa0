"""
models/booking.py
-----------------
A rider's claim on a lesson. Status moves freely between the three values.
"""

from typing import Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ridsport.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from ridsport.models.enums import BookingStatus


class Booking(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "bookings"

    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("riding_schools.id"),
        nullable=False,
        index=True,
    )
    lesson_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("lessons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rider_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BookingStatus.confirmed.value
    )
    notes: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Booking id={self.id} lesson_id={self.lesson_id} status={self.status}>"
