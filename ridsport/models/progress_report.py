"""
models/progress_report.py
-------------------------
Trainer-authored rating (1-5) of a rider in one skill category.
Rows are append-only: there is no update or delete path.
"""

from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ridsport.db.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin


class ProgressReport(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "progress_reports"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_progress_rating_range"),
    )

    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("riding_schools.id"),
        nullable=False,
        index=True,
    )
    rider_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    trainer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    # Detached (set to NULL) when the lesson is deleted
    lesson_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("lessons.id", ondelete="SET NULL")
    )
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<ProgressReport id={self.id} rider_id={self.rider_id} rating={self.rating}>"
