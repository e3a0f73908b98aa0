"""
services/progress_service.py
----------------------------
Progress Ledger: append-only trainer assessments of riders.

There is no update or delete: a report is a historical record. A trainer
who wants to revise a rating writes a new report.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core.exceptions import InvalidInputError
from ridsport.core.logging import get_logger
from ridsport.models.enums import ProgressCategory
from ridsport.models.progress_report import ProgressReport
from ridsport.schemas.progress import MAX_RATING, MIN_RATING, ProgressReportCreate
from ridsport.services.lesson_service import LessonService
from ridsport.services.user_service import UserService

logger = get_logger(__name__)


class ProgressService:

    @staticmethod
    async def create_report(
        db: AsyncSession,
        tenant_id: str,
        trainer_id: str,
        data: ProgressReportCreate,
    ) -> ProgressReport:
        """
        Append a report about a rider of the same school.

        The rider and, when given, the lesson are resolved within tenant_id;
        anything outside the school is reported as not found.
        """
        rating = data.rating
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise InvalidInputError("rating must be an integer")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise InvalidInputError(
                f"rating must be between {MIN_RATING} and {MAX_RATING}"
            )
        try:
            category = ProgressCategory(data.category)
        except ValueError:
            raise InvalidInputError(f"Unknown progress category '{data.category}'")

        rider = await UserService.get_user(db, data.rider_id, tenant_id)
        lesson_id = None
        if data.lesson_id is not None:
            lesson = await LessonService.get_lesson(db, data.lesson_id, tenant_id)
            lesson_id = lesson.id

        report = ProgressReport(
            tenant_id=tenant_id,
            rider_id=rider.id,
            trainer_id=trainer_id,
            lesson_id=lesson_id,
            category=category.value,
            rating=rating,
            notes=data.notes,
        )
        db.add(report)
        await db.flush()
        await db.refresh(report)

        logger.info(
            "Progress report created",
            report_id=report.id,
            rider_id=report.rider_id,
            trainer_id=trainer_id,
            category=report.category,
        )
        return report

    @staticmethod
    async def list_reports_by_rider(
        db: AsyncSession, rider_id: str, tenant_id: Optional[str] = None
    ) -> list[ProgressReport]:
        query = (
            select(ProgressReport)
            .where(ProgressReport.rider_id == rider_id)
            .order_by(ProgressReport.created_at.desc())
        )
        if tenant_id is not None:
            query = query.where(ProgressReport.tenant_id == tenant_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def list_reports_by_trainer(
        db: AsyncSession, trainer_id: str, tenant_id: Optional[str] = None
    ) -> list[ProgressReport]:
        query = (
            select(ProgressReport)
            .where(ProgressReport.trainer_id == trainer_id)
            .order_by(ProgressReport.created_at.desc())
        )
        if tenant_id is not None:
            query = query.where(ProgressReport.tenant_id == tenant_id)
        result = await db.execute(query)
        return list(result.scalars().all())
