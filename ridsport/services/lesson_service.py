"""
services/lesson_service.py
--------------------------
Lesson Catalog: trainer-authored lessons with a time window and capacity.

Ownership (who may edit / delete) is NOT checked here; routes consult
core.policy first. Capacity is not counted against bookings anywhere, so
"available" means "not started yet", not "has free places".
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core.exceptions import InvalidInputError, NotFoundError
from ridsport.core.logging import get_logger
from ridsport.db.base import as_utc, utcnow
from ridsport.models.booking import Booking
from ridsport.models.lesson import Lesson
from ridsport.models.progress_report import ProgressReport
from ridsport.schemas.lesson import LessonCreate, LessonUpdate

logger = get_logger(__name__)


def _check_lesson_shape(start_time: datetime, end_time: datetime, max_participants: int) -> None:
    if as_utc(start_time) >= as_utc(end_time):
        raise InvalidInputError("start_time must be before end_time")
    if max_participants < 1:
        raise InvalidInputError("max_participants must be at least 1")


class LessonService:

    @staticmethod
    async def create_lesson(
        db: AsyncSession,
        tenant_id: str,
        trainer_id: str,
        data: LessonCreate,
    ) -> Lesson:
        """
        The trainer reference is trusted as given; the route decides who
        the trainer is.
        """
        _check_lesson_shape(data.start_time, data.end_time, data.max_participants)

        lesson = Lesson(
            tenant_id=tenant_id,
            trainer_id=trainer_id,
            title=data.title,
            description=data.description,
            lesson_type=data.lesson_type.value,
            start_time=data.start_time,
            end_time=data.end_time,
            max_participants=data.max_participants,
        )
        db.add(lesson)
        await db.flush()
        await db.refresh(lesson)

        logger.info(
            "Lesson created",
            lesson_id=lesson.id,
            tenant_id=tenant_id,
            trainer_id=trainer_id,
        )
        return lesson

    @staticmethod
    async def get_lesson(
        db: AsyncSession, lesson_id: str, tenant_id: Optional[str] = None
    ) -> Lesson:
        query = select(Lesson).where(Lesson.id == lesson_id)
        if tenant_id is not None:
            query = query.where(Lesson.tenant_id == tenant_id)
        result = await db.execute(query)
        lesson = result.scalar_one_or_none()
        if lesson is None:
            raise NotFoundError.for_entity("Lesson", lesson_id)
        return lesson

    @staticmethod
    async def list_lessons(
        db: AsyncSession, tenant_id: Optional[str] = None
    ) -> list[Lesson]:
        query = select(Lesson).order_by(Lesson.start_time)
        if tenant_id is not None:
            query = query.where(Lesson.tenant_id == tenant_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def list_lessons_by_trainer(
        db: AsyncSession, trainer_id: str, tenant_id: Optional[str] = None
    ) -> list[Lesson]:
        query = (
            select(Lesson)
            .where(Lesson.trainer_id == trainer_id)
            .order_by(Lesson.start_time)
        )
        if tenant_id is not None:
            query = query.where(Lesson.tenant_id == tenant_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def list_available_lessons(
        db: AsyncSession,
        tenant_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[Lesson]:
        """Lessons that have not started yet, soonest first. Full lessons included."""
        cutoff = as_utc(now) if now is not None else utcnow()
        query = (
            select(Lesson)
            .where(Lesson.start_time >= cutoff)
            .order_by(Lesson.start_time)
        )
        if tenant_id is not None:
            query = query.where(Lesson.tenant_id == tenant_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update_lesson(
        db: AsyncSession,
        lesson_id: str,
        data: LessonUpdate,
        tenant_id: Optional[str] = None,
    ) -> Lesson:
        """
        Apply a partial update. The merged result must still have a
        non-empty time window and room for at least one rider.
        """
        lesson = await LessonService.get_lesson(db, lesson_id, tenant_id)
        changes = data.changes()
        if "lesson_type" in changes:
            changes["lesson_type"] = changes["lesson_type"].value

        _check_lesson_shape(
            changes.get("start_time", lesson.start_time),
            changes.get("end_time", lesson.end_time),
            changes.get("max_participants", lesson.max_participants),
        )

        for field, value in changes.items():
            setattr(lesson, field, value)
        lesson.updated_at = utcnow()
        await db.flush()
        await db.refresh(lesson)

        logger.info("Lesson updated", lesson_id=lesson.id, fields=sorted(changes))
        return lesson

    @staticmethod
    async def delete_lesson(
        db: AsyncSession, lesson_id: str, tenant_id: Optional[str] = None
    ) -> None:
        """
        Hard delete. Bookings for the lesson go with it; progress reports
        survive but lose their lesson reference.
        """
        lesson = await LessonService.get_lesson(db, lesson_id, tenant_id)

        removed = await db.execute(delete(Booking).where(Booking.lesson_id == lesson.id))
        await db.execute(
            update(ProgressReport)
            .where(ProgressReport.lesson_id == lesson.id)
            .values(lesson_id=None)
        )
        await db.delete(lesson)
        await db.flush()

        logger.info(
            "Lesson deleted",
            lesson_id=lesson_id,
            tenant_id=lesson.tenant_id,
            bookings_removed=removed.rowcount,
        )
