"""
services/booking_service.py
---------------------------
Booking Ledger: riders' claims on lessons.

No capacity check is made when booking: a lesson can end up with more
non-cancelled bookings than max_participants, and staff resolve that by
hand. Status changes are unrestricted here (any status → any status);
who may change what is decided in core.policy.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core.exceptions import NotFoundError
from ridsport.core.logging import get_logger
from ridsport.db.base import utcnow
from ridsport.models.booking import Booking
from ridsport.models.enums import BookingStatus
from ridsport.schemas.booking import BookingCreate
from ridsport.services.lesson_service import LessonService

logger = get_logger(__name__)


class BookingService:

    @staticmethod
    async def create_booking(
        db: AsyncSession,
        tenant_id: str,
        rider_id: str,
        data: BookingCreate,
    ) -> Booking:
        # The lesson has to live in the same school as the booking
        lesson = await LessonService.get_lesson(db, data.lesson_id, tenant_id)

        booking = Booking(
            tenant_id=tenant_id,
            lesson_id=lesson.id,
            rider_id=rider_id,
            status=(data.status or BookingStatus.confirmed).value,
            notes=data.notes,
        )
        db.add(booking)
        await db.flush()
        await db.refresh(booking)

        logger.info(
            "Booking created",
            booking_id=booking.id,
            lesson_id=lesson.id,
            rider_id=rider_id,
            status=booking.status,
        )
        return booking

    @staticmethod
    async def get_booking(
        db: AsyncSession, booking_id: str, tenant_id: Optional[str] = None
    ) -> Booking:
        query = select(Booking).where(Booking.id == booking_id)
        if tenant_id is not None:
            query = query.where(Booking.tenant_id == tenant_id)
        result = await db.execute(query)
        booking = result.scalar_one_or_none()
        if booking is None:
            raise NotFoundError.for_entity("Booking", booking_id)
        return booking

    @staticmethod
    async def list_bookings_by_rider(
        db: AsyncSession, rider_id: str, tenant_id: Optional[str] = None
    ) -> list[Booking]:
        """Newest first."""
        query = (
            select(Booking)
            .where(Booking.rider_id == rider_id)
            .order_by(Booking.created_at.desc())
        )
        if tenant_id is not None:
            query = query.where(Booking.tenant_id == tenant_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def list_bookings_by_lesson(
        db: AsyncSession, lesson_id: str, tenant_id: Optional[str] = None
    ) -> list[Booking]:
        query = select(Booking).where(Booking.lesson_id == lesson_id)
        if tenant_id is not None:
            query = query.where(Booking.tenant_id == tenant_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update_booking_status(
        db: AsyncSession,
        booking_id: str,
        status: BookingStatus,
        tenant_id: Optional[str] = None,
    ) -> Booking:
        booking = await BookingService.get_booking(db, booking_id, tenant_id)
        previous = booking.status
        booking.status = BookingStatus(status).value
        booking.updated_at = utcnow()
        await db.flush()
        await db.refresh(booking)

        logger.info(
            "Booking status changed",
            booking_id=booking.id,
            previous=previous,
            status=booking.status,
        )
        return booking

    @staticmethod
    async def delete_booking(
        db: AsyncSession, booking_id: str, tenant_id: Optional[str] = None
    ) -> None:
        booking = await BookingService.get_booking(db, booking_id, tenant_id)
        await db.delete(booking)
        await db.flush()
        logger.info("Booking deleted", booking_id=booking_id, tenant_id=booking.tenant_id)
