"""
api/routes/bookings.py
----------------------
Booking endpoints.

GET    /bookings/rider/{rider_id}    — Rider's own bookings, or any rider's for staff.
GET    /bookings/lesson/{lesson_id}  — Staff: who is booked on a lesson.
POST   /bookings                     — Rider books a lesson.
PATCH  /bookings/{id}/status         — Staff set any status; riders may cancel their own.
DELETE /bookings/{id}                — Admin removes a booking outright.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core import policy
from ridsport.db.session import get_db
from ridsport.dependencies import get_current_user
from ridsport.models.enums import UserRole
from ridsport.models.user import User
from ridsport.schemas.booking import BookingCreate, BookingRead, BookingStatusUpdate
from ridsport.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get(
    "/rider/{rider_id}",
    response_model=list[BookingRead],
    summary="List a rider's bookings",
)
async def list_rider_bookings(
    rider_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[BookingRead]:
    policy.ensure(
        policy.can_view_bookings_of_rider(
            UserRole(current_user.role), current_user.id, rider_id
        ),
        "You may only view your own bookings",
    )
    bookings = await BookingService.list_bookings_by_rider(
        db, rider_id, tenant_id=current_user.tenant_id
    )
    return [BookingRead.model_validate(b) for b in bookings]


@router.get(
    "/lesson/{lesson_id}",
    response_model=list[BookingRead],
    summary="List bookings for a lesson",
)
async def list_lesson_bookings(
    lesson_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[BookingRead]:
    policy.ensure(policy.can_view_bookings_of_lesson(UserRole(current_user.role)))
    bookings = await BookingService.list_bookings_by_lesson(
        db, lesson_id, tenant_id=current_user.tenant_id
    )
    return [BookingRead.model_validate(b) for b in bookings]


@router.post(
    "",
    response_model=BookingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Book a lesson",
)
async def create_booking(
    body: BookingCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> BookingRead:
    """The booking is always made for the calling rider."""
    policy.ensure(
        policy.can_create_booking(UserRole(current_user.role)), "Only riders can book lessons"
    )
    booking = await BookingService.create_booking(
        db, tenant_id=current_user.tenant_id, rider_id=current_user.id, data=body
    )
    return BookingRead.model_validate(booking)


@router.patch(
    "/{booking_id}/status",
    response_model=BookingRead,
    summary="Change a booking's status",
)
async def update_booking_status(
    booking_id: str,
    body: BookingStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> BookingRead:
    booking = await BookingService.get_booking(
        db, booking_id, tenant_id=current_user.tenant_id
    )
    policy.ensure(
        policy.can_change_booking_status(
            UserRole(current_user.role),
            current_user.id,
            booking.rider_id,
            body.status,
        ),
        "Riders may only cancel their own bookings",
    )
    booking = await BookingService.update_booking_status(
        db, booking.id, body.status, tenant_id=current_user.tenant_id
    )
    return BookingRead.model_validate(booking)


@router.delete(
    "/{booking_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a booking (admin only)",
)
async def delete_booking(
    booking_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> Response:
    policy.ensure(
        policy.can_delete_booking(UserRole(current_user.role)),
        "Only admins can remove bookings",
    )
    await BookingService.delete_booking(db, booking_id, tenant_id=current_user.tenant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
