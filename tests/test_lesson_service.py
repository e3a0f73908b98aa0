from datetime import timedelta

import pytest

from ridsport.core.exceptions import InvalidInputError, NotFoundError
from ridsport.models.enums import BookingStatus, LessonType, ProgressCategory, UserRole
from ridsport.schemas.booking import BookingCreate
from ridsport.schemas.lesson import LessonCreate, LessonUpdate
from ridsport.schemas.progress import ProgressReportCreate
from ridsport.services.booking_service import BookingService
from ridsport.services.lesson_service import LessonService
from ridsport.services.progress_service import ProgressService

from conftest import hours_from_now


@pytest.mark.asyncio
async def test_create_lesson(make_tenant, make_user, make_lesson):
    tenant = await make_tenant()
    trainer = await make_user(tenant, role=UserRole.trainer)

    lesson = await make_lesson(tenant, trainer, max_participants=6)

    assert lesson.id
    assert lesson.tenant_id == tenant.id
    assert lesson.trainer_id == trainer.id
    assert lesson.lesson_type == LessonType.show_jumping.value
    assert lesson.max_participants == 6


@pytest.mark.asyncio
async def test_service_rejects_inverted_window_built_without_validation(db, make_tenant):
    tenant = await make_tenant()
    start = hours_from_now(5)
    data = LessonCreate.model_construct(
        title="Dressyr",
        description=None,
        lesson_type=LessonType.dressage,
        start_time=start,
        end_time=start,
        max_participants=1,
        trainer_id=None,
    )

    with pytest.raises(InvalidInputError):
        await LessonService.create_lesson(db, tenant.id, "trainer", data)


@pytest.mark.asyncio
async def test_listings_are_ordered_by_start_time(db, make_tenant, make_user, make_lesson):
    tenant = await make_tenant()
    trainer = await make_user(tenant, role=UserRole.trainer)
    other_trainer = await make_user(tenant, role=UserRole.trainer)
    await make_lesson(tenant, trainer, start_in_hours=3, title="T+3")
    await make_lesson(tenant, other_trainer, start_in_hours=1, title="T+1")
    await make_lesson(tenant, trainer, start_in_hours=2, title="T+2")

    everything = await LessonService.list_lessons(db, tenant_id=tenant.id)
    assert [l.title for l in everything] == ["T+1", "T+2", "T+3"]

    mine = await LessonService.list_lessons_by_trainer(db, trainer.id)
    assert [l.title for l in mine] == ["T+2", "T+3"]


@pytest.mark.asyncio
async def test_available_lessons_are_upcoming_and_ordered(
    db, make_tenant, make_user, make_lesson
):
    tenant = await make_tenant()
    trainer = await make_user(tenant, role=UserRole.trainer)
    await make_lesson(tenant, trainer, start_in_hours=-1, title="started")
    await make_lesson(tenant, trainer, start_in_hours=1, title="T+1h")
    await make_lesson(tenant, trainer, start_in_hours=3, title="T+3h")
    await make_lesson(tenant, trainer, start_in_hours=2, title="T+2h")

    available = await LessonService.list_available_lessons(db, tenant_id=tenant.id)

    assert [l.title for l in available] == ["T+1h", "T+2h", "T+3h"]


@pytest.mark.asyncio
async def test_full_lessons_are_still_available(
    db, make_tenant, make_user, make_lesson
):
    tenant = await make_tenant()
    trainer = await make_user(tenant, role=UserRole.trainer)
    rider = await make_user(tenant)
    lesson = await make_lesson(tenant, trainer, max_participants=1)
    await BookingService.create_booking(db, tenant.id, rider.id, BookingCreate(lesson_id=lesson.id))

    available = await LessonService.list_available_lessons(db, tenant_id=tenant.id)

    assert [l.id for l in available] == [lesson.id]


@pytest.mark.asyncio
async def test_lessons_of_other_tenant_are_invisible(
    db, make_tenant, make_user, make_lesson
):
    first = await make_tenant(subdomain="first")
    second = await make_tenant(subdomain="second")
    trainer = await make_user(first, role=UserRole.trainer)
    lesson = await make_lesson(first, trainer)

    assert await LessonService.list_lessons(db, tenant_id=second.id) == []
    assert await LessonService.list_available_lessons(db, tenant_id=second.id) == []
    with pytest.raises(NotFoundError):
        await LessonService.get_lesson(db, lesson.id, tenant_id=second.id)


@pytest.mark.asyncio
async def test_update_revalidates_merged_window(db, make_tenant, make_user, make_lesson):
    tenant = await make_tenant()
    trainer = await make_user(tenant, role=UserRole.trainer)
    lesson = await make_lesson(tenant, trainer, start_in_hours=10, duration_hours=1)

    with pytest.raises(InvalidInputError):
        await LessonService.update_lesson(
            db, lesson.id, LessonUpdate(start_time=hours_from_now(20))
        )

    updated = await LessonService.update_lesson(
        db, lesson.id, LessonUpdate(title="Terräng", lesson_type=LessonType.cross_country)
    )
    assert updated.title == "Terräng"
    assert updated.lesson_type == LessonType.cross_country.value


@pytest.mark.asyncio
async def test_update_moves_whole_window(db, make_tenant, make_user, make_lesson):
    tenant = await make_tenant()
    trainer = await make_user(tenant, role=UserRole.trainer)
    lesson = await make_lesson(tenant, trainer, start_in_hours=10)
    new_start = hours_from_now(30)

    updated = await LessonService.update_lesson(
        db,
        lesson.id,
        LessonUpdate(start_time=new_start, end_time=new_start + timedelta(minutes=45)),
    )

    assert updated.id == lesson.id


@pytest.mark.asyncio
async def test_delete_then_get_is_not_found(db, make_tenant, make_user, make_lesson):
    tenant = await make_tenant()
    trainer = await make_user(tenant, role=UserRole.trainer)
    lesson = await make_lesson(tenant, trainer)

    await LessonService.delete_lesson(db, lesson.id)

    with pytest.raises(NotFoundError):
        await LessonService.get_lesson(db, lesson.id)
    with pytest.raises(NotFoundError):
        await LessonService.delete_lesson(db, lesson.id)


@pytest.mark.asyncio
async def test_delete_removes_bookings_and_detaches_reports(
    db, make_tenant, make_user, make_lesson
):
    tenant = await make_tenant()
    trainer = await make_user(tenant, role=UserRole.trainer)
    rider = await make_user(tenant)
    lesson = await make_lesson(tenant, trainer)
    keep = await make_lesson(tenant, trainer, start_in_hours=48)
    await BookingService.create_booking(db, tenant.id, rider.id, BookingCreate(lesson_id=lesson.id))
    kept_booking = await BookingService.create_booking(
        db, tenant.id, rider.id, BookingCreate(lesson_id=keep.id)
    )
    report = await ProgressService.create_report(
        db,
        tenant.id,
        trainer.id,
        ProgressReportCreate(
            rider_id=rider.id, lesson_id=lesson.id, category=ProgressCategory.balance, rating=4
        ),
    )

    await LessonService.delete_lesson(db, lesson.id)

    assert await BookingService.list_bookings_by_lesson(db, lesson.id) == []
    remaining = await BookingService.list_bookings_by_rider(db, rider.id)
    assert [b.id for b in remaining] == [kept_booking.id]
    assert remaining[0].status == BookingStatus.confirmed.value

    reports = await ProgressService.list_reports_by_rider(db, rider.id)
    assert [r.id for r in reports] == [report.id]
    await db.refresh(reports[0])
    assert reports[0].lesson_id is None
