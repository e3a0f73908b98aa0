from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from ridsport.models.enums import BookingStatus, LessonType, UserRole
from ridsport.schemas.booking import BookingCreate, BookingStatusUpdate
from ridsport.schemas.lesson import LessonCreate, LessonRead, LessonUpdate
from ridsport.schemas.tenant import TenantCreate, TenantUpdate
from ridsport.schemas.user import UserRegister, UserUpdate

START = datetime(2026, 11, 2, 9, 0, tzinfo=timezone.utc)


def _lesson(**overrides):
    fields = {
        "title": "Grundkurs",
        "lesson_type": "Grundutbildning",
        "start_time": START,
        "end_time": START + timedelta(hours=1),
    }
    fields.update(overrides)
    return LessonCreate(**fields)


def test_lesson_defaults_and_enum_value():
    lesson = _lesson()
    assert lesson.lesson_type is LessonType.basic_training
    assert lesson.max_participants == 1


@pytest.mark.parametrize("end", [START, START - timedelta(minutes=1)])
def test_lesson_window_must_not_be_empty(end):
    with pytest.raises(ValidationError):
        _lesson(end_time=end)


def test_lesson_capacity_at_least_one():
    with pytest.raises(ValidationError):
        _lesson(max_participants=0)


def test_lesson_type_is_closed():
    with pytest.raises(ValidationError):
        _lesson(lesson_type="Voltige")


def test_lesson_times_normalised_to_utc():
    stockholm = timezone(timedelta(hours=1))
    lesson = _lesson(
        start_time=datetime(2026, 11, 2, 10, 0, tzinfo=stockholm),
        end_time=datetime(2026, 11, 2, 11, 0),
    )
    assert lesson.start_time == START
    assert lesson.start_time.tzinfo == timezone.utc
    assert lesson.end_time.tzinfo == timezone.utc


def test_partial_update_tracks_only_sent_fields():
    update = LessonUpdate(title="Ny titel")
    assert update.changes() == {"title": "Ny titel"}


def test_partial_update_rejects_null_for_required_columns():
    with pytest.raises(ValidationError):
        LessonUpdate(title=None)
    with pytest.raises(ValidationError):
        UserUpdate(role=None)
    # Optional columns may be cleared
    assert TenantUpdate(description=None).changes() == {"description": None}


def test_booking_status_is_closed():
    assert BookingCreate(lesson_id="l").status is BookingStatus.confirmed
    with pytest.raises(ValidationError):
        BookingStatusUpdate(status="Avslutad")


def test_user_role_is_closed():
    assert UserRegister(tenant_id="t", name="Alva", role="Tränare").role is UserRole.trainer
    with pytest.raises(ValidationError):
        UserRegister(tenant_id="t", name="Alva", role="Hästskötare")


def test_tenant_subdomain_is_lowercased_and_validated():
    assert TenantCreate(name="Stall", subdomain="Solbacken").subdomain == "solbacken"
    with pytest.raises(ValidationError):
        TenantCreate(name="Stall", subdomain="not a slug")


def test_read_models_return_aware_utc_timestamps():
    naive = datetime(2026, 11, 2, 9, 0)
    row = SimpleNamespace(
        id="l1",
        tenant_id="t1",
        trainer_id="u1",
        title="Grundkurs",
        description=None,
        lesson_type=LessonType.basic_training,
        start_time=naive,
        end_time=naive + timedelta(hours=1),
        max_participants=1,
        created_at=naive,
    )

    lesson = LessonRead.model_validate(row)

    assert lesson.start_time == START
    assert lesson.created_at.tzinfo is not None
    assert lesson.created_at.utcoffset() == timedelta(0)
    assert lesson.model_dump(mode="json")["end_time"].endswith(("Z", "+00:00"))
