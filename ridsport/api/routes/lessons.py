"""
api/routes/lessons.py
---------------------
Lesson catalog endpoints, always scoped to the caller's school.

GET    /lessons                       — All lessons, by start time.
GET    /lessons/available             — Lessons that have not started yet.
GET    /lessons/trainer/{trainer_id}  — One trainer's lessons.
GET    /lessons/{id}                  — Single lesson.
POST   /lessons                       — Trainer / admin schedules a lesson.
PATCH  /lessons/{id}                  — Owning trainer or admin.
DELETE /lessons/{id}                  — Owning trainer or admin; bookings go too.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core import policy
from ridsport.db.session import get_db
from ridsport.dependencies import get_current_user
from ridsport.models.enums import UserRole
from ridsport.models.user import User
from ridsport.schemas.lesson import LessonCreate, LessonRead, LessonUpdate
from ridsport.services.lesson_service import LessonService
from ridsport.services.user_service import UserService

router = APIRouter(prefix="/lessons", tags=["Lessons"])


@router.get("", response_model=list[LessonRead], summary="List lessons")
async def list_lessons(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[LessonRead]:
    lessons = await LessonService.list_lessons(db, tenant_id=current_user.tenant_id)
    return [LessonRead.model_validate(lesson) for lesson in lessons]


@router.get(
    "/available",
    response_model=list[LessonRead],
    summary="List upcoming lessons open for booking",
)
async def list_available_lessons(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[LessonRead]:
    """Full lessons are still listed; capacity is managed by staff."""
    lessons = await LessonService.list_available_lessons(
        db, tenant_id=current_user.tenant_id
    )
    return [LessonRead.model_validate(lesson) for lesson in lessons]


@router.get(
    "/trainer/{trainer_id}",
    response_model=list[LessonRead],
    summary="List a trainer's lessons",
)
async def list_trainer_lessons(
    trainer_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[LessonRead]:
    lessons = await LessonService.list_lessons_by_trainer(
        db, trainer_id, tenant_id=current_user.tenant_id
    )
    return [LessonRead.model_validate(lesson) for lesson in lessons]


@router.get("/{lesson_id}", response_model=LessonRead, summary="Get a lesson")
async def get_lesson(
    lesson_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> LessonRead:
    lesson = await LessonService.get_lesson(db, lesson_id, tenant_id=current_user.tenant_id)
    return LessonRead.model_validate(lesson)


@router.post(
    "",
    response_model=LessonRead,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule a lesson",
)
async def create_lesson(
    body: LessonCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    staff: Annotated[User, Depends(get_current_user)],
) -> LessonRead:
    """
    Trainers always own the lessons they create. Admins may schedule on a
    trainer's behalf by passing trainer_id; it must be a member of the
    same school.
    """
    policy.ensure(
        policy.can_create_lesson(UserRole(staff.role)),
        "Only trainers and admins can schedule lessons",
    )
    trainer_id = staff.id
    if staff.role == UserRole.admin.value and body.trainer_id:
        trainer = await UserService.get_user(db, body.trainer_id, tenant_id=staff.tenant_id)
        trainer_id = trainer.id

    lesson = await LessonService.create_lesson(
        db, tenant_id=staff.tenant_id, trainer_id=trainer_id, data=body
    )
    return LessonRead.model_validate(lesson)


@router.patch("/{lesson_id}", response_model=LessonRead, summary="Update a lesson")
async def update_lesson(
    lesson_id: str,
    body: LessonUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> LessonRead:
    lesson = await LessonService.get_lesson(db, lesson_id, tenant_id=current_user.tenant_id)
    policy.ensure(
        policy.can_manage_lesson(
            UserRole(current_user.role), current_user.id, lesson.trainer_id
        ),
        "Only the lesson's trainer or an admin may change it",
    )
    lesson = await LessonService.update_lesson(
        db, lesson.id, body, tenant_id=current_user.tenant_id
    )
    return LessonRead.model_validate(lesson)


@router.delete(
    "/{lesson_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a lesson and its bookings",
)
async def delete_lesson(
    lesson_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> Response:
    lesson = await LessonService.get_lesson(db, lesson_id, tenant_id=current_user.tenant_id)
    policy.ensure(
        policy.can_manage_lesson(
            UserRole(current_user.role), current_user.id, lesson.trainer_id
        ),
        "Only the lesson's trainer or an admin may delete it",
    )
    await LessonService.delete_lesson(db, lesson.id, tenant_id=current_user.tenant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
