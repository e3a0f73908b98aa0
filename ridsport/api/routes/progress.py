"""
api/routes/progress.py
----------------------
Progress report endpoints. Reports are append-only.

GET  /progress/rider/{rider_id}      — Rider's own reports, or any rider's for staff.
GET  /progress/trainer/{trainer_id}  — Reports written by a trainer.
POST /progress                       — Trainer records an assessment.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core import policy
from ridsport.db.session import get_db
from ridsport.dependencies import get_current_user
from ridsport.models.enums import UserRole
from ridsport.models.user import User
from ridsport.schemas.progress import ProgressReportCreate, ProgressReportRead
from ridsport.services.progress_service import ProgressService

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get(
    "/rider/{rider_id}",
    response_model=list[ProgressReportRead],
    summary="List progress reports about a rider",
)
async def list_rider_reports(
    rider_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[ProgressReportRead]:
    policy.ensure(
        policy.can_view_progress_of_rider(
            UserRole(current_user.role), current_user.id, rider_id
        ),
        "You may only view your own progress",
    )
    reports = await ProgressService.list_reports_by_rider(
        db, rider_id, tenant_id=current_user.tenant_id
    )
    return [ProgressReportRead.model_validate(r) for r in reports]


@router.get(
    "/trainer/{trainer_id}",
    response_model=list[ProgressReportRead],
    summary="List progress reports written by a trainer",
)
async def list_trainer_reports(
    trainer_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[ProgressReportRead]:
    policy.ensure(
        policy.can_view_progress_of_trainer(
            UserRole(current_user.role), current_user.id, trainer_id
        ),
        "Trainers may only list their own reports",
    )
    reports = await ProgressService.list_reports_by_trainer(
        db, trainer_id, tenant_id=current_user.tenant_id
    )
    return [ProgressReportRead.model_validate(r) for r in reports]


@router.post(
    "",
    response_model=ProgressReportRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record a progress report",
)
async def create_report(
    body: ProgressReportCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ProgressReportRead:
    """The author is always the calling trainer."""
    policy.ensure(
        policy.can_create_progress_report(UserRole(current_user.role)),
        "Only trainers can write progress reports",
    )
    report = await ProgressService.create_report(
        db, tenant_id=current_user.tenant_id, trainer_id=current_user.id, data=body
    )
    return ProgressReportRead.model_validate(report)
