"""
api/routes/users.py
-------------------
User management within the caller's school.

GET   /users       — Admin: every user in the school, newest first.
GET   /users/{id}  — Any member: look up a fellow member.
PATCH /users/{id}  — Self (name / phone / email) or admin (anything).
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core import policy
from ridsport.db.session import get_db
from ridsport.dependencies import get_current_user
from ridsport.models.enums import UserRole
from ridsport.models.user import User
from ridsport.schemas.user import UserRead, UserUpdate
from ridsport.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=list[UserRead],
    summary="List all users in your riding school (admin only)",
)
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[UserRead]:
    policy.ensure(
        policy.can_list_users(UserRole(current_user.role)), "Admin privileges required"
    )
    users = await UserService.list_users(db, tenant_id=current_user.tenant_id)
    return [UserRead.model_validate(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get a user in your riding school",
)
async def get_user(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserRead:
    user = await UserService.get_user(db, user_id, tenant_id=current_user.tenant_id)
    return UserRead.model_validate(user)


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Update a user's profile",
)
async def update_user(
    user_id: str,
    body: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserRead:
    """Role and active flag can only be changed by an admin."""
    target = await UserService.get_user(db, user_id, tenant_id=current_user.tenant_id)
    policy.ensure(
        policy.can_update_user(
            UserRole(current_user.role),
            current_user.id,
            target.id,
            body.changes().keys(),
        ),
        "You may only edit your own name, phone and email",
    )
    user = await UserService.update_user(
        db, target.id, body, tenant_id=current_user.tenant_id
    )
    return UserRead.model_validate(user)
