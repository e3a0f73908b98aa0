"""
api/routes/auth.py
------------------
Identity binding endpoints.

Credentials are checked by the external identity provider; the client
arrives here with the provider's signed token.

POST /register  — Bind the caller's verified identity to a new user in a school.
GET  /me        — Return the authenticated user's profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core.security import IdentityClaims
from ridsport.db.session import get_db
from ridsport.dependencies import get_current_user, get_identity
from ridsport.models.user import User
from ridsport.schemas.user import UserRead, UserRegister
from ridsport.services.user_service import UserService

router = APIRouter(tags=["Authentication"])


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register the calling identity in a riding school",
)
async def register(
    body: UserRegister,
    identity: Annotated[IdentityClaims, Depends(get_identity)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRead:
    """
    The e-mail and external identity id come from the verified token.
    One login maps to at most one user across the whole platform.
    """
    user = await UserService.register_user(
        db,
        tenant_id=body.tenant_id,
        external_identity_id=identity.external_identity_id,
        email=identity.email,
        name=body.name,
        role=body.role,
        phone=body.phone,
    )
    return UserRead.model_validate(user)


@router.get(
    "/me",
    response_model=UserRead,
    summary="Get the currently authenticated user",
)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserRead:
    return UserRead.model_validate(current_user)
