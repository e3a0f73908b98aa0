"""
dependencies.py
---------------
FastAPI dependency injection functions for authentication and authorisation.

Flow:
  1. HTTPBearer extracts the identity token from the Authorization header.
  2. get_identity verifies the token issued by the identity provider and
     returns its claims (no DB round-trip).
  3. get_current_user loads the User bound to that identity, which fixes
     the caller's tenant and role for the rest of the request.
  4. Routes then ask core.policy whether the caller's role allows the action.

The tenant_id of the loaded user is used to scope every DB query, so a
caller can never reach another school's data through a guessed id.
"""

import secrets
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core.config import settings
from ridsport.core.exceptions import NotFoundError
from ridsport.core.logging import bind_request_context, get_logger
from ridsport.core.security import IdentityClaims, decode_identity_token
from ridsport.db.session import get_db
from ridsport.models.user import User
from ridsport.services.user_service import UserService

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_identity(
    credentials: Annotated[
        Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)
    ],
) -> IdentityClaims:
    """Verify the identity token. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _CREDENTIALS_EXCEPTION
    try:
        return decode_identity_token(credentials.credentials)
    except JWTError as exc:
        logger.warning("Identity token rejected", error=str(exc))
        raise _CREDENTIALS_EXCEPTION


async def get_current_user(
    identity: Annotated[IdentityClaims, Depends(get_identity)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Load the user bound to the verified identity.
    Raises 401 if the identity has not registered, 403 if deactivated.
    """
    try:
        user = await UserService.get_user_by_external_identity(
            db, identity.external_identity_id
        )
    except NotFoundError:
        logger.warning(
            "Verified identity has no user record",
            external_identity_id=identity.external_identity_id,
        )
        raise _CREDENTIALS_EXCEPTION

    if not user.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated",
        )

    bind_request_context(user_id=user.id, tenant_id=user.tenant_id)
    return user


async def get_optional_user(
    credentials: Annotated[
        Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)
    ],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Optional[User]:
    """Like get_current_user, but anonymous callers yield None."""
    if credentials is None:
        return None
    identity = await get_identity(credentials)
    return await get_current_user(identity, db)


def is_platform_operator(x_platform_key: Optional[str]) -> bool:
    if not settings.PLATFORM_API_KEY or not x_platform_key:
        return False
    return secrets.compare_digest(x_platform_key, settings.PLATFORM_API_KEY)


async def require_platform_operator(
    x_platform_key: Annotated[Optional[str], Header()] = None,
) -> None:
    """Gate for platform-level operations such as onboarding a school."""
    if not is_platform_operator(x_platform_key):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Platform operator key required",
        )
