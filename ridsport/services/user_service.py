"""
services/user_service.py
------------------------
Identity & Role Store: registration, lookup and profile management.

Two uniqueness rules, both also backed by DB constraints:
  - (email, tenant_id): one account per e-mail within a school.
  - external_identity_id: one user record per identity-provider login,
    across the whole platform.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core.exceptions import ConflictError, NotFoundError
from ridsport.core.logging import get_logger
from ridsport.db.base import utcnow
from ridsport.models.enums import UserRole
from ridsport.models.user import User
from ridsport.schemas.user import UserUpdate
from ridsport.services.tenant_service import TenantService

logger = get_logger(__name__)


class UserService:

    @staticmethod
    async def register_user(
        db: AsyncSession,
        tenant_id: str,
        external_identity_id: str,
        email: str,
        name: str,
        role: UserRole,
        phone: Optional[str] = None,
    ) -> User:
        """
        Bind a verified external identity to a new user in a school.

        Raises:
            NotFoundError: the school does not exist or is deactivated.
            ConflictError: e-mail already used in that school, or the
                           identity is already bound to a user.
        """
        tenant = await TenantService.get_tenant(db, tenant_id)
        if not tenant.active:
            raise NotFoundError.for_entity("Riding school", tenant_id)

        email = email.lower()
        if await UserService._identity_bound(db, external_identity_id):
            raise ConflictError("This login is already registered")
        if await UserService._email_taken(db, tenant_id, email):
            raise ConflictError(f"Email '{email}' is already registered")

        user = User(
            tenant_id=tenant_id,
            external_identity_id=external_identity_id,
            email=email,
            name=name,
            phone=phone,
            role=UserRole(role).value,
            active=True,
        )
        db.add(user)
        try:
            await db.flush()
            await db.refresh(user)
        except IntegrityError:
            await db.rollback()
            raise ConflictError(f"Email '{email}' or this login is already registered")

        logger.info(
            "User registered",
            user_id=user.id,
            tenant_id=tenant_id,
            role=user.role,
        )
        return user

    @staticmethod
    async def get_user(
        db: AsyncSession, user_id: str, tenant_id: Optional[str] = None
    ) -> User:
        """
        Fetch a user by id. With tenant_id, users of other schools are
        reported as missing rather than forbidden.
        """
        query = select(User).where(User.id == user_id)
        if tenant_id is not None:
            query = query.where(User.tenant_id == tenant_id)
        result = await db.execute(query)
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError.for_entity("User", user_id)
        return user

    @staticmethod
    async def get_user_by_external_identity(
        db: AsyncSession, external_identity_id: str
    ) -> User:
        result = await db.execute(
            select(User).where(User.external_identity_id == external_identity_id)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("No user is registered for this login")
        return user

    @staticmethod
    async def list_users(
        db: AsyncSession, tenant_id: Optional[str] = None
    ) -> list[User]:
        """
        Newest first. Without tenant_id this is a platform-wide listing;
        callers must enforce tenant isolation before using that form.
        """
        query = select(User).order_by(User.created_at.desc())
        if tenant_id is not None:
            query = query.where(User.tenant_id == tenant_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update_user(
        db: AsyncSession,
        user_id: str,
        data: UserUpdate,
        tenant_id: Optional[str] = None,
    ) -> User:
        """
        Apply a partial update. Tenant and identity binding are not
        updatable. Re-applying the same changes is a no-op success.
        """
        user = await UserService.get_user(db, user_id, tenant_id)
        changes = data.changes()

        if "email" in changes:
            changes["email"] = changes["email"].lower()
            if changes["email"] != user.email and await UserService._email_taken(
                db, user.tenant_id, changes["email"]
            ):
                raise ConflictError(f"Email '{changes['email']}' is already registered")
        if "role" in changes:
            changes["role"] = UserRole(changes["role"]).value

        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = utcnow()
        try:
            await db.flush()
            await db.refresh(user)
        except IntegrityError:
            await db.rollback()
            raise ConflictError(f"Email '{changes.get('email')}' is already registered")

        logger.info("User updated", user_id=user.id, fields=sorted(changes))
        return user

    @staticmethod
    async def deactivate_user(
        db: AsyncSession, user_id: str, tenant_id: Optional[str] = None
    ) -> User:
        """Users are never deleted; they lose access instead."""
        return await UserService.update_user(
            db, user_id, UserUpdate(active=False), tenant_id
        )

    @staticmethod
    async def _identity_bound(db: AsyncSession, external_identity_id: str) -> bool:
        result = await db.execute(
            select(User.id).where(User.external_identity_id == external_identity_id)
        )
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def _email_taken(db: AsyncSession, tenant_id: str, email: str) -> bool:
        result = await db.execute(
            select(User.id).where(User.tenant_id == tenant_id, User.email == email)
        )
        return result.scalar_one_or_none() is not None
