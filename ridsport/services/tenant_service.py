"""
services/tenant_service.py
--------------------------
Tenant Registry: business logic for riding schools.

Service layer is responsible for:
  - Constructing queries
  - Enforcing business rules (e.g. unique subdomains)
  - Returning domain objects (ORM models) to the route layer
  - Never returning HTTP responses (that's the route's job)
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core.exceptions import ConflictError, NotFoundError
from ridsport.core.logging import get_logger
from ridsport.db.base import utcnow
from ridsport.models.tenant import Tenant
from ridsport.schemas.tenant import TenantCreate, TenantUpdate

logger = get_logger(__name__)


class TenantService:

    @staticmethod
    async def create_tenant(db: AsyncSession, data: TenantCreate) -> Tenant:
        """
        Onboard a new riding school. New schools start active.
        Raises ConflictError if the subdomain is already taken.
        """
        if await TenantService._subdomain_taken(db, data.subdomain):
            raise ConflictError(f"Subdomain '{data.subdomain}' is already taken")

        tenant = Tenant(**data.model_dump(), active=True)
        db.add(tenant)
        try:
            await db.flush()  # Trigger DB constraints before commit
            await db.refresh(tenant)
        except IntegrityError:
            # Lost a race against a concurrent create with the same subdomain
            await db.rollback()
            raise ConflictError(f"Subdomain '{data.subdomain}' is already taken")

        logger.info("Tenant created", tenant_id=tenant.id, subdomain=tenant.subdomain)
        return tenant

    @staticmethod
    async def get_tenant(db: AsyncSession, tenant_id: str) -> Tenant:
        result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
        tenant = result.scalar_one_or_none()
        if tenant is None:
            raise NotFoundError.for_entity("Riding school", tenant_id)
        return tenant

    @staticmethod
    async def get_tenant_by_subdomain(db: AsyncSession, subdomain: str) -> Tenant:
        result = await db.execute(
            select(Tenant).where(Tenant.subdomain == subdomain.lower())
        )
        tenant = result.scalar_one_or_none()
        if tenant is None:
            raise NotFoundError.for_entity("Riding school", subdomain)
        return tenant

    @staticmethod
    async def list_active_tenants(db: AsyncSession) -> list[Tenant]:
        """Public listing: deactivated schools are hidden."""
        result = await db.execute(
            select(Tenant).where(Tenant.active.is_(True)).order_by(Tenant.created_at)
        )
        return list(result.scalars().all())

    @staticmethod
    async def update_tenant(
        db: AsyncSession, tenant_id: str, data: TenantUpdate
    ) -> Tenant:
        tenant = await TenantService.get_tenant(db, tenant_id)
        for field, value in data.changes().items():
            setattr(tenant, field, value)
        tenant.updated_at = utcnow()
        await db.flush()
        await db.refresh(tenant)
        logger.info("Tenant updated", tenant_id=tenant.id, fields=sorted(data.changes()))
        return tenant

    @staticmethod
    async def _subdomain_taken(db: AsyncSession, subdomain: str) -> bool:
        result = await db.execute(select(Tenant.id).where(Tenant.subdomain == subdomain))
        return result.scalar_one_or_none() is not None
