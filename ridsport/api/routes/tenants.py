"""
api/routes/tenants.py
---------------------
Riding school (tenant) endpoints.

GET   /riding-schools                        — Public list of active schools.
GET   /riding-schools/{id}                   — Public lookup by id.
GET   /riding-schools/subdomain/{subdomain}  — Public lookup by subdomain.
POST  /riding-schools                        — Platform operator onboards a school.
PATCH /riding-schools/{id}                   — Platform operator or the school's admin.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core import policy
from ridsport.db.session import get_db
from ridsport.dependencies import (
    get_optional_user,
    is_platform_operator,
    require_platform_operator,
)
from ridsport.models.enums import UserRole
from ridsport.models.user import User
from ridsport.schemas.tenant import TenantCreate, TenantRead, TenantUpdate
from ridsport.services.tenant_service import TenantService

router = APIRouter(prefix="/riding-schools", tags=["Riding schools"])


@router.get(
    "",
    response_model=list[TenantRead],
    summary="List active riding schools",
)
async def list_riding_schools(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TenantRead]:
    tenants = await TenantService.list_active_tenants(db)
    return [TenantRead.model_validate(t) for t in tenants]


@router.get(
    "/subdomain/{subdomain}",
    response_model=TenantRead,
    summary="Look up a riding school by subdomain",
)
async def get_riding_school_by_subdomain(
    subdomain: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantRead:
    tenant = await TenantService.get_tenant_by_subdomain(db, subdomain)
    return TenantRead.model_validate(tenant)


@router.get(
    "/{tenant_id}",
    response_model=TenantRead,
    summary="Get a riding school by id",
)
async def get_riding_school(
    tenant_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantRead:
    tenant = await TenantService.get_tenant(db, tenant_id)
    return TenantRead.model_validate(tenant)


@router.post(
    "",
    response_model=TenantRead,
    status_code=status.HTTP_201_CREATED,
    summary="Onboard a new riding school",
    dependencies=[Depends(require_platform_operator)],
)
async def create_riding_school(
    body: TenantCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantRead:
    """Platform operators only (X-Platform-Key header)."""
    tenant = await TenantService.create_tenant(db, body)
    return TenantRead.model_validate(tenant)


@router.patch(
    "/{tenant_id}",
    response_model=TenantRead,
    summary="Update a riding school's details",
)
async def update_riding_school(
    tenant_id: str,
    body: TenantUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Optional[User], Depends(get_optional_user)],
    x_platform_key: Annotated[Optional[str], Header()] = None,
) -> TenantRead:
    """
    The school's own admins may edit it; so may the platform operator.
    The subdomain can never be changed.
    """
    if not is_platform_operator(x_platform_key):
        policy.ensure(
            current_user is not None
            and policy.can_update_tenant(
                UserRole(current_user.role), current_user.tenant_id, tenant_id
            ),
            "Only this school's admins may edit it",
        )
    tenant = await TenantService.update_tenant(db, tenant_id, body)
    return TenantRead.model_validate(tenant)
