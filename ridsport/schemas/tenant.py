"""
schemas/tenant.py
-----------------
Pydantic request/response models for riding schools (tenants).

Naming convention:
  TenantCreate  → inbound request body
  TenantUpdate  → inbound PATCH body (subdomain is immutable, so absent)
  TenantRead    → outbound response body
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ridsport.schemas.common import PartialUpdate, ReadModel

SUBDOMAIN_PATTERN = r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$"
COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class TenantCreate(BaseModel):
    name: str = Field(
        ...,
        min_length=2,
        max_length=255,
        examples=["Stall Solbacken"],
        description="Display name of the riding school",
    )
    subdomain: str = Field(
        ...,
        max_length=63,
        pattern=SUBDOMAIN_PATTERN,
        examples=["solbacken"],
        description="Unique lookup key, used as <subdomain>.ridsportpro.se",
    )
    address: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=320)
    website: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    logo: Optional[str] = Field(default=None, max_length=500, description="Logo URL")
    primary_color: str = Field(default="#0ea5e9", pattern=COLOR_PATTERN)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("subdomain", mode="before")
    @classmethod
    def lower_subdomain(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class TenantUpdate(PartialUpdate):
    NON_NULLABLE = frozenset({"name", "primary_color", "active"})

    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    address: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=320)
    website: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    logo: Optional[str] = Field(default=None, max_length=500)
    primary_color: Optional[str] = Field(default=None, pattern=COLOR_PATTERN)
    active: Optional[bool] = None


class TenantRead(ReadModel):
    id: str
    name: str
    subdomain: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    primary_color: str
    active: bool
    created_at: datetime
    updated_at: datetime
