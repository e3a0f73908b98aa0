"""
schemas/user.py
---------------
Pydantic models for user registration, profile updates and responses.

E-mail and external identity id on registration come from the verified
identity token, not from the request body, so they cannot be spoofed.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from ridsport.models.enums import UserRole
from ridsport.schemas.common import PartialUpdate, ReadModel


class UserRegister(BaseModel):
    """Self-registration of the calling identity into a riding school."""
    tenant_id: str = Field(..., description="Id of the riding school to join")
    name: str = Field(..., min_length=1, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    role: UserRole

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class UserUpdate(PartialUpdate):
    """
    Profile changes. Which fields a caller may touch is decided by
    core.policy.can_update_user; tenant and identity binding never change.
    """
    NON_NULLABLE = frozenset({"name", "email", "role", "active"})

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    role: Optional[UserRole] = None
    active: Optional[bool] = None


class UserRead(ReadModel):
    id: str
    tenant_id: str
    email: str
    name: str
    phone: Optional[str] = None
    role: UserRole
    active: bool
    created_at: datetime
    updated_at: datetime
