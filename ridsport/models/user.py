"""
models/user.py
--------------
User ORM model with roles and tenant binding.

Role design (see core/policy.py for the enforced rules):
  - 'Ryttare' (rider):   books lessons.
  - 'Tränare' (trainer): schedules lessons, writes progress reports.
  - 'Admin':             manages users within their own school.

A user belongs to exactly one school for its whole lifetime and is paired
1:1 with an account at the external identity provider. Users are never
hard-deleted; set active=False instead.
"""

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ridsport.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from ridsport.models.enums import UserRole


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", "tenant_id", name="uq_users_email_tenant"),
    )

    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("riding_schools.id"),
        nullable=False,
        index=True,
    )
    external_identity_id: Mapped[str] = mapped_column(
        String(128), unique=True, nullable=False, index=True
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.rider.value
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role}>"
