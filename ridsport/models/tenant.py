"""
models/tenant.py
----------------
Riding school (tenant) ORM model.

Each riding school is an isolated organisational unit. All data belonging to
a school is scoped by tenant_id at the query level — never trust
application-level filtering alone; always include tenant_id in WHERE clauses.

Schools are never deleted, only deactivated. Deactivation hides a school from
the public listing but leaves its users, lessons and history in place.
"""

from typing import Optional

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ridsport.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Tenant(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "riding_schools"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Lookup key for <subdomain>.ridsportpro.se
    subdomain: Mapped[str] = mapped_column(
        String(63), unique=True, nullable=False, index=True
    )
    address: Mapped[Optional[str]] = mapped_column(String(255))
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    email: Mapped[Optional[str]] = mapped_column(String(320))
    website: Mapped[Optional[str]] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text)
    logo: Mapped[Optional[str]] = mapped_column(String(500))
    primary_color: Mapped[str] = mapped_column(
        String(20), nullable=False, default="#0ea5e9"
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<Tenant id={self.id} subdomain={self.subdomain}>"
