"""
models/message.py
-----------------
Direct message between two users of the same school.

The sender owns the row. The receiver may only flip `read` to True;
everything else is immutable after creation.
"""

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ridsport.db.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin


class Message(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "messages"

    # Denormalised for zero-JOIN tenant-scoped queries
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("riding_schools.id"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    receiver_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Message id={self.id} sender_id={self.sender_id} read={self.read}>"
