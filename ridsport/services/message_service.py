"""
services/message_service.py
----------------------------
Messaging Store: direct messages between users of one school.

Critical security invariant:
  Every query that takes a tenant_id MUST include it in the WHERE clause.
  This prevents cross-tenant data leakage even if a user id is guessable.
"""

from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core.exceptions import NotFoundError
from ridsport.core.logging import get_logger
from ridsport.models.message import Message
from ridsport.schemas.message import MessageCreate
from ridsport.services.user_service import UserService

logger = get_logger(__name__)


class MessageService:

    @staticmethod
    async def create_message(
        db: AsyncSession,
        tenant_id: str,
        sender_id: str,
        data: MessageCreate,
    ) -> Message:
        """
        Persist a new, unread message.

        The receiver must belong to the sender's school; anyone else is
        reported as not found.
        """
        receiver = await UserService.get_user(db, data.receiver_id, tenant_id)

        message = Message(
            tenant_id=tenant_id,
            sender_id=sender_id,
            receiver_id=receiver.id,
            subject=data.subject,
            content=data.content,
            read=False,
        )
        db.add(message)
        await db.flush()
        await db.refresh(message)

        logger.info(
            "Message stored",
            message_id=message.id,
            tenant_id=tenant_id,
            sender_id=sender_id,
            receiver_id=receiver.id,
        )
        return message

    @staticmethod
    async def get_message(
        db: AsyncSession, message_id: str, tenant_id: Optional[str] = None
    ) -> Message:
        query = select(Message).where(Message.id == message_id)
        if tenant_id is not None:
            query = query.where(Message.tenant_id == tenant_id)
        result = await db.execute(query)
        message = result.scalar_one_or_none()
        if message is None:
            raise NotFoundError.for_entity("Message", message_id)
        return message

    @staticmethod
    async def list_messages_for_user(
        db: AsyncSession, user_id: str, tenant_id: Optional[str] = None
    ) -> list[Message]:
        """Inbox and outbox together, newest first."""
        query = (
            select(Message)
            .where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .order_by(Message.created_at.desc())
        )
        if tenant_id is not None:
            query = query.where(Message.tenant_id == tenant_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def mark_read(
        db: AsyncSession, message_id: str, tenant_id: Optional[str] = None
    ) -> Message:
        """Idempotent: marking an already-read message just returns it."""
        message = await MessageService.get_message(db, message_id, tenant_id)
        if not message.read:
            message.read = True
            await db.flush()
            await db.refresh(message)
            logger.info("Message read", message_id=message.id)
        return message

    @staticmethod
    async def count_unread(
        db: AsyncSession, user_id: str, tenant_id: Optional[str] = None
    ) -> int:
        base_filter = [Message.receiver_id == user_id, Message.read.is_(False)]
        if tenant_id is not None:
            base_filter.append(Message.tenant_id == tenant_id)
        result = await db.execute(
            select(func.count()).select_from(Message).where(*base_filter)
        )
        return result.scalar_one()
