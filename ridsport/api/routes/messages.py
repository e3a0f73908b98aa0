"""
api/routes/messages.py
----------------------
Direct messaging endpoints.

GET   /messages               — Caller's inbox + outbox, newest first.
GET   /messages/unread-count  — Number of unread messages addressed to the caller.
POST  /messages               — Send a message to a member of the same school.
PATCH /messages/{id}/read     — Receiver marks a message as read.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ridsport.core import policy
from ridsport.db.session import get_db
from ridsport.dependencies import get_current_user
from ridsport.models.user import User
from ridsport.schemas.message import MessageCreate, MessageRead, UnreadCount
from ridsport.services.message_service import MessageService

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.get(
    "",
    response_model=list[MessageRead],
    summary="List your sent and received messages",
)
async def list_messages(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[MessageRead]:
    messages = await MessageService.list_messages_for_user(
        db, current_user.id, tenant_id=current_user.tenant_id
    )
    return [MessageRead.model_validate(m) for m in messages]


@router.get(
    "/unread-count",
    response_model=UnreadCount,
    summary="Count your unread messages",
)
async def unread_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> UnreadCount:
    count = await MessageService.count_unread(
        db, current_user.id, tenant_id=current_user.tenant_id
    )
    return UnreadCount(count=count)


@router.post(
    "",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
)
async def send_message(
    body: MessageCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageRead:
    """The sender is always the caller; new messages start unread."""
    message = await MessageService.create_message(
        db,
        tenant_id=current_user.tenant_id,
        sender_id=current_user.id,
        data=body,
    )
    return MessageRead.model_validate(message)


@router.patch(
    "/{message_id}/read",
    response_model=MessageRead,
    summary="Mark a message as read",
)
async def mark_message_read(
    message_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageRead:
    message = await MessageService.get_message(
        db, message_id, tenant_id=current_user.tenant_id
    )
    policy.ensure(
        message.receiver_id == current_user.id,
        "Only the receiver can mark a message as read",
    )
    message = await MessageService.mark_read(
        db, message.id, tenant_id=current_user.tenant_id
    )
    return MessageRead.model_validate(message)
