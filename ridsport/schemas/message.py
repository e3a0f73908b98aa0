"""
schemas/message.py
------------------
Pydantic models for direct messages between users.

There is deliberately no `read` field on MessageCreate: new messages are
always unread.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ridsport.schemas.common import ReadModel


class MessageCreate(BaseModel):
    receiver_id: str
    subject: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1, max_length=8000)


class MessageRead(ReadModel):
    id: str
    tenant_id: str
    sender_id: str
    receiver_id: str
    subject: str
    content: str
    read: bool
    created_at: datetime


class UnreadCount(BaseModel):
    count: int
