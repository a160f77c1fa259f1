"""
gladiator/messaging/schemas.py

Messaging Schemas
- MessageWrite: direct message to another user
- MessageRead: stored message tagged with direction and counterpart
- Conversation: messages grouped by the other party
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from gladiator.database.enums import UserRole


class CounterpartInfo(BaseModel):
    """Partial profile of the other party of a message."""

    id: UUID
    full_name: str | None = None
    avatar_url: str | None = None
    user_type: UserRole | None = None

    model_config = ConfigDict(from_attributes=True)


class MessageWrite(BaseModel):
    recipient_id: UUID = Field(..., description="Profile receiving the message")
    subject: str | None = Field(default=None, max_length=200)
    body: str = Field(..., description="Message text")


class MessageRead(BaseModel):
    id: UUID
    sender_id: UUID
    recipient_id: UUID
    subject: str | None = None
    body: str
    read: bool = False
    created_at: datetime
    direction: Literal["sent", "received"] | None = Field(
        default=None, description="Relative to the caller"
    )
    counterpart: CounterpartInfo | None = None

    model_config = ConfigDict(from_attributes=True)


class Conversation(BaseModel):
    counterpart_id: UUID
    counterpart: CounterpartInfo | None = None
    unread_count: int = Field(0, description="Received messages not read yet")
    last_message_at: datetime
    messages: list[MessageRead] = Field(..., description="Newest first")


class UnreadCount(BaseModel):
    count: int
