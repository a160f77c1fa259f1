"""
gladiator/messaging/services.py

Messaging Service Layer
- Send direct messages between profiles
- List sent and received messages, newest first
- Group messages into conversations by counterpart
- Mark messages as read and count unread ones
"""

import logging
from collections.abc import Iterable
from typing import Any
from uuid import UUID

from gladiator.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from gladiator.core.schemas import CurrentUser
from gladiator.core.validators import optional_text, required_text
from gladiator.database.models import MESSAGES, PROFILES
from gladiator.database.store import DataStore
from gladiator.messaging.schemas import Conversation, CounterpartInfo, MessageRead

logger = logging.getLogger(__name__)


def group_by_counterpart(messages: Iterable[MessageRead], me: UUID) -> list[Conversation]:
    """
    Group messages by the other party. Conversations are ordered by their most
    recent message; messages inside keep the input order (newest first).
    """
    grouped: dict[UUID, list[MessageRead]] = {}
    for message in messages:
        other = message.recipient_id if message.sender_id == me else message.sender_id
        grouped.setdefault(other, []).append(message)

    conversations = [
        Conversation(
            counterpart_id=other,
            counterpart=next((m.counterpart for m in items if m.counterpart), None),
            unread_count=sum(1 for m in items if m.recipient_id == me and not m.read),
            last_message_at=max(m.created_at for m in items),
            messages=items,
        )
        for other, items in grouped.items()
    ]
    conversations.sort(key=lambda c: c.last_message_at, reverse=True)
    return conversations


class MessageService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def _get_message(self, message_id: UUID) -> dict[str, Any]:
        message = await self.store.fetch_one(MESSAGES, {"id": message_id})
        if not message:
            raise NotFoundError("Message not found")
        return message

    async def send_message(
        self,
        actor: CurrentUser,
        recipient_id: UUID,
        body: str | None,
        subject: str | None = None,
    ) -> MessageRead:
        """
        Raises:
            EmptyField: If the body is blank.
            ValidationError: If the actor messages themselves.
            NotFoundError: If the recipient has no profile.
        """
        body = required_text(body, "body")
        if recipient_id == actor.id:
            raise ValidationError("You cannot message yourself", code="self_message")

        recipient = await self.store.fetch_one(PROFILES, {"id": recipient_id})
        if not recipient:
            raise NotFoundError("Recipient not found")

        row = await self.store.insert(
            MESSAGES,
            {
                "sender_id": actor.id,
                "recipient_id": recipient_id,
                "subject": optional_text(subject),
                "body": body,
                "read": False,
            },
        )
        logger.info(f"[MESSAGE] {actor.id} -> {recipient_id} ({row['id']})")
        return MessageRead.model_validate(
            {**row, "direction": "sent", "counterpart": CounterpartInfo.model_validate(recipient)}
        )

    async def list_messages(self, actor: CurrentUser) -> list[MessageRead]:
        """Everything the actor sent or received, newest first."""
        sent = await self.store.fetch_all(MESSAGES, {"sender_id": actor.id})
        received = await self.store.fetch_all(MESSAGES, {"recipient_id": actor.id})
        rows = sorted(sent + received, key=lambda row: row["created_at"], reverse=True)

        counterpart_ids = {
            row["recipient_id"] if row["sender_id"] == actor.id else row["sender_id"] for row in rows
        }
        profiles = (
            {p["id"]: p for p in await self.store.fetch_all(PROFILES, {"id": list(counterpart_ids)})}
            if counterpart_ids
            else {}
        )

        messages = []
        for row in rows:
            outgoing = row["sender_id"] == actor.id
            other = row["recipient_id"] if outgoing else row["sender_id"]
            messages.append(
                MessageRead.model_validate(
                    {
                        **row,
                        "direction": "sent" if outgoing else "received",
                        "counterpart": (
                            CounterpartInfo.model_validate(profiles[other]) if other in profiles else None
                        ),
                    }
                )
            )
        return messages

    async def list_conversations(self, actor: CurrentUser) -> list[Conversation]:
        return group_by_counterpart(await self.list_messages(actor), actor.id)

    async def mark_read(self, message_id: UUID, actor: CurrentUser) -> MessageRead:
        """
        The recipient marks a message as read; the sender's call changes nothing.

        Raises:
            NotFoundError: If the message does not exist.
            AuthorizationError: If the actor is neither sender nor recipient.
        """
        message = await self._get_message(message_id)
        if message["recipient_id"] == actor.id:
            if not message["read"]:
                message = await self.store.update(MESSAGES, {"id": message_id}, {"read": True}) or message
                logger.debug(f"[MESSAGE] {message_id} read by {actor.id}")
            return MessageRead.model_validate({**message, "direction": "received"})
        if message["sender_id"] == actor.id:
            return MessageRead.model_validate({**message, "direction": "sent"})

        logger.warning(f"[MESSAGE] {actor.id} tried to mark message {message_id} as read")
        raise AuthorizationError("You are not a participant of this message")

    async def unread_count(self, actor: CurrentUser) -> int:
        return await self.store.count(MESSAGES, {"recipient_id": actor.id, "read": False})
