"""
gladiator/messaging/routes.py

Messaging Routes
- Send a direct message
- List messages and conversations
- Unread counter and read receipts
"""

from uuid import UUID

from fastapi import APIRouter, Request, status

from gladiator.core.dependencies import CurrentUserDep, StoreDep
from gladiator.core.limiter import limiter
from gladiator.messaging.schemas import Conversation, MessageRead, MessageWrite, UnreadCount
from gladiator.messaging.services import MessageService

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.post(
    "",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send Message",
)
@limiter.limit("20/minute")
async def send_message(
    request: Request,
    data: MessageWrite,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> MessageRead:
    return await MessageService(store).send_message(
        current_user, data.recipient_id, data.body, data.subject
    )


@router.get(
    "",
    response_model=list[MessageRead],
    status_code=status.HTTP_200_OK,
    summary="List My Messages",
)
@limiter.limit("60/minute")
async def list_messages(
    request: Request,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> list[MessageRead]:
    return await MessageService(store).list_messages(current_user)


@router.get(
    "/conversations",
    response_model=list[Conversation],
    status_code=status.HTTP_200_OK,
    summary="List My Conversations",
)
@limiter.limit("60/minute")
async def list_conversations(
    request: Request,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> list[Conversation]:
    return await MessageService(store).list_conversations(current_user)


@router.get(
    "/unread-count",
    response_model=UnreadCount,
    status_code=status.HTTP_200_OK,
    summary="Count Unread Messages",
)
@limiter.limit("120/minute")
async def unread_count(
    request: Request,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> UnreadCount:
    return UnreadCount(count=await MessageService(store).unread_count(current_user))


@router.patch(
    "/{message_id}/read",
    response_model=MessageRead,
    status_code=status.HTTP_200_OK,
    summary="Mark Message as Read",
)
@limiter.limit("60/minute")
async def mark_message_read(
    request: Request,
    message_id: UUID,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> MessageRead:
    return await MessageService(store).mark_read(message_id, current_user)
