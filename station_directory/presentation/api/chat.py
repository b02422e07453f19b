"""
Chat API Router - Direct messages between two users.

Clients poll /chat/history; there is no push delivery.

Message format (what the chat client reads):
{"id": "uuid", "from_user": "alice", "to_user": "bob", "text": "...", "timestamp": "ISO"}
"""

from logging import getLogger

from fastapi import APIRouter, Depends, Query, status
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel

from station_directory.application.dto.chat import MessageDTO
from station_directory.application.services.message_store import MessageStore
from station_directory.domain.value_objects.auth_identity import AuthIdentity
from station_directory.presentation.dependencies.auth import get_current_user

logger = getLogger(__name__)


class SendMessageRequest(BaseModel):
    to: str = ""
    text: str = ""


class SendMessageResponse(BaseModel):
    success: bool
    message: MessageDTO


router = APIRouter(prefix="/chat", tags=["chat"])


@router.post(
    "/send",
    response_model=SendMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def send_message(
    request: SendMessageRequest,
    store: FromDishka[MessageStore],
    current_user: AuthIdentity = Depends(get_current_user),
):
    message = await store.send(current_user, request.to, request.text)
    return SendMessageResponse(success=True, message=MessageDTO.from_entity(message))


@router.get("/history", response_model=list[MessageDTO])
@inject
async def chat_history(
    store: FromDishka[MessageStore],
    user: str = Query(..., description="The other participant"),
    current_user: AuthIdentity = Depends(get_current_user),
):
    """Messages between the caller and ``user``, oldest first."""
    messages = await store.history(current_user, user)
    return [MessageDTO.from_entity(message) for message in messages]


@router.get("/messages/{message_id}", response_model=MessageDTO)
@inject
async def get_message(
    message_id: str,
    store: FromDishka[MessageStore],
    current_user: AuthIdentity = Depends(get_current_user),
):
    message = await store.get(current_user, message_id)
    return MessageDTO.from_entity(message)
