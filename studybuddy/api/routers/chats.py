"""
Chat API endpoints.

Routes:
- POST /chats - Create new chat
- GET /chats - List the caller's chats
- GET /chats/{id} - Get chat transcript
- PUT /chats/{id} - Rename chat
- DELETE /chats/{id} - Delete chat and its messages
- POST /chats/{id}/messages - Send a message and run one chat turn

Dependencies: studybuddy.application.services, studybuddy.models
System role: Chat HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from studybuddy.api.deps.auth import get_current_owner_id
from studybuddy.api.deps.dependencies import get_chat_service
from studybuddy.api.routers.router_utils import handle_service_errors
from studybuddy.application.services.chat_service import ChatService
from studybuddy.models.chat import (
    ChatResponse,
    CreateChatRequest,
    SendMessageRequest,
    UpdateChatRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chats", tags=["chats"])


@router.post("", response_model=ChatResponse, status_code=201)
@handle_service_errors
async def create_chat(
    request: CreateChatRequest,
    owner_id: str = Depends(get_current_owner_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Create a new, empty chat.

    Args:
        request: CreateChatRequest with optional title
        owner_id: Authenticated owner
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Created chat
    """
    return await chat_service.create_chat(owner_id, title=request.title)


@router.get("", response_model=list[ChatResponse])
@handle_service_errors
async def list_chats(
    owner_id: str = Depends(get_current_owner_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> list[ChatResponse]:
    """List the caller's chats, most recently active first."""
    return await chat_service.list_chats(owner_id)


@router.get("/{chat_id}", response_model=ChatResponse)
@handle_service_errors
async def get_chat(
    chat_id: UUID,
    owner_id: str = Depends(get_current_owner_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Get a chat transcript.

    Raises:
        HTTPException(404): Chat not found
    """
    return await chat_service.get_chat(chat_id, owner_id)


@router.put("/{chat_id}", response_model=ChatResponse)
@handle_service_errors
async def rename_chat(
    chat_id: UUID,
    request: UpdateChatRequest,
    owner_id: str = Depends(get_current_owner_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Rename a chat."""
    return await chat_service.rename_chat(chat_id, owner_id, request.title)


@router.delete("/{chat_id}", status_code=204)
@handle_service_errors
async def delete_chat(
    chat_id: UUID,
    owner_id: str = Depends(get_current_owner_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> None:
    """Delete a chat and all of its messages."""
    await chat_service.delete_chat(chat_id, owner_id)


@router.post("/{chat_id}/messages", response_model=ChatResponse)
@handle_service_errors
async def send_message(
    chat_id: UUID,
    request: SendMessageRequest,
    owner_id: str = Depends(get_current_owner_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Send a message and process one chat turn.

    The assistant may create, update or delete a quiz, study plan or note
    as part of the turn; the reply message links to the affected document
    through its metadata.

    Args:
        chat_id: Chat UUID
        request: SendMessageRequest with the message content
        owner_id: Authenticated owner
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Full transcript after the turn

    Raises:
        HTTPException(400): Empty message
        HTTPException(404): Chat not found
        HTTPException(500): Turn could not be persisted
    """
    logger.info("Processing chat turn", extra={"chat_id": str(chat_id)})
    return await chat_service.process_turn(chat_id, owner_id, request.content)
