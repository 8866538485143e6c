"""POST /chats - Create a new chat from its first message."""

import logging
import uuid

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.chats.models import Part, Turn, chat_title, turn_to_document
from db import FirestoreService
from dependencies import get_current_user_id, get_firestore_service
from errors import PersistenceError

logger = logging.getLogger(__name__)


# --- Request Schemas ---


class CreateChatRequest(BaseModel):
    """Request body for creating a chat."""

    text: str = Field(..., description="First user message of the conversation")


# --- Handler ---


async def create_chat(
    body: CreateChatRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    firestore_service: FirestoreService = Depends(get_firestore_service),
) -> JSONResponse:
    """Create a chat with one user turn and index it for the caller.

    Returns the new chat ID as a JSON string with status 201.
    """
    request_id = getattr(request.state, "request_id", None)
    chat_id = str(uuid.uuid4())
    first_turn = Turn(role="user", parts=[Part(text=body.text)])

    try:
        await firestore_service.create_chat(
            chat_id=chat_id,
            user_id=user_id,
            first_turn=turn_to_document(first_turn),
            title=chat_title(body.text),
        )
    except Exception as e:
        logger.exception("[%s] Failed to create chat", request_id)
        raise PersistenceError("Error creating chat!") from e

    logger.info("[%s] Created chat %s", request_id, chat_id)
    return JSONResponse(content=chat_id, status_code=201)
