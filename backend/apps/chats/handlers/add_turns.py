"""PUT /chats/{chat_id} - Append a question/answer exchange to a chat."""

import logging

from fastapi import Depends, Request
from pydantic import BaseModel, Field

from apps.chats.models import build_turns, turn_to_document
from db import FirestoreService
from dependencies import get_current_user_id, get_firestore_service
from errors import NotFoundError, PersistenceError

logger = logging.getLogger(__name__)


# --- Request/Response Schemas ---


class AddTurnsRequest(BaseModel):
    """Request body for appending to a chat."""

    question: str | None = Field(None, description="User question, if any")
    answer: str = Field(..., description="Model answer")
    img: str | None = Field(None, description="Image reference for the question")


class UpdateResult(BaseModel):
    """Outcome of an append."""

    matched_count: int = Field(..., description="Chats matching id and owner")
    modified_count: int = Field(..., description="Chats actually written")


# --- Handler ---


async def add_turns(
    chat_id: str,
    body: AddTurnsRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    firestore_service: FirestoreService = Depends(get_firestore_service),
) -> UpdateResult:
    """Append an optional user turn and one model turn, in that order."""
    request_id = getattr(request.state, "request_id", None)
    turns = build_turns(body.answer, question=body.question, img=body.img)

    try:
        result = await firestore_service.append_turns(
            chat_id, user_id, [turn_to_document(turn) for turn in turns]
        )
    except Exception as e:
        logger.exception("[%s] Failed to append to chat %s", request_id, chat_id)
        raise PersistenceError("Error adding conversation!") from e

    # Missing and foreign chats both match nothing
    if result["matched_count"] == 0:
        raise NotFoundError("Chat not found or nothing to update.")

    logger.info("[%s] Appended %d turns to chat %s", request_id, len(turns), chat_id)
    return UpdateResult(**result)
