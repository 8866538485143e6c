"""GET /chats/{chat_id} - Get one chat owned by the caller."""

import logging

from fastapi import Depends, Request

from apps.chats.models import ChatDocument
from db import FirestoreService
from dependencies import get_current_user_id, get_firestore_service
from errors import NotFoundError, PersistenceError

logger = logging.getLogger(__name__)


async def get_chat(
    chat_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    firestore_service: FirestoreService = Depends(get_firestore_service),
) -> ChatDocument:
    """Get a chat with its full history.

    Chats owned by someone else are reported exactly like missing ones.
    """
    request_id = getattr(request.state, "request_id", None)

    try:
        chat = await firestore_service.get_chat(chat_id, user_id)
    except Exception as e:
        logger.exception("[%s] Failed to get chat %s", request_id, chat_id)
        raise PersistenceError("Error fetching chat!") from e

    if chat is None:
        raise NotFoundError("Chat not found.")

    return ChatDocument(**chat)
