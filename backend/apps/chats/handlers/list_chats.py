"""GET /chats - List every chat owned by the caller."""

import logging

from fastapi import Depends, Request

from apps.chats.models import ChatDocument
from db import FirestoreService
from dependencies import get_current_user_id, get_firestore_service
from errors import PersistenceError

logger = logging.getLogger(__name__)


async def list_chats(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    firestore_service: FirestoreService = Depends(get_firestore_service),
) -> list[ChatDocument]:
    """List the caller's chats in store order."""
    request_id = getattr(request.state, "request_id", None)

    try:
        chats = await firestore_service.list_chats(user_id)
    except Exception as e:
        logger.exception("[%s] Failed to list chats", request_id)
        raise PersistenceError("Error fetching chats!") from e

    return [ChatDocument(**chat) for chat in chats]
