"""GET /userchats - List the caller's conversation index."""

import logging

from fastapi import Depends, Request

from apps.chats.models import UserChatEntry
from db import FirestoreService
from dependencies import get_current_user_id, get_firestore_service
from errors import NotFoundError, PersistenceError
from responses import ResponseCode

logger = logging.getLogger(__name__)


async def list_user_chats(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    firestore_service: FirestoreService = Depends(get_firestore_service),
) -> list[UserChatEntry]:
    """List {id, title} entries in creation order.

    A user who never created a chat has no index at all, which is a 404.
    """
    request_id = getattr(request.state, "request_id", None)

    try:
        entries = await firestore_service.get_user_chats(user_id)
    except Exception as e:
        logger.exception("[%s] Failed to get user chats", request_id)
        raise PersistenceError("Error fetching userchats!") from e

    if entries is None:
        raise NotFoundError(code=ResponseCode.USER_CHATS_NOT_FOUND)

    return [UserChatEntry(**entry) for entry in entries]
