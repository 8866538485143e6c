"""Chat routes - registers all chat endpoints."""

from fastapi import APIRouter

from apps.chats.handlers import add_turns, create_chat, get_chat, list_chats
from apps.chats.handlers.add_turns import UpdateResult
from apps.chats.models import ChatDocument
from dependencies import AuthenticatedRoute

router = APIRouter(prefix="/chats", tags=["Chats"], route_class=AuthenticatedRoute)

# GET /chats - List the caller's chats
router.get(
    "", response_model=list[ChatDocument], response_model_exclude_none=True
)(list_chats)

# POST /chats - Create a chat, returns its ID
router.post("", status_code=201)(create_chat)

# GET /chats/{chat_id} - Get one chat
router.get(
    "/{chat_id}", response_model=ChatDocument, response_model_exclude_none=True
)(get_chat)

# PUT /chats/{chat_id} - Append question/answer turns
router.put("/{chat_id}", response_model=UpdateResult)(add_turns)
