"""User chat index routes."""

from fastapi import APIRouter

from apps.chats.models import UserChatEntry
from apps.userchats.handlers import list_user_chats
from dependencies import AuthenticatedRoute

router = APIRouter(
    prefix="/userchats", tags=["User Chats"], route_class=AuthenticatedRoute
)

# GET /userchats - List the caller's conversation index
router.get(
    "", response_model=list[UserChatEntry], response_model_exclude_none=True
)(list_user_chats)
