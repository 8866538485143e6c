"""Chat document models."""

from apps.chats.models.chat import (
    ChatDocument,
    Part,
    Turn,
    UserChatEntry,
    build_turns,
    chat_title,
    turn_to_document,
)

__all__ = [
    "ChatDocument",
    "Part",
    "Turn",
    "UserChatEntry",
    "build_turns",
    "chat_title",
    "turn_to_document",
]
