"""Chat handlers."""

from apps.chats.handlers.add_turns import add_turns
from apps.chats.handlers.create_chat import create_chat
from apps.chats.handlers.get_chat import get_chat
from apps.chats.handlers.list_chats import list_chats

__all__ = [
    "add_turns",
    "create_chat",
    "get_chat",
    "list_chats",
]
