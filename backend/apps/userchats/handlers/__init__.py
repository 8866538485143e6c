"""User chat index handlers."""

from apps.userchats.handlers.list_user_chats import list_user_chats

__all__ = ["list_user_chats"]
