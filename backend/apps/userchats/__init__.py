"""User chats module - per-user conversation index."""

from apps.userchats.routes import router

__all__ = ["router"]
