"""Chats module - conversation creation, retrieval and appending."""

from apps.chats.routes import router

__all__ = ["router"]
