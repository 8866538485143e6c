"""Upload module - direct image upload credentials."""

from apps.upload.routes import router

__all__ = ["router"]
