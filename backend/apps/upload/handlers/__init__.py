"""Upload handlers."""

from apps.upload.handlers.get_upload_auth import get_upload_auth

__all__ = ["get_upload_auth"]
