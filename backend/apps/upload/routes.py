"""Upload routes - registers upload credential endpoints."""

from fastapi import APIRouter

from apps.upload.handlers import get_upload_auth
from apps.upload.handlers.get_upload_auth import UploadAuthResponse

router = APIRouter(prefix="/upload", tags=["Upload"])

# GET /upload - ImageKit authentication parameters
router.get("", response_model=UploadAuthResponse)(get_upload_auth)
