"""GET /upload - Issue ImageKit upload authentication parameters."""

import logging

from fastapi import Depends
from pydantic import BaseModel, Field

from dependencies import get_optional_upload_user, get_upload_signer
from services.imagekit import UploadSigner

logger = logging.getLogger(__name__)


# --- Response Schemas ---


class UploadAuthResponse(BaseModel):
    """Signed parameters for one direct upload to ImageKit."""

    token: str = Field(..., description="One-time upload token")
    expire: int = Field(..., description="Unix time after which the signature is rejected")
    signature: str = Field(..., description="HMAC-SHA1 of token + expire")


# --- Handler ---


async def get_upload_auth(
    user_id: str | None = Depends(get_optional_upload_user),
    signer: UploadSigner = Depends(get_upload_signer),
) -> UploadAuthResponse:
    """Generate fresh upload credentials."""
    auth = signer.issue()
    logger.debug(
        "Issued upload token expiring at %d for %s", auth.expire, user_id or "anonymous"
    )
    return UploadAuthResponse(**auth.to_dict())
