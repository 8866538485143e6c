"""ImageKit client-side upload authentication.

Browsers upload straight to ImageKit with a one-time token, an expiry and an
HMAC signature computed by the ImageKit SDK with the account's private key.
"""

import time
from dataclasses import asdict, dataclass

from imagekitio import ImageKit

from config import Settings


@dataclass
class UploadAuth:
    """Signed parameters for one direct upload."""

    token: str
    expire: int
    signature: str

    def to_dict(self) -> dict:
        return asdict(self)


class UploadSigner:
    """Issues upload authentication parameters. Holds no per-call state."""

    def __init__(self, client: ImageKit, ttl_seconds: int = 1800) -> None:
        self.client = client
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadSigner":
        client = ImageKit(
            private_key=settings.imagekit_private_key,
            public_key=settings.imagekit_public_key,
            url_endpoint=settings.imagekit_url_endpoint,
        )
        return cls(client, settings.upload_token_ttl_seconds)

    def issue(self, now: float | None = None) -> UploadAuth:
        """Generate a fresh token, expiry and signature."""
        expire = int(now if now is not None else time.time()) + self.ttl_seconds
        params = self.client.get_authentication_parameters(expire=expire)
        return UploadAuth(
            token=params["token"],
            expire=int(params["expire"]),
            signature=params["signature"],
        )
