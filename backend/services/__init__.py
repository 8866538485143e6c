"""Services module for cross-cutting logic.

Contains services used across multiple route modules:
- Clerk session verification
- ImageKit upload signing

Note: Service instances are managed via dependencies.py using FastAPI DI.
"""

from services.auth import ClerkAuthenticator, extract_token
from services.imagekit import UploadAuth, UploadSigner

__all__ = [
    "ClerkAuthenticator",
    "extract_token",
    "UploadAuth",
    "UploadSigner",
]
