"""FastAPI dependency injection for services.

Services are cached with @lru_cache to avoid recreation per request.
Tests replace them through app.dependency_overrides.
"""

from collections.abc import Awaitable, Callable
from functools import lru_cache

from fastapi import Depends, Request, Response
from fastapi.routing import APIRoute

from config import Settings, get_settings
from db import FirestoreService
from services.auth import ClerkAuthenticator
from services.imagekit import UploadSigner

# --- Cached Singletons ---
# These are created once and reused across all requests


@lru_cache
def get_firestore_service() -> FirestoreService:
    """Get cached Firestore service (expensive - has Firestore client)."""
    return FirestoreService(settings=get_settings())


@lru_cache
def get_authenticator() -> ClerkAuthenticator:
    """Get cached Clerk authenticator (caches JWKS keys)."""
    return ClerkAuthenticator(get_settings())


@lru_cache
def get_upload_signer() -> UploadSigner:
    """Get cached ImageKit upload signer."""
    return UploadSigner.from_settings(get_settings())


# --- Auth Gate ---


async def get_current_user_id(
    request: Request,
    authenticator: ClerkAuthenticator = Depends(get_authenticator),
) -> str:
    """Require a valid session and return the caller's user ID.

    Routes built with AuthenticatedRoute have already authenticated and the
    result is reused. Raises AuthenticationError otherwise.
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        user_id = await authenticator.authenticate(request)
        request.state.user_id = user_id
    return user_id


class AuthenticatedRoute(APIRoute):
    """Route that authenticates before the request body is read.

    FastAPI parses JSON bodies before resolving dependencies, so without this
    a malformed body would be reported ahead of a missing session.
    """

    def get_route_handler(self) -> Callable[[Request], Awaitable[Response]]:
        route_handler = super().get_route_handler()

        async def authenticated_route_handler(request: Request) -> Response:
            provider = request.app.dependency_overrides.get(
                get_authenticator, get_authenticator
            )
            request.state.user_id = await provider().authenticate(request)
            return await route_handler(request)

        return authenticated_route_handler


async def get_optional_upload_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    authenticator: ClerkAuthenticator = Depends(get_authenticator),
) -> str | None:
    """Apply the auth gate to uploads only when configured to."""
    if not settings.upload_requires_auth:
        return None
    return await get_current_user_id(request, authenticator)
