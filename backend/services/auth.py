"""Clerk session token verification.

Clerk issues RS256-signed session JWTs. The token is read from the
`Authorization: Bearer` header or the `__session` cookie and verified
against either a configured PEM key or the Clerk JWKS endpoint.
"""

import logging

import jwt
from fastapi import Request
from starlette.concurrency import run_in_threadpool

from config import Settings
from errors import AuthenticationError

logger = logging.getLogger(__name__)

ALGORITHMS = ["RS256"]
SESSION_COOKIE = "__session"


def extract_token(request: Request) -> str | None:
    """Get the raw session token from the request, header first."""
    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
        return None

    return request.cookies.get(SESSION_COOKIE) or None


class ClerkAuthenticator:
    """Verifies Clerk session tokens and returns the user ID.

    Every failure raises the same AuthenticationError; the reason is only
    logged.
    """

    def __init__(
        self,
        settings: Settings,
        jwk_client: jwt.PyJWKClient | None = None,
    ) -> None:
        self.settings = settings
        self.public_key = settings.clerk_jwt_key
        self.jwk_client = jwk_client
        if self.jwk_client is None and not self.public_key:
            self.jwk_client = jwt.PyJWKClient(settings.clerk_jwks_url)

    async def _signing_key(self, token: str):
        if self.public_key:
            return self.public_key
        # PyJWKClient fetches over blocking urllib; keys are cached after the first call
        signing_key = await run_in_threadpool(
            self.jwk_client.get_signing_key_from_jwt, token
        )
        return signing_key.key

    async def verify_token(self, token: str) -> str:
        """Verify a session token and return its subject."""
        try:
            key = await self._signing_key(token)
            claims = jwt.decode(
                token,
                key,
                algorithms=ALGORITHMS,
                issuer=self.settings.clerk_issuer or None,
                leeway=self.settings.auth_leeway_seconds,
                options={
                    "require": ["exp", "sub"],
                    "verify_iss": bool(self.settings.clerk_issuer),
                },
            )
        except jwt.PyJWTError as e:
            logger.debug("Rejected session token: %s", e)
            raise AuthenticationError(str(e)) from e

        parties = self.settings.clerk_authorized_parties
        if parties and claims.get("azp") not in parties:
            logger.warning("Rejected session token from party %r", claims.get("azp"))
            raise AuthenticationError("unauthorized party")

        user_id = claims.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise AuthenticationError("missing subject")
        return user_id

    async def authenticate(self, request: Request) -> str:
        """Authenticate a request and return the user ID."""
        token = extract_token(request)
        if not token:
            raise AuthenticationError("missing session token")
        return await self.verify_token(token)
