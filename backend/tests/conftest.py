"""Pytest configuration and fixtures for ChatRelay tests."""

import os
import sys

# Set required env vars BEFORE any imports that might trigger Settings
os.environ.setdefault(
    "FIREBASE_CREDENTIALS", '{"type":"service_account","project_id":"test"}'
)
os.environ.setdefault(
    "CLERK_JWKS_URL", "https://clerk.example.test/.well-known/jwks.json"
)
os.environ.setdefault("IMAGEKIT_URL_ENDPOINT", "https://ik.imagekit.io/test")
os.environ.setdefault("IMAGEKIT_PUBLIC_KEY", "public_test_key")
os.environ.setdefault("IMAGEKIT_PRIVATE_KEY", "private_test_key")

import asyncio
import time
import uuid
from datetime import UTC, datetime
from typing import Any

import httpx
import jwt
import pytest
import pytest_asyncio
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config import get_settings  # noqa: E402
from services.auth import ClerkAuthenticator  # noqa: E402
from services.imagekit import UploadSigner  # noqa: E402


class InMemoryFirestoreService:
    """Stand-in for FirestoreService keeping documents in dicts.

    Mirrors the real service's contract: creating a chat writes the chat and
    upserts the index entry together, appends check ownership.
    """

    def __init__(self) -> None:
        self.chats: dict[str, dict[str, Any]] = {}
        self.user_chats: dict[str, dict[str, Any]] = {}
        self.writes = 0
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise ConnectionError("firestore unavailable")

    async def create_chat(
        self, chat_id: str, user_id: str, first_turn: dict[str, Any], title: str
    ) -> dict[str, Any]:
        self._check()
        # Yield so concurrent creates interleave like real network calls
        await asyncio.sleep(0)
        now = datetime.now(UTC)
        chat = {
            "user_id": user_id,
            "history": [first_turn],
            "created_at": now,
            "updated_at": now,
        }
        self.chats[chat_id] = chat
        # Single-step upsert and append, like set(merge=True) with ArrayUnion
        index = self.user_chats.setdefault(user_id, {"user_id": user_id, "chats": []})
        index["chats"].append({"id": chat_id, "title": title, "created_at": now})
        self.writes += 1
        return {"id": chat_id, **chat}

    async def get_user_chats(self, user_id: str) -> list[dict[str, Any]] | None:
        self._check()
        index = self.user_chats.get(user_id)
        if index is None:
            return None
        return [dict(entry) for entry in index["chats"]]

    async def get_chat(self, chat_id: str, user_id: str) -> dict[str, Any] | None:
        self._check()
        chat = self.chats.get(chat_id)
        if chat is None or chat["user_id"] != user_id:
            return None
        return {"id": chat_id, **chat}

    async def append_turns(
        self, chat_id: str, user_id: str, turns: list[dict[str, Any]]
    ) -> dict[str, int]:
        self._check()
        chat = self.chats.get(chat_id)
        if chat is None or chat["user_id"] != user_id:
            return {"matched_count": 0, "modified_count": 0}
        chat["history"].extend(turns)
        chat["updated_at"] = datetime.now(UTC)
        self.writes += 1
        return {"matched_count": 1, "modified_count": 1}

    async def list_chats(self, user_id: str) -> list[dict[str, Any]]:
        self._check()
        return [
            {"id": chat_id, **chat}
            for chat_id, chat in self.chats.items()
            if chat["user_id"] == user_id
        ]

    async def health_check(self) -> dict[str, Any]:
        if self.fail:
            return {"status": "unhealthy", "error": "firestore unavailable"}
        return {"status": "healthy", "latency_ms": 1.0}


@pytest.fixture(scope="session")
def rsa_private_key():
    """RSA key standing in for Clerk's signing key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_public_pem(rsa_private_key) -> str:
    """PEM of the signing key's public half."""
    return (
        rsa_private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode("utf-8")
    )


@pytest.fixture
def settings(rsa_public_pem):
    """Application settings verifying tokens with the test key."""
    return get_settings().model_copy(
        update={
            "clerk_jwt_key": rsa_public_pem,
            "clerk_issuer": None,
            "clerk_authorized_parties": [],
            "upload_requires_auth": False,
        }
    )


@pytest.fixture
def make_token(rsa_private_key):
    """Factory for signed session tokens."""

    def _make_token(sub: str | None = "user_1", expires_in: int = 300, **claims) -> str:
        now = int(time.time())
        payload: dict[str, Any] = {
            "iat": now,
            "nbf": now,
            "exp": now + expires_in,
            "sid": f"sess_{uuid.uuid4().hex[:8]}",
            **claims,
        }
        if sub is not None:
            payload["sub"] = sub
        return jwt.encode(payload, rsa_private_key, algorithm="RS256")

    return _make_token


@pytest.fixture
def auth_headers(make_token):
    """Factory for Authorization headers of a given user."""

    def _auth_headers(user_id: str = "user_1") -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(sub=user_id)}"}

    return _auth_headers


@pytest.fixture
def authenticator(settings):
    """Clerk authenticator using the test key."""
    return ClerkAuthenticator(settings)


@pytest.fixture
def upload_signer(settings):
    """ImageKit signer with the test private key."""
    return UploadSigner.from_settings(settings)


@pytest.fixture
def fake_firestore():
    """In-memory Firestore service."""
    return InMemoryFirestoreService()


@pytest.fixture
def app(settings, authenticator, upload_signer, fake_firestore):
    """FastAPI app wired to test doubles."""
    from config import get_settings as settings_dependency
    from dependencies import get_authenticator, get_firestore_service, get_upload_signer
    from main import app as fastapi_app

    fastapi_app.dependency_overrides[settings_dependency] = lambda: settings
    fastapi_app.dependency_overrides[get_authenticator] = lambda: authenticator
    fastapi_app.dependency_overrides[get_upload_signer] = lambda: upload_signer
    fastapi_app.dependency_overrides[get_firestore_service] = lambda: fake_firestore
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    """HTTP client talking to the app in-process (lifespan not run)."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
