"""Firestore service for conversation persistence.

Stores conversations and the per-user conversation index:
- `chats/{chat_id}` - owner, full turn history and timestamps
- `user_chats/{user_id}` - ordered list of {id, title, created_at} entries

Creating a chat writes both documents in one batch. Appending turns runs in a
transaction so ownership check and write see the same document version.
"""

import base64
import json
import logging
import os
import time
from datetime import UTC, datetime
from typing import Any

import firebase_admin
from firebase_admin import credentials
from google.cloud.firestore_v1 import ArrayUnion, AsyncClient
from google.cloud.firestore_v1.async_transaction import async_transactional
from google.oauth2 import service_account

from config import Settings, get_settings

logger = logging.getLogger(__name__)

CHATS_COLLECTION = "chats"
USER_CHATS_COLLECTION = "user_chats"


def _load_firebase_credentials(creds_value: str) -> dict:
    """Load Firebase credentials from JSON string, file path, or base64."""
    if os.path.isfile(creds_value):
        with open(creds_value) as f:
            return json.load(f)

    try:
        return json.loads(creds_value)
    except json.JSONDecodeError:
        pass

    try:
        decoded = base64.b64decode(creds_value, validate=True).decode("utf-8")
        return json.loads(decoded)
    except (ValueError, UnicodeDecodeError):
        pass

    raise ValueError("FIREBASE_CREDENTIALS is not valid JSON, file path, or base64")


def _to_iso(value: Any) -> Any:
    """Firestore timestamps come back as datetimes; expose ISO strings."""
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _chat_from_snapshot(doc) -> dict[str, Any]:
    data = doc.to_dict() or {}
    return {
        "id": doc.id,
        "user_id": data.get("user_id"),
        "history": data.get("history", []),
        "created_at": _to_iso(data.get("created_at")),
        "updated_at": _to_iso(data.get("updated_at")),
    }


@async_transactional
async def _append_in_transaction(
    transaction,
    chat_ref,
    user_id: str,
    turns: list[dict[str, Any]],
) -> dict[str, int]:
    """Append turns to a chat owned by user_id inside a transaction."""
    snapshot = await chat_ref.get(transaction=transaction)
    if not snapshot.exists:
        return {"matched_count": 0, "modified_count": 0}

    data = snapshot.to_dict() or {}
    if data.get("user_id") != user_id:
        return {"matched_count": 0, "modified_count": 0}

    history = list(data.get("history", []))
    history.extend(turns)
    transaction.update(
        chat_ref, {"history": history, "updated_at": datetime.now(UTC)}
    )
    return {"matched_count": 1, "modified_count": 1}


class FirestoreService:
    """Service for managing conversations in Firestore."""

    _initialized: bool = False
    _db: AsyncClient | None = None

    def __init__(
        self,
        db: AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize Firestore client.

        A client passed in is used as-is; otherwise one shared client is
        built from the configured service account.
        """
        if db is not None:
            self.db = db
            return

        if FirestoreService._initialized:
            self.db = FirestoreService._db
            return

        settings = settings or get_settings()

        try:
            creds_dict = _load_firebase_credentials(settings.firebase_credentials)

            if not firebase_admin._apps:
                cred = credentials.Certificate(creds_dict)
                firebase_admin.initialize_app(cred)

            gcp_credentials = service_account.Credentials.from_service_account_info(
                creds_dict
            )

            FirestoreService._db = AsyncClient(
                project=creds_dict.get("project_id"),
                credentials=gcp_credentials,
            )
            self.db = FirestoreService._db

            FirestoreService._initialized = True
            logger.info("Firestore client initialized successfully")
        except Exception as e:
            logger.error("Failed to initialize Firestore: %s", e)
            raise

    # --- Conversation Methods ---
    # Store errors propagate; handlers log them with the request ID.

    async def create_chat(
        self,
        chat_id: str,
        user_id: str,
        first_turn: dict[str, Any],
        title: str,
    ) -> dict[str, Any]:
        """Create a chat and add it to the owner's index atomically.

        The index document is upserted with ArrayUnion so concurrent creates
        for the same user both land, including the very first one.
        """
        now = datetime.now(UTC)
        chat_ref = self.db.collection(CHATS_COLLECTION).document(chat_id)
        index_ref = self.db.collection(USER_CHATS_COLLECTION).document(user_id)

        chat_data = {
            "user_id": user_id,
            "history": [first_turn],
            "created_at": now,
            "updated_at": now,
        }
        entry = {"id": chat_id, "title": title, "created_at": now}

        batch = self.db.batch()
        batch.set(chat_ref, chat_data)
        batch.set(
            index_ref,
            {"user_id": user_id, "chats": ArrayUnion([entry])},
            merge=True,
        )
        await batch.commit()
        logger.debug("Created chat %s for user %s", chat_id, user_id)

        return {"id": chat_id, **chat_data}

    async def get_user_chats(self, user_id: str) -> list[dict[str, Any]] | None:
        """Get the index entries for a user, or None if no index exists."""
        doc = await self.db.collection(USER_CHATS_COLLECTION).document(user_id).get()
        if not doc.exists:
            return None

        data = doc.to_dict() or {}
        return [
            {
                "id": entry.get("id"),
                "title": entry.get("title", ""),
                "created_at": _to_iso(entry.get("created_at")),
            }
            for entry in data.get("chats", [])
        ]

    async def get_chat(self, chat_id: str, user_id: str) -> dict[str, Any] | None:
        """Get a chat if it exists and belongs to user_id."""
        doc = await self.db.collection(CHATS_COLLECTION).document(chat_id).get()
        if not doc.exists:
            return None

        chat = _chat_from_snapshot(doc)
        if chat["user_id"] != user_id:
            return None
        return chat

    async def append_turns(
        self,
        chat_id: str,
        user_id: str,
        turns: list[dict[str, Any]],
    ) -> dict[str, int]:
        """Append turns, in order, to a chat owned by user_id.

        Returns matched/modified counts; both are 0 when the chat does not
        exist or has another owner.
        """
        chat_ref = self.db.collection(CHATS_COLLECTION).document(chat_id)
        transaction = self.db.transaction()
        result = await _append_in_transaction(transaction, chat_ref, user_id, turns)
        logger.debug(
            "Appended %d turns to chat %s (matched=%d)",
            len(turns),
            chat_id,
            result["matched_count"],
        )
        return result

    async def list_chats(self, user_id: str) -> list[dict[str, Any]]:
        """Get every chat owned by user_id in natural store order."""
        query = self.db.collection(CHATS_COLLECTION).where("user_id", "==", user_id)
        docs = await query.get()
        return [_chat_from_snapshot(doc) for doc in docs]

    async def health_check(self) -> dict[str, Any]:
        """Check Firestore connection health."""
        start = time.time()
        try:
            test_ref = self.db.collection("_health_check").document("test")
            await test_ref.set({"timestamp": datetime.now(UTC)})
            await test_ref.get()

            latency = (time.time() - start) * 1000
            return {"status": "healthy", "latency_ms": round(latency, 2)}
        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}
