"""Firestore document schemas for conversations.

These represent the structure of documents stored in Firestore:
- `chats/{chat_id}` - one conversation with its full history
- `user_chats/{user_id}` - the per-user conversation index
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

TITLE_MAX_CHARS = 40

Role = Literal["user", "model"]


class Part(BaseModel):
    """One content part of a turn."""

    text: str = Field(..., description="Part text")
    img: str | None = Field(None, description="Optional image reference")


class Turn(BaseModel):
    """One message in a conversation history."""

    role: Role = Field(..., description="Message role: 'user' or 'model'")
    parts: list[Part] = Field(..., description="Ordered content parts")


class ChatDocument(BaseModel):
    """Conversation document stored in Firestore.

    Path: chats/{chat_id}
    """

    id: str = Field(..., description="Conversation ID")
    user_id: str = Field(..., description="Owner user ID")
    history: list[Turn] = Field(default_factory=list, description="Ordered turns")
    created_at: datetime | None = Field(None, description="Creation timestamp")
    updated_at: datetime | None = Field(None, description="Last append timestamp")


class UserChatEntry(BaseModel):
    """Summary of one conversation in a user's index.

    Stored in the `chats` array of user_chats/{user_id}.
    """

    id: str = Field(..., description="Conversation ID")
    title: str = Field(..., description="First 40 characters of the first message")
    created_at: datetime | None = Field(None, description="Creation timestamp")


def chat_title(text: str) -> str:
    """Title for a new conversation: the leading characters, untouched."""
    return text[:TITLE_MAX_CHARS]


def build_turns(
    answer: str, question: str | None = None, img: str | None = None
) -> list[Turn]:
    """Build the turns appended for one question/answer exchange.

    A user turn is emitted only for a non-empty question and carries the
    image reference on its part. The model turn always follows.
    """
    turns: list[Turn] = []
    if question:
        turns.append(Turn(role="user", parts=[Part(text=question, img=img or None)]))
    turns.append(Turn(role="model", parts=[Part(text=answer)]))
    return turns


def turn_to_document(turn: Turn) -> dict:
    """Serialize a turn for Firestore, omitting absent image references."""
    return turn.model_dump(exclude_none=True)
