"""Application error taxonomy.

Handlers raise these; main.py maps them to HTTP responses in one place.
"""

from responses import ResponseCode


class AppError(Exception):
    """Base class for errors that map to a response code."""

    code: ResponseCode = ResponseCode.INTERNAL_ERROR

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "")
        self.message = message


class AuthenticationError(AppError):
    """Raised when the session credential is missing, invalid or expired.

    The message is never sent to the caller.
    """

    code = ResponseCode.UNAUTHENTICATED


class NotFoundError(AppError):
    """Raised when no resource owned by the caller matches."""

    code = ResponseCode.CHAT_NOT_FOUND

    def __init__(
        self,
        message: str | None = None,
        code: ResponseCode = ResponseCode.CHAT_NOT_FOUND,
    ) -> None:
        super().__init__(message)
        self.code = code


class PersistenceError(AppError):
    """Raised when the chat store is unreachable or rejects a write."""

    code = ResponseCode.STORE_ERROR
