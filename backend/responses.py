"""Standardized error responses for API endpoints.

Successful responses are plain JSON payloads. Errors are plain-text bodies
whose status and default message are derived from a response code.
"""

from enum import Enum

from fastapi.responses import PlainTextResponse


class ResponseCode(str, Enum):
    """Response codes for API errors.

    Ranges: 1xxx=Client Error, 2xxx=Server Error
    """

    # Client errors
    VALIDATION_ERROR = "1000"
    UNAUTHENTICATED = "1001"
    CHAT_NOT_FOUND = "1002"
    USER_CHATS_NOT_FOUND = "1003"

    # Server errors
    INTERNAL_ERROR = "2000"
    STORE_ERROR = "2001"


# Response messages mapped to codes
RESPONSE_MESSAGES: dict[ResponseCode, str] = {
    ResponseCode.VALIDATION_ERROR: "Request validation failed",
    ResponseCode.UNAUTHENTICATED: "Unauthenticated!",
    ResponseCode.CHAT_NOT_FOUND: "Chat not found.",
    ResponseCode.USER_CHATS_NOT_FOUND: "No chats found for this user.",
    ResponseCode.INTERNAL_ERROR: "An unexpected error occurred",
    ResponseCode.STORE_ERROR: "Error accessing chat storage!",
}

# HTTP status codes for each response code
HTTP_STATUS_MAP: dict[ResponseCode, int] = {
    ResponseCode.VALIDATION_ERROR: 422,
    ResponseCode.UNAUTHENTICATED: 401,
    ResponseCode.CHAT_NOT_FOUND: 404,
    ResponseCode.USER_CHATS_NOT_FOUND: 404,
    ResponseCode.INTERNAL_ERROR: 500,
    ResponseCode.STORE_ERROR: 500,
}


def get_message(code: ResponseCode) -> str:
    """Get the message for a response code."""
    return RESPONSE_MESSAGES.get(code, "Unknown error")


def get_http_status(code: ResponseCode) -> int:
    """Get HTTP status code for a response code."""
    return HTTP_STATUS_MAP.get(code, 500)


def error_response(
    code: ResponseCode,
    custom_message: str | None = None,
    request_id: str | None = None,
) -> PlainTextResponse:
    """Create a plain-text error response for a response code."""
    headers = {"X-Request-ID": request_id} if request_id else None
    return PlainTextResponse(
        content=custom_message or get_message(code),
        status_code=get_http_status(code),
        headers=headers,
    )
