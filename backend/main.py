"""Main FastAPI application for ChatRelay.

Entry point for the application. Configures:
- FastAPI app with settings
- CORS middleware
- Exception handlers
- Route registration
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from config import get_app_config, get_cors_config, get_settings, setup_logging
from dependencies import get_firestore_service
from errors import AppError, AuthenticationError
from responses import ResponseCode, error_response
from router import router as api_router

# Setup logging
setup_logging(get_settings().log_level)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Management
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown."""
    # Startup
    logger.info("Starting ChatRelay...")

    try:
        settings = get_settings()
        logger.info("Environment: %s", settings.environment)
        logger.info("Allowed origin: %s", settings.client_url)

        if not settings.upload_requires_auth:
            logger.warning(
                "GET /api/upload is unauthenticated; set UPLOAD_REQUIRES_AUTH=true "
                "to require a session"
            )

        # Test Firestore connection
        firestore = get_firestore_service()
        firestore_health = await firestore.health_check()
        if firestore_health.get("status") != "healthy":
            logger.error("Firestore unhealthy: %s", firestore_health)
            raise RuntimeError(f"Firestore health check failed: {firestore_health}")
        logger.info(
            "✓ Firestore connected (latency: %sms)", firestore_health.get("latency_ms")
        )

        logger.info("ChatRelay started successfully")

    except Exception as e:
        logger.error("Startup validation failed: %s", e)
        raise

    yield

    # Shutdown
    logger.info("Shutting down ChatRelay...")


# Create FastAPI app with lifespan
app_config = get_app_config()
app = FastAPI(lifespan=lifespan, **app_config)

# Add CORS middleware
cors_config = get_cors_config()
app.add_middleware(CORSMiddleware, **cors_config)


# =============================================================================
# Middleware
# =============================================================================


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests for tracing."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> PlainTextResponse:
    """Map the error taxonomy to plain-text responses."""
    request_id = getattr(request.state, "request_id", None)

    if isinstance(exc, AuthenticationError):
        # Reason stays server-side; the caller always gets the same body
        logger.info(
            "[%s] Unauthenticated %s %s", request_id, request.method, request.url.path
        )
        return error_response(ResponseCode.UNAUTHENTICATED, request_id=request_id)

    return error_response(exc.code, exc.message, request_id=request_id)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> PlainTextResponse:
    """Handle Pydantic validation errors."""
    request_id = getattr(request.state, "request_id", None)

    first_error = exc.errors()[0] if exc.errors() else {}
    if first_error.get("type") == "json_invalid":
        # loc ends with a byte offset into the body here
        field_name = "body"
    else:
        field_name = first_error.get("loc", ["unknown"])[-1]

    return error_response(
        ResponseCode.VALIDATION_ERROR,
        f"Validation failed for field '{field_name}'",
        request_id=request_id,
    )


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> PlainTextResponse:
    """Handle unhandled exceptions."""
    request_id = getattr(request.state, "request_id", None)

    logger.exception("Unhandled exception: %s", exc)

    return error_response(ResponseCode.INTERNAL_ERROR, request_id=request_id)


# =============================================================================
# Routes
# =============================================================================

# Include API routes
app.include_router(api_router, prefix="/api")


# =============================================================================
# Development Server
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
