"""Configuration and settings for ChatRelay application.

Uses Pydantic Settings for fail-fast validation on startup.
All required environment variables are validated when settings are first loaded.
"""

import logging
import sys
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "0.1.0"


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("grpc").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Raises ValidationError on startup if required variables are missing.
    """

    model_config = SettingsConfigDict(
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Firebase Configuration (required for chat storage)
    # Can be either a JSON string, a file path, or base64 of the credentials JSON
    firebase_credentials: str = Field(
        ..., description="Firebase service account JSON string or path to JSON file"
    )

    # Clerk session verification (one of jwks url / jwt key is required)
    clerk_jwks_url: str | None = Field(
        default=None, description="Clerk JWKS endpoint used to verify session tokens"
    )
    clerk_jwt_key: str | None = Field(
        default=None, description="Clerk PEM public key for network-less verification"
    )
    clerk_issuer: str | None = Field(
        default=None, description="Expected 'iss' claim (Clerk frontend API URL)"
    )
    clerk_authorized_parties: list[str] = Field(
        default_factory=list, description="Allowed 'azp' claim values"
    )
    auth_leeway_seconds: int = Field(
        default=5, description="Clock skew tolerance for exp/nbf/iat checks"
    )

    # ImageKit Configuration (required for upload credentials)
    imagekit_url_endpoint: str = Field(..., description="ImageKit URL endpoint")
    imagekit_public_key: str = Field(..., description="ImageKit public key")
    imagekit_private_key: str = Field(..., description="ImageKit private key")
    upload_token_ttl_seconds: int = Field(
        default=1800, description="Lifetime of upload signatures in seconds"
    )
    upload_requires_auth: bool = Field(
        default=False, description="Require a session for GET /api/upload"
    )

    # Application Settings
    client_url: str = Field(
        default="http://localhost:5173", description="Single allowed CORS origin"
    )
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator(
        "firebase_credentials",
        "imagekit_url_endpoint",
        "imagekit_public_key",
        "imagekit_private_key",
    )
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Ensure credentials are not empty strings."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return v.strip()

    @field_validator("upload_token_ttl_seconds")
    @classmethod
    def validate_upload_ttl(cls, v: int) -> int:
        """ImageKit rejects signatures that expire more than an hour ahead."""
        if not 0 < v <= 3600:
            raise ValueError("upload_token_ttl_seconds must be between 1 and 3600")
        return v

    @model_validator(mode="after")
    def validate_clerk_key_source(self) -> "Settings":
        """Require a way to verify session tokens."""
        if not self.clerk_jwks_url and not self.clerk_jwt_key:
            raise ValueError("Either clerk_jwks_url or clerk_jwt_key must be set")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# FastAPI App Configuration
APP_CONFIG: dict[str, Any] = {
    "title": "ChatRelay",
    "description": (
        "Backend-for-frontend that stores chat conversations per user "
        "and issues image upload credentials."
    ),
    "version": APP_VERSION,
    "docs_url": "/api/docs",
    "redoc_url": "/api/redoc",
    "openapi_url": "/api/openapi.json",
    "openapi_tags": [
        {
            "name": "Health",
            "description": "Health check and service status",
        },
        {
            "name": "Chats",
            "description": "Conversation creation, retrieval and appending",
        },
        {
            "name": "User Chats",
            "description": "Per-user conversation index",
        },
        {
            "name": "Upload",
            "description": "Direct image upload credentials",
        },
    ],
}


def get_app_config() -> dict[str, Any]:
    """Get FastAPI application configuration."""
    return APP_CONFIG.copy()


def get_cors_config(settings: Settings | None = None) -> dict[str, Any]:
    """Get CORS middleware configuration.

    Only the configured client origin is accepted, with cookies allowed.
    """
    settings = settings or get_settings()
    return {
        "allow_origins": [settings.client_url],
        "allow_credentials": True,
        "allow_methods": ["GET", "POST", "PUT", "OPTIONS"],
        "allow_headers": ["*"],
        "expose_headers": ["X-Request-ID"],
        "max_age": 600,
    }
