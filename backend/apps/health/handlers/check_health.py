"""GET /api/health - Report store connectivity."""

from datetime import UTC, datetime
from typing import Literal

from fastapi import Depends
from pydantic import BaseModel, Field

from config import APP_VERSION, Settings, get_settings
from db import FirestoreService
from dependencies import get_firestore_service

Status = Literal["healthy", "unhealthy"]


class ServiceStatus(BaseModel):
    """Result of one backing-service round trip."""

    name: str
    status: Status
    latency_ms: float | None = Field(None, description="Round trip time in ms")
    error: str | None = Field(None, description="Failure reason when unhealthy")


class HealthResponse(BaseModel):
    status: Status = Field(..., description="Unhealthy if any service is")
    version: str
    environment: str
    services: list[ServiceStatus]
    timestamp: datetime


async def check_health(
    settings: Settings = Depends(get_settings),
    firestore_service: FirestoreService = Depends(get_firestore_service),
) -> HealthResponse:
    """Round-trip Firestore and report the result."""
    result = await firestore_service.health_check()
    firestore = ServiceStatus(
        name="firestore",
        status="healthy" if result.get("status") == "healthy" else "unhealthy",
        latency_ms=result.get("latency_ms"),
        error=result.get("error"),
    )

    return HealthResponse(
        status=firestore.status,
        version=APP_VERSION,
        environment=settings.environment,
        services=[firestore],
        timestamp=datetime.now(UTC),
    )
