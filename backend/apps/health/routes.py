"""Health routes. Public; no session required."""

from fastapi import APIRouter

from apps.health.handlers import check_health
from apps.health.handlers.check_health import HealthResponse

router = APIRouter(prefix="/health", tags=["Health"])

router.get(
    "",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    summary="Store connectivity",
)(check_health)
