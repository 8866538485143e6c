"""Main API router that registers all sub-routers.

This module aggregates all domain-specific routers into a single router
that gets mounted in main.py.
"""

from fastapi import APIRouter

from apps.chats import router as chats_router
from apps.health import router as health_router
from apps.upload import router as upload_router
from apps.userchats import router as userchats_router

# Create main API router
router = APIRouter()

# Register all domain routers
router.include_router(health_router)
router.include_router(upload_router)
router.include_router(chats_router)
router.include_router(userchats_router)
