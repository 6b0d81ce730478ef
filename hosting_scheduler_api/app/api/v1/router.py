"""
Top‑level router for version 1 of the API.

Aggregates the per-area routers under a single router that ``main``
mounts at ``/api/v1``.
"""

from fastapi import APIRouter

from .endpoints import auth, health, hosting_slots

router = APIRouter()

router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(hosting_slots.router, prefix="/hosting-slots", tags=["hosting-slots"])
