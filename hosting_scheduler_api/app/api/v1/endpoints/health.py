"""Liveness endpoint for load balancers and uptime checks."""

from datetime import datetime, timezone

from fastapi import APIRouter

from hosting_scheduler_api.app.schemas.common import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the server is up, with the current UTC timestamp."""
    return HealthResponse(
        success=True,
        message="Server is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
