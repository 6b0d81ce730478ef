"""
Authentication endpoint for API v1.

Exchanges the shared site password for a bearer token.  The token is
required by every endpoint that creates, updates or deletes hosting
slots.
"""

from fastapi import APIRouter, Depends

from hosting_scheduler_api.app.core.config import Settings
from hosting_scheduler_api.app.core.security import authenticate, get_settings
from hosting_scheduler_api.app.schemas.common import ApiResponse, LoginRequest, LoginResponse

router = APIRouter()


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    credentials: LoginRequest,
    settings: Settings = Depends(get_settings),
) -> ApiResponse[LoginResponse]:
    """Return an access token if ``password`` matches the site password.

    A wrong password yields 401; a server without ``SITE_PASSWORD`` or
    ``SECRET_KEY`` configured yields 500.
    """
    token = authenticate(credentials.password, settings)
    return ApiResponse(success=True, data=LoginResponse(token=token, message="Login successful"))
