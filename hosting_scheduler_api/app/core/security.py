"""
Site password login and JWT bearer authentication.

The site is protected by a single shared password
(``SITE_PASSWORD``).  A successful login yields a signed JWT carrying
``{"authenticated": true}`` and an ``exp`` claim.  Clients send it back
as ``Authorization: Bearer <token>`` on every write request, where the
``require_token`` dependency verifies it.
"""

import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings
from .exceptions import AuthError, ConfigurationError

logger = logging.getLogger(__name__)


def create_access_token(
    data: Dict[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed JWT token with the given claims.

    Parameters
    ----------
    data : dict
        Claims to embed in the token.
    settings : Settings
        Supplies the signing key, the algorithm and the default lifetime.
    expires_delta : Optional[timedelta]
        Lifetime of the token.  Defaults to
        ``settings.access_token_expire_minutes``.

    Returns
    -------
    str
        The encoded token.
    """
    if not settings.secret_key:
        raise ConfigurationError("Server configuration error")
    to_encode = data.copy()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = datetime.now(timezone.utc) + lifetime
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """Verify signature and expiry of ``token``.

    Returns the claims if the token is valid, otherwise ``None``.
    """
    if not settings.secret_key:
        raise ConfigurationError("Server configuration error")
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.PyJWTError as exc:
        logger.info("Rejected access token: %s", exc)
        return None


def authenticate(password: Optional[str], settings: Settings) -> str:
    """Check the shared site password and issue an access token.

    Raises ``ConfigurationError`` when the server has no password or
    signing key configured and ``AuthError`` when the password does not
    match.
    """
    if not settings.site_password or not settings.secret_key:
        logger.error("Login attempted but SITE_PASSWORD or SECRET_KEY is not configured")
        raise ConfigurationError("Server configuration error")
    # Constant-time comparison
    if not password or not hmac.compare_digest(password.encode("utf-8"), settings.site_password.encode("utf-8")):
        logger.warning("Login rejected: invalid password")
        raise AuthError("Invalid password", code="invalid_credentials")
    return create_access_token({"authenticated": True}, settings)


security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Dependency returning the settings the running app was built with."""
    return request.app.state.settings


def require_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Dependency that rejects requests without a valid bearer token.

    A missing ``Authorization`` header raises ``AuthError`` with code
    ``missing_token``; an invalid or expired token raises it with code
    ``invalid_token``.  On success the decoded claims are returned.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Access token required", code="missing_token")
    payload = decode_access_token(credentials.credentials, settings)
    if payload is None:
        raise AuthError("Invalid or expired token", code="invalid_token")
    return payload
