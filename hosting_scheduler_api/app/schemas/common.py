"""
Response envelope and small shared payloads.

Every endpoint answers with ``ApiResponse``: ``success`` tells the
client whether to look at ``data``/``message`` or at ``error``.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None


class LoginRequest(BaseModel):
    password: Optional[str] = Field(None, examples=["hunter2"])


class LoginResponse(BaseModel):
    token: str
    message: str


class HealthResponse(BaseModel):
    """Liveness payload; ``timestamp`` sits beside ``success`` rather than in ``data``."""

    success: bool
    message: str
    timestamp: str
