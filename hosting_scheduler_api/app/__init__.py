"""
Application package initializer.

The API is split into ``core`` (configuration, logging, database,
security, clock and errors), ``schemas`` (Pydantic payloads),
``services`` (slot storage and validation) and ``api`` (versioned
FastAPI routers).
"""

from .main import app  # noqa: F401
