"""
Error taxonomy shared by the services and the HTTP layer.

Every error carries a short machine readable ``code`` and a
human readable ``message``.  Services raise these; the exception
handlers registered in ``main`` turn them into HTTP responses.
"""

from typing import Optional


class SchedulerError(Exception):
    """Base class for all application errors."""

    code = "error"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return self.message


class ValidationError(SchedulerError):
    """Bad or missing input; the caller may fix it and resubmit."""

    code = "invalid_input"


class ConflictError(SchedulerError):
    """The requested hosting date is already claimed."""

    code = "date_taken"


class NotFoundError(SchedulerError):
    """No hosting slot has the requested id."""

    code = "not_found"


class AuthError(SchedulerError):
    """Missing, wrong, invalid or expired credential."""

    code = "invalid_token"


class StorageError(SchedulerError):
    """Unexpected failure of the underlying database."""

    code = "storage_error"


class ServiceError(SchedulerError):
    """A storage failure wrapped for the caller of a read operation."""

    code = "service_error"


class ConfigurationError(SchedulerError):
    """The server is missing configuration needed to serve the request."""

    code = "configuration_error"
