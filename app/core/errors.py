"""
Error taxonomy shared by services and the HTTP layer.
Services raise these; app.api.errors maps them to JSON responses.
"""
from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base operational error: message + HTTP status + machine-readable code."""

    status_code = 500
    code = "INTERNAL_ERROR"
    retryable = False

    def __init__(self, message: str, *, details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or []


class ValidationError(AppError):
    """Malformed input, rejected before touching the ledger."""

    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(AppError):
    status_code = 401
    code = "AUTHENTICATION_ERROR"


class NotFoundError(AppError):
    """Job does not exist or is not publicly visible."""

    status_code = 404
    code = "NOT_FOUND_ERROR"


class StorageError(AppError):
    """
    Ledger read/write failure (database down, timeout).
    Never means «locked»: the client must offer a retry, not a share prompt.
    """

    status_code = 503
    code = "STORAGE_ERROR"
    retryable = True

    def __init__(self, message: str = "Temporarily unavailable, try again", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
