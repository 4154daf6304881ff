"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class BackendError(DomainError):
    """Raised when a call against the volkszaehler middleware fails."""


class BackendTransportError(BackendError):
    """Raised on connection failures, timeouts and unexpected HTTP statuses."""


class BackendApiError(BackendError):
    """Raised when the middleware answers with an exception payload."""

    def __init__(
        self,
        message: str,
        exception_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.exception_type = exception_type
        super().__init__(f"api exception: {message}", details)


class BackendDecodeError(BackendError):
    """Raised when a middleware response cannot be decoded."""


class QueryExecutionError(DomainError):
    """Raised when a query target fails for a reason other than the backend."""
