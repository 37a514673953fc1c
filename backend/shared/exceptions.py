"""
Base exception classes for the Jotter backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class JotterError(Exception):
    """
    Base exception for all Jotter errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(JotterError):
    """Resource not found."""

    pass


class ValidationError(JotterError):
    """Input validation failed."""

    pass


class ConflictError(JotterError):
    """Resource already exists."""

    pass


class AuthenticationError(JotterError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class ConfigurationError(JotterError):
    """A feature or dependency is not configured."""

    pass


class ExternalServiceError(JotterError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
