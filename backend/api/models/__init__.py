"""API models package."""

from .errors import ErrorResponse

__all__ = [
    "ErrorResponse",
]
