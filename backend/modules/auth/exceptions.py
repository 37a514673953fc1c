"""
Authentication module exceptions.

These exceptions are raised by the auth module and caught by the API
error handler to return appropriate HTTP responses. Messages for
credential and code failures are deliberately generic.
"""

from shared.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    ExternalServiceError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class UserNotFoundError(AuthenticationError):
    """Raised when the authenticated user doesn't exist in the database."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class InvalidOtpError(AuthenticationError):
    """Raised for a missing, mismatched or expired signup code."""

    def __init__(self):
        super().__init__("Invalid or expired OTP", code="INVALID_OTP")


class InvalidCredentialsError(AuthenticationError):
    """Raised for any password login failure."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class InvalidIdentityTokenError(AuthenticationError):
    """Raised when a Google ID token fails verification or lacks a verified email."""

    def __init__(self, message: str = "Invalid Google token"):
        super().__init__(message, code="INVALID_GOOGLE_TOKEN")


class AccountExistsError(ConflictError):
    """Raised when an account with the email already exists."""

    def __init__(self, email: str):
        super().__init__(
            "User already exists",
            code="USER_EXISTS",
            details={"email": email},
        )


class FederatedLoginNotConfiguredError(ConfigurationError):
    """Raised when Google sign-in is used without a client ID configured."""

    def __init__(self):
        super().__init__(
            "Google authentication not configured",
            code="GOOGLE_NOT_CONFIGURED",
        )


class NotificationDeliveryError(ExternalServiceError):
    """Raised when the verification email could not be sent."""

    def __init__(self, original_error: str = ""):
        super().__init__(
            "Failed to send email",
            service="email",
            code="EMAIL_DELIVERY_FAILED",
            details={"original_error": original_error},
        )
