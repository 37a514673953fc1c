"""
Authentication module.

Handles OTP-verified signup, password and Google login, session tokens
and the account store.

Public API:
- IAuthService: Interface for auth operations
- Account, AuthResponse, UserSummary: Account data and login results
- PendingVerificationLedger: In-memory store of signups awaiting a code
- Auth exceptions: InvalidTokenError, InvalidOtpError, etc.
"""

from .interfaces import (
    IAuthService,
    IUserRepository,
    INotificationChannel,
    IIdentityVerifier,
)
from .models import (
    Account,
    AuthResponse,
    DraftProfile,
    IdentityClaims,
    PendingVerification,
    UserSummary,
)
from .ledger import PendingVerificationLedger
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    UserNotFoundError,
    InvalidOtpError,
    InvalidCredentialsError,
    InvalidIdentityTokenError,
    AccountExistsError,
    FederatedLoginNotConfiguredError,
    NotificationDeliveryError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    "INotificationChannel",
    "IIdentityVerifier",
    # Models
    "Account",
    "AuthResponse",
    "DraftProfile",
    "IdentityClaims",
    "PendingVerification",
    "UserSummary",
    "PendingVerificationLedger",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "UserNotFoundError",
    "InvalidOtpError",
    "InvalidCredentialsError",
    "InvalidIdentityTokenError",
    "AccountExistsError",
    "FederatedLoginNotConfiguredError",
    "NotificationDeliveryError",
]
