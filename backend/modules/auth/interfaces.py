"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
The collaborator protocols (credential store, email channel, identity
verifier) let the service be tested with fakes and let each backend be
swapped without touching the auth flow.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import Account, AuthResponse, IdentityClaims, MessageResponse


@runtime_checkable
class IUserRepository(Protocol):
    """Persistent account storage keyed by normalized email."""

    def find_by_email(self, email: str) -> Optional[Account]:
        ...

    def find_by_id(self, user_id: str) -> Optional[Account]:
        ...

    def create(self, data: dict[str, Any]) -> Account:
        """
        Insert a new account.

        Raises:
            AccountExistsError: If the email is already taken
        """
        ...


@runtime_checkable
class INotificationChannel(Protocol):
    """Outbound email channel. Optional: unconfigured channels are skipped."""

    @property
    def is_configured(self) -> bool:
        ...

    async def send(self, to: str, subject: str, html: str) -> None:
        """
        Send an email.

        Raises:
            NotificationDeliveryError: If the provider rejected or failed the send
        """
        ...


@runtime_checkable
class IIdentityVerifier(Protocol):
    """Verifies third-party ID tokens."""

    def verify(self, token: str, audience: str) -> IdentityClaims:
        """
        Verify signature, issuer and audience and return the claims.

        Raises:
            InvalidIdentityTokenError: If verification fails
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer and other modules.
    """

    async def signup(
        self,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str],
        date_of_birth: Optional[str],
    ) -> MessageResponse:
        """
        Validate a signup and send a one-time code to the email.

        Raises:
            ValidationError: First failing input check
            AccountExistsError: If the email is already registered
            NotificationDeliveryError: If the configured channel failed
        """
        ...

    async def verify_otp(
        self,
        email: Optional[str],
        otp: Optional[str],
        password: Optional[str] = None,
        name: Optional[str] = None,
        date_of_birth: Optional[str] = None,
    ) -> AuthResponse:
        """
        Consume a pending signup and create the account.

        Raises:
            InvalidOtpError: Missing entry, wrong code or expired code
        """
        ...

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResponse:
        """
        Authenticate with email and password.

        Raises:
            InvalidCredentialsError: For any credential mismatch
        """
        ...

    async def google_login(self, token: Optional[str]) -> AuthResponse:
        """
        Authenticate with a Google ID token, creating the account on first use.

        Raises:
            FederatedLoginNotConfiguredError: If no Google client ID is set
            InvalidIdentityTokenError: If the token or its email is not verified
        """
        ...

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a session token and return the authenticated user.

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...

    async def get_user_by_id(self, user_id: str) -> Optional[Account]:
        """Get an account by its ID."""
        ...
