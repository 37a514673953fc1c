"""
Authentication service implementation.

Orchestrates OTP-gated signup, password login, Google sign-in and session
token validation on top of the account repository, the pending
verification ledger and the external collaborators.
"""

import asyncio
import logging
from typing import Optional

from shared.exceptions import ValidationError
from shared.models import AuthenticatedUser

from .exceptions import (
    AccountExistsError,
    FederatedLoginNotConfiguredError,
    InvalidCredentialsError,
    InvalidIdentityTokenError,
    InvalidOtpError,
)
from .interfaces import IAuthService, IIdentityVerifier, IUserRepository
from .ledger import PendingVerificationLedger, normalize_email
from .models import Account, AuthResponse, DraftProfile, MessageResponse, UserSummary
from .otp import OtpIssuer
from .passwords import MIN_ROUNDS, hash_password, verify_password
from .tokens import TokenService
from .validation import check_password, parse_date_of_birth, validate_signup

logger = logging.getLogger(__name__)

DEFAULT_FEDERATED_NAME = "Google User"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    All collaborators are injected; the service holds no global state.
    The ledger in particular must be the process-wide instance owned by
    the service container, otherwise codes issued by one request would be
    invisible to the next.
    """

    def __init__(
        self,
        users: IUserRepository,
        ledger: PendingVerificationLedger,
        tokens: TokenService,
        otp_issuer: OtpIssuer,
        identity_verifier: Optional[IIdentityVerifier] = None,
        google_client_id: str = "",
        password_rounds: int = MIN_ROUNDS,
    ):
        self._users = users
        self._ledger = ledger
        self._tokens = tokens
        self._otp_issuer = otp_issuer
        self._identity_verifier = identity_verifier
        self._google_client_id = google_client_id
        self._password_rounds = password_rounds

    # -------------------------------------------------------------------------
    # Signup
    # -------------------------------------------------------------------------

    async def signup(
        self,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str],
        date_of_birth: Optional[str],
    ) -> MessageResponse:
        """Validate the signup and send a one-time code to the email."""
        profile = validate_signup(email, password, name, date_of_birth)
        normalized = normalize_email(email)

        if self._users.find_by_email(normalized) is not None:
            raise AccountExistsError(normalized)

        await self._otp_issuer.issue(normalized, profile)
        return MessageResponse(message="OTP sent to email")

    async def verify_otp(
        self,
        email: Optional[str],
        otp: Optional[str],
        password: Optional[str] = None,
        name: Optional[str] = None,
        date_of_birth: Optional[str] = None,
    ) -> AuthResponse:
        """
        Consume the pending signup and create the account.

        The ledger entry is taken atomically before any slow work, so a
        second verification for the same email finds nothing. If the
        account cannot be created the entry is put back and the error
        propagates; nothing partial reaches the caller.
        """
        if not email or not otp:
            raise InvalidOtpError()

        entry = self._ledger.consume(email, otp)

        try:
            if not password:
                raise ValidationError("Password is required", code="VALIDATION_ERROR",
                                      details={"field": "password"})
            check_password(password)
            profile = entry.profile or self._fallback_profile(name, date_of_birth)

            password_hash = await asyncio.to_thread(
                hash_password, password, self._password_rounds
            )
            account = self._users.create({
                "email": entry.email,
                "password_hash": password_hash,
                "name": profile.name.strip(),
                "date_of_birth": profile.date_of_birth,
            })
        except Exception:
            self._ledger.restore(entry)
            raise

        logger.info(f"Created account {account.id} for verified email")
        return self._authenticated(account)

    # -------------------------------------------------------------------------
    # Login
    # -------------------------------------------------------------------------

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResponse:
        """
        Authenticate with email and password.

        Unknown email, a federated-only account and a wrong password all
        raise the same InvalidCredentialsError.
        """
        if not email or not password:
            raise ValidationError("Email and password are required", code="VALIDATION_ERROR")

        account = self._users.find_by_email(normalize_email(email))
        if account is None or not account.password_hash:
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(verify_password, password, account.password_hash)
        if not matches:
            raise InvalidCredentialsError()

        return self._authenticated(account)

    async def google_login(self, token: Optional[str]) -> AuthResponse:
        """
        Authenticate with a Google ID token.

        Accounts are matched by email. An existing password account with
        the same email is reused as-is: it is not linked to the Google
        subject and keeps its password. New accounts get no password.
        """
        if not self._google_client_id or self._identity_verifier is None:
            raise FederatedLoginNotConfiguredError()
        if not token:
            raise InvalidIdentityTokenError()

        claims = await asyncio.to_thread(
            self._identity_verifier.verify, token, self._google_client_id
        )
        if not claims.email or not claims.email_verified:
            raise InvalidIdentityTokenError()

        normalized = normalize_email(claims.email)
        account = self._users.find_by_email(normalized)
        if account is None:
            try:
                account = self._users.create({
                    "email": normalized,
                    "name": claims.name or DEFAULT_FEDERATED_NAME,
                    "google_id": claims.subject,
                })
                logger.info(f"Created account {account.id} from Google sign-in")
            except AccountExistsError:
                # Lost a race with a concurrent first sign-in
                account = self._users.find_by_email(normalized)
                if account is None:
                    raise

        return self._authenticated(account)

    # -------------------------------------------------------------------------
    # Token validation
    # -------------------------------------------------------------------------

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """Validate a session token and return the authenticated user."""
        return self._tokens.validate(token)

    async def get_user_by_id(self, user_id: str) -> Optional[Account]:
        return self._users.find_by_id(user_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _authenticated(self, account: Account) -> AuthResponse:
        return AuthResponse(
            token=self._tokens.issue(account),
            user=UserSummary.from_account(account),
        )

    @staticmethod
    def _fallback_profile(name: Optional[str], date_of_birth: Optional[str]) -> DraftProfile:
        """Build a profile from resubmitted fields when the entry has none."""
        birth = parse_date_of_birth(date_of_birth) if date_of_birth else None
        if not name or not name.strip() or birth is None:
            raise ValidationError("All fields are required", code="VALIDATION_ERROR")
        return DraftProfile(name=name.strip(), date_of_birth=birth)
