"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import os

# Settings are read at import time by api.app; keep the real environment out.
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing-only")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

import jwt  # PyJWT

# Import the app package first so route modules never see a half-built api package
from api.app import create_app
from api.dependencies import ServiceContainer
from shared.config import Settings, get_settings
from modules.auth.exceptions import AccountExistsError, NotificationDeliveryError
from modules.auth.ledger import PendingVerificationLedger
from modules.auth.models import Account, IdentityClaims
from modules.auth.otp import OtpIssuer
from modules.auth.service import AuthService
from modules.auth.tokens import TokenService


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_GOOGLE_CLIENT_ID = "test-client.apps.googleusercontent.com"


class FakeUserRepository:
    """In-memory stand-in for the Supabase users table."""

    def __init__(self) -> None:
        self.accounts: dict[str, Account] = {}
        self.create_calls = 0
        self.fail_next_create: Optional[Exception] = None

    def find_by_email(self, email: str) -> Optional[Account]:
        return self.accounts.get(email)

    def find_by_id(self, user_id: str) -> Optional[Account]:
        for account in self.accounts.values():
            if account.id == user_id:
                return account
        return None

    def create(self, data: dict[str, Any]) -> Account:
        self.create_calls += 1
        if self.fail_next_create is not None:
            error, self.fail_next_create = self.fail_next_create, None
            raise error
        if data["email"] in self.accounts:
            raise AccountExistsError(data["email"])
        account = Account(
            id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
            **data,
        )
        self.accounts[account.email] = account
        return account


class FakeEmailChannel:
    """Records sent emails instead of calling Resend."""

    def __init__(self, configured: bool = True, fail: bool = False) -> None:
        self.configured = configured
        self.fail = fail
        self.sent: list[dict[str, str]] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def send(self, to: str, subject: str, html: str) -> None:
        if self.fail:
            raise NotificationDeliveryError("connection refused")
        self.sent.append({"to": to, "subject": subject, "html": html})


class FakeIdentityVerifier:
    """Returns preset claims, or raises a preset error."""

    def __init__(self, claims: Optional[IdentityClaims] = None, error: Optional[Exception] = None):
        self.claims = claims
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def verify(self, token: str, audience: str) -> IdentityClaims:
        self.calls.append((token, audience))
        if self.error is not None:
            raise self.error
        return self.claims


class FakeClock:
    """Controllable UTC clock for ledger expiry tests."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a session token for authentication.

    Args:
        user_id: Account ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(days=7)
    iat = now - timedelta(days=8) if expired else now

    payload = {
        "sub": user_id,
        "email": email,
        "exp": int(exp.timestamp()),
        "iat": int(iat.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with a test secret and no external integrations."""
    return Settings(
        _env_file=None,
        jwt_secret=TEST_JWT_SECRET,
        environment="development",
        google_client_id="",
        resend_api_key="",
        supabase_url="",
        supabase_service_role_key="",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ledger(clock: FakeClock) -> PendingVerificationLedger:
    return PendingVerificationLedger(ttl=timedelta(minutes=5), clock=clock)


@pytest.fixture
def users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def email_channel() -> FakeEmailChannel:
    return FakeEmailChannel()


@pytest.fixture
def identity_verifier() -> FakeIdentityVerifier:
    return FakeIdentityVerifier(
        claims=IdentityClaims(
            subject="google-sub-1",
            email="Gina@Example.com",
            email_verified=True,
            name="Gina",
        )
    )


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret=TEST_JWT_SECRET)


@pytest.fixture
def auth_service(
    users: FakeUserRepository,
    ledger: PendingVerificationLedger,
    token_service: TokenService,
    email_channel: FakeEmailChannel,
    identity_verifier: FakeIdentityVerifier,
) -> AuthService:
    """Auth service wired to in-memory fakes."""
    return AuthService(
        users=users,
        ledger=ledger,
        tokens=token_service,
        otp_issuer=OtpIssuer(ledger, email_channel),
        identity_verifier=identity_verifier,
        google_client_id=TEST_GOOGLE_CLIENT_ID,
    )


@pytest.fixture
def container(settings: Settings) -> ServiceContainer:
    return ServiceContainer(settings)


@pytest.fixture
def app(container: ServiceContainer):
    """Create a fresh app for each test."""
    application = create_app(container)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def adult_birth_date() -> str:
    return date(date.today().year - 30, 1, 1).isoformat()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def make_token():
    """Factory fixture for custom tokens."""
    return create_test_token
