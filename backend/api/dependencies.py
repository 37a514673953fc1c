"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

One container is created per application (see api.app.create_app) and
stored on app.state. It owns every process-lifetime object, most
importantly the pending-verification ledger.
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from fastapi import Request

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.google import GoogleIdentityVerifier
    from modules.auth.interfaces import IAuthService, INotificationChannel, IUserRepository
    from modules.auth.ledger import PendingVerificationLedger
    from modules.auth.otp import OtpIssuer
    from modules.auth.tokens import TokenService
    from modules.notes.interfaces import INoteService
    from modules.notes.repository import NoteRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container, so the
    pending-verification ledger lives as long as the application.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._ledger: "PendingVerificationLedger | None" = None
        self._tokens: "TokenService | None" = None
        self._user_repository: "IUserRepository | None" = None
        self._notification_channel: "INotificationChannel | None" = None
        self._identity_verifier: "GoogleIdentityVerifier | None" = None
        self._otp_issuer: "OtpIssuer | None" = None
        self._auth_service: "IAuthService | None" = None
        self._note_repository: "NoteRepository | None" = None
        self._note_service: "INoteService | None" = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def ledger(self) -> "PendingVerificationLedger":
        """Get the pending-verification ledger (process lifetime)."""
        if self._ledger is None:
            from modules.auth.ledger import PendingVerificationLedger
            self._ledger = PendingVerificationLedger(
                ttl=timedelta(seconds=self._settings.otp_ttl_seconds),
            )
        return self._ledger

    @property
    def tokens(self) -> "TokenService":
        """Get the session token service."""
        if self._tokens is None:
            from modules.auth.tokens import TokenService
            self._tokens = TokenService(
                secret=self._settings.jwt_secret,
                algorithm=self._settings.jwt_algorithm,
                expires_in=timedelta(days=self._settings.jwt_expire_days),
            )
        return self._tokens

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the account repository instance."""
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(get_supabase_client(self._settings))
        return self._user_repository

    @property
    def notification_channel(self) -> "INotificationChannel":
        """Get the email channel (may report itself as not configured)."""
        if self._notification_channel is None:
            from modules.auth.notifications import ResendEmailChannel
            self._notification_channel = ResendEmailChannel(
                api_key=self._settings.resend_api_key,
                sender=self._settings.email_from,
                timeout=self._settings.email_timeout_seconds,
            )
        return self._notification_channel

    @property
    def identity_verifier(self) -> "GoogleIdentityVerifier":
        """Get the Google ID token verifier."""
        if self._identity_verifier is None:
            from modules.auth.google import GoogleIdentityVerifier
            self._identity_verifier = GoogleIdentityVerifier()
        return self._identity_verifier

    @property
    def otp_issuer(self) -> "OtpIssuer":
        """Get the OTP issuer."""
        if self._otp_issuer is None:
            from modules.auth.otp import OtpIssuer
            self._otp_issuer = OtpIssuer(
                ledger=self.ledger,
                channel=self.notification_channel,
                diagnostics=not self._settings.is_production,
            )
        return self._otp_issuer

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.user_repository,
                ledger=self.ledger,
                tokens=self.tokens,
                otp_issuer=self.otp_issuer,
                identity_verifier=self.identity_verifier,
                google_client_id=self._settings.google_client_id,
                password_rounds=self._settings.password_hash_rounds,
            )
        return self._auth_service

    @property
    def note_repository(self) -> "NoteRepository":
        """Get the note repository instance."""
        if self._note_repository is None:
            from modules.notes.repository import NoteRepository
            from shared.database import get_supabase_client
            self._note_repository = NoteRepository(get_supabase_client(self._settings))
        return self._note_repository

    @property
    def notes(self) -> "INoteService":
        """Get the note service instance."""
        if self._note_service is None:
            from modules.notes.service import NoteService
            self._note_service = NoteService(self.note_repository)
        return self._note_service


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_container(request: Request) -> ServiceContainer:
    """FastAPI dependency for the application's service container."""
    return request.app.state.container


def get_auth_service(request: Request) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container(request).auth


def get_token_service(request: Request) -> "TokenService":
    """FastAPI dependency for the session token service."""
    return get_container(request).tokens


def get_note_service(request: Request) -> "INoteService":
    """FastAPI dependency for note service."""
    return get_container(request).notes
