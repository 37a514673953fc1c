"""
Session token issuance and validation.

Tokens are HS256 JWTs signed with the server secret. Nothing is stored
server-side: a token is valid iff its signature verifies and it has not
expired.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from shared.exceptions import ConfigurationError
from shared.models import AuthenticatedUser

from .exceptions import ExpiredTokenError, InvalidTokenError, MissingTokenError
from .models import Account, TokenPayload


class TokenService:
    """Mints and verifies session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=7),
    ):
        if not secret:
            raise ConfigurationError(
                "JWT secret is not configured. Set the JWT_SECRET environment variable.",
                code="JWT_SECRET_MISSING",
            )
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in

    def issue(self, account: Account, now: Optional[datetime] = None) -> str:
        """Create a token for the account, valid for the configured lifetime."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": account.id,
            "email": account.email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._expires_in).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def validate(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Verify a token and return the user it identifies.

        Raises:
            MissingTokenError: If no token was given
            ExpiredTokenError: If the token is past its expiry
            InvalidTokenError: For bad signatures, malformed tokens or missing claims
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
            token_payload = TokenPayload(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError:
            raise InvalidTokenError()
        except ValueError:
            # Claims present but of the wrong shape
            raise InvalidTokenError()

        return AuthenticatedUser(
            id=token_payload.sub,
            email=token_payload.email,
            issued_at=datetime.fromtimestamp(token_payload.iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(token_payload.exp, tz=timezone.utc),
        )
