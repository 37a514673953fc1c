"""
Google ID token verification.

Fetches Google's public signing keys (cached by PyJWKClient) and checks
the token's signature, issuer, audience and expiry.
"""

import logging
from typing import Optional

import jwt
from jwt import PyJWKClient

from .exceptions import InvalidIdentityTokenError
from .models import IdentityClaims

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ["accounts.google.com", "https://accounts.google.com"]


class GoogleIdentityVerifier:
    """Verifies Google-issued ID tokens."""

    def __init__(
        self,
        jwk_client: Optional[PyJWKClient] = None,
        leeway: int = 60,
    ):
        self._jwk_client = jwk_client
        self._leeway = leeway

    @property
    def jwk_client(self) -> PyJWKClient:
        if self._jwk_client is None:
            self._jwk_client = PyJWKClient(GOOGLE_CERTS_URL)
        return self._jwk_client

    def verify(self, token: str, audience: str) -> IdentityClaims:
        """
        Verify an ID token for the given client ID and return its claims.

        Raises:
            InvalidIdentityTokenError: If the key cannot be resolved or the
                token fails any check
        """
        if not token:
            raise InvalidIdentityTokenError()

        try:
            signing_key = self.jwk_client.get_signing_key_from_jwt(token).key
            payload = jwt.decode(
                token,
                signing_key,
                algorithms=["RS256"],
                audience=audience,
                issuer=GOOGLE_ISSUERS,
                leeway=self._leeway,
            )
        except jwt.PyJWKClientError as e:
            logger.warning(f"Could not resolve Google signing key: {e}")
            raise InvalidIdentityTokenError()
        except jwt.InvalidTokenError as e:
            logger.debug(f"Google ID token rejected: {e}")
            raise InvalidIdentityTokenError()

        return IdentityClaims(
            subject=str(payload.get("sub", "")),
            email=payload.get("email") or "",
            email_verified=payload.get("email_verified") in (True, "true"),
            name=payload.get("name"),
        )
