"""
Session token authentication for protected routes.

Extracts the bearer token, validates it and injects the authenticated
user. Any failure stops the request with a 401 before the route runs.
"""

import logging
from typing import TYPE_CHECKING, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

from ..dependencies import get_token_service

if TYPE_CHECKING:
    from modules.auth.tokens import TokenService

logger = logging.getLogger(__name__)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)

# Missing, malformed, forged and expired tokens all get this detail
AUTH_REQUIRED = "Authentication required"


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: "TokenService" = Depends(get_token_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise AuthError(AUTH_REQUIRED)

    try:
        return tokens.validate(credentials.credentials)
    except AuthenticationError as e:
        logger.debug(f"Rejected session token: {e.code}")
        raise AuthError(AUTH_REQUIRED)

