"""
User-related endpoints.

Provides the profile endpoint for the logged-in account.
"""

from fastapi import APIRouter, Depends

from shared.models import AuthenticatedUser
from modules.auth.exceptions import UserNotFoundError
from modules.auth.interfaces import IAuthService
from modules.auth.models import UserSummary
from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.get("/me", response_model=UserSummary)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> UserSummary:
    """
    Get the current user's profile.

    Requires authentication. A token whose account no longer exists is
    rejected like any other invalid token.
    """
    account = await service.get_user_by_id(user.id)
    if account is None:
        raise UserNotFoundError(user.id)
    return UserSummary.from_account(account)
