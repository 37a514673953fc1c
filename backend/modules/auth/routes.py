"""
Authentication API endpoints.

Signup with email verification, password login and Google sign-in.
Errors raised by the service are turned into responses by the
application-level JotterError handler.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.models.errors import ErrorResponse

from .interfaces import IAuthService
from .models import (
    AuthResponse,
    GoogleLoginRequest,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    VerifyOtpRequest,
)

router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input, code or credentials"},
        500: {"model": ErrorResponse, "description": "Server or email provider error"},
    },
)


@router.post("/signup", response_model=MessageResponse)
async def signup(
    request: SignupRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Start a signup.

    Validates the input and emails a 6-digit code that is valid for
    5 minutes. The account is only created by /verify-otp.
    """
    return await service.signup(
        request.email,
        request.password,
        request.name,
        request.date_of_birth,
    )


@router.post("/verify-otp", response_model=AuthResponse)
async def verify_otp(
    request: VerifyOtpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Finish a signup with the emailed code.

    Returns a session token and the new user.
    """
    return await service.verify_otp(
        request.email,
        request.otp,
        request.password,
        request.name,
        request.date_of_birth,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Log in with email and password."""
    return await service.login(request.email, request.password)


@router.post("/google", response_model=AuthResponse)
async def google_login(
    request: GoogleLoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Log in with a Google ID token, creating the account on first use."""
    return await service.google_login(request.token)
