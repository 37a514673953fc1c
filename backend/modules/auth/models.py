"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field


class Account(BaseModel):
    """
    A stored user account.

    Email is the identity key and is always lowercased. Accounts created
    through Google sign-in have no password hash and no date of birth.
    """

    id: str = Field(..., description="Account ID (UUID)")
    email: str = Field(..., description="Normalized email address")
    password_hash: Optional[str] = Field(None, description="bcrypt hash, absent for federated-only accounts")
    name: str = Field(..., description="Display name")
    date_of_birth: Optional[date] = Field(None, description="Date of birth")
    google_id: Optional[str] = Field(None, description="Google subject identifier")
    created_at: Optional[datetime] = Field(None, description="Account creation time")


class DraftProfile(BaseModel):
    """Profile data captured at signup, held until the email is verified."""

    name: str
    date_of_birth: date


class PendingVerification(BaseModel):
    """
    A signup waiting for its one-time code.

    Lives only in process memory; see PendingVerificationLedger.
    """

    email: str
    otp: str
    expires_at: datetime
    profile: Optional[DraftProfile] = None

    model_config = {"frozen": True}


class IdentityClaims(BaseModel):
    """Verified claims extracted from a Google ID token."""

    subject: str
    email: str
    email_verified: bool = False
    name: Optional[str] = None


class TokenPayload(BaseModel):
    """Session token payload structure."""

    sub: str  # Account ID
    email: str
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp


# =============================================================================
# Request / response models
# =============================================================================


class SignupRequest(BaseModel):
    """Signup request. Fields are optional so missing ones get a readable error."""

    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    date_of_birth: Optional[str] = Field(
        None, validation_alias=AliasChoices("dateOfBirth", "date_of_birth")
    )


class VerifyOtpRequest(BaseModel):
    """OTP verification request."""

    email: Optional[str] = None
    otp: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    date_of_birth: Optional[str] = Field(
        None, validation_alias=AliasChoices("dateOfBirth", "date_of_birth")
    )


class LoginRequest(BaseModel):
    """Password login request."""

    email: Optional[str] = None
    password: Optional[str] = None


class GoogleLoginRequest(BaseModel):
    """Google sign-in request carrying the ID token from the client."""

    token: Optional[str] = None


class UserSummary(BaseModel):
    """Minimal user projection returned to clients. Never includes the hash."""

    id: str
    email: str
    name: str

    @classmethod
    def from_account(cls, account: Account) -> "UserSummary":
        return cls(id=account.id, email=account.email, name=account.name)


class AuthResponse(BaseModel):
    """Session token plus the authenticated user."""

    token: str
    user: UserSummary


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
