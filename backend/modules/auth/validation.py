"""
Signup input validation.

Checks run in a fixed order and the first failure wins, so the client
always gets a single, specific message.
"""

import re
from datetime import date, datetime
from typing import Optional

from shared.exceptions import ValidationError

from .models import DraftProfile

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2
MIN_AGE_YEARS = 13


def _field_error(message: str, field: str) -> ValidationError:
    return ValidationError(message, code="VALIDATION_ERROR", details={"field": field})


def parse_date_of_birth(value: str) -> Optional[date]:
    """Parse an ISO date ("2000-01-01") or datetime string. None if unparseable."""
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def age_in_years(birth: date, today: date) -> int:
    """Coarse age: calendar-year difference only, ignoring month and day."""
    return today.year - birth.year


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def check_password(password: str) -> None:
    """Enforce the minimum password length used at signup and verification."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise _field_error(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters", "password"
        )


def validate_signup(
    email: Optional[str],
    password: Optional[str],
    name: Optional[str],
    date_of_birth: Optional[str],
    today: Optional[date] = None,
) -> DraftProfile:
    """
    Validate signup input and return the draft profile to keep pending.

    Raises:
        ValidationError: For the first failing check, in order: missing
            field, email format, password length, name length, date
            format, minimum age
    """
    if not email or not password or not name or not date_of_birth:
        raise ValidationError("All fields are required", code="VALIDATION_ERROR")

    if not is_valid_email(email):
        raise _field_error("Invalid email format", "email")

    check_password(password)

    trimmed_name = name.strip()
    if len(trimmed_name) < MIN_NAME_LENGTH:
        raise _field_error(f"Name must be at least {MIN_NAME_LENGTH} characters", "name")

    birth = parse_date_of_birth(date_of_birth)
    if birth is None:
        raise _field_error("Invalid date of birth", "date_of_birth")

    if age_in_years(birth, today or date.today()) < MIN_AGE_YEARS:
        raise _field_error(
            f"Must be at least {MIN_AGE_YEARS} years old", "date_of_birth"
        )

    return DraftProfile(name=trimmed_name, date_of_birth=birth)
