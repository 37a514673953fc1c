"""Tests for signup input validation."""

from datetime import date

import pytest

from shared.exceptions import ValidationError
from modules.auth.validation import (
    age_in_years,
    check_password,
    is_valid_email,
    parse_date_of_birth,
    validate_signup,
)

TODAY = date(2026, 6, 15)


def signup(**overrides):
    fields = {
        "email": "a@x.com",
        "password": "secret1",
        "name": "Ann",
        "date_of_birth": "2000-01-01",
    }
    fields.update(overrides)
    return validate_signup(today=TODAY, **fields)


class TestValidateSignup:
    def test_valid_input_returns_profile(self):
        profile = signup(name="  Ann  ")
        assert profile.name == "Ann"
        assert profile.date_of_birth == date(2000, 1, 1)

    @pytest.mark.parametrize("field", ["email", "password", "name", "date_of_birth"])
    def test_missing_field(self, field):
        with pytest.raises(ValidationError, match="All fields are required"):
            signup(**{field: None})

    @pytest.mark.parametrize("email", ["plain", "a@b", "a b@x.com", "@x.com", "a@.com "])
    def test_invalid_email(self, email):
        with pytest.raises(ValidationError, match="Invalid email format") as exc_info:
            signup(email=email)
        assert exc_info.value.details["field"] == "email"

    def test_short_password(self):
        with pytest.raises(ValidationError, match="at least 6 characters"):
            signup(password="12345")

    def test_short_name_after_trimming(self):
        with pytest.raises(ValidationError, match="Name must be at least 2 characters"):
            signup(name=" A ")

    def test_unparseable_date(self):
        with pytest.raises(ValidationError, match="Invalid date of birth"):
            signup(date_of_birth="not-a-date")

    def test_under_age_by_year_difference(self):
        """Age 12 by calendar years is rejected."""
        with pytest.raises(ValidationError, match="at least 13 years old"):
            signup(date_of_birth="2014-01-01")

    def test_year_only_age_check(self):
        """Born in December 13 years ago still passes in June."""
        profile = signup(date_of_birth="2013-12-31")
        assert profile.date_of_birth == date(2013, 12, 31)

    def test_checks_run_in_order(self):
        """Email format is reported before a short password."""
        with pytest.raises(ValidationError, match="Invalid email format"):
            signup(email="bad", password="1", name="A", date_of_birth="junk")
        with pytest.raises(ValidationError, match="Password"):
            signup(password="1", name="A", date_of_birth="junk")
        with pytest.raises(ValidationError, match="Name"):
            signup(name="A", date_of_birth="junk")


class TestParseDateOfBirth:
    def test_iso_date(self):
        assert parse_date_of_birth("2000-01-01") == date(2000, 1, 1)

    def test_iso_datetime(self):
        assert parse_date_of_birth("2000-01-01T00:00:00.000Z") == date(2000, 1, 1)

    def test_garbage(self):
        assert parse_date_of_birth("yesterday") is None


class TestHelpers:
    def test_age_ignores_month_and_day(self):
        assert age_in_years(date(2013, 12, 31), date(2026, 1, 1)) == 13

    def test_email_pattern(self):
        assert is_valid_email("user@domain.com")
        assert not is_valid_email("user@domain")

    @pytest.mark.parametrize("email", ["a@x.com\n", "a@x.com ", "\na@x.com"])
    def test_email_must_match_whole_string(self, email):
        assert not is_valid_email(email)

    def test_check_password(self):
        check_password("secret")
        with pytest.raises(ValidationError, match="at least 6 characters"):
            check_password("short")
