"""Tests for the /api/auth endpoints."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_auth_service
from modules.auth.models import Account
from modules.auth.otp import OtpIssuer
from modules.auth.passwords import hash_password
from modules.auth.service import AuthService

from tests.conftest import FakeEmailChannel


@pytest.fixture
def client(app, auth_service):
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    return TestClient(app)


@pytest.fixture
def signup_body(adult_birth_date):
    return {
        "email": "a@x.com",
        "password": "secret1",
        "name": "Ann",
        "dateOfBirth": adult_birth_date,
    }


class TestSignupRoute:
    def test_signup_then_verify(self, client, signup_body, ledger, token_service):
        response = client.post("/api/auth/signup", json=signup_body)
        assert response.status_code == 200
        assert response.json() == {"message": "OTP sent to email"}

        otp = ledger._entries.get("a@x.com").otp
        response = client.post(
            "/api/auth/verify-otp",
            json={**signup_body, "otp": otp},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["email"] == "a@x.com"
        assert data["user"]["name"] == "Ann"
        assert set(data["user"].keys()) == {"id", "email", "name"}
        assert token_service.validate(data["token"]).id == data["user"]["id"]

        # The code is single-use
        response = client.post("/api/auth/verify-otp", json={**signup_body, "otp": otp})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid or expired OTP"

    def test_snake_case_birth_date(self, client, signup_body):
        body = {**signup_body}
        body["date_of_birth"] = body.pop("dateOfBirth")
        response = client.post("/api/auth/signup", json=body)
        assert response.status_code == 200

    def test_missing_field(self, client, signup_body):
        del signup_body["name"]
        response = client.post("/api/auth/signup", json=signup_body)
        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required"

    def test_too_young(self, client, signup_body):
        signup_body["dateOfBirth"] = "2024-01-01"
        response = client.post("/api/auth/signup", json=signup_body)
        assert response.status_code == 400
        assert response.json()["message"] == "Must be at least 13 years old"

    def test_existing_account(self, client, signup_body, users):
        users.accounts["a@x.com"] = Account(id="u1", email="a@x.com", name="Ann")
        response = client.post("/api/auth/signup", json=signup_body)
        assert response.status_code == 409
        assert response.json()["message"] == "User already exists"

    def test_email_failure(self, app, users, ledger, token_service, signup_body):
        service = AuthService(
            users=users,
            ledger=ledger,
            tokens=token_service,
            otp_issuer=OtpIssuer(ledger, FakeEmailChannel(fail=True)),
        )
        app.dependency_overrides[get_auth_service] = lambda: service
        client = TestClient(app)

        response = client.post("/api/auth/signup", json=signup_body)

        assert response.status_code == 500
        assert response.json() == {
            "error": "EMAIL_DELIVERY_FAILED",
            "message": "Failed to send email",
            "details": {},
        }

    def test_verify_wrong_code(self, client, signup_body, ledger):
        client.post("/api/auth/signup", json=signup_body)
        otp = ledger._entries.get("a@x.com").otp
        wrong = "100000" if otp != "100000" else "100001"

        response = client.post("/api/auth/verify-otp", json={**signup_body, "otp": wrong})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_OTP"


class TestLoginRoute:
    @pytest.fixture
    def account(self, users):
        account = Account(
            id="user-1",
            email="a@x.com",
            name="Ann",
            password_hash=hash_password("secret1"),
        )
        users.accounts[account.email] = account
        return account

    def test_login(self, client, account):
        response = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
        assert response.status_code == 200
        assert response.json()["user"] == {"id": "user-1", "email": "a@x.com", "name": "Ann"}

    def test_wrong_password(self, client, account):
        response = client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid credentials"

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "b@x.com", "password": "secret1"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid credentials"

    def test_missing_password(self, client):
        response = client.post("/api/auth/login", json={"email": "a@x.com"})
        assert response.status_code == 400


class TestGoogleRoute:
    def test_google_login(self, client, users):
        response = client.post("/api/auth/google", json={"token": "google-id-token"})
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "gina@example.com"
        assert "gina@example.com" in users.accounts

    def test_not_configured(self, app, users, ledger, token_service):
        service = AuthService(
            users=users,
            ledger=ledger,
            tokens=token_service,
            otp_issuer=OtpIssuer(ledger),
        )
        app.dependency_overrides[get_auth_service] = lambda: service
        client = TestClient(app)

        response = client.post("/api/auth/google", json={"token": "t"})

        assert response.status_code == 503
        assert response.json()["message"] == "Google authentication not configured"

    def test_missing_token(self, client):
        response = client.post("/api/auth/google", json={})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid Google token"


class TestMalformedBodies:
    def test_numeric_otp(self, client, signup_body, ledger):
        """Wrongly typed fields are a 400 in the usual error shape."""
        client.post("/api/auth/signup", json=signup_body)
        otp = ledger._entries.get("a@x.com").otp

        response = client.post(
            "/api/auth/verify-otp",
            json={**signup_body, "otp": int(otp)},
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "VALIDATION_ERROR",
            "message": "Invalid request body",
            "details": {"fields": ["otp"]},
        }
        assert otp not in response.text
        assert "a@x.com" in ledger

    def test_invalid_json(self, client):
        response = client.post(
            "/api/auth/login",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
