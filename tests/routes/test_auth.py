"""
Tests for POST /login and the access token dependency.
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from jwt.exceptions import ExpiredSignatureError, PyJWKClientError

from invoice_dashboard.auth.dependencies import _extract_token, verify_access_token
from invoice_dashboard.auth.provider import AuthenticationError, SignInSession
from invoice_dashboard.main import app
from invoice_dashboard.routes.dependencies import get_invoice_service

client = TestClient(app)


@pytest.fixture
def mock_service(invoice_service):
    app.dependency_overrides[get_invoice_service] = lambda: invoice_service
    yield invoice_service
    app.dependency_overrides.clear()


class TestLogin:
    """Tests for POST /login"""

    def test_success_redirects_and_sets_cookie(self, mock_service, auth_provider):
        auth_provider.sign_in.return_value = SignInSession(user_id="user-1", access_token="tok-123")

        response = client.post(
            "/login",
            data={"email": "user@nextmail.com", "password": "123456"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard"
        cookie = response.headers["set-cookie"]
        assert "access_token=tok-123" in cookie
        assert "HttpOnly" in cookie

    def test_invalid_credentials_message(self, mock_service, auth_provider):
        auth_provider.sign_in.side_effect = AuthenticationError("CredentialsSignin")

        response = client.post(
            "/login",
            data={"email": "user@nextmail.com", "password": "wrong-password"},
            follow_redirects=False,
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Invalid credentials."}

    def test_other_auth_failure_message(self, mock_service, auth_provider):
        auth_provider.sign_in.side_effect = AuthenticationError("CallbackRouteError")

        response = client.post("/login", data={"email": "a@b.c", "password": "123456"})

        assert response.json() == {"message": "Something went wrong."}


class TestExtractToken:
    """Token lookup order: Authorization header, then session cookie."""

    def test_bearer_header(self):
        assert _extract_token("Bearer abc", None) == "abc"

    def test_header_wins_over_cookie(self):
        assert _extract_token("Bearer from-header", "from-cookie") == "from-header"

    def test_cookie_fallback(self):
        assert _extract_token(None, "from-cookie") == "from-cookie"

    def test_missing_token(self):
        with pytest.raises(HTTPException) as exc_info:
            _extract_token(None, None)

        assert exc_info.value.status_code == 401

    def test_malformed_header(self):
        with pytest.raises(HTTPException) as exc_info:
            _extract_token("Basic dXNlcjpwYXNz", None)

        assert exc_info.value.status_code == 401


class TestVerifyAccessToken:
    """verify_access_token maps JWT failures to 401s."""

    @patch("invoice_dashboard.auth.dependencies.decode")
    @patch("invoice_dashboard.auth.dependencies.get_jwks_client")
    def test_valid_token_returns_subject(self, mock_jwks, mock_decode):
        mock_decode.return_value = {"sub": "user-1", "aud": "authenticated"}

        assert verify_access_token("token") == "user-1"

    @patch("invoice_dashboard.auth.dependencies.decode")
    @patch("invoice_dashboard.auth.dependencies.get_jwks_client")
    def test_missing_subject(self, mock_jwks, mock_decode):
        mock_decode.return_value = {"aud": "authenticated"}

        with pytest.raises(HTTPException) as exc_info:
            verify_access_token("token")

        assert exc_info.value.status_code == 401

    @patch("invoice_dashboard.auth.dependencies.decode")
    @patch("invoice_dashboard.auth.dependencies.get_jwks_client")
    def test_expired_token(self, mock_jwks, mock_decode):
        mock_decode.side_effect = ExpiredSignatureError("expired")

        with pytest.raises(HTTPException) as exc_info:
            verify_access_token("token")

        assert exc_info.value.detail["error"] == "token_expired"

    @patch("invoice_dashboard.auth.dependencies.get_jwks_client")
    def test_jwks_failure(self, mock_jwks):
        jwks_client = MagicMock()
        jwks_client.get_signing_key_from_jwt.side_effect = PyJWKClientError("no keys")
        mock_jwks.return_value = jwks_client

        with pytest.raises(HTTPException) as exc_info:
            verify_access_token("token")

        assert exc_info.value.detail["error"] == "jwks_error"
