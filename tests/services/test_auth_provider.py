"""
Tests for the Supabase-backed sign-in provider.

Tests the translation of Supabase Auth failures into AuthenticationError types.
"""

from unittest.mock import MagicMock

import pytest
from supabase import AuthApiError, AuthInvalidCredentialsError

from invoice_dashboard.auth.provider import AuthenticationError, SupabaseAuthProvider

CREDENTIALS = {"email": "user@nextmail.com", "password": "123456"}


@pytest.fixture
def provider(supabase_client):
    return SupabaseAuthProvider(supabase_client)


class TestSignIn:
    """sign_in delegates to Supabase Auth."""

    @pytest.mark.asyncio
    async def test_success_returns_session(self, provider, supabase_client):
        response = MagicMock()
        response.user.id = "user-uuid-1"
        response.session.access_token = "jwt-token"
        supabase_client.auth.sign_in_with_password.return_value = response

        session = await provider.sign_in("credentials", CREDENTIALS)

        supabase_client.auth.sign_in_with_password.assert_called_once_with(
            {"email": "user@nextmail.com", "password": "123456"}
        )
        assert session.user_id == "user-uuid-1"
        assert session.access_token == "jwt-token"

    @pytest.mark.asyncio
    async def test_missing_session_is_callback_error(self, provider, supabase_client):
        response = MagicMock()
        response.session = None
        supabase_client.auth.sign_in_with_password.return_value = response

        with pytest.raises(AuthenticationError) as exc_info:
            await provider.sign_in("credentials", CREDENTIALS)

        assert exc_info.value.type == "CallbackRouteError"


class TestSignInFailures:
    """Failures carry the matching discriminant."""

    @pytest.mark.asyncio
    async def test_unknown_provider_is_configuration_error(self, provider, supabase_client):
        with pytest.raises(AuthenticationError) as exc_info:
            await provider.sign_in("github", CREDENTIALS)

        assert exc_info.value.type == "Configuration"
        supabase_client.auth.sign_in_with_password.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "credentials",
        [
            {"email": "not-an-email", "password": "123456"},
            {"email": "user@nextmail.com", "password": "123"},
            {"email": "user@nextmail.com"},
            {},
        ],
    )
    async def test_malformed_credentials_are_rejected_locally(self, provider, supabase_client, credentials):
        with pytest.raises(AuthenticationError) as exc_info:
            await provider.sign_in("credentials", credentials)

        assert exc_info.value.type == "CredentialsSignin"
        supabase_client.auth.sign_in_with_password.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejected_password_is_credentials_signin(self, provider, supabase_client):
        supabase_client.auth.sign_in_with_password.side_effect = AuthApiError(
            "Invalid login credentials", 400, "invalid_credentials"
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await provider.sign_in("credentials", CREDENTIALS)

        assert exc_info.value.type == "CredentialsSignin"

    @pytest.mark.asyncio
    async def test_invalid_credentials_error_is_credentials_signin(self, provider, supabase_client):
        supabase_client.auth.sign_in_with_password.side_effect = AuthInvalidCredentialsError(
            "You must provide either an email or phone number and a password"
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await provider.sign_in("credentials", CREDENTIALS)

        assert exc_info.value.type == "CredentialsSignin"

    @pytest.mark.asyncio
    async def test_other_auth_api_error_is_callback_error(self, provider, supabase_client):
        supabase_client.auth.sign_in_with_password.side_effect = AuthApiError(
            "Service unavailable", 503, "unexpected_failure"
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await provider.sign_in("credentials", CREDENTIALS)

        assert exc_info.value.type == "CallbackRouteError"

    @pytest.mark.asyncio
    async def test_unconfirmed_email_is_callback_error(self, provider, supabase_client):
        supabase_client.auth.sign_in_with_password.side_effect = AuthApiError(
            "Email not confirmed", 400, "email_not_confirmed"
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await provider.sign_in("credentials", CREDENTIALS)

        assert exc_info.value.type == "CallbackRouteError"

    @pytest.mark.asyncio
    async def test_bad_request_without_code_is_credentials_signin(self, provider, supabase_client):
        supabase_client.auth.sign_in_with_password.side_effect = AuthApiError(
            "Invalid login credentials", 400, None
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await provider.sign_in("credentials", CREDENTIALS)

        assert exc_info.value.type == "CredentialsSignin"

    @pytest.mark.asyncio
    async def test_non_auth_errors_propagate(self, provider, supabase_client):
        supabase_client.auth.sign_in_with_password.side_effect = ConnectionError("network down")

        with pytest.raises(ConnectionError):
            await provider.sign_in("credentials", CREDENTIALS)
