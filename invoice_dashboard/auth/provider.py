"""
Sign-in provider backed by Supabase Auth.

The dashboard's login form posts email and password to the "credentials"
provider. Failures are reported as AuthenticationError carrying a type
discriminant so callers can choose a message without inspecting Supabase's
error classes:

- CredentialsSignin: the credentials were malformed or rejected
- CallbackRouteError: Supabase Auth failed for another reason
- Configuration: the requested provider does not exist

Errors that are not authentication failures (network errors, bugs) are not
translated and propagate unchanged.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from pydantic import ValidationError
from supabase import AuthApiError, AuthError, AuthInvalidCredentialsError, Client

from invoice_dashboard.schemas.auth import LoginForm

logger = logging.getLogger(__name__)

CREDENTIALS_PROVIDER = "credentials"

CREDENTIALS_SIGNIN = "CredentialsSignin"
CALLBACK_ROUTE_ERROR = "CallbackRouteError"
CONFIGURATION = "Configuration"


class AuthenticationError(Exception):
    """
    A sign-in attempt failed.

    Attributes:
        type: Discriminant naming the failure (e.g. "CredentialsSignin")
    """

    def __init__(self, error_type: str, message: str = "") -> None:
        super().__init__(message or error_type)
        self.type = error_type


@dataclass
class SignInSession:
    """
    Result of a successful sign-in.

    Attributes:
        user_id: The user's UUID
        access_token: JWT access token issued by Supabase Auth
    """
    user_id: str
    access_token: str


class AuthProvider(Protocol):
    """Anything that can sign a user in by provider name."""

    async def sign_in(self, provider_name: str, credentials: Mapping[str, Any]) -> SignInSession:
        ...


class SupabaseAuthProvider:
    """Email/password sign-in against Supabase Auth."""

    def __init__(self, supabase_client: Client) -> None:
        self._client = supabase_client

    async def sign_in(self, provider_name: str, credentials: Mapping[str, Any]) -> SignInSession:
        """
        Sign a user in.

        Args:
            provider_name: Must be "credentials"
            credentials: Form fields; "email" and "password" are read

        Returns:
            SignInSession for the authenticated user

        Raises:
            AuthenticationError: The sign-in failed (see module docstring for types)
        """
        if provider_name != CREDENTIALS_PROVIDER:
            logger.error(f"Sign-in requested for unknown provider '{provider_name}'")
            raise AuthenticationError(CONFIGURATION, f"Unknown sign-in provider '{provider_name}'")

        try:
            form = LoginForm.model_validate(dict(credentials))
        except ValidationError:
            logger.warning("Sign-in rejected: credentials failed validation")
            raise AuthenticationError(CREDENTIALS_SIGNIN, "Credentials failed validation") from None

        try:
            response = self._client.auth.sign_in_with_password(
                {"email": form.email, "password": form.password}
            )
        except AuthApiError as e:
            code = getattr(e, "code", None)
            # Older Auth servers send no error code; a bare 400 is then a rejected password
            if code == "invalid_credentials" or (code is None and getattr(e, "status", None) == 400):
                logger.warning("Sign-in rejected by Supabase Auth: invalid credentials")
                raise AuthenticationError(CREDENTIALS_SIGNIN, "Invalid login credentials") from e
            logger.error(f"Supabase Auth error during sign-in: {e}")
            raise AuthenticationError(CALLBACK_ROUTE_ERROR, str(e)) from e
        except AuthInvalidCredentialsError as e:
            logger.warning("Sign-in rejected by Supabase Auth: invalid credentials")
            raise AuthenticationError(CREDENTIALS_SIGNIN, "Invalid login credentials") from e
        except AuthError as e:
            logger.error(f"Supabase Auth error during sign-in: {e}")
            raise AuthenticationError(CALLBACK_ROUTE_ERROR, str(e)) from e

        session = getattr(response, "session", None)
        user = getattr(response, "user", None)
        if session is None or user is None:
            logger.error("Supabase Auth returned no session for a successful sign-in")
            raise AuthenticationError(CALLBACK_ROUTE_ERROR, "No session returned")

        logger.info(f"User {user.id} signed in")

        return SignInSession(user_id=str(user.id), access_token=session.access_token)
