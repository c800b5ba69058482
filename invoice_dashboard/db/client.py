"""
Supabase client factory.

The client is a process-wide handle: it is created lazily on first use and
then injected into each request's InvoiceMutationService. Route handlers never
construct their own client.
"""

import logging

from invoice_dashboard.config import settings
from supabase import Client, ClientOptions, create_client

logger = logging.getLogger(__name__)

_supabase_client: Client | None = None
_auth_client: Client | None = None


def get_supabase_client() -> Client:
    """
    Get or create the shared Supabase client.

    Returns:
        Supabase client configured with the project's publishable key.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_PUBLISHABLE_KEY is not configured
    """
    global _supabase_client

    if _supabase_client is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_PUBLISHABLE_KEY:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_PUBLISHABLE_KEY must be configured "
                "before the database client can be created."
            )

        _supabase_client = create_client(
            supabase_url=settings.SUPABASE_URL,
            supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
        )
        logger.info("Created shared Supabase client")

    return _supabase_client


def get_auth_client() -> Client:
    """
    Get or create the Supabase client used for password sign-in.

    Kept apart from the database client so that signing a user in never
    changes the session the shared database client sends. Sessions are not
    persisted or refreshed; the access token is handed to the browser instead.
    """
    global _auth_client

    if _auth_client is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_PUBLISHABLE_KEY:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_PUBLISHABLE_KEY must be configured "
                "before the auth client can be created."
            )

        _auth_client = create_client(
            supabase_url=settings.SUPABASE_URL,
            supabase_key=settings.SUPABASE_PUBLISHABLE_KEY,
            options=ClientOptions(auto_refresh_token=False, persist_session=False),
        )
        logger.info("Created Supabase auth client")

    return _auth_client


def reset_supabase_client() -> None:
    """Drop the shared clients so the next call builds fresh ones."""
    global _supabase_client, _auth_client
    _supabase_client = None
    _auth_client = None
