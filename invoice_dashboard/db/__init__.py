"""
Database access layer for the invoice dashboard backend.

Only the shared Supabase client lives here. Table access (the `invoices`
table) is done by the service layer through the client's query builder, which
parameterizes every value.
"""

from .client import get_auth_client, get_supabase_client, reset_supabase_client

__all__ = ["get_auth_client", "get_supabase_client", "reset_supabase_client"]
