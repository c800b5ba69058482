"""
FastAPI dependencies shared by the dashboard routers.
"""

from typing import Any, Dict

from starlette.datastructures import FormData

from invoice_dashboard.auth.provider import SupabaseAuthProvider
from invoice_dashboard.db.client import get_auth_client, get_supabase_client
from invoice_dashboard.services.cache import get_page_cache
from invoice_dashboard.services.invoice_service import InvoiceMutationService


def get_invoice_service() -> InvoiceMutationService:
    """Build a per-request service around the process-wide collaborators."""
    return InvoiceMutationService(
        supabase_client=get_supabase_client(),
        page_cache=get_page_cache(),
        auth_provider=SupabaseAuthProvider(get_auth_client()),
    )


def form_fields(form: FormData) -> Dict[str, Any]:
    """
    Flatten posted form data to one value per field.

    The first value wins when a field is posted more than once. Fields that
    were not posted are absent from the result.
    """
    fields: Dict[str, Any] = {}
    for key, value in form.multi_items():
        fields.setdefault(key, value)
    return fields
