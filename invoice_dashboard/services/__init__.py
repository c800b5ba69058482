"""
Service layer for the invoice dashboard backend.

Services sit between routes (HTTP layer) and the database: they validate form
input, write the `invoices` table, invalidate cached views and decide where
the browser goes next.
"""

from .cache import PageCache, get_page_cache
from .invoice_service import InvoiceMutationService, InvoiceValidationError, to_cents
from .navigation import Redirect, redirect
from .validation import ValidationErr, ValidationOk, validate_form

__all__ = [
    "InvoiceMutationService",
    "InvoiceValidationError",
    "to_cents",
    "PageCache",
    "get_page_cache",
    "Redirect",
    "redirect",
    "ValidationOk",
    "ValidationErr",
    "validate_form",
]
