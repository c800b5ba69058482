"""
Invoice mutation service.

Backs the invoice dashboard's form handlers:
- create_invoice / update_invoice / delete_invoice write the `invoices` table
  and invalidate the cached invoice list view
- authenticate signs a user in through the injected auth provider
- list_invoices renders (and caches) the invoice list view

Failure reporting:
- create_invoice returns a FormState for invalid input or a database error
- update_invoice raises InvoiceValidationError for invalid input and returns a
  FormState for a database error
- delete_invoice returns a FormState for a database error
- Successful create/update and sign-in end with redirect(), which raises
  Redirect; nothing is returned on those paths
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, cast

from supabase import Client

from invoice_dashboard.auth.provider import (
    CREDENTIALS_PROVIDER,
    CREDENTIALS_SIGNIN,
    AuthenticationError,
    AuthProvider,
)
from invoice_dashboard.config import settings
from invoice_dashboard.schemas.invoices import (
    INVOICE_FIELD_RULES,
    FieldErrors,
    FormState,
    InvoiceForm,
    MutationOutcome,
    to_cents,
)
from invoice_dashboard.services.cache import PageCache
from invoice_dashboard.services.navigation import redirect
from invoice_dashboard.services.validation import ValidationErr, ValidationResult, validate_form

logger = logging.getLogger(__name__)

CREATE_VALIDATION_MESSAGE = "Missing Fields. Failed to Create Invoice."
UPDATE_VALIDATION_MESSAGE = "Invalid Fields. Failed to Update Invoice."
CREATE_DATABASE_ERROR = "Database Error: Failed to create invoice"
UPDATE_DATABASE_ERROR = "Database Error: Failed to update invoice."
DELETE_DATABASE_ERROR = "Database Error: Failed to delete invoice."
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
SIGN_IN_FAILED_MESSAGE = "Something went wrong."

INVOICE_COLUMNS = "id, customer_id, amount, date, status"


class InvoiceValidationError(Exception):
    """
    Raised by update_invoice when the submitted form is invalid.

    Attributes:
        errors: Field name -> messages, same shape as FormState.errors
    """

    def __init__(self, errors: FieldErrors) -> None:
        super().__init__(f"Invalid invoice fields: {', '.join(errors.keys())}")
        self.errors = errors

    def to_form_state(self) -> FormState:
        return FormState(
            errors=self.errors,
            message=UPDATE_VALIDATION_MESSAGE,
            outcome=MutationOutcome.VALIDATION_FAILED,
        )


def _today() -> str:
    """Current UTC date as an ISO-8601 date string (no time component)."""
    return datetime.now(timezone.utc).date().isoformat()


class InvoiceMutationService:
    """
    Validate, persist and navigate for the invoice forms.

    Collaborators are passed in rather than looked up, so one service can be
    built per request from process-wide handles (see routes/dependencies.py).

    Args:
        supabase_client: Database client used for the `invoices` table
        page_cache: Cache holding rendered views by path
        auth_provider: Sign-in provider used by authenticate()
        table: Table name (defaults to settings.INVOICES_TABLE)
        invoices_path: Path of the invoice list view (defaults to settings.INVOICES_PATH)
    """

    def __init__(
        self,
        supabase_client: Client,
        page_cache: PageCache,
        auth_provider: AuthProvider,
        table: Optional[str] = None,
        invoices_path: Optional[str] = None,
    ) -> None:
        self.client = supabase_client
        self.page_cache = page_cache
        self.auth_provider = auth_provider
        self.table = table or settings.INVOICES_TABLE
        self.invoices_path = invoices_path or settings.INVOICES_PATH

    def validate(self, raw: Mapping[str, Any]) -> ValidationResult:
        """
        Validate a raw invoice form.

        Every invalid field is reported. No side effects.

        Returns:
            ValidationOk with an InvoiceForm, or ValidationErr with field errors
        """
        return validate_form(InvoiceForm, INVOICE_FIELD_RULES, raw)

    async def create_invoice(
        self,
        previous_state: Optional[FormState],
        raw: Mapping[str, Any],
    ) -> FormState:
        """
        Create an invoice from the create form.

        Returns:
            FormState describing the failure. On success this never returns:
            the list view is revalidated and Redirect is raised.
        """
        result = self.validate(raw)

        if isinstance(result, ValidationErr):
            logger.info(f"Invoice create rejected: invalid fields {list(result.errors.keys())}")
            return FormState(
                errors=result.errors,
                message=CREATE_VALIDATION_MESSAGE,
                outcome=MutationOutcome.VALIDATION_FAILED,
            )

        form = cast(InvoiceForm, result.data)
        row = {
            "id": str(uuid.uuid4()),
            "customer_id": form.customer_id,
            "amount": to_cents(form.amount),
            "date": _today(),
            "status": form.status,
        }

        logger.info(
            f"Creating invoice {row['id']}: customer={form.customer_id}, "
            f"status={form.status}, date={row['date']}"
        )

        try:
            self.client.table(self.table).insert(row).execute()
        except Exception as e:
            logger.error(f"Failed to create invoice {row['id']}: {e}", exc_info=True)
            return FormState(
                message=CREATE_DATABASE_ERROR,
                outcome=MutationOutcome.PERSISTENCE_FAILED,
            )

        logger.info(f"Invoice {row['id']} created")

        self.page_cache.revalidate_path(self.invoices_path)
        redirect(self.invoices_path)

    async def update_invoice(self, invoice_id: str, raw: Mapping[str, Any]) -> FormState:
        """
        Update an invoice from the edit form.

        `customer_id`, `amount` and `status` are overwritten; `id` and `date`
        are left as they are.

        Returns:
            FormState for a database error. On success this never returns:
            the list view is revalidated and Redirect is raised.

        Raises:
            InvoiceValidationError: The submitted form is invalid
        """
        result = self.validate(raw)

        if isinstance(result, ValidationErr):
            logger.warning(
                f"Invoice {invoice_id} update rejected: invalid fields {list(result.errors.keys())}"
            )
            raise InvoiceValidationError(result.errors)

        form = cast(InvoiceForm, result.data)
        updates = {
            "customer_id": form.customer_id,
            "amount": to_cents(form.amount),
            "status": form.status,
        }

        logger.info(f"Updating invoice {invoice_id}: customer={form.customer_id}, status={form.status}")

        try:
            response = (
                self.client.table(self.table)
                .update(updates)
                .eq("id", invoice_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update invoice {invoice_id}: {e}", exc_info=True)
            return FormState(
                message=UPDATE_DATABASE_ERROR,
                outcome=MutationOutcome.PERSISTENCE_FAILED,
            )

        if not getattr(response, "data", None):
            logger.warning(f"Update matched no invoice with id {invoice_id}")
        else:
            logger.info(f"Invoice {invoice_id} updated")

        self.page_cache.revalidate_path(self.invoices_path)
        redirect(self.invoices_path)

    async def delete_invoice(self, invoice_id: str) -> Optional[FormState]:
        """
        Delete an invoice and revalidate the list view.

        Returns:
            None on success, FormState for a database error
        """
        logger.info(f"Deleting invoice {invoice_id}")

        try:
            self.client.table(self.table).delete().eq("id", invoice_id).execute()
        except Exception as e:
            logger.error(f"Failed to delete invoice {invoice_id}: {e}", exc_info=True)
            return FormState(
                message=DELETE_DATABASE_ERROR,
                outcome=MutationOutcome.PERSISTENCE_FAILED,
            )

        logger.info(f"Invoice {invoice_id} deleted")

        self.page_cache.revalidate_path(self.invoices_path)
        return None

    async def authenticate(
        self,
        previous_state: Optional[str],
        credentials: Mapping[str, Any],
    ) -> Optional[str]:
        """
        Sign a user in with the login form's credentials.

        Returns:
            "Invalid credentials." or "Something went wrong." on a sign-in
            failure. On success this never returns: Redirect is raised with the
            session's access token as a cookie.

        Raises:
            Exception: Anything the provider raises that is not an
                AuthenticationError is re-raised unchanged
        """
        try:
            session = await self.auth_provider.sign_in(CREDENTIALS_PROVIDER, credentials)
        except AuthenticationError as error:
            if error.type == CREDENTIALS_SIGNIN:
                return INVALID_CREDENTIALS_MESSAGE
            logger.warning(f"Sign-in failed with {error.type}")
            return SIGN_IN_FAILED_MESSAGE

        redirect(
            settings.LOGIN_REDIRECT_PATH,
            cookies={settings.ACCESS_TOKEN_COOKIE: session.access_token},
        )

    async def list_invoices(self) -> List[Dict[str, Any]]:
        """
        Fetch the invoice list view, newest first.

        Served from the page cache when a rendering is cached for the list
        path; otherwise read from the database and cached.
        """
        cached = self.page_cache.get(self.invoices_path)
        if cached is not None:
            logger.debug(f"Serving {self.invoices_path} from cache")
            return cast(List[Dict[str, Any]], cached)

        result = (
            self.client.table(self.table)
            .select(INVOICE_COLUMNS)
            .order("date", desc=True)
            .execute()
        )

        invoices = cast(List[Dict[str, Any]], result.data or [])
        self.page_cache.set(self.invoices_path, invoices)

        logger.info(f"Fetched {len(invoices)} invoices")

        return invoices
