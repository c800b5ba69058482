"""
Invoice dashboard form endpoints.

Endpoints (prefix: settings.INVOICES_PATH, default /dashboard/invoices):
- GET  ""               - Invoice list view (cached until a mutation revalidates it)
- POST /create          - Create form handler
- POST /{invoice_id}/edit   - Edit form handler
- POST /{invoice_id}/delete - Delete button handler

Form handlers redirect (303) back to the list on success. Recoverable failures
come back as a FormState body; invalid edit submissions become a 422.
"""

import logging
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status

from invoice_dashboard.auth.dependencies import AuthenticatedUser, get_authenticated_user
from invoice_dashboard.config import settings
from invoice_dashboard.routes.dependencies import form_fields, get_invoice_service
from invoice_dashboard.schemas.invoices import FormState, InvoiceListResponse, InvoiceResponse
from invoice_dashboard.services.invoice_service import InvoiceMutationService
from invoice_dashboard.services.navigation import redirect

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.INVOICES_PATH, tags=["invoices"])


def _to_invoice_response(row: Dict[str, Any]) -> InvoiceResponse:
    return InvoiceResponse(
        id=str(row.get("id")),
        customer_id=str(row.get("customer_id")),
        amount=int(row.get("amount") or 0),
        date=str(row.get("date")),
        status=row.get("status", "pending"),
    )


@router.get(
    "",
    response_model=InvoiceListResponse,
    status_code=status.HTTP_200_OK,
    summary="List invoices",
    description="""
    Invoice list view for the dashboard, newest first.

    The rendered list is cached per path and recomputed after any
    create, edit or delete.
    """
)
async def list_invoices(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    service: Annotated[InvoiceMutationService, Depends(get_invoice_service)],
) -> InvoiceListResponse:
    """List all invoices."""
    try:
        rows = await service.list_invoices()
    except Exception as e:
        logger.error(f"Failed to fetch invoices: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve invoices from database"
            }
        )

    invoices = [_to_invoice_response(row) for row in rows]

    logger.info(f"Returning {len(invoices)} invoices to user {auth_user.user_id}")

    return InvoiceListResponse(invoices=invoices, count=len(invoices))


@router.post(
    "/create",
    response_model=FormState,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Create invoice (form handler)",
    description="""
    Handle the create-invoice form (fields: customerId, amount, status).

    - Success: 303 redirect to the invoice list
    - Invalid fields: 200 with per-field errors
    - Database error: 200 with an error message
    """
)
async def create_invoice_form(
    request: Request,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    service: Annotated[InvoiceMutationService, Depends(get_invoice_service)],
) -> FormState:
    """Create an invoice from the posted form."""
    logger.info(f"Create invoice form submitted by user {auth_user.user_id}")

    fields = form_fields(await request.form())

    return await service.create_invoice(None, fields)


@router.post(
    "/{invoice_id}/edit",
    response_model=FormState,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Update invoice (form handler)",
    description="""
    Handle the edit-invoice form (fields: customerId, amount, status).

    - Success: 303 redirect to the invoice list
    - Invalid fields: 422 with per-field errors
    - Database error: 200 with an error message
    """
)
async def update_invoice_form(
    request: Request,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    service: Annotated[InvoiceMutationService, Depends(get_invoice_service)],
    invoice_id: str = Path(..., description="UUID of the invoice to update"),
) -> FormState:
    """Update an invoice from the posted form."""
    logger.info(f"Edit invoice form for {invoice_id} submitted by user {auth_user.user_id}")

    fields = form_fields(await request.form())

    return await service.update_invoice(invoice_id, fields)


@router.post(
    "/{invoice_id}/delete",
    response_model=FormState,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Delete invoice (form handler)",
    description="""
    Handle the delete button on the invoice list.

    - Success: 303 redirect to the invoice list
    - Database error: 200 with an error message
    """
)
async def delete_invoice_form(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    service: Annotated[InvoiceMutationService, Depends(get_invoice_service)],
    invoice_id: str = Path(..., description="UUID of the invoice to delete"),
) -> Optional[FormState]:
    """Delete an invoice."""
    logger.info(f"Delete requested for invoice {invoice_id} by user {auth_user.user_id}")

    state = await service.delete_invoice(invoice_id)
    if state is not None:
        return state

    redirect(service.invoices_path)
