"""
Login endpoint.

- POST /login - Handle the login form (fields: email, password)

On success the browser is redirected (303) to the dashboard with the Supabase
access token stored in an HTTP-only cookie. On a recognized sign-in failure
the message to show above the form is returned.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from invoice_dashboard.routes.dependencies import form_fields, get_invoice_service
from invoice_dashboard.schemas.auth import LoginResponse
from invoice_dashboard.services.invoice_service import InvoiceMutationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in (form handler)",
)
async def login(
    request: Request,
    service: Annotated[InvoiceMutationService, Depends(get_invoice_service)],
) -> LoginResponse:
    """Sign a user in with the posted credentials."""
    fields = form_fields(await request.form())

    message = await service.authenticate(None, fields)

    logger.info("Login form rejected")
    return LoginResponse(message=message)
