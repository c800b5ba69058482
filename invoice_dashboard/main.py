"""
FastAPI application entry point for the invoice dashboard backend.

This module creates the FastAPI app instance, registers the routers, and
translates the service layer's control-flow exceptions into responses:
- Redirect -> 303 See Other (with any cookies the handler set)
- InvoiceValidationError -> 422 with per-field errors
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from invoice_dashboard.config import settings
from invoice_dashboard.routes.auth import router as auth_router
from invoice_dashboard.routes.health import router as health_router
from invoice_dashboard.routes.invoices import router as invoices_router
from invoice_dashboard.services.invoice_service import InvoiceValidationError
from invoice_dashboard.services.navigation import Redirect

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="Invoice Dashboard API",
    description="Form handlers for the invoice management dashboard",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.exception_handler(Redirect)
async def redirect_handler(request: Request, exc: Redirect):
    """Navigate the client to the path a handler redirected to."""
    logger.info(f"{request.method} {request.url.path} -> redirect to {exc.path}")

    response = RedirectResponse(url=exc.path, status_code=status.HTTP_303_SEE_OTHER)
    for name, value in exc.cookies.items():
        response.set_cookie(
            key=name,
            value=value,
            httponly=True,
            samesite="lax",
            secure=settings.is_production(),
        )
    return response


@app.exception_handler(InvoiceValidationError)
async def invoice_validation_handler(request: Request, exc: InvoiceValidationError):
    """Render an invalid edit submission with the same shape as the create form's errors."""
    logger.warning(f"Invalid invoice fields on {request.method} {request.url.path}: {list(exc.errors.keys())}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=exc.to_form_state().model_dump(mode="json", exclude_none=True),
    )


# Custom validation error handler to log detailed errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log detailed request validation errors for debugging."""
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_encoder(exc.errors()),
        }
    )


# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(invoices_router)

logger.info("FastAPI app initialized successfully")
