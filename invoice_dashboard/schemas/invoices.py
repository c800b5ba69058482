"""
Pydantic schemas for the invoice form handlers.

The invoice form is described declaratively in two parts:
- InvoiceForm: field types and constraints (what a valid submission looks like)
- INVOICE_FIELD_RULES: the user-facing message for each field when it is
  missing or invalid

Both are consumed by the generic validator in services/validation.py.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

InvoiceStatus = Literal["pending", "paid"]

FieldErrors = Dict[str, List[str]]


@dataclass(frozen=True)
class FieldRule:
    """
    Messages shown for one form field.

    Attributes:
        required_message: Shown when the field is absent from the submission
        invalid_message: Shown when the field is present but fails its type or constraint
    """
    required_message: str
    invalid_message: str


# Keyed by form field name; order here is the order errors are reported in.
INVOICE_FIELD_RULES: Dict[str, FieldRule] = {
    "customerId": FieldRule(
        required_message="A customer is required",
        invalid_message="Please select a customer",
    ),
    "amount": FieldRule(
        required_message="Positive dollar amount",
        invalid_message="Positive dollar amount",
    ),
    "status": FieldRule(
        required_message="Select an invoice status",
        invalid_message="Select an invoice status",
    ),
}


class InvoiceForm(BaseModel):
    """
    A validated invoice submission (create and edit forms share it).

    Form values arrive as strings; `amount` is coerced to a Decimal in dollars.
    The form's `date` field, if posted, is ignored: the creation date is
    assigned by the server.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    customer_id: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] = Field(
        ...,
        alias="customerId",
        description="UUID of the customer being billed",
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Invoice amount in dollars (must be > 0)",
        examples=["250.00"],
    )
    status: InvoiceStatus = Field(..., description="Invoice status: 'pending' or 'paid'")

    @field_validator("amount")
    @classmethod
    def validate_amount_has_cents(cls, v: Decimal) -> Decimal:
        """Reject amounts that round to zero cents when stored."""
        if to_cents(v) <= 0:
            raise ValueError("amount rounds to zero cents")
        return v


def to_cents(amount: Decimal) -> int:
    """Convert a dollar amount to integer cents, rounding half up."""
    return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


class MutationOutcome(str, Enum):
    """Classification shared by every failed invoice mutation."""
    VALIDATION_FAILED = "validation_failed"
    PERSISTENCE_FAILED = "persistence_failed"


class FormState(BaseModel):
    """
    State handed back to an invoice form after a failed submission.

    `errors` maps field names to their messages; `message` is the banner shown
    above the form. `outcome` is for callers of the service and is never
    serialized into a response body.
    """
    errors: Optional[FieldErrors] = Field(None, description="Per-field error messages")
    message: Optional[str] = Field(None, description="Summary message for the form")
    outcome: Optional[MutationOutcome] = Field(
        None,
        exclude=True,
        description="Which stage of the mutation failed"
    )


# --- Invoice read models ---

class InvoiceResponse(BaseModel):
    """One row of the `invoices` table."""
    id: str = Field(..., description="Invoice UUID")
    customer_id: str = Field(..., description="Customer UUID")
    amount: int = Field(..., description="Amount in cents")
    date: str = Field(..., description="ISO-8601 creation date")
    status: InvoiceStatus = Field(..., description="Invoice status")


class InvoiceListResponse(BaseModel):
    """Response for GET /dashboard/invoices."""
    invoices: List[InvoiceResponse] = Field(..., description="Invoices, newest first")
    count: int = Field(..., description="Number of invoices returned")
