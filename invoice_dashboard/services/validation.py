"""
Generic form validation.

A form is validated against a pydantic schema (types and constraints) and a
rule table (messages per field). Every failing field is reported, not just the
first one, so the form can render all problems at once.
"""

import logging
from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar, Union

from pydantic import BaseModel, ValidationError

from invoice_dashboard.schemas.invoices import FieldErrors, FieldRule

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ValidationOk(Generic[ModelT]):
    """Successful validation carrying the parsed form."""
    data: ModelT
    success: bool = True


@dataclass(frozen=True)
class ValidationErr:
    """Failed validation carrying every field's messages."""
    errors: FieldErrors
    success: bool = False


ValidationResult = Union[ValidationOk[ModelT], ValidationErr]


def flatten_field_errors(
    exc: ValidationError,
    rules: Mapping[str, FieldRule],
) -> FieldErrors:
    """
    Map a pydantic ValidationError to field name -> list of messages.

    Errors of type "missing" use the rule's required message; any other error
    uses its invalid message. Messages are de-duplicated per field and fields
    are ordered as in the rule table.

    Args:
        exc: The error raised by model validation
        rules: Rule table keyed by form field name

    Returns:
        Field errors, e.g. {"amount": ["Positive dollar amount"]}
    """
    collected: FieldErrors = {}

    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else "__root__"
        rule = rules.get(field)

        if rule is None:
            # Not a form field (model-level error); keep pydantic's own message
            message = error.get("msg", "Invalid value")
        elif error.get("type") == "missing":
            message = rule.required_message
        else:
            message = rule.invalid_message

        messages = collected.setdefault(field, [])
        if message not in messages:
            messages.append(message)

    ordered = {name: collected[name] for name in rules if name in collected}
    for name, messages in collected.items():
        ordered.setdefault(name, messages)

    return ordered


def validate_form(
    schema: type[ModelT],
    rules: Mapping[str, FieldRule],
    raw: Mapping[str, Any],
) -> ValidationResult:
    """
    Validate a raw form field bag.

    Only the fields named in `rules` are read from `raw`; fields absent from
    `raw` stay absent so that "missing" and "invalid" can be told apart.

    Returns:
        ValidationOk with the parsed model, or ValidationErr with field errors
    """
    fields = {name: raw[name] for name in rules if name in raw}

    try:
        data = schema.model_validate(fields)
    except ValidationError as exc:
        errors = flatten_field_errors(exc, rules)
        logger.debug(f"{schema.__name__} validation failed for fields: {list(errors.keys())}")
        return ValidationErr(errors=errors)

    return ValidationOk(data=data)
