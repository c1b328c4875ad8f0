"""
Payload validation.

Pure functions from untyped input to validated models. Every violated
field is reported, not just the first, and nothing here touches the
database or the network, so the schemas are testable without HTTP.
"""

from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from ..errors import FieldError, ValidationError

M = TypeVar("M", bound=BaseModel)


def field_errors(error: pydantic.ValidationError) -> list[FieldError]:
    """Flatten pydantic errors into (field path, reason) pairs."""
    errors = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "body"
        errors.append(FieldError(field=field, message=item["msg"]))
    return errors


def validate_payload(schema: type[M], payload: Any) -> M:
    """
    Validate a payload against a schema.

    Args:
        schema: Pydantic model describing the payload
        payload: Decoded request body (usually a dict)

    Returns:
        Validated model instance

    Raises:
        ValidationError: With one FieldError per violated field
    """
    if not isinstance(payload, dict):
        raise ValidationError([FieldError(field="body", message="Request body must be a JSON object")])
    try:
        return schema.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(field_errors(e)) from e


def parse_record_id(raw: Any, field: str = "id") -> int:
    """
    Coerce a route/body id to a positive integer.

    Raises:
        ValidationError: When the id is missing, non-numeric or not positive
    """
    if isinstance(raw, bool):
        raw = None
    try:
        value = int(str(raw).strip()) if raw is not None else None
    except ValueError:
        value = None
    if value is None:
        raise ValidationError([FieldError(field=field, message="ID must be an integer")], "Invalid ID")
    if value <= 0:
        raise ValidationError([FieldError(field=field, message="ID must be positive")], "Invalid ID")
    return value
