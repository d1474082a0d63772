"""
Helpers that turn raw JSON into validated records.

The entity models live in `models`; this module holds the generic pieces
used by every endpoint: single-record parsing with structured errors, the
list envelope check, and challenge rating arithmetic.
"""

import logging
import math
from fractions import Fraction
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import SchemaValidationError

logger = logging.getLogger("open5e-client")

ModelT = TypeVar("ModelT", bound=BaseModel)


class EndpointResult(BaseModel):
    """List response envelope. Elements are checked by the entity model later."""
    results: list[dict[str, Any]]


def _describe_errors(exc: ValidationError) -> list[dict[str, Any]]:
    """Flatten a pydantic error into plain dicts with a dotted-path friendly loc."""
    return [
        {
            "loc": tuple(err["loc"]),
            "msg": err["msg"],
            "type": err["type"],
            "input_type": type(err.get("input")).__name__,
        }
        for err in exc.errors()
    ]


def _format_errors(errors: list[dict[str, Any]]) -> str:
    parts = []
    for err in errors:
        path = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{path}: {err['msg']} (got {err['input_type']})")
    return "; ".join(parts)


def parse_record(model: type[ModelT], data: Any) -> ModelT:
    """
    Validate one JSON value against an entity model.

    Args:
        model: Pydantic model class describing the expected shape
        data: Decoded JSON value

    Returns:
        A new, immutable instance of `model`

    Raises:
        SchemaValidationError: If any field is missing or has the wrong type.
            No partially populated record is ever returned.
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = _describe_errors(e)
        logger.debug(f"Rejected {model.__name__} record with {len(errors)} error(s)")
        raise SchemaValidationError(
            f"Invalid {model.__name__}: {_format_errors(errors)}",
            errors=errors,
        ) from e


def parse_envelope(data: Any) -> list[dict[str, Any]]:
    """Validate a `{"results": [...]}` envelope and return the raw results."""
    try:
        return EndpointResult.model_validate(data).results
    except ValidationError as e:
        errors = _describe_errors(e)
        raise SchemaValidationError(
            f"Invalid list response: {_format_errors(errors)}",
            errors=errors,
        ) from e


def challenge_rating_to_float(value: str | int | float) -> float:
    """
    Convert a challenge rating to its numeric value.

    Accepts numbers and display strings such as "1/8", "1/2" or "10".

    Raises:
        ValueError: If the value is not a nonnegative number or fraction.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid challenge rating: {value!r}")
    if isinstance(value, (int, float)):
        cr = float(value)
    else:
        try:
            cr = float(Fraction(value.strip()))
        except (ValueError, ZeroDivisionError):
            raise ValueError(f"Invalid challenge rating: {value!r}") from None
    if not math.isfinite(cr):
        raise ValueError(f"Challenge rating must be finite: {value!r}")
    if cr < 0:
        raise ValueError(f"Challenge rating must not be negative: {value!r}")
    return cr


__all__ = [
    "EndpointResult",
    "parse_record",
    "parse_envelope",
    "challenge_rating_to_float",
]
