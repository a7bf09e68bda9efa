"""
Request Validators.

Helpers that check path and query parameters and translate request body
validation failures into ``ApiError`` instances with the messages clients see.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional, Sequence

from storefront_api.core.errors import ApiError
from storefront_api.core.logging_config import get_logger
from storefront_api.core.models.io.rules import CUSTOM_ERROR_TYPES, MISSING_FIELDS

logger = get_logger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def parse_id(raw: Any) -> int:
    """Parse a path id, which must be a positive integer.

    Raises:
        ApiError: 400 "Invalid ID format"
    """
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ApiError.bad_request("Invalid ID format") from None
    if value <= 0:
        raise ApiError.bad_request("Invalid ID format")
    return value


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Parse a numeric query parameter, falling back to ``default`` when absent or not positive."""
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value > 0 else default


def parse_float(raw: Optional[str], default: float) -> float:
    if raw is None or not str(raw).strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def api_error_from_validation(errors: Sequence[Mapping[str, Any]]) -> ApiError:
    """Map pydantic/FastAPI validation errors onto a 400 ``ApiError``.

    The first error decides the response. Field rules defined for the request
    models carry their own client-facing message; everything else is reported
    as a generic validation error listing each problem.
    """
    if not errors:
        return ApiError.bad_request("Validation Error")

    first = errors[0]
    error_type = first.get("type")
    if error_type == MISSING_FIELDS:
        return ApiError.bad_request("Validation Error", first.get("msg"))
    if error_type in CUSTOM_ERROR_TYPES:
        return ApiError.bad_request(first.get("msg", "Validation Error"))
    if error_type == "json_invalid":
        return ApiError.bad_request("Invalid JSON body")
    if error_type == "missing" and tuple(first.get("loc", ())) == ("body",):
        return ApiError.bad_request("Validation Error", "Request body is required")

    details = "; ".join(_describe(err) for err in errors)
    return ApiError.bad_request("Validation Error", details)


def _describe(err: Mapping[str, Any]) -> str:
    loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    msg = err.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


@contextmanager
def handle_failures(message: str) -> Iterator[None]:
    """Turn unexpected exceptions inside a route into a 500 ``ApiError`` with ``message``.

    ``ApiError`` raised inside the block passes through unchanged.
    """
    try:
        yield
    except ApiError:
        raise
    except Exception as e:
        logger.error(f"{message}: {e}", exc_info=True)
        raise ApiError(500, message) from e


def valid_id(item_id: str) -> int:
    """FastAPI dependency validating the ``{item_id}`` path segment before the body is read."""
    return parse_id(item_id)


def valid_user_id(user_id: str) -> int:
    """FastAPI dependency validating the ``{user_id}`` path segment."""
    return parse_id(user_id)
