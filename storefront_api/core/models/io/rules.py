"""
Field rules shared by the request models.

Each check raises ``PydanticCustomError`` with one of the error types listed in
``CUSTOM_ERROR_TYPES`` so that the server can turn it into a 400 response
carrying exactly the message defined here.
"""

from __future__ import annotations

import math
import re
from typing import Any, Iterable, Optional

from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_DIGITS = 10

ORDER_STATUSES = ("pending", "confirmed", "shipped", "delivered", "cancelled")

MISSING_FIELDS = "missing_fields"
INVALID_EMAIL = "invalid_email"
INVALID_PHONE = "invalid_phone"
INVALID_PRODUCT_NUMBERS = "invalid_product_numbers"
INVALID_ITEMS = "invalid_items"
INVALID_TOTAL = "invalid_total"
INVALID_USER_ID = "invalid_user_id"
INVALID_STATUS = "invalid_status"

CUSTOM_ERROR_TYPES = frozenset(
    {
        MISSING_FIELDS,
        INVALID_EMAIL,
        INVALID_PHONE,
        INVALID_PRODUCT_NUMBERS,
        INVALID_ITEMS,
        INVALID_TOTAL,
        INVALID_USER_ID,
        INVALID_STATUS,
    }
)


def is_blank(value: Any) -> bool:
    """A value counts as missing when it is None or a whitespace-only string."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def as_text(value: Any) -> Any:
    """Numbers sent for a text field are stored as their string form."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def require_fields(data: dict, fields: Iterable[str]) -> None:
    missing = [field for field in fields if is_blank(data.get(field))]
    if missing:
        raise PydanticCustomError(
            MISSING_FIELDS,
            "Missing required fields: {fields}",
            {"fields": ", ".join(missing)},
        )


def as_number(value: Any) -> Optional[float]:
    """Parse a JSON number or numeric string; booleans, blanks, NaN and infinities are rejected."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def check_email(value: Any) -> Any:
    if value and not EMAIL_PATTERN.match(str(value)):
        raise PydanticCustomError(INVALID_EMAIL, "Invalid email format")
    return value


def check_phone(value: Any) -> Any:
    if value is None:
        return value
    digits = re.sub(r"\D", "", str(value))
    if len(digits) != PHONE_DIGITS:
        raise PydanticCustomError(INVALID_PHONE, "Invalid phone format. Use 10 digits.")
    return value


def check_product_numbers(price: Any = None, stock: Any = None, *, partial: bool = False) -> tuple:
    """Validate and coerce price (float) and stock (int); with ``partial`` either may be absent."""
    coerced = []
    for value in (price, stock):
        if value is None and partial:
            coerced.append(None)
            continue
        number = as_number(value)
        if number is None or number < 0:
            raise PydanticCustomError(INVALID_PRODUCT_NUMBERS, "Price and stock must be positive numbers")
        coerced.append(number)
    new_price, new_stock = coerced
    return new_price, (int(new_stock) if new_stock is not None else None)


def check_items(items: Any) -> list:
    if not isinstance(items, list) or not items:
        raise PydanticCustomError(INVALID_ITEMS, "Items must be a non-empty array")
    return items


def check_total(total: Any) -> float:
    number = as_number(total)
    if number is None or number <= 0:
        raise PydanticCustomError(INVALID_TOTAL, "Total amount must be a positive number")
    return number


def check_user_id(user_id: Any) -> int:
    number = as_number(user_id)
    if number is None or number <= 0 or number != int(number):
        raise PydanticCustomError(INVALID_USER_ID, "userId must be a positive integer")
    return int(number)


def check_status(status: Any) -> Optional[str]:
    if status is None:
        return None
    normalized = str(status).lower()
    if normalized not in ORDER_STATUSES:
        raise PydanticCustomError(
            INVALID_STATUS,
            "Invalid status. Must be one of: {statuses}",
            {"statuses": ", ".join(ORDER_STATUSES)},
        )
    return normalized
