"""
Input parsing helpers shared by the managers.

Every helper raises InvalidArgumentError with a message naming the field.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Type
import enum

from inventory_app.buisness.inventory.errors import InvalidArgumentError

CENT = Decimal('0.01')
# Largest amount a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal('9999999999.99')
MAX_INT = 2 ** 31 - 1


def require_text(data: dict, field: str) -> str:
    value = data.get(field)
    if value is None or not str(value).strip():
        raise InvalidArgumentError(f"{field} is required")
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_positive_decimal(value: Any, field: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidArgumentError(f"{field} is required")
    try:
        # str() keeps floats like 19.99 from carrying binary noise
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidArgumentError(f"{field} must be a decimal number")
    if not amount.is_finite() or amount <= 0:
        raise InvalidArgumentError(f"{field} must be greater than 0")
    if amount > MAX_AMOUNT:
        raise InvalidArgumentError(f"{field} must not exceed {MAX_AMOUNT}")
    try:
        return amount.quantize(CENT)
    except InvalidOperation:
        raise InvalidArgumentError(f"{field} must be a decimal number")


def parse_int(value: Any, field: str, minimum: int = 0, maximum: int = MAX_INT) -> int:
    if value is None or isinstance(value, bool):
        raise InvalidArgumentError(f"{field} is required")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidArgumentError(f"{field} must be an integer")
    if number < minimum:
        raise InvalidArgumentError(f"{field} must be at least {minimum}")
    if number > maximum:
        raise InvalidArgumentError(f"{field} must be at most {maximum}")
    return number


def parse_enum(enum_cls: Type[enum.Enum], value: Any, field: str) -> enum.Enum:
    if isinstance(value, enum_cls):
        return value
    if value is None:
        raise InvalidArgumentError(f"{field} is required")
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise InvalidArgumentError(f"Invalid {field}: {value}. Allowed values: {allowed}")


def parse_datetime(value: Any, field: str) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime; None and '' mean unset."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace('Z', '+00:00'))
    except ValueError:
        raise InvalidArgumentError(f"{field} must be an ISO-8601 date or datetime")
    if parsed.tzinfo is not None:
        # Stored timestamps are naive UTC
        parsed = parsed.replace(tzinfo=None) - parsed.utcoffset()
    return parsed


LIKE_ESCAPE = '\\'


def like_pattern(term: str) -> str:
    """Substring pattern for ilike(); % and _ in the term match literally."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace('%', LIKE_ESCAPE + '%')
        .replace('_', LIKE_ESCAPE + '_')
    )
    return f"%{escaped}%"
