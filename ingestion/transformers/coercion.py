"""
Coercion of loosely-typed upstream values into strict optional types.

Every function here is pure and total: it returns either a value of the
target type or ``None``. ``None`` means "absent in the snapshot row" and is
the intended outcome for missing, malformed or non-representable input, so
a bad field never costs us the rest of the record. Nothing in this module
logs or raises.
"""

import math
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Signed ranges of the INTEGER and BIGINT column types
INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def parse_float(text: Optional[str]) -> Optional[float]:
    """Parse a numeric string as a float, or None if it does not parse."""
    if text is None:
        return None
    try:
        return float(text.strip())
    except (ValueError, AttributeError):
        return None


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Convert a JSON number (or numeric string) into an exact Decimal.

    Floats go through their shortest repr, so ``50000.5`` becomes
    ``Decimal("50000.5")`` rather than the full binary expansion. NaN and
    infinities have no decimal form and yield None, as do booleans.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        return value if value.is_finite() else None

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, str):
        value = parse_float(value)
        if value is None:
            return None

    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        try:
            return Decimal(repr(value))
        except InvalidOperation:
            return None

    return None


def to_int(value: Any, low: int = INT32_MIN, high: int = INT32_MAX) -> Optional[int]:
    """
    Integer, integral float or integer-valued numeric string; else None.

    Values outside ``low..high`` (a 32-bit column by default) are None too.
    """
    result = _integral(value)
    if result is None or not low <= result <= high:
        return None
    return result


def to_bigint(value: Any) -> Optional[int]:
    """Same as :func:`to_int` for 64-bit columns."""
    return to_int(value, INT64_MIN, INT64_MAX)


def _integral(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            value = parse_float(text)

    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)

    return None


def to_date(value: Any) -> Optional[date]:
    """Strict ``YYYY-MM-DD`` date; anything else (including ``""``) is None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None
