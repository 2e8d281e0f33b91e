"""Value coercion shared by the operation groups.

Operations degrade instead of failing on mismatched types: numbers are
coerced the way a JSON-oriented client would (``"12"`` becomes 12, ``null``
becomes 0, anything unparseable becomes NaN) and strings are produced with
null-safe stringification.
"""

import json
import math
import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any

from .values import UNDEFINED, is_missing

_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_INT_PATTERN = re.compile(r"^[+-]?\d+$")

# Largest integer a double holds exactly
MAX_SAFE_INTEGER = 2**53


def is_number(value: Any) -> bool:
    """Return True for ints and floats, excluding bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(value: Any) -> int | float:
    """Coerce a value to a number, returning NaN when it has no numeric form."""
    if isinstance(value, bool):
        return 1 if value else 0
    if is_number(value):
        return value
    if value is None:
        return 0
    if value is UNDEFINED:
        return math.nan
    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return 0
        if _NUMBER_PATTERN.match(text):
            number = float(text)
            if _INT_PATTERN.match(text) and abs(number) <= MAX_SAFE_INTEGER:
                return int(number)
            return number
        if text in ("Infinity", "+Infinity"):
            return math.inf
        if text == "-Infinity":
            return -math.inf
        return math.nan
    if isinstance(value, datetime):
        return int(to_datetime(value).timestamp() * 1000)
    if isinstance(value, list):
        if not value:
            return 0
        if len(value) == 1:
            return to_number(value[0])
    return math.nan


def format_number(value: int | float) -> str:
    """Render a number without a trailing ``.0`` for integral floats."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return str(value)


def to_string(value: Any) -> str:
    """Stringify a value; null and undefined become the empty string."""
    if is_missing(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return format_number(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return ",".join(to_string(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(value, default=str, sort_keys=True)
    return str(value)


def is_truthy(value: Any) -> bool:
    """Truthiness for conditions: empty lists and maps count as true."""
    if is_missing(value) or value is False:
        return False
    if is_number(value):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without cross-type coercion (``True`` is not ``1``)."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if is_number(left) and is_number(right):
        return left == right
    if is_missing(left) or is_missing(right):
        return left is right
    if type(left) is not type(right):
        if isinstance(left, Mapping) and isinstance(right, Mapping):
            return dict(left) == dict(right)
        return False
    if isinstance(left, datetime):
        return to_datetime(left) == to_datetime(right)
    return left == right


def compare(left: Any, right: Any) -> int | None:
    """Order two values.

    Returns:
        -1, 0 or 1, or None when the values cannot be ordered.
    """
    if isinstance(left, str) and isinstance(right, str):
        return (left > right) - (left < right)

    if isinstance(left, datetime) and isinstance(right, datetime):
        a, b = to_datetime(left), to_datetime(right)
        return (a > b) - (a < b)

    a, b = to_number(left), to_number(right)
    if math.isnan(a) or math.isnan(b):
        return None
    return (a > b) - (a < b)


def to_datetime(value: Any) -> datetime | None:
    """Normalize a datetime or ISO-8601 string to an aware UTC-based datetime.

    Naive values are taken to be UTC. Numbers are epoch milliseconds.
    Returns None when the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            result = datetime.fromisoformat(text)
        except ValueError:
            return None
    elif is_number(value):
        if math.isnan(value) or math.isinf(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=timezone.utc)
    return result
