"""Date operations.

Dates may arrive as ``datetime`` values or ISO-8601 strings; naive values are
treated as UTC. Operations that measure against "now" read the evaluation
clock from ``context.now`` and fall back to the wall clock.
"""

import re
from datetime import datetime, timezone
from typing import Any

from ..coercion import to_datetime, to_string
from ..context import ExpressionContext
from ..values import is_missing
from .base import OperationFunc, arg

DEFAULT_DATE_FORMAT = "YYYY-MM-DD"

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_FORMAT_TOKENS = re.compile(r"YYYY|YY|MMMM|MMM|MM|M|DD|D|HH|H|mm|ss")

# (seconds per unit, unit name), largest first
_RELATIVE_UNITS = (
    (365 * 24 * 3600, "year"),
    (30 * 24 * 3600, "month"),
    (24 * 3600, "day"),
    (3600, "hour"),
    (60, "minute"),
)


def clock(context: ExpressionContext) -> datetime:
    """Return the evaluation-time clock for a context."""
    if context.now is not None:
        return to_datetime(context.now)
    return datetime.now(timezone.utc)


def _reference(args: list[Any], index: int, context: ExpressionContext) -> datetime | None:
    value = arg(args, index)
    if is_missing(value):
        return clock(context)
    return to_datetime(value)


def _utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc)


def format_date(args: list[Any], context: ExpressionContext) -> str:
    """formatDate(date, pattern="YYYY-MM-DD") -> formatted string, "" if unparseable."""
    value = to_datetime(arg(args, 0))
    if value is None:
        return ""
    value = _utc(value)
    pattern = arg(args, 1)
    pattern = DEFAULT_DATE_FORMAT if is_missing(pattern) else to_string(pattern)

    replacements = {
        "YYYY": f"{value.year:04d}",
        "YY": f"{value.year % 100:02d}",
        "MMMM": MONTH_NAMES[value.month - 1],
        "MMM": MONTH_NAMES[value.month - 1][:3],
        "MM": f"{value.month:02d}",
        "M": str(value.month),
        "DD": f"{value.day:02d}",
        "D": str(value.day),
        "HH": f"{value.hour:02d}",
        "H": str(value.hour),
        "mm": f"{value.minute:02d}",
        "ss": f"{value.second:02d}",
    }
    return _FORMAT_TOKENS.sub(lambda match: replacements[match.group(0)], pattern)


def time_ago(args: list[Any], context: ExpressionContext) -> str:
    """timeAgo(date, from?) -> "just now", "3 days ago", "in 2 hours"."""
    value = to_datetime(arg(args, 0))
    reference = _reference(args, 1, context)
    if value is None or reference is None:
        return ""

    seconds = (reference - value).total_seconds()
    elapsed = abs(seconds)
    if elapsed < 60:
        return "just now"

    for unit_seconds, unit in _RELATIVE_UNITS:
        if elapsed >= unit_seconds:
            count = int(elapsed // unit_seconds)
            label = unit if count == 1 else f"{unit}s"
            return f"{count} {label} ago" if seconds > 0 else f"in {count} {label}"
    return "just now"


def years_ago(args: list[Any], context: ExpressionContext) -> int | None:
    """yearsAgo(date, from?) -> whole calendar years elapsed (e.g. an age)."""
    value = to_datetime(arg(args, 0))
    reference = _reference(args, 1, context)
    if value is None or reference is None:
        return None
    value, reference = _utc(value), _utc(reference)
    years = reference.year - value.year
    if (reference.month, reference.day) < (value.month, value.day):
        years -= 1
    return years


def months_ago(args: list[Any], context: ExpressionContext) -> int | None:
    """monthsAgo(date, from?) -> whole calendar months elapsed."""
    value = to_datetime(arg(args, 0))
    reference = _reference(args, 1, context)
    if value is None or reference is None:
        return None
    value, reference = _utc(value), _utc(reference)
    months = (reference.year - value.year) * 12 + reference.month - value.month
    if reference.day < value.day:
        months -= 1
    return months


def days_ago(args: list[Any], context: ExpressionContext) -> int | None:
    """daysAgo(date, from?) -> calendar days elapsed (UTC dates)."""
    value = to_datetime(arg(args, 0))
    reference = _reference(args, 1, context)
    if value is None or reference is None:
        return None
    return (_utc(reference).date() - _utc(value).date()).days


def now(args: list[Any], context: ExpressionContext) -> datetime:
    return clock(context)


def current_year(args: list[Any], context: ExpressionContext) -> int:
    return clock(context).year


def parse_date(args: list[Any], context: ExpressionContext) -> datetime | None:
    return to_datetime(arg(args, 0))


def is_past(args: list[Any], context: ExpressionContext) -> bool:
    value = to_datetime(arg(args, 0))
    if value is None:
        return False
    return value < clock(context)


def is_future(args: list[Any], context: ExpressionContext) -> bool:
    value = to_datetime(arg(args, 0))
    if value is None:
        return False
    return value > clock(context)


DATE_OPERATIONS: dict[str, OperationFunc] = {
    "formatDate": format_date,
    "timeAgo": time_ago,
    "yearsAgo": years_ago,
    "monthsAgo": months_ago,
    "daysAgo": days_ago,
    "now": now,
    "currentYear": current_year,
    "parseDate": parse_date,
    "isPast": is_past,
    "isFuture": is_future,
}
