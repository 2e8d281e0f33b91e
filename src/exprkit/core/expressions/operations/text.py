"""String operations.

The primary operand is stringified first; null and undefined become ``""``.
"""

import math
from typing import Any

from ..coercion import to_number, to_string
from ..context import ExpressionContext
from ..values import is_missing
from .base import OperationFunc, arg


def _index(value: Any, length: int) -> int:
    number = to_number(value)
    if math.isnan(number):
        return 0
    if math.isinf(number):
        return length if number > 0 else 0
    return max(0, min(int(number), length))


def concat(args: list[Any], context: ExpressionContext) -> str:
    return "".join(to_string(value) for value in args)


def upper(args: list[Any], context: ExpressionContext) -> str:
    return to_string(arg(args, 0)).upper()


def lower(args: list[Any], context: ExpressionContext) -> str:
    return to_string(arg(args, 0)).lower()


def capitalize(args: list[Any], context: ExpressionContext) -> str:
    """Upper-case the first character and leave the rest untouched."""
    text = to_string(arg(args, 0))
    return text[:1].upper() + text[1:]


def trim(args: list[Any], context: ExpressionContext) -> str:
    return to_string(arg(args, 0)).strip()


def substring(args: list[Any], context: ExpressionContext) -> str:
    """substring(text, start, end?) with clamped, order-insensitive bounds."""
    text = to_string(arg(args, 0))
    length = len(text)
    start = _index(arg(args, 1, 0), length)
    end_arg = arg(args, 2)
    end = length if is_missing(end_arg) else _index(end_arg, length)
    if start > end:
        start, end = end, start
    return text[start:end]


def replace(args: list[Any], context: ExpressionContext) -> str:
    """replace(text, search, replacement) -> every occurrence replaced."""
    text = to_string(arg(args, 0))
    search = to_string(arg(args, 1))
    replacement = to_string(arg(args, 2))
    if search == "":
        return text
    return text.replace(search, replacement)


def split(args: list[Any], context: ExpressionContext) -> list[str]:
    text = to_string(arg(args, 0))
    separator = arg(args, 1)
    if is_missing(separator):
        return [text]
    separator = to_string(separator)
    if separator == "":
        return list(text)
    return text.split(separator)


def join(args: list[Any], context: ExpressionContext) -> str:
    items = arg(args, 0)
    separator = arg(args, 1)
    separator = "," if is_missing(separator) else to_string(separator)
    if not isinstance(items, list):
        return to_string(items)
    return separator.join(to_string(item) for item in items)


def contains(args: list[Any], context: ExpressionContext) -> bool:
    return to_string(arg(args, 1)) in to_string(arg(args, 0))


def starts_with(args: list[Any], context: ExpressionContext) -> bool:
    return to_string(arg(args, 0)).startswith(to_string(arg(args, 1)))


def ends_with(args: list[Any], context: ExpressionContext) -> bool:
    return to_string(arg(args, 0)).endswith(to_string(arg(args, 1)))


def length(args: list[Any], context: ExpressionContext) -> int:
    """length(value) -> character count, or item count for a list."""
    value = arg(args, 0)
    if isinstance(value, list):
        return len(value)
    return len(to_string(value))


STRING_OPERATIONS: dict[str, OperationFunc] = {
    "concat": concat,
    "upper": upper,
    "lower": lower,
    "capitalize": capitalize,
    "trim": trim,
    "substring": substring,
    "replace": replace,
    "split": split,
    "join": join,
    "contains": contains,
    "startsWith": starts_with,
    "endsWith": ends_with,
    "length": length,
}
