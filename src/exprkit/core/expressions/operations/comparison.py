"""Comparison operations.

Used by condition nodes (``eq`` through ``in``) and available as ordinary
operations as well. ``between`` is only reachable as an operation.
"""

from typing import Any

from ..coercion import compare, strict_equals
from ..context import ExpressionContext
from .base import OperationFunc, arg


def _ordered(args: list[Any], accept: tuple[int, ...]) -> bool:
    result = compare(arg(args, 0), arg(args, 1))
    return result is not None and result in accept


def eq(args: list[Any], context: ExpressionContext) -> bool:
    return strict_equals(arg(args, 0), arg(args, 1))


def ne(args: list[Any], context: ExpressionContext) -> bool:
    return not strict_equals(arg(args, 0), arg(args, 1))


def gt(args: list[Any], context: ExpressionContext) -> bool:
    return _ordered(args, (1,))


def gte(args: list[Any], context: ExpressionContext) -> bool:
    return _ordered(args, (0, 1))


def lt(args: list[Any], context: ExpressionContext) -> bool:
    return _ordered(args, (-1,))


def lte(args: list[Any], context: ExpressionContext) -> bool:
    return _ordered(args, (-1, 0))


def contained_in(args: list[Any], context: ExpressionContext) -> bool:
    """in(value, container) -> list membership, or substring for strings."""
    value = arg(args, 0)
    container = arg(args, 1)
    if isinstance(container, list):
        return any(strict_equals(value, item) for item in container)
    if isinstance(container, str) and isinstance(value, str):
        return value in container
    return False


def between(args: list[Any], context: ExpressionContext) -> bool:
    """between(value, min, max) -> inclusive range test."""
    value = arg(args, 0)
    low = compare(value, arg(args, 1))
    high = compare(value, arg(args, 2))
    if low is None or high is None:
        return False
    return low >= 0 and high <= 0


COMPARISON_OPERATIONS: dict[str, OperationFunc] = {
    "eq": eq,
    "ne": ne,
    "gt": gt,
    "gte": gte,
    "lt": lt,
    "lte": lte,
    "in": contained_in,
    "between": between,
}
