"""Logical operations.

``and``, ``or`` and ``if`` listed here receive already-evaluated arguments.
The evaluator short-circuits these three names itself unless eager logic is
configured, in which case these functions run over every argument.
"""

from collections.abc import Mapping
from typing import Any

from ..coercion import is_truthy
from ..context import ExpressionContext
from ..values import is_missing
from .base import OperationFunc, arg


def logical_and(args: list[Any], context: ExpressionContext) -> bool:
    return all(is_truthy(value) for value in args)


def logical_or(args: list[Any], context: ExpressionContext) -> bool:
    return any(is_truthy(value) for value in args)


def logical_not(args: list[Any], context: ExpressionContext) -> bool:
    return not is_truthy(arg(args, 0))


def if_then_else(args: list[Any], context: ExpressionContext) -> Any:
    """if(condition, then, else) -> ``then`` when condition is truthy."""
    if is_truthy(arg(args, 0)):
        return arg(args, 1)
    return arg(args, 2)


def coalesce(args: list[Any], context: ExpressionContext) -> Any:
    """coalesce(a, b, ...) -> first argument that is neither null nor undefined."""
    for value in args:
        if not is_missing(value):
            return value
    return None


def exists(args: list[Any], context: ExpressionContext) -> bool:
    return not is_missing(arg(args, 0))


def is_null(args: list[Any], context: ExpressionContext) -> bool:
    return is_missing(arg(args, 0))


def is_empty(args: list[Any], context: ExpressionContext) -> bool:
    """isEmpty(value) -> True for null, undefined, "", [] and {}."""
    value = arg(args, 0)
    if is_missing(value):
        return True
    if isinstance(value, (str, list, Mapping)):
        return len(value) == 0
    return False


LOGICAL_OPERATIONS: dict[str, OperationFunc] = {
    "and": logical_and,
    "or": logical_or,
    "not": logical_not,
    "if": if_then_else,
    "coalesce": coalesce,
    "exists": exists,
    "isNull": is_null,
    "isEmpty": is_empty,
}
