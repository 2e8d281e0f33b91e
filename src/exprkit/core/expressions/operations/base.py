"""Shared helpers for operation groups."""

from typing import Any, Callable

from ..context import ExpressionContext
from ..values import UNDEFINED

OperationFunc = Callable[[list[Any], ExpressionContext], Any]


def arg(args: list[Any], index: int, default: Any = UNDEFINED) -> Any:
    """Return the positional argument at ``index``, or ``default`` when absent."""
    if index < len(args):
        return args[index]
    return default


def as_list(value: Any) -> list[Any] | None:
    """Return the value if it is a list, otherwise None."""
    return value if isinstance(value, list) else None
