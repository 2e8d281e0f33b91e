"""Array operations.

These are field projections, not higher-order functions: ``map``, ``filter``,
``find``, ``some`` and ``every`` take a field *name* and read that field from
each record in the list. Non-list input degrades to an empty result.
"""

import math
import sys
from collections.abc import Mapping
from typing import Any

from ..coercion import is_truthy, strict_equals, to_number
from ..context import ExpressionContext
from ..values import UNDEFINED, is_missing
from .base import OperationFunc, arg, as_list


def _project(item: Any, field: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get(field, UNDEFINED)
    return item


def _index(value: Any) -> int:
    number = to_number(value)
    if math.isnan(number):
        return 0
    if math.isinf(number):
        return sys.maxsize if number > 0 else -sys.maxsize
    return int(number)


def _matches(args: list[Any]) -> tuple[list[Any], Any, Any] | None:
    items = as_list(arg(args, 0))
    if items is None:
        return None
    return items, arg(args, 1), arg(args, 2)


def count(args: list[Any], context: ExpressionContext) -> int:
    items = as_list(arg(args, 0))
    return 0 if items is None else len(items)


def total(args: list[Any], context: ExpressionContext) -> int | float:
    """sum(list, field?) -> total of the numbers, or of ``field`` on each record."""
    items = as_list(arg(args, 0))
    if items is None:
        return 0
    field = arg(args, 1)
    result: int | float = 0
    for item in items:
        value = item if is_missing(field) else _project(item, field)
        result += to_number(value) if is_truthy(value) else 0
    return result


def average(args: list[Any], context: ExpressionContext) -> int | float:
    items = as_list(arg(args, 0))
    if not items:
        return 0
    return total(args, context) / len(items)


def first(args: list[Any], context: ExpressionContext) -> Any:
    items = as_list(arg(args, 0))
    return items[0] if items else UNDEFINED


def last(args: list[Any], context: ExpressionContext) -> Any:
    items = as_list(arg(args, 0))
    return items[-1] if items else UNDEFINED


def project(args: list[Any], context: ExpressionContext) -> list[Any]:
    """map(list, field) -> the field's value from each record."""
    items = as_list(arg(args, 0))
    if items is None:
        return []
    field = arg(args, 1)
    return [_project(item, field) for item in items]


def filter_by(args: list[Any], context: ExpressionContext) -> list[Any]:
    """filter(list, field, value) -> records whose field equals value."""
    matched = _matches(args)
    if matched is None:
        return []
    items, field, value = matched
    return [item for item in items if strict_equals(_project(item, field), value)]


def find(args: list[Any], context: ExpressionContext) -> Any:
    matched = _matches(args)
    if matched is None:
        return UNDEFINED
    items, field, value = matched
    for item in items:
        if strict_equals(_project(item, field), value):
            return item
    return UNDEFINED


def some(args: list[Any], context: ExpressionContext) -> bool:
    matched = _matches(args)
    if matched is None:
        return False
    items, field, value = matched
    return any(strict_equals(_project(item, field), value) for item in items)


def every(args: list[Any], context: ExpressionContext) -> bool:
    matched = _matches(args)
    if matched is None:
        return False
    items, field, value = matched
    return all(strict_equals(_project(item, field), value) for item in items)


def slice_list(args: list[Any], context: ExpressionContext) -> list[Any]:
    """slice(list, start, end?) -> sub-list; negative indexes count from the end."""
    items = as_list(arg(args, 0))
    if items is None:
        return []
    start = _index(arg(args, 1, 0))
    end = arg(args, 2)
    if is_missing(end):
        return items[start:]
    return items[start:_index(end)]


def unique(args: list[Any], context: ExpressionContext) -> list[Any]:
    items = as_list(arg(args, 0))
    if items is None:
        return []
    result: list[Any] = []
    for item in items:
        if not any(strict_equals(item, seen) for seen in result):
            result.append(item)
    return result


def flatten(args: list[Any], context: ExpressionContext) -> list[Any]:
    """flatten(list) -> one level of nesting removed."""
    items = as_list(arg(args, 0))
    if items is None:
        return []
    result: list[Any] = []
    for item in items:
        if isinstance(item, list):
            result.extend(item)
        else:
            result.append(item)
    return result


ARRAY_OPERATIONS: dict[str, OperationFunc] = {
    "count": count,
    "sum": total,
    "avg": average,
    "first": first,
    "last": last,
    "map": project,
    "filter": filter_by,
    "find": find,
    "some": some,
    "every": every,
    "slice": slice_list,
    "unique": unique,
    "flatten": flatten,
}
