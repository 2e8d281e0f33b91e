"""Math operations.

Every argument is coerced with :func:`to_number`, so ``"5"`` behaves like 5
and unparseable input yields NaN rather than an error.
"""

import math
from typing import Any

from ..coercion import to_number
from ..context import ExpressionContext
from ..exceptions import DivisionByZeroError
from .base import OperationFunc, arg


def _numbers(args: list[Any]) -> list[int | float]:
    # min/max also accept a single list argument
    if len(args) == 1 and isinstance(args[0], list):
        args = args[0]
    return [to_number(a) for a in args]


def add(args: list[Any], context: ExpressionContext) -> int | float:
    """add(a, b, ...) -> sum of all arguments."""
    total: int | float = 0
    for value in args:
        total += to_number(value)
    return total


def subtract(args: list[Any], context: ExpressionContext) -> int | float:
    return to_number(arg(args, 0)) - to_number(arg(args, 1))


def multiply(args: list[Any], context: ExpressionContext) -> int | float:
    """multiply(a, b, ...) -> product of all arguments."""
    product: int | float = 1
    for value in args:
        product *= to_number(value)
    return product


def divide(args: list[Any], context: ExpressionContext) -> float:
    """divide(a, b) -> a / b.

    Raises:
        DivisionByZeroError: If the divisor is zero.
    """
    dividend = to_number(arg(args, 0))
    divisor = to_number(arg(args, 1))
    if divisor == 0:
        raise DivisionByZeroError()
    return dividend / divisor


def mod(args: list[Any], context: ExpressionContext) -> float:
    """mod(a, b) -> remainder carrying the sign of the dividend."""
    dividend = to_number(arg(args, 0))
    divisor = to_number(arg(args, 1))
    if divisor == 0 or math.isnan(dividend) or math.isnan(divisor) or math.isinf(dividend):
        return math.nan
    result = math.fmod(dividend, divisor)
    if isinstance(dividend, int) and isinstance(divisor, int):
        return int(result)
    return result


def power(args: list[Any], context: ExpressionContext) -> float:
    base = to_number(arg(args, 0))
    exponent = to_number(arg(args, 1))
    try:
        result = math.pow(base, exponent)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan
    if isinstance(base, int) and isinstance(exponent, int) and exponent >= 0:
        return int(result)
    return result


def absolute(args: list[Any], context: ExpressionContext) -> int | float:
    return abs(to_number(arg(args, 0)))


def round_half_up(args: list[Any], context: ExpressionContext) -> int | float:
    """round(value, digits=0) -> value rounded with halves going up."""
    value = to_number(arg(args, 0))
    digits = to_number(arg(args, 1, 0))
    if math.isnan(value) or math.isinf(value):
        return value
    digits = 0 if math.isnan(digits) else int(digits)
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits <= 0 else rounded


def floor(args: list[Any], context: ExpressionContext) -> int | float:
    value = to_number(arg(args, 0))
    if math.isnan(value) or math.isinf(value):
        return value
    return math.floor(value)


def ceil(args: list[Any], context: ExpressionContext) -> int | float:
    value = to_number(arg(args, 0))
    if math.isnan(value) or math.isinf(value):
        return value
    return math.ceil(value)


def minimum(args: list[Any], context: ExpressionContext) -> int | float:
    """min(a, b, ...) -> smallest argument; Infinity when called with none."""
    values = _numbers(args)
    if any(math.isnan(v) for v in values):
        return math.nan
    return min(values, default=math.inf)


def maximum(args: list[Any], context: ExpressionContext) -> int | float:
    """max(a, b, ...) -> largest argument; -Infinity when called with none."""
    values = _numbers(args)
    if any(math.isnan(v) for v in values):
        return math.nan
    return max(values, default=-math.inf)


MATH_OPERATIONS: dict[str, OperationFunc] = {
    "add": add,
    "subtract": subtract,
    "multiply": multiply,
    "divide": divide,
    "mod": mod,
    "pow": power,
    "abs": absolute,
    "round": round_half_up,
    "floor": floor,
    "ceil": ceil,
    "min": minimum,
    "max": maximum,
}
