"""Runtime values for expressions.

Expressions only produce and consume JSON-compatible values plus datetimes.
``UNDEFINED`` marks a value that is absent, as opposed to an explicit null.
"""

from datetime import datetime
from typing import Any, Union


class _Undefined:
    """Singleton type for an absent value."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Undefined":
        return self

    def __deepcopy__(self, memo: dict) -> "_Undefined":
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()

Value = Union[None, bool, int, float, str, datetime, list, dict, _Undefined]


def is_missing(value: Any) -> bool:
    """Return True for null or undefined."""
    return value is None or value is UNDEFINED
