"""Built-in operation groups."""

from .arrays import ARRAY_OPERATIONS
from .base import OperationFunc
from .comparison import COMPARISON_OPERATIONS
from .dates import DATE_OPERATIONS
from .logical import LOGICAL_OPERATIONS
from .numeric import MATH_OPERATIONS
from .permissions import PERMISSION_OPERATIONS
from .text import STRING_OPERATIONS

OPERATION_GROUPS: dict[str, dict[str, OperationFunc]] = {
    "math": MATH_OPERATIONS,
    "string": STRING_OPERATIONS,
    "date": DATE_OPERATIONS,
    "logical": LOGICAL_OPERATIONS,
    "comparison": COMPARISON_OPERATIONS,
    "array": ARRAY_OPERATIONS,
    "permission": PERMISSION_OPERATIONS,
}

__all__ = [
    "OPERATION_GROUPS",
    "OperationFunc",
    "MATH_OPERATIONS",
    "STRING_OPERATIONS",
    "DATE_OPERATIONS",
    "LOGICAL_OPERATIONS",
    "COMPARISON_OPERATIONS",
    "ARRAY_OPERATIONS",
    "PERMISSION_OPERATIONS",
]
