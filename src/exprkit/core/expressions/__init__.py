"""Expression evaluation API."""

from .ast import Condition, Field, Literal, Node, Operation, Permission
from .context import ExpressionContext, UserIdentity
from .evaluator import Evaluator, evaluate, get_default_evaluator
from .exceptions import (
    BudgetExceededError,
    DivisionByZeroError,
    EvaluationError,
    ExpressionError,
    ExpressionSyntaxError,
    ExpressionValidationError,
    MaxDepthExceededError,
    OperationFailedError,
    OperationRegistrationError,
    SecurityError,
    UnknownOperationError,
    UnknownPermissionCheckError,
)
from .parser import parse_expression, to_dict
from .registry import (
    OperationRegistry,
    RegisteredOperation,
    create_default_registry,
    get_default_registry,
    register_operation,
)
from .resolver import resolve_path
from .sandbox import EvaluationBudget, SafeEvaluator, evaluate_safe
from .validator import ExpressionValidator, validate_expression
from .values import UNDEFINED

__all__ = [
    "evaluate",
    "evaluate_safe",
    "parse_expression",
    "to_dict",
    "validate_expression",
    "register_operation",
    "resolve_path",
    "Evaluator",
    "SafeEvaluator",
    "EvaluationBudget",
    "ExpressionValidator",
    "OperationRegistry",
    "RegisteredOperation",
    "create_default_registry",
    "get_default_registry",
    "get_default_evaluator",
    "ExpressionContext",
    "UserIdentity",
    "UNDEFINED",
    "Node",
    "Literal",
    "Field",
    "Operation",
    "Condition",
    "Permission",
    "ExpressionError",
    "ExpressionSyntaxError",
    "ExpressionValidationError",
    "EvaluationError",
    "UnknownOperationError",
    "UnknownPermissionCheckError",
    "DivisionByZeroError",
    "MaxDepthExceededError",
    "OperationFailedError",
    "BudgetExceededError",
    "SecurityError",
    "OperationRegistrationError",
]
