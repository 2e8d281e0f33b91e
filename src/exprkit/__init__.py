"""exprkit - JSON expression evaluation engine.

A deterministic, side-effect-free interpreter for JSON-encoded expressions
used for computed fields, conditional visibility and field- or row-level
access checks.
"""

__version__ = "0.1.0"

from exprkit.core.expressions import (
    EvaluationError,
    ExpressionContext,
    UserIdentity,
    evaluate,
    register_operation,
    validate_expression,
)

__all__ = [
    "__version__",
    "evaluate",
    "register_operation",
    "validate_expression",
    "ExpressionContext",
    "UserIdentity",
    "EvaluationError",
]
