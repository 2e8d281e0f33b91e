"""Sandboxed evaluation.

Wraps the evaluator with an evaluation budget (tree depth, number of nodes
visited, wall-clock time, and an optional operation allow-list) and rejects
field paths that reach for object internals. Intended for expressions
authored by untrusted users.
"""

import copy
import dataclasses
import time
from dataclasses import dataclass
from typing import Any, Mapping

from exprkit.core.config import Settings, get_settings
from exprkit.core.logging import get_logger

from .ast import Condition, Field, Node, Operation, Permission
from .context import ExpressionContext
from .evaluator import Evaluator
from .exceptions import BudgetExceededError, SecurityError
from .parser import parse_expression
from .registry import OperationRegistry

logger = get_logger(__name__)

DANGEROUS_PROPERTIES = frozenset(
    {
        "__proto__",
        "constructor",
        "prototype",
        "process",
        "global",
        "require",
        "module",
        "exports",
        "eval",
        "Function",
        "__dirname",
        "__filename",
        "__class__",
        "__dict__",
        "__globals__",
        "__builtins__",
        "__import__",
        "__subclasses__",
    }
)


@dataclass(frozen=True)
class EvaluationBudget:
    """Limits applied to a single sandboxed evaluation.

    Attributes:
        max_depth: Maximum expression tree depth.
        max_operations: Maximum number of nodes evaluated.
        timeout_ms: Maximum wall-clock time in milliseconds.
        allowed_operations: Operation names that may be called (None = any).
    """

    max_depth: int = 10
    max_operations: int = 100
    timeout_ms: int = 100
    allowed_operations: frozenset[str] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "EvaluationBudget":
        allowed = settings.sandbox_allowed_operations
        return cls(
            max_depth=settings.sandbox_max_depth,
            max_operations=settings.sandbox_max_operations,
            timeout_ms=settings.sandbox_timeout_ms,
            allowed_operations=frozenset(allowed) if allowed is not None else None,
        )


DEFAULT_BUDGET = EvaluationBudget()


class BudgetTracker:
    """Counts the work done by one sandboxed evaluation."""

    def __init__(self, budget: EvaluationBudget) -> None:
        self.budget = budget
        self.operations = 0
        self.started = time.monotonic()

    def charge(self, node: Node) -> None:
        """Account for one node about to be evaluated."""
        elapsed_ms = (time.monotonic() - self.started) * 1000
        if elapsed_ms > self.budget.timeout_ms:
            raise BudgetExceededError(
                f"Expression evaluation timeout ({self.budget.timeout_ms}ms exceeded)"
            )

        self.operations += 1
        if self.operations > self.budget.max_operations:
            raise BudgetExceededError(
                f"Maximum operations ({self.budget.max_operations}) exceeded"
            )

        allowed = self.budget.allowed_operations
        if allowed is not None:
            name = _operation_name(node)
            if name is not None and name not in allowed:
                raise SecurityError(f"Operation '{name}' is not allowed")


def _operation_name(node: Node) -> str | None:
    if isinstance(node, (Operation, Condition)):
        return node.op
    if isinstance(node, Permission):
        return node.check
    return None


class SafeEvaluator(Evaluator):
    """Evaluator with security boundaries.

    Example:
        evaluator = SafeEvaluator(EvaluationBudget(max_operations=20))
        evaluator.evaluate({"type": "field", "path": "price"}, context)
    """

    def __init__(
        self,
        budget: EvaluationBudget | None = None,
        registry: OperationRegistry | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.budget = budget or EvaluationBudget.from_settings(settings)
        super().__init__(registry, settings, max_depth=self.budget.max_depth)

    def evaluate(
        self,
        expression: Node | Mapping[str, Any] | str,
        context: ExpressionContext | None = None,
    ) -> Any:
        """Evaluate an expression within the budget.

        Raises:
            SecurityError: If a field path touches a dangerous property or an
                operation outside the allow-list is called.
            BudgetExceededError: If the depth, operation or time limit is hit.
        """
        node = parse_expression(expression)
        self._check_paths(node)
        isolated = self._isolate(context or ExpressionContext())
        return self._run(node, isolated, BudgetTracker(self.budget))

    def _check_paths(self, node: Node, depth: int = 1) -> None:
        """Reject trees whose field paths reach for object internals."""
        # Nodes below the depth limit never run
        if depth > self.max_depth:
            return
        if isinstance(node, Field):
            for part in node.path.split("."):
                if part in DANGEROUS_PROPERTIES:
                    logger.warning("Rejected unsafe field path", path=node.path)
                    raise SecurityError(
                        f"Field access '{node.path}' is not allowed "
                        f"(contains dangerous property '{part}')"
                    )
        elif isinstance(node, Operation):
            for arg in node.args:
                self._check_paths(arg, depth + 1)
        elif isinstance(node, Condition):
            self._check_paths(node.left, depth + 1)
            self._check_paths(node.right, depth + 1)

    @staticmethod
    def _isolate(context: ExpressionContext) -> ExpressionContext:
        """Copy the mutable parts of the context so operations cannot alter the caller's data."""
        return dataclasses.replace(
            context,
            data=copy.deepcopy(dict(context.data)),
            params=dict(context.params),
            globals=copy.deepcopy(dict(context.globals)),
        )


def create_safe_evaluator(budget: EvaluationBudget | None = None) -> SafeEvaluator:
    """Create a safe evaluator with the given (or default) budget."""
    return SafeEvaluator(budget or DEFAULT_BUDGET)


def evaluate_safe(
    expression: Node | Mapping[str, Any] | str,
    context: ExpressionContext | None = None,
) -> Any:
    """Evaluate an expression with the default budget."""
    return create_safe_evaluator().evaluate(expression, context)


__all__ = [
    "BudgetTracker",
    "DANGEROUS_PROPERTIES",
    "DEFAULT_BUDGET",
    "EvaluationBudget",
    "SafeEvaluator",
    "create_safe_evaluator",
    "evaluate_safe",
]
