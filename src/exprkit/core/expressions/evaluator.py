"""Evaluator for expressions."""

from functools import lru_cache
from typing import Any, Mapping

from exprkit.core.config import Settings, get_settings

from .ast import CONDITION_OPERATORS, Condition, Field, Literal, Node, Operation, Permission
from .coercion import is_truthy
from .context import ExpressionContext
from .exceptions import (
    EvaluationError,
    MaxDepthExceededError,
    OperationFailedError,
    UnknownOperationError,
    UnknownPermissionCheckError,
)
from .parser import parse_expression
from .registry import OperationRegistry, RegisteredOperation, get_default_registry
from .resolver import resolve_path
from .values import UNDEFINED

# Built-in operations whose arguments are evaluated only as far as needed
SHORT_CIRCUIT_OPERATIONS = frozenset({"and", "or", "if"})


class Evaluator:
    """Evaluates an expression tree against a context.

    The evaluator holds no per-call state, so one instance can serve many
    threads at once as long as each caller leaves its context alone while
    the call is running.
    """

    def __init__(
        self,
        registry: OperationRegistry | None = None,
        settings: Settings | None = None,
        max_depth: int | None = None,
        eager_logic: bool | None = None,
    ):
        """Initialize the evaluator.

        Args:
            registry: Operations to dispatch to. Defaults to the process-wide registry.
            settings: Settings to read limits from. Defaults to the cached settings.
            max_depth: Override for ``settings.max_depth``.
            eager_logic: Override for ``settings.eager_logic``.
        """
        settings = settings or get_settings()
        self.registry = registry if registry is not None else get_default_registry()
        self.max_depth = max_depth if max_depth is not None else settings.max_depth
        self.eager_logic = settings.eager_logic if eager_logic is None else eager_logic

    def evaluate(
        self,
        expression: Node | Mapping[str, Any] | str,
        context: ExpressionContext | None = None,
    ) -> Any:
        """Evaluate an expression.

        Args:
            expression: An AST node or its JSON form.
            context: Evaluation context. Defaults to an empty context.

        Returns:
            The resulting value.

        Raises:
            ExpressionSyntaxError: If ``expression`` is a malformed document.
            EvaluationError: If an operation is unknown or fails.
        """
        node = parse_expression(expression)
        return self._run(node, context or ExpressionContext(), None)

    def _run(self, node: Node, context: ExpressionContext, tracker: Any) -> Any:
        return self._evaluate(node, context, 1, tracker)

    def _evaluate(self, node: Node, context: ExpressionContext, depth: int, tracker: Any) -> Any:
        """Evaluate a node."""
        if depth > self.max_depth:
            raise MaxDepthExceededError(self.max_depth)

        if tracker is not None:
            tracker.charge(node)

        if isinstance(node, Literal):
            return node.value

        if isinstance(node, Field):
            return resolve_path(context.data, node.path)

        if isinstance(node, Operation):
            return self._evaluate_operation(node, context, depth, tracker)

        if isinstance(node, Condition):
            return self._evaluate_condition(node, context, depth, tracker)

        if isinstance(node, Permission):
            return self._evaluate_permission(node, context)

        raise EvaluationError(f"Unknown node type: {type(node).__name__}")

    def _evaluate_operation(
        self, node: Operation, context: ExpressionContext, depth: int, tracker: Any
    ) -> Any:
        """Evaluate an operation node."""
        operation = self.registry.get(node.op)
        if operation is None:
            raise UnknownOperationError(node.op)

        if (
            not self.eager_logic
            and operation.is_builtin
            and node.op in SHORT_CIRCUIT_OPERATIONS
        ):
            return self._evaluate_short_circuit(node, context, depth, tracker)

        args = [self._evaluate(arg, context, depth + 1, tracker) for arg in node.args]
        return self._call(operation, args, context)

    def _evaluate_short_circuit(
        self, node: Operation, context: ExpressionContext, depth: int, tracker: Any
    ) -> Any:
        """Evaluate and/or/if, skipping arguments whose value cannot matter."""
        if node.op == "and":
            for arg in node.args:
                if not is_truthy(self._evaluate(arg, context, depth + 1, tracker)):
                    return False
            return True

        if node.op == "or":
            for arg in node.args:
                if is_truthy(self._evaluate(arg, context, depth + 1, tracker)):
                    return True
            return False

        # if(condition, then, else)
        condition = self._argument(node, 0, context, depth, tracker)
        return self._argument(node, 1 if is_truthy(condition) else 2, context, depth, tracker)

    def _argument(
        self, node: Operation, index: int, context: ExpressionContext, depth: int, tracker: Any
    ) -> Any:
        if index >= len(node.args):
            return UNDEFINED
        return self._evaluate(node.args[index], context, depth + 1, tracker)

    def _evaluate_condition(
        self, node: Condition, context: ExpressionContext, depth: int, tracker: Any
    ) -> bool:
        """Evaluate a comparison node."""
        if node.op not in CONDITION_OPERATORS:
            raise EvaluationError(f"Unknown condition operator: {node.op}")

        comparator = self.registry.get(node.op)
        if comparator is None:
            raise UnknownOperationError(node.op)

        left = self._evaluate(node.left, context, depth + 1, tracker)
        right = self._evaluate(node.right, context, depth + 1, tracker)
        return self._call(comparator, [left, right], context)

    def _evaluate_permission(self, node: Permission, context: ExpressionContext) -> Any:
        """Evaluate a permission node; its arguments are used as-is."""
        checker = self.registry.get(node.check)
        if checker is None:
            raise UnknownPermissionCheckError(node.check)
        return self._call(checker, list(node.args), context)

    def _call(
        self, operation: RegisteredOperation, args: list[Any], context: ExpressionContext
    ) -> Any:
        try:
            return operation.func(args, context)
        except EvaluationError:
            raise
        except Exception as e:
            raise OperationFailedError(operation.name, e) from e


@lru_cache
def get_default_evaluator() -> Evaluator:
    """Evaluator bound to the process-wide registry and cached settings."""
    return Evaluator()


def evaluate(
    expression: Node | Mapping[str, Any] | str,
    context: ExpressionContext | None = None,
) -> Any:
    """Evaluate an expression with the default evaluator."""
    return get_default_evaluator().evaluate(expression, context)
