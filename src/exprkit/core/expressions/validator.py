"""Expression validator.

Checks a whole expression tree against an operation registry when the
expression is loaded, so unknown operation names surface before the first
evaluation instead of during it.
"""

from typing import Any, Mapping

from .ast import CONDITION_OPERATORS, Condition, Field, Literal, Node, Operation, Permission
from .exceptions import ExpressionSyntaxError, ExpressionValidationError
from .parser import parse_expression
from .registry import OperationRegistry, get_default_registry


class ExpressionValidator:
    """Validates expression trees."""

    def __init__(
        self,
        registry: OperationRegistry | None = None,
        forbidden_segments: frozenset[str] | None = None,
    ):
        """Initialize validator.

        Args:
            registry: Registry that must contain every referenced operation.
            forbidden_segments: Field path segments that may not appear.
        """
        self.registry = registry if registry is not None else get_default_registry()
        self.forbidden_segments = forbidden_segments or frozenset()
        self.errors: list[str] = []

    def validate(self, expression: Node | Mapping[str, Any] | str) -> Node:
        """Validate an expression and return its parsed tree.

        Raises:
            ExpressionSyntaxError: If the document is malformed.
            ExpressionValidationError: If the tree references unknown names or
                forbidden paths. Every problem found is reported at once.
        """
        node = parse_expression(expression)

        self.errors = []
        try:
            self._validate_node(node, "$")
        except RecursionError as e:
            raise ExpressionSyntaxError("Expression nested too deeply") from e

        if self.errors:
            raise ExpressionValidationError(self.errors)
        return node

    def _validate_node(self, node: Node, location: str) -> None:
        """Recursively validate AST node."""
        if isinstance(node, Literal):
            return

        if isinstance(node, Field):
            self._validate_path(node.path, location)
            return

        if isinstance(node, Operation):
            if node.op not in self.registry:
                self.errors.append(f"Unknown operation '{node.op}' at {location}")
            for index, arg in enumerate(node.args):
                self._validate_node(arg, f"{location}.args[{index}]")
            return

        if isinstance(node, Condition):
            if node.op not in CONDITION_OPERATORS:
                valid = ", ".join(CONDITION_OPERATORS)
                self.errors.append(
                    f"Invalid condition operator '{node.op}' at {location}. Valid: {valid}"
                )
            elif node.op not in self.registry:
                self.errors.append(f"Unknown operation '{node.op}' at {location}")
            self._validate_node(node.left, f"{location}.left")
            self._validate_node(node.right, f"{location}.right")
            return

        if isinstance(node, Permission):
            if node.check not in self.registry:
                self.errors.append(f"Unknown permission check '{node.check}' at {location}")
            return

        self.errors.append(f"Unknown node type: {type(node).__name__} at {location}")

    def _validate_path(self, path: str, location: str) -> None:
        """Validate a field path."""
        segments = path.split(".")
        if any(segment == "" for segment in segments):
            self.errors.append(f"Invalid field path '{path}' at {location}")
            return

        for segment in segments:
            if segment in self.forbidden_segments:
                self.errors.append(
                    f"Field access '{path}' is not allowed (contains '{segment}') at {location}"
                )
                return


def validate_expression(
    expression: Node | Mapping[str, Any] | str,
    registry: OperationRegistry | None = None,
) -> Node:
    """Validate an expression against a registry.

    Returns:
        Node: The parsed expression tree, ready for evaluation.

    Raises:
        ExpressionSyntaxError: If the document is malformed.
        ExpressionValidationError: If the tree references unknown operations.

    Examples:
        >>> validate_expression({"type": "operation", "op": "add", "args": []})
        # OK

        >>> validate_expression({"type": "operation", "op": "nope", "args": []})
        # Raises: ExpressionValidationError: Unknown operation 'nope' at $
    """
    return ExpressionValidator(registry).validate(expression)
