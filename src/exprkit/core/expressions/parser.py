"""Loading expression documents into AST nodes."""

import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .ast import Condition, Field, Literal, Node, Operation, Permission
from .exceptions import ExpressionSyntaxError
from .schemas import (
    ConditionExpressionSchema,
    ExpressionSchema,
    FieldExpressionSchema,
    LiteralExpressionSchema,
    OperationExpressionSchema,
    PermissionExpressionSchema,
)

_expression_adapter: TypeAdapter = TypeAdapter(ExpressionSchema)


def parse_expression(data: Node | Mapping[str, Any] | str) -> Node:
    """Parse a JSON expression document into an AST.

    Args:
        data: An already-built node, a decoded JSON mapping, or a JSON string.

    Returns:
        Node: The root of the expression tree.

    Raises:
        ExpressionSyntaxError: If the document is not a valid expression.
    """
    if isinstance(data, Node):
        return data

    try:
        return _load(data)
    except RecursionError as e:
        raise ExpressionSyntaxError("Expression nested too deeply") from e


def _load(data: Mapping[str, Any] | str | bytes) -> Node:
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ExpressionSyntaxError(f"Invalid JSON: {e.msg}", f"position {e.pos}") from e

    try:
        schema = _expression_adapter.validate_python(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or None
        raise ExpressionSyntaxError(first["msg"], location) from e

    return _to_node(schema)


def _to_node(schema: Any) -> Node:
    """Convert a validated schema model into an AST node."""
    if isinstance(schema, LiteralExpressionSchema):
        return Literal(schema.value)

    if isinstance(schema, FieldExpressionSchema):
        return Field(schema.path)

    if isinstance(schema, OperationExpressionSchema):
        return Operation(schema.op, tuple(_to_node(arg) for arg in schema.args))

    if isinstance(schema, ConditionExpressionSchema):
        return Condition(schema.op, _to_node(schema.left), _to_node(schema.right))

    if isinstance(schema, PermissionExpressionSchema):
        return Permission(schema.check, tuple(schema.args))

    raise ExpressionSyntaxError(f"Unknown expression schema: {type(schema).__name__}")


def to_dict(node: Node) -> dict[str, Any]:
    """Serialize an AST back into its JSON document form."""
    if isinstance(node, Literal):
        return {"type": "literal", "value": _plain(node.value)}

    if isinstance(node, Field):
        return {"type": "field", "path": node.path}

    if isinstance(node, Operation):
        return {"type": "operation", "op": node.op, "args": [to_dict(arg) for arg in node.args]}

    if isinstance(node, Condition):
        return {
            "type": "condition",
            "op": node.op,
            "left": to_dict(node.left),
            "right": to_dict(node.right),
        }

    if isinstance(node, Permission):
        return {"type": "permission", "check": node.check, "args": [_plain(a) for a in node.args]}

    raise ExpressionSyntaxError(f"Unknown node type: {type(node).__name__}")


def _plain(value: Any) -> Any:
    """Make a literal value JSON-serializable."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value
