"""Abstract Syntax Tree nodes for expressions."""

from dataclasses import dataclass, field
from typing import Any

CONDITION_OPERATORS = ("eq", "ne", "gt", "gte", "lt", "lte", "in")


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Literal(Node):
    """Represents a constant value."""
    value: Any


@dataclass(frozen=True)
class Field(Node):
    """Represents a dot-path access into the context data (e.g., author.profile.bio)."""
    path: str


@dataclass(frozen=True)
class Operation(Node):
    """Represents a call to a registered operation (e.g., add(a, b))."""
    op: str
    args: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class Condition(Node):
    """Represents a binary comparison (e.g., left gt right)."""
    op: str
    left: Node
    right: Node


@dataclass(frozen=True)
class Permission(Node):
    """Represents an access check with raw, unevaluated arguments."""
    check: str
    args: tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))
