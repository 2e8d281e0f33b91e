"""Pydantic schemas for the JSON encoding of expressions.

These models validate the shape of a stored expression document. They are
converted into the immutable AST in :mod:`exprkit.core.expressions.parser`.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class LiteralExpressionSchema(BaseModel):
    """A constant value."""

    type: Literal["literal"]
    value: Any = Field(default=None, description="Any JSON value")


class FieldExpressionSchema(BaseModel):
    """Field access by dot path."""

    type: Literal["field"]
    path: str = Field(
        ...,
        min_length=1,
        description="Dot-separated path into the context data (e.g. author.profile.bio)",
    )


class OperationExpressionSchema(BaseModel):
    """Application of a registered operation."""

    type: Literal["operation"]
    op: str = Field(..., min_length=1, description="Registered operation name")
    args: list["ExpressionSchema"] = Field(default_factory=list)


class ConditionExpressionSchema(BaseModel):
    """Binary comparison of two expressions."""

    type: Literal["condition"]
    op: Literal["eq", "ne", "gt", "gte", "lt", "lte", "in"]
    left: "ExpressionSchema"
    right: "ExpressionSchema"


class PermissionExpressionSchema(BaseModel):
    """Permission check with raw argument values."""

    type: Literal["permission"]
    check: str = Field(..., min_length=1, description="Registered permission operation name")
    args: list[Any] = Field(default_factory=list)


ExpressionSchema = Annotated[
    Union[
        LiteralExpressionSchema,
        FieldExpressionSchema,
        OperationExpressionSchema,
        ConditionExpressionSchema,
        PermissionExpressionSchema,
    ],
    Field(discriminator="type"),
]

OperationExpressionSchema.model_rebuild()
ConditionExpressionSchema.model_rebuild()
