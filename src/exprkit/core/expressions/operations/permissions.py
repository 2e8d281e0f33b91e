"""Permission operations.

Identity lives only in the evaluation context, never in the expression tree,
so every check here reads ``context.user``. Without a user every check except
``isAnonymous`` is False.
"""

from typing import Any

from ..coercion import strict_equals, to_string
from ..context import ExpressionContext
from ..resolver import resolve_path
from .base import OperationFunc, arg


def _names(value: Any) -> list[Any]:
    # A single role may be passed where a list is expected
    if isinstance(value, list):
        return value
    return [value]


def has_role(args: list[Any], context: ExpressionContext) -> bool:
    """hasRole(role) -> True when the user holds the role."""
    user = context.user
    if user is None:
        return False
    return arg(args, 0) in user.roles


def has_any_role(args: list[Any], context: ExpressionContext) -> bool:
    user = context.user
    if user is None:
        return False
    return any(role in user.roles for role in _names(arg(args, 0)))


def has_all_roles(args: list[Any], context: ExpressionContext) -> bool:
    user = context.user
    if user is None:
        return False
    return all(role in user.roles for role in _names(arg(args, 0)))


def has_permission(args: list[Any], context: ExpressionContext) -> bool:
    """hasPermission(name) -> True when the user was granted the permission."""
    user = context.user
    if user is None or not user.permissions:
        return False
    return arg(args, 0) in user.permissions


def is_owner(args: list[Any], context: ExpressionContext) -> bool:
    """isOwner(path) -> True when the record field at ``path`` is the user's id.

    The owner field is resolved against ``context.data`` and compared with
    strict equality, so a numeric owner id never matches a string user id.
    """
    user = context.user
    if user is None:
        return False
    owner = resolve_path(context.data, to_string(arg(args, 0)))
    return strict_equals(owner, user.id)


def is_authenticated(args: list[Any], context: ExpressionContext) -> bool:
    return context.user is not None


def is_anonymous(args: list[Any], context: ExpressionContext) -> bool:
    return context.user is None


PERMISSION_OPERATIONS: dict[str, OperationFunc] = {
    "hasRole": has_role,
    "hasAnyRole": has_any_role,
    "hasAllRoles": has_all_roles,
    "hasPermission": has_permission,
    "isOwner": is_owner,
    "isAuthenticated": is_authenticated,
    "isAnonymous": is_anonymous,
}
