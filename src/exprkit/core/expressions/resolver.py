"""Field-path resolution over the context data."""

from collections.abc import Mapping
from typing import Any

from .values import UNDEFINED


def resolve_path(root: Any, path: str) -> Any:
    """Resolve a dot-separated path against a data mapping.

    An explicit null part-way along the path short-circuits to None, while a
    missing key yields UNDEFINED. Lists are returned as-is; there is no
    index or wildcard syntax.

    Args:
        root: The mapping to start from (usually ``context.data``).
        path: Dot-separated path, e.g. ``author.profile.bio``.

    Returns:
        The resolved value, None, or UNDEFINED.

    Examples:
        >>> resolve_path({"user": None}, "user.name")
        >>> resolve_path({"name": "John"}, "nonexistent")
        UNDEFINED
    """
    value = root

    for part in path.split("."):
        if value is None:
            return None
        if value is UNDEFINED:
            return UNDEFINED

        if isinstance(value, Mapping):
            value = value.get(part, UNDEFINED)
        else:
            # Scalars and lists have no named members
            value = UNDEFINED

    return value
