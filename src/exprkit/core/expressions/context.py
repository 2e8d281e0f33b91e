"""Evaluation context passed alongside an expression."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class UserIdentity:
    """The authenticated user an expression is evaluated for.

    Attributes:
        id: User identifier, compared against owner fields.
        roles: Role names granted to the user.
        permissions: Explicit permission strings, if the host tracks them.
    """

    id: str
    roles: list[str] = field(default_factory=list)
    permissions: Optional[list[str]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserIdentity":
        """Build an identity from a plain mapping."""
        permissions = data.get("permissions")
        return cls(
            id=data["id"],
            roles=_names(data.get("roles") or []),
            permissions=_names(permissions) if permissions is not None else None,
        )


def _names(value: Any) -> list[str]:
    """A lone string is one name, not a sequence of characters."""
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass(frozen=True)
class ExpressionContext:
    """Everything an expression may read during evaluation.

    The engine never mutates a context. Callers build one per render or
    request and discard it afterwards.

    Attributes:
        data: The current record, addressed by field paths.
        user: The authenticated user, or None for anonymous access.
        params: Route parameters.
        globals: Global application state.
        now: Evaluation clock for date operations. When None the wall
            clock is read, so pin it where repeatable results matter.
    """

    data: Mapping[str, Any] = field(default_factory=dict)
    user: Optional[UserIdentity] = None
    params: Mapping[str, str] = field(default_factory=dict)
    globals: Mapping[str, Any] = field(default_factory=dict)
    now: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExpressionContext":
        """Build a context from its JSON form.

        Example:
            >>> ExpressionContext.from_dict({"data": {"title": "x"}, "user": {"id": "u1"}})
        """
        user = data.get("user")
        now = data.get("now")
        if isinstance(now, str):
            now = datetime.fromisoformat(now.replace("Z", "+00:00"))
        return cls(
            data=dict(data.get("data") or {}),
            user=UserIdentity.from_dict(user) if user else None,
            params=dict(data.get("params") or {}),
            globals=dict(data.get("globals") or {}),
            now=now,
        )
