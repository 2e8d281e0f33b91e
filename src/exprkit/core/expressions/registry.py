"""Operation registry.

The registry maps operation names to functions. It is built once from the
seven built-in groups and then only read by evaluators. Hosts may add
domain-specific operations, but replacing an existing name requires an
explicit ``override=True``.

Example:
    registry = create_default_registry()

    def slugify(args, context):
        return to_string(args[0]).lower().replace(" ", "-")

    registry.register("slugify", slugify)
    registry.freeze()

    evaluator = Evaluator(registry)
"""

import threading
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from exprkit.core.logging import get_logger

from .exceptions import OperationRegistrationError
from .operations import OPERATION_GROUPS, OperationFunc

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegisteredOperation:
    """Internal representation of a registered operation.

    Attributes:
        name: Name used in ``op``/``check`` fields of expressions.
        func: Callable receiving ``(args, context)``.
        group: Group the operation belongs to (``custom`` for host additions).
        is_builtin: Whether this operation ships with the engine.
    """

    name: str
    func: OperationFunc
    group: str = "custom"
    is_builtin: bool = False

    def __call__(self, args, context):
        return self.func(args, context)


class OperationRegistry:
    """Name to function table consulted by the evaluator."""

    def __init__(self) -> None:
        self._operations: dict[str, RegisteredOperation] = {}
        self._frozen = False
        self._lock = threading.Lock()

    def register(
        self,
        name: str,
        func: OperationFunc,
        group: str = "custom",
        override: bool = False,
        is_builtin: bool = False,
    ) -> None:
        """Register an operation.

        Args:
            name: Operation name as it appears in expressions.
            func: Callable receiving the evaluated argument list and the context.
            group: Group label, used for listing.
            override: Replace an existing operation of the same name.
            is_builtin: Mark the operation as part of the engine.

        Raises:
            OperationRegistrationError: If the registry is frozen, the name is
                empty, ``func`` is not callable, or the name is taken and
                ``override`` is False.
        """
        if not name:
            raise OperationRegistrationError("Operation name must not be empty")
        if not callable(func):
            raise OperationRegistrationError(f"Operation '{name}' is not callable")

        with self._lock:
            if self._frozen:
                raise OperationRegistrationError(
                    f"Cannot register '{name}': registry is frozen"
                )
            if name in self._operations and not override:
                raise OperationRegistrationError(
                    f"Operation '{name}' is already registered; pass override=True to replace it"
                )
            self._operations[name] = RegisteredOperation(
                name=name, func=func, group=group, is_builtin=is_builtin
            )

        if not is_builtin:
            logger.info("Operation registered", operation=name, group=group, override=override)

    def register_group(
        self, group: str, operations: Mapping[str, OperationFunc], is_builtin: bool = False
    ) -> None:
        """Register every operation of a group."""
        for name, func in operations.items():
            self.register(name, func, group=group, is_builtin=is_builtin)

    def get(self, name: str) -> Optional[RegisteredOperation]:
        """Look up an operation by name."""
        return self._operations.get(name)

    def names(self, group: str | None = None) -> list[str]:
        """List registered names, optionally restricted to one group."""
        return sorted(
            name
            for name, operation in self._operations.items()
            if group is None or operation.group == group
        )

    def groups(self) -> list[str]:
        """List the groups that have at least one operation."""
        return sorted({operation.group for operation in self._operations.values()})

    def as_mapping(self) -> Mapping[str, RegisteredOperation]:
        """Read-only view of the registry."""
        return MappingProxyType(self._operations)

    def freeze(self) -> "OperationRegistry":
        """Prevent further registrations."""
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def copy(self) -> "OperationRegistry":
        """Return an unfrozen copy, for hosts that want their own variant."""
        clone = OperationRegistry()
        clone._operations = dict(self._operations)
        return clone

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __len__(self) -> int:
        return len(self._operations)


def create_default_registry() -> OperationRegistry:
    """Build a registry holding every built-in operation group."""
    registry = OperationRegistry()
    for group, operations in OPERATION_GROUPS.items():
        registry.register_group(group, operations, is_builtin=True)
    logger.debug("Default operation registry built", operations=len(registry))
    return registry


@lru_cache
def get_default_registry() -> OperationRegistry:
    """Process-wide registry used by the module-level helpers."""
    return create_default_registry()


def register_operation(name: str, func: OperationFunc, *, override: bool = False) -> None:
    """Add an operation to the process-wide registry.

    Example:
        register_operation("vat", lambda args, ctx: to_number(args[0]) * 0.2)
    """
    get_default_registry().register(name, func, override=override)
