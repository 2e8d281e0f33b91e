"""Exceptions for expression loading and evaluation."""


class ExpressionError(Exception):
    """Base class for all expression-related errors."""
    pass


class ExpressionSyntaxError(ExpressionError):
    """Raised when an expression document is malformed."""
    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{message} at {path}" if path else message)


class ExpressionValidationError(ExpressionSyntaxError):
    """Raised when an expression tree fails load-time validation."""
    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class EvaluationError(ExpressionError):
    """Raised when expression evaluation fails."""
    pass


class UnknownOperationError(EvaluationError):
    """Raised when an operation name is not registered."""
    def __init__(self, op: str):
        self.op = op
        super().__init__(f"Unknown operation: {op}")


class UnknownPermissionCheckError(EvaluationError):
    """Raised when a permission check name is not registered."""
    def __init__(self, check: str):
        self.check = check
        super().__init__(f"Unknown permission check: {check}")


class DivisionByZeroError(EvaluationError):
    """Raised by ``divide`` when the divisor is exactly zero."""
    def __init__(self) -> None:
        super().__init__("Division by zero")


class MaxDepthExceededError(EvaluationError):
    """Raised when an expression tree nests deeper than allowed."""
    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Maximum recursion depth ({max_depth}) exceeded")


class OperationFailedError(EvaluationError):
    """Raised when an operation function fails unexpectedly."""
    def __init__(self, op: str, cause: Exception):
        self.op = op
        self.cause = cause
        super().__init__(f"Operation '{op}' failed: {cause}")


class BudgetExceededError(EvaluationError):
    """Raised when a sandboxed evaluation exceeds its budget."""
    pass


class SecurityError(EvaluationError):
    """Raised when a sandboxed expression touches something it must not."""
    pass


class OperationRegistrationError(ExpressionError):
    """Raised when an operation cannot be registered."""
    pass
