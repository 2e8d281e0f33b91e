"""Unit tests for the expression evaluator."""

import pytest

from exprkit.core.config import Settings
from exprkit.core.expressions import (
    Condition,
    EvaluationError,
    Evaluator,
    ExpressionContext,
    ExpressionSyntaxError,
    Field,
    Literal,
    MaxDepthExceededError,
    Operation,
    OperationFailedError,
    Permission,
    UNDEFINED,
    UnknownOperationError,
    UnknownPermissionCheckError,
    create_default_registry,
    evaluate,
)


def boom(args, context):
    raise RuntimeError("Should not be called")


@pytest.fixture
def registry():
    registry = create_default_registry()
    registry.register("boom", boom)
    return registry


class TestDispatch:
    """Node dispatch."""

    def test_literal(self):
        assert evaluate(Literal(42)) == 42
        assert evaluate(Literal(None)) is None
        assert evaluate(Literal([1, 2])) == [1, 2]

    def test_field(self, context):
        assert evaluate(Field("author.profile.bio"), context) == "Writer"
        assert evaluate(Field("deletedAt.value"), context) is None
        assert evaluate(Field("nonexistent"), context) is UNDEFINED

    def test_json_document(self, context):
        document = {
            "type": "operation",
            "op": "multiply",
            "args": [{"type": "field", "path": "price"}, {"type": "field", "path": "quantity"}],
        }
        assert evaluate(document, context) == 300

    def test_condition(self, context):
        assert evaluate(Condition("gt", Field("price"), Literal(50)), context) is True

    def test_context_defaults_to_empty(self):
        assert evaluate(Field("anything")) is UNDEFINED

    def test_malformed_document_raises_syntax_error(self):
        with pytest.raises(ExpressionSyntaxError):
            evaluate({"type": "operation"})


class TestErrors:
    """Failure policy."""

    def test_unknown_operation(self, context):
        with pytest.raises(EvaluationError, match="Unknown operation: doesNotExist"):
            evaluate({"type": "operation", "op": "doesNotExist", "args": []}, context)

    def test_unknown_operation_type(self, context):
        with pytest.raises(UnknownOperationError):
            evaluate(Operation("doesNotExist", []), context)

    def test_unknown_permission_check(self, context):
        with pytest.raises(UnknownPermissionCheckError, match="isWizard"):
            evaluate(Permission("isWizard", []), context)

    def test_unknown_condition_operator(self, context):
        with pytest.raises(EvaluationError, match="Unknown condition operator"):
            evaluate(Condition("add", Literal(1), Literal(2)), context)

    def test_operation_failures_are_wrapped(self, registry, context):
        evaluator = Evaluator(registry)
        with pytest.raises(OperationFailedError, match="boom") as exc_info:
            evaluator.evaluate(Operation("boom", []), context)
        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_max_depth(self):
        expr = Literal(1)
        for _ in range(10):
            expr = Operation("add", [expr])
        with pytest.raises(MaxDepthExceededError):
            Evaluator(max_depth=5).evaluate(expr)
        assert Evaluator(max_depth=20).evaluate(expr) == 1


class TestShortCircuit:
    """and/or/if only evaluate what they need."""

    def test_if_skips_untaken_branch(self, context):
        # divide by zero sits in the branch that is not taken
        expr = Operation(
            "if",
            [
                Condition("eq", Field("quantity"), Literal(0)),
                Literal(0),
                Operation("divide", [Field("price"), Field("quantity")]),
            ],
        )
        assert evaluate(expr, context) == pytest.approx(100 / 3)

        empty = ExpressionContext(data={"price": 100, "quantity": 0})
        assert evaluate(expr, empty) == 0

    def test_and_or_stop_early(self, registry):
        evaluator = Evaluator(registry)
        assert evaluator.evaluate(Operation("and", [Literal(False), Operation("boom", [])])) is False
        assert evaluator.evaluate(Operation("or", [Literal(True), Operation("boom", [])])) is True
        assert evaluator.evaluate(Operation("and", [Literal(1), Literal("x")])) is True

    def test_eager_logic_evaluates_every_branch(self, registry):
        evaluator = Evaluator(registry, settings=Settings(eager_logic=True))
        with pytest.raises(OperationFailedError):
            evaluator.evaluate(Operation("and", [Literal(False), Operation("boom", [])]))

    def test_overridden_logic_operation_is_called_normally(self):
        registry = create_default_registry()
        registry.register("and", lambda args, ctx: "custom", override=True)
        assert Evaluator(registry).evaluate(Operation("and", [Literal(True)])) == "custom"


def test_purity(context):
    expr = Operation(
        "concat",
        [
            Operation("upper", [Field("title")]),
            Literal(" "),
            Operation("formatDate", [Field("publishedAt")]),
        ],
    )
    first = evaluate(expr, context)
    assert first == evaluate(expr, context) == "HELLO WORLD 2024-06-10"


def test_context_is_not_mutated(context):
    snapshot = {key: value for key, value in context.data.items()}
    evaluate(Operation("flatten", [Field("tags")]), context)
    evaluate(Operation("sum", [Field("items"), Literal("price")]), context)
    assert dict(context.data) == snapshot


def test_context_is_passed_to_operations(context):
    assert evaluate(Operation("hasRole", [Literal("admin")]), context) is True
    assert evaluate(Operation("isOwner", [Literal("author.id")]), context) is True
