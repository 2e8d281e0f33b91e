"""Tests for the exprkit command-line interface."""

import json

import pytest
from click.testing import CliRunner

from exprkit.cli import cli
from exprkit.core.config import Settings
from exprkit.core.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    """The CLI configures logging against the runner's streams."""
    yield
    configure_logging(Settings(environment="testing", log_format="console", log_level="WARNING"))


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def write_json(tmp_path):
    def _write(name, payload):
        path = tmp_path / name
        path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
        return str(path)

    return _write


TOTAL = {
    "type": "operation",
    "op": "multiply",
    "args": [{"type": "field", "path": "price"}, {"type": "field", "path": "quantity"}],
}


def test_eval_prints_json_result(runner, write_json):
    expression = write_json("total.json", TOTAL)
    context = write_json("context.json", {"data": {"price": 12.5, "quantity": 4}})

    result = runner.invoke(cli, ["eval", expression, "--context", context])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == 50


def test_eval_reads_stdin(runner):
    document = json.dumps({"type": "operation", "op": "upper", "args": [{"type": "literal", "value": "hi"}]})

    result = runner.invoke(cli, ["eval", "-"], input=document)

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == "HI"


def test_eval_missing_field_prints_null(runner, write_json):
    expression = write_json("field.json", {"type": "field", "path": "missing.path"})

    result = runner.invoke(cli, ["eval", expression])

    assert result.exit_code == 0
    assert json.loads(result.stdout) is None


def test_eval_with_user_and_pinned_clock(runner, write_json):
    expression = write_json(
        "rule.json",
        {
            "type": "operation",
            "op": "and",
            "args": [
                {"type": "operation", "op": "hasRole", "args": [{"type": "literal", "value": "editor"}]},
                {"type": "operation", "op": "currentYear", "args": []},
            ],
        },
    )
    context = write_json(
        "context.json",
        {"user": {"id": "u1", "roles": ["editor"]}, "now": "2024-06-15T12:00:00Z"},
    )

    result = runner.invoke(cli, ["eval", expression, "--context", context])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) is True


def test_eval_unknown_operation(runner, write_json):
    expression = write_json("bad.json", {"type": "operation", "op": "doesNotExist", "args": []})

    result = runner.invoke(cli, ["eval", expression])

    assert result.exit_code == 1
    assert "Unknown operation: doesNotExist" in result.output


def test_eval_invalid_json(runner, write_json):
    expression = write_json("broken.json", "{not json")

    result = runner.invoke(cli, ["eval", expression])

    assert result.exit_code == 1
    assert "Expression is not valid JSON" in result.output


def test_eval_safe_rejects_dangerous_path(runner, write_json):
    expression = write_json("proto.json", {"type": "field", "path": "__proto__.polluted"})

    result = runner.invoke(cli, ["eval", "--safe", expression])

    assert result.exit_code == 1
    assert "is not allowed" in result.output


def test_validate_valid_expression(runner, write_json):
    expression = write_json("total.json", TOTAL)

    result = runner.invoke(cli, ["validate", expression])

    assert result.exit_code == 0
    assert "Expression is valid." in result.output


def test_validate_reports_every_unknown_operation(runner, write_json):
    expression = write_json(
        "bad.json",
        {
            "type": "operation",
            "op": "first",
            "args": [{"type": "operation", "op": "second", "args": []}],
        },
    )

    result = runner.invoke(cli, ["validate", expression])

    assert result.exit_code == 1
    assert "Unknown operation 'second' at $.args[0]" in result.output


def test_validate_safe_rejects_dangerous_path(runner, write_json):
    expression = write_json("proto.json", {"type": "field", "path": "data.constructor"})

    assert runner.invoke(cli, ["validate", expression]).exit_code == 0
    result = runner.invoke(cli, ["validate", "--safe", expression])
    assert result.exit_code == 1
    assert "contains 'constructor'" in result.output


def test_operations_lists_groups(runner):
    result = runner.invoke(cli, ["operations"])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert [line.split(":")[0] for line in lines] == [
        "array",
        "comparison",
        "date",
        "logical",
        "math",
        "permission",
        "string",
    ]


def test_operations_single_group(runner):
    result = runner.invoke(cli, ["operations", "--group", "logical"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "logical: and, coalesce, exists, if, isEmpty, isNull, not, or"


def test_operations_unknown_group(runner):
    result = runner.invoke(cli, ["operations", "--group", "nope"])

    assert result.exit_code == 1
    assert "Unknown group: nope" in result.output
