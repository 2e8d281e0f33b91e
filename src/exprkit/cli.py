"""Command-line interface for exprkit.

Evaluates and validates expression documents stored as JSON files, which is
handy when authoring computed fields and access rules.
"""

import json
from datetime import datetime
from typing import Any, NoReturn

import click

from exprkit.core.config import get_settings
from exprkit.core.expressions import (
    ExpressionContext,
    ExpressionError,
    SafeEvaluator,
    get_default_evaluator,
    get_default_registry,
)
from exprkit.core.expressions.sandbox import DANGEROUS_PROPERTIES
from exprkit.core.expressions.validator import ExpressionValidator
from exprkit.core.expressions.values import UNDEFINED
from exprkit.core.logging import configure_logging, get_logger


def _jsonable(value: Any) -> Any:
    """Convert an evaluation result into something json.dumps accepts."""
    if value is UNDEFINED:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    return value


def _load_json(stream: Any, label: str) -> Any:
    try:
        return json.load(stream)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{label} is not valid JSON: {e}") from e


@click.group()
@click.version_option(version="0.1.0", prog_name="exprkit")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides EXPRKIT_LOG_LEVEL)",
)
def cli(log_level: str | None) -> None:
    """exprkit - evaluate JSON expressions for computed fields and access rules."""
    settings = get_settings()
    if log_level is not None:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


@cli.command("eval")
@click.argument("expression_file", type=click.File("r"))
@click.option(
    "--context",
    "context_file",
    type=click.File("r"),
    default=None,
    help="JSON file with data, user, params, globals and now",
)
@click.option(
    "--safe",
    is_flag=True,
    default=False,
    help="Evaluate inside the sandbox budget",
)
def eval_command(expression_file: Any, context_file: Any, safe: bool) -> None:
    """Evaluate EXPRESSION_FILE and print the result as JSON.

    Use '-' to read the expression from stdin.
    """
    logger = get_logger(__name__)
    document = _load_json(expression_file, "Expression")
    raw_context = _load_json(context_file, "Context") if context_file else {}

    try:
        context = ExpressionContext.from_dict(raw_context)
    except (KeyError, TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid context: {e}") from e

    evaluator = SafeEvaluator() if safe else get_default_evaluator()
    try:
        result = evaluator.evaluate(document, context)
    except ExpressionError as e:
        logger.debug("Evaluation failed", error=str(e))
        raise click.ClickException(str(e)) from e

    click.echo(json.dumps(_jsonable(result)))


@cli.command()
@click.argument("expression_file", type=click.File("r"))
@click.option(
    "--safe",
    is_flag=True,
    default=False,
    help="Also reject field paths that are refused by the sandbox",
)
def validate(expression_file: Any, safe: bool) -> None:
    """Validate EXPRESSION_FILE against the registered operations."""
    document = _load_json(expression_file, "Expression")
    forbidden = DANGEROUS_PROPERTIES if safe else None
    validator = ExpressionValidator(get_default_registry(), forbidden_segments=forbidden)

    try:
        validator.validate(document)
    except ExpressionError as e:
        raise click.ClickException(str(e)) from e

    click.echo("Expression is valid.")


@cli.command()
@click.option("--group", type=str, default=None, help="Only list operations of this group")
def operations(group: str | None) -> None:
    """List registered operations by group."""
    registry = get_default_registry()
    groups = [group] if group else registry.groups()

    for name in groups:
        names = registry.names(group=name)
        if not names:
            raise click.ClickException(f"Unknown group: {name}")
        click.echo(f"{name}: {', '.join(names)}")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `exprkit` command is run
    or when using `python -m exprkit`.
    """
    cli()


if __name__ == "__main__":
    main()
