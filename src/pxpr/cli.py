"""Command-line interface for pxpr.

Evaluates a single expression given as arguments, or runs an interactive
read/evaluate/print loop when no expression is given.
"""

import sys
from typing import Optional, TextIO, Tuple

import click
from pydantic import ValidationError

from pxpr import __version__
from pxpr.config import CalculatorSettings
from pxpr.expr import ExpressionLimits, ast_to_string, evaluate_expression, format_value
from pxpr.expr.errors import ExpressionError
from pxpr.logging import LOG_LEVELS, configure_logging, get_logger

QUIT_COMMANDS = (".quit", ".exit")

RESULT_PREFIX = "    = "

logger = get_logger(__name__)


def render_error(error: ExpressionError) -> str:
    """Renders an expression error for the terminal."""
    return f"error: {error.format_with_context()}"


def run_once(source: str, limits: ExpressionLimits, show_ast: bool = False) -> bool:
    """Evaluates one expression and prints the outcome. Returns success."""
    result = evaluate_expression(source, limits)
    if show_ast and result.ast is not None:
        click.echo(ast_to_string(result.ast))

    if result.success:
        click.echo(f"{RESULT_PREFIX}{format_value(result.value)}")
        return True

    click.echo(render_error(result.error), err=True)
    return False


def run_repl(
    limits: ExpressionLimits,
    prompt: str,
    show_ast: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Reads expressions line by line until end of input or a quit command."""
    stream = stream or sys.stdin
    evaluated = 0
    failed = 0

    while True:
        click.echo(prompt, nl=False)
        line = stream.readline()
        if not line:
            click.echo()
            break

        source = line.strip()
        if not source:
            continue
        if source in QUIT_COMMANDS:
            break

        evaluated += 1
        if not run_once(source, limits, show_ast):
            failed += 1

    logger.info("repl_finished", evaluated=evaluated, failed=failed)


@click.command(context_settings={"ignore_unknown_options": True})
@click.version_option(version=__version__, prog_name="pxpr")
@click.option(
    "--ast",
    "show_ast",
    is_flag=True,
    default=False,
    help="Print the parsed expression tree before the result",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Set log level (overrides PXPR_LOG_LEVEL)",
)
@click.argument("expression", nargs=-1, type=click.UNPROCESSED)
def cli(show_ast: bool, log_level: Optional[str], expression: Tuple[str, ...]) -> None:
    """Evaluate arithmetic and boolean expressions.

    With EXPRESSION, evaluate it once and exit. Without it, start an
    interactive prompt; type .quit or send end-of-input to leave.
    """
    try:
        settings = CalculatorSettings.from_env()
    except ValidationError as error:
        raise click.UsageError(f"Invalid configuration: {error}") from error

    configure_logging(log_level or settings.log_level)
    limits = settings.to_limits()

    if expression:
        if not run_once(" ".join(expression), limits, show_ast):
            sys.exit(1)
        return

    run_repl(limits, settings.prompt, show_ast)


def main() -> None:
    cli()
