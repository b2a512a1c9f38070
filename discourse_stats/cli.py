"""
Discourse Stats CLI.

Fetches /site/statistics.json from a Discourse forum once, then either
prints every numeric statistic (--all), prints one statistic (--key), or
opens an interactive menu.

Data lines ("name<TAB>value") go to stdout. Diagnostics, logs, menu text
and prompts go to stderr.

Exit codes:
    0  success, including quitting the interactive menu
    1  usage error, configuration error, fetch or parse failure
    2  --key names a statistic that is not in the document
"""

import click
import structlog

from discourse_stats import __version__
from discourse_stats.client import fetch_statistics, normalize_base_url
from discourse_stats.core.config import get_settings
from discourse_stats.core.exceptions import (
    EXIT_FAILURE,
    StatsError,
    UsageError,
    exit_code_for,
)
from discourse_stats.core.logging import get_logger, setup_logging
from discourse_stats.formatting import print_all, print_one
from discourse_stats.shell import run_shell
from discourse_stats.statistics import StatisticsDocument, parse_statistics

logger = get_logger(__name__)


def _usage_error(message: str, ctx: click.Context | None = None) -> click.UsageError:
    """click usage error that exits with the generic failure code."""
    error = click.UsageError(message, ctx=ctx)
    error.exit_code = EXIT_FAILURE
    return error


class StatsCommand(click.Command):
    """Command whose usage errors exit with 1 instead of click's default 2."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if not args:
            click.echo(ctx.get_help(), err=True)
            ctx.exit(EXIT_FAILURE)
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = EXIT_FAILURE
            raise


def _resolve_log_level(verbose: bool, debug: bool) -> str | None:
    """Flag-selected log level; None defers to environment and logging.yaml."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return get_settings().log_level


@click.command(cls=StatsCommand, context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("base_url", metavar="BASE_URL")
@click.option(
    "--all", "-a", "show_all",
    is_flag=True,
    help="Print all numeric statistics (topics_count, posts_count, etc.).",
)
@click.option(
    "--key", "-k",
    metavar="KEY",
    default=None,
    help="Print the value of a single statistic (e.g. topics_count).",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    metavar="SECONDS",
    help="Request timeout in seconds (default from application.yaml).",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.version_option(__version__, prog_name="discourse-stats")
def main(
    base_url: str,
    show_all: bool,
    key: str | None,
    timeout: float | None,
    verbose: bool,
    debug: bool,
) -> None:
    """
    Fetch and display Discourse forum statistics.

    BASE_URL is the root of the forum (e.g. https://forum.example.com).
    https:// is assumed when no scheme is given.

    Without a flag, an interactive menu lets you pick statistics until you
    type q. Use 'a' in the menu to show all statistics.

    \b
    Examples:
        discourse-stats https://forum.example.com --all
        discourse-stats forum.example.com --key topics_count
        discourse-stats forum.example.com
    """
    ctx = click.get_current_context()

    if show_all and key is not None:
        raise _usage_error("--all and --key cannot be used together.", ctx)

    try:
        setup_logging(level=_resolve_log_level(verbose, debug))
        structlog.contextvars.bind_contextvars(source="cli")

        url = normalize_base_url(base_url)
        mode = "all" if show_all else "key" if key is not None else "interactive"
        logger.debug("CLI invoked", base_url=url, mode=mode, timeout=timeout)

        document = parse_statistics(fetch_statistics(url, timeout=timeout))
        _dispatch(document, show_all, key)

    except UsageError as e:
        raise _usage_error(e.message, ctx) from e
    except StatsError as e:
        _fail(ctx, e)


def _dispatch(document: StatisticsDocument, show_all: bool, key: str | None) -> None:
    """Run exactly one output mode against the fetched document."""
    if show_all:
        count = print_all(document)
        logger.info("Printed all numeric statistics", count=count)
    elif key is not None:
        print_one(document, key)
    else:
        run_shell(document)


def _fail(ctx: click.Context, error: StatsError) -> None:
    """Report an application error on stderr and exit with its code."""
    exit_code = exit_code_for(error)
    logger.debug("Command failed", code=error.code, exit_code=exit_code)
    click.echo(click.style(f"Error: {error.message}", fg="red"), err=True)
    ctx.exit(exit_code)


if __name__ == "__main__":
    main(prog_name="discourse-stats")
