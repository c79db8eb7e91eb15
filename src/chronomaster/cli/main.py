"""CLI entry point for chronomaster.

Invoked as::

    chronomaster [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m chronomaster.cli.main

Commands
--------
parse       Parse a date string and show the resolved instant
format      Parse a date string and render it with a pattern or style
relative    Describe a date relative to now ("5 minutes ago")
patterns    List the registered parse patterns in priority order
now         Show the trusted network time
version     Show version information
"""
from __future__ import annotations

import asyncio
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from chronomaster.facade import ChronoMaster
from chronomaster.result import Failure, Result, T

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def _unwrap_or_exit(result: Result[T]) -> T:
    """Return the success value, or print the error and exit with status 1."""
    if isinstance(result, Failure):
        err_console.print(f"[red]Error:[/red] {escape(result.message)}")
        sys.exit(1)
    return result.value


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=False)],
    )


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="chronomaster")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML file with input_zone, output_zone, locale and custom_parsers.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Parse date strings of unknown format and render them in any zone or locale."""
    import yaml

    from chronomaster.config import load_config
    from chronomaster.errors import ConfigurationError

    _configure_logging(verbose)
    if config_path is None:
        ctx.obj = ChronoMaster()
        return
    try:
        ctx.obj = ChronoMaster(load_config(config_path))
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {escape(config_path)}: {escape(str(exc))}")
        sys.exit(1)
    except (yaml.YAMLError, ConfigurationError) as exc:
        err_console.print(f"[red]Config error[/red] in {escape(config_path)}: {escape(str(exc))}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    import babel

    from chronomaster import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]chronomaster[/bold]", f"v{__version__}")
    table.add_row("Babel (CLDR)", babel.__version__)
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("text")
@click.option("--zone", "-z", default=None, help="Zone assumed when TEXT has no offset.")
@click.pass_obj
def parse_command(chrono: ChronoMaster, text: str, zone: str | None) -> None:
    """Parse a date string and show the resolved instant.

    TEXT may be epoch seconds or milliseconds, ISO-8601 or any registered
    pattern.

    Examples:

    \b
        chronomaster parse 1730389800
        chronomaster parse "31/10/2025 18:45:00" --zone Asia/Kolkata
    """
    value = _unwrap_or_exit(chrono.parse_date(text, zone))

    table = Table(show_header=False, box=None)
    if value.in_calendar_range:
        table.add_row("[bold]Local[/bold]", escape(value.isoformat()))
        table.add_row("[bold]UTC[/bold]", value.instant.isoformat())
    else:
        table.add_row("[bold]Local[/bold]", "[yellow]outside the years 1 to 9999[/yellow]")
    table.add_row("[bold]Epoch ms[/bold]", str(value.epoch_millis))
    console.print(table)


# ---------------------------------------------------------------------------
# format command
# ---------------------------------------------------------------------------


@cli.command(name="format")
@click.argument("text")
@click.option("--pattern", "-p", default=None, help="Output pattern, e.g. \"dd MMM yyyy HH:mm\".")
@click.option(
    "--style",
    "-s",
    type=click.Choice(["short", "medium", "long", "full"], case_sensitive=False),
    default=None,
    help="Predefined locale style instead of a pattern.",
)
@click.option("--input-zone", default=None, help="Zone assumed when TEXT has no offset.")
@click.option("--output-zone", default=None, help="Zone to render in.")
@click.option("--locale", "-l", default=None, help="Locale for text fields and styles, e.g. de_DE.")
@click.pass_obj
def format_command(
    chrono: ChronoMaster,
    text: str,
    pattern: str | None,
    style: str | None,
    input_zone: str | None,
    output_zone: str | None,
    locale: str | None,
) -> None:
    """Parse a date string and render it with a pattern or a style.

    Exactly one of --pattern and --style is required.

    Examples:

    \b
        chronomaster format 2025-10-31T12:30:00Z -p "dd MMM, yyyy 'at' hh:mm a"
        chronomaster format 1730389800 --style full --locale fr_FR --output-zone Europe/Paris
    """
    if (pattern is None) == (style is None):
        err_console.print("[red]Error:[/red] Pass exactly one of --pattern or --style.")
        sys.exit(1)

    if pattern is not None:
        result = chrono.format_date(text, pattern, input_zone, output_zone, locale)
    else:
        result = chrono.format_date_style(text, style, locale, output_zone, input_zone)

    console.print(escape(_unwrap_or_exit(result)))


# ---------------------------------------------------------------------------
# relative command
# ---------------------------------------------------------------------------


@cli.command(name="relative")
@click.argument("text")
@click.option("--now", "now_text", default=None, help="Reference date instead of the current time.")
@click.pass_obj
def relative_command(chrono: ChronoMaster, text: str, now_text: str | None) -> None:
    """Describe a date relative to now.

    Examples:

    \b
        chronomaster relative 2025-10-31T12:30:00Z
        chronomaster relative 1730389800 --now 2024-10-31T16:00:00Z
    """
    target = _unwrap_or_exit(chrono.parse_date(text))
    now = _unwrap_or_exit(chrono.parse_date(now_text)) if now_text is not None else None
    console.print(chrono.to_relative_time(target, now))


# ---------------------------------------------------------------------------
# patterns command
# ---------------------------------------------------------------------------


@cli.command(name="patterns")
@click.pass_obj
def patterns_command(chrono: ChronoMaster) -> None:
    """List the registered parse patterns in priority order.

    Epoch numbers and strict ISO-8601 with an offset are always tried
    before these patterns.
    """
    registry = chrono.config.registry
    table = Table(title=f"Parse patterns ({registry.locale})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Pattern")
    for index, spec in enumerate(registry.specs(), start=1):
        table.add_row(str(index), escape(spec))
    console.print(table)


# ---------------------------------------------------------------------------
# now command
# ---------------------------------------------------------------------------


@cli.command(name="now")
@click.option("--host", default=None, help="NTP server (default: pool.ntp.org).")
@click.option("--timeout", default=10.0, show_default=True, help="Seconds to wait for the server.")
@click.pass_obj
def now_command(chrono: ChronoMaster, host: str | None, timeout: float) -> None:
    """Show the trusted network time in the output zone."""
    from chronomaster.ntp import DEFAULT_NTP_HOST, NtpTimeSource

    source = NtpTimeSource(host or DEFAULT_NTP_HOST, timeout=timeout)
    value = _unwrap_or_exit(asyncio.run(chrono.get_true_time(source)))
    console.print(escape(value.isoformat()))


if __name__ == "__main__":
    cli()
