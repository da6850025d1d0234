"""Main Typer application — imports and registers all CLI commands.

Entry point: ``reportview`` (configured via pyproject.toml console_scripts).

Commands: report, log, show, watch, config.
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from reportview.cli.commands.log_cmd import log_cmd
from reportview.cli.commands.report_cmd import report_cmd
from reportview.cli.commands.show_cmd import show_cmd
from reportview.cli.commands.watch_cmd import watch_cmd
from reportview.config import config

app = typer.Typer(
    name="reportview",
    help="reportview: latest build report and log, in the terminal.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _configure(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to REPORTVIEW_LOG_LEVEL).",
    ),
) -> None:
    """Configure logging once for every command."""
    level = (log_level or config.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=config.debug, show_path=False)],
    )


# Register subcommands
app.command(name="report", help="Fetch and show the latest build report.")(report_cmd)
app.command(name="log", help="Fetch and show the raw build log.")(log_cmd)
app.command(name="show", help="Fetch report and log and show the full page.")(show_cmd)
app.command(name="watch", help="Follow report and log live.")(watch_cmd)


@app.command(name="config", help="Show the effective configuration.")
def config_cmd() -> None:
    """Print every setting and its effective value."""
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    console = Console()
    table = Table(title="reportview configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for name, value in config.model_dump().items():
        table.add_row(name, "[dim]-[/dim]" if value is None else escape(str(value)))

    console.print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
