"""``reportview show`` — fetch report and log together and print the page.

Both triggers are armed at once; the two fetches run concurrently and the
page is printed after both have resolved.
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from reportview.cli.commands._common import (
    build_viewer,
    display_tz,
    resolved_to_error,
    utc_now,
)
from reportview.models.resource import ResourceState
from reportview.monitor.projection import PageSnapshot
from reportview.monitor.renderer import MonitorRenderer

console = Console()


async def _fetch_page(
    report_url: str | None, log_url: str | None
) -> tuple[PageSnapshot, list[ResourceState]]:
    async with build_viewer(report_url, log_url) as viewer:
        viewer.arm_all()
        await viewer.settle()
        return viewer.snapshot(utc_now()), [viewer.report.state, viewer.log.state]


def show_cmd(
    report_url: str = typer.Option(
        None,
        "--url",
        "-u",
        help="Report endpoint (defaults to REPORTVIEW_REPORT_URL).",
    ),
    log_url: str = typer.Option(
        None,
        "--log-url",
        "-l",
        help="Log endpoint (defaults to REPORTVIEW_LOG_URL).",
    ),
    utc: bool = typer.Option(
        False,
        "--utc",
        help="Show absolute times in UTC instead of the local offset.",
    ),
) -> None:
    """Fetch the build report and log and show them side by side."""
    snapshot, states = asyncio.run(_fetch_page(report_url, log_url))

    MonitorRenderer(console=console, tz=display_tz(utc)).print_page(snapshot)

    if any(resolved_to_error(state) for state in states):
        raise typer.Exit(code=1)
