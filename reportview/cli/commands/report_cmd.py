"""``reportview report`` — fetch the latest build report once.

Arms the report trigger, waits for the fetch to resolve, and prints the
report panel.  Exits with code 1 when the fetch resolved to an error.
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
from reportview.monitor.projection import project
from reportview.monitor.renderer import MonitorRenderer

console = Console()


async def _fetch_report(url: str | None) -> ResourceState:
    async with build_viewer(url, None) as viewer:
        viewer.arm_report()
        await viewer.settle()
        return viewer.report.state


def report_cmd(
    url: str = typer.Option(
        None,
        "--url",
        "-u",
        help="Report endpoint (defaults to REPORTVIEW_REPORT_URL).",
    ),
    utc: bool = typer.Option(
        False,
        "--utc",
        help="Show absolute times in UTC instead of the local offset.",
    ),
) -> None:
    """Fetch and show the latest build report."""
    state = asyncio.run(_fetch_report(url))

    renderer = MonitorRenderer(console=console, tz=display_tz(utc))
    renderer.print_report_view(project(state), utc_now())

    if resolved_to_error(state):
        raise typer.Exit(code=1)
