"""``reportview log`` — fetch the raw build log once and print it verbatim."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from reportview.cli.commands._common import build_viewer, resolved_to_error
from reportview.models.resource import ResourceState
from reportview.monitor.projection import project
from reportview.monitor.renderer import MonitorRenderer

console = Console()


async def _fetch_log(url: str | None) -> ResourceState:
    async with build_viewer(None, url) as viewer:
        viewer.arm_log()
        await viewer.settle()
        return viewer.log.state


def log_cmd(
    url: str = typer.Option(
        None,
        "--url",
        "-u",
        "--log-url",
        "-l",
        help="Log endpoint (defaults to REPORTVIEW_LOG_URL).",
    ),
) -> None:
    """Fetch and show the raw build log."""
    state = asyncio.run(_fetch_log(url))

    MonitorRenderer(console=console).print_log_view(project(state))

    if resolved_to_error(state):
        raise typer.Exit(code=1)
