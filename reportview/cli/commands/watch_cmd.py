"""``reportview watch`` — follow report and log in Rich Live mode.

Arms both triggers on start and re-arms them every ``--interval`` seconds.
A response that arrives after a newer request has been made is discarded,
so the page never flips back to older data.
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from reportview.cli.commands._common import build_viewer, display_tz
from reportview.config import config
from reportview.monitor.renderer import MonitorRenderer

console = Console()


async def _watch(
    renderer: MonitorRenderer,
    report_url: str | None,
    log_url: str | None,
    refresh_hz: float,
    interval: float | None,
) -> None:
    async with build_viewer(report_url, log_url) as viewer:
        await renderer.render_live(viewer, refresh_hz=refresh_hz, rearm_every=interval)


def watch_cmd(
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
    interval: float = typer.Option(
        config.watch_interval_seconds,
        "--interval",
        "-i",
        help="Seconds between re-fetches.  0 fetches once.",
    ),
    refresh_hz: float = typer.Option(
        config.refresh_hz,
        "--refresh",
        "-r",
        help="Redraw rate in Hz.",
    ),
    utc: bool = typer.Option(
        False,
        "--utc",
        help="Show absolute times in UTC instead of the local offset.",
    ),
) -> None:
    """Follow the build report and log live (Ctrl+C to exit)."""
    console.print(
        f"[dim]Watching report and log, re-fetching every {interval}s. "
        "Press Ctrl+C to exit.[/dim]"
    )
    renderer = MonitorRenderer(console=console, tz=display_tz(utc))
    try:
        asyncio.run(
            _watch(renderer, report_url, log_url, refresh_hz, interval if interval > 0 else None)
        )
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")
