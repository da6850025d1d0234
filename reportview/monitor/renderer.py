"""Rich terminal renderer for the status page.

Turns ``View`` and ``PageSnapshot`` into Rich renderables, with one panel
for the build report and one for the raw log, and an optional continuous
``Rich.Live`` mode.

Color scheme
------------
- dim       : not requested
- yellow    : loading
- green     : loaded / build passed
- red       : error / build failed
- magenta   : not requested yet (sentinel result)
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone, tzinfo
from typing import TYPE_CHECKING

from rich.console import Console, Group
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from reportview.core.formatting import format_duration, format_time
from reportview.models.errors import ErrorKind
from reportview.models.report import BuildStatus, Report
from reportview.monitor.projection import (
    PageSnapshot,
    PresentationBinding,
    View,
    ViewKind,
)

if TYPE_CHECKING:
    from reportview.core.viewer import StatusViewer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Kind -> Rich style mapping
# ---------------------------------------------------------------------------

_VIEW_STYLES: dict[ViewKind, str] = {
    ViewKind.NEUTRAL: "dim",
    ViewKind.LOADING: "yellow",
    ViewKind.SUCCESS: "green",
    ViewKind.ERROR: "red",
}

_ERROR_STYLES: dict[ErrorKind, str] = {
    ErrorKind.NETWORK: "bold red",
    ErrorKind.DECODE: "bold red",
    ErrorKind.NOT_TRIGGERED_YET: "magenta",
}

_STATUS_ICONS: dict[BuildStatus, str] = {
    BuildStatus.RUNNING: "[yellow]RUNNING[/yellow]",
    BuildStatus.PASSED: "[green]PASSED[/green]",
    BuildStatus.FAILED: "[bold red]FAILED[/bold red]",
}


class MonitorRenderer:
    """Renders resource views as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    tz:
        Offset absolute timestamps are shown in.  ``None`` uses the system
        local offset.
    """

    def __init__(self, console: Console | None = None, tz: tzinfo | None = None) -> None:
        self.console = console or Console()
        self.tz = tz

    # ------------------------------------------------------------------
    # Placeholder and error bodies
    # ------------------------------------------------------------------

    @staticmethod
    def _placeholder(view: View, noun: str) -> Text:
        if view.kind == ViewKind.NEUTRAL:
            return Text(f"{noun.capitalize()} not requested.", style="dim")
        return Text(f"Loading {noun} (request #{view.generation})...", style="yellow")

    @staticmethod
    def _error_body(view: View) -> Text:
        error = view.error
        if error is None:
            return Text("Unknown error", style="bold red")
        return Text(error.describe(), style=_ERROR_STYLES[error.kind])

    def _panel(self, body, view: View, title: str) -> Panel:
        return Panel(
            body,
            title=f"[bold]{title}[/bold]",
            subtitle=view.kind.value,
            border_style=_VIEW_STYLES[view.kind],
            padding=(1, 2),
        )

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------

    def render_report_view(self, view: View, now: datetime) -> Panel:
        """Render the report resource's view against ``now``."""
        if view.kind == ViewKind.SUCCESS:
            body = self._build_report_table(view.value, now)
        elif view.kind == ViewKind.ERROR:
            body = self._error_body(view)
        else:
            body = self._placeholder(view, "report")
        return self._panel(body, view, "Build Report")

    def _build_report_table(self, report: Report, now: datetime) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold cyan", justify="right")
        table.add_column()

        table.add_row("Ref", escape(report.ref))
        table.add_row("Message", escape(report.message))
        table.add_row("Artifacts", escape(report.artifacts))
        table.add_row("Status", _STATUS_ICONS[report.status])
        table.add_row("Started", self._time_cell(report.start.time, now))

        if report.finish is None:
            table.add_row("Finished", "[dim]-[/dim]")
            table.add_row("Duration", "[dim]-[/dim]")
            return table

        table.add_row("Finished", self._time_cell(report.finish.time, now))
        duration = format_duration(report.elapsed_seconds or 0)
        if duration.is_valid:
            table.add_row("Duration", duration.human)
        else:
            table.add_row("Duration", f"[bold red]{duration.human}[/bold red]")
        return table

    def _time_cell(self, unix_seconds: int, now: datetime) -> str:
        display = format_time(unix_seconds, now, self.tz)
        if not display.iso:
            return f"[bold red]{display.human}[/bold red] [dim]({display.raw})[/dim]"
        return f"{display.human} [dim]{display.iso} ({display.raw})[/dim]"

    # ------------------------------------------------------------------
    # Log
    # ------------------------------------------------------------------

    def render_log_view(self, view: View) -> Panel:
        """Render the log resource's view; loaded text is shown verbatim."""
        if view.kind == ViewKind.SUCCESS:
            body = Text(view.value or "")
        elif view.kind == ViewKind.ERROR:
            body = self._error_body(view)
        else:
            body = self._placeholder(view, "log")
        return self._panel(body, view, "Build Log")

    # ------------------------------------------------------------------
    # Page
    # ------------------------------------------------------------------

    def render_page(self, snapshot: PageSnapshot) -> Panel:
        """Render both views as one page."""
        grid = Table.grid(expand=True)
        grid.add_column(ratio=1)
        grid.add_column(ratio=1)
        grid.add_row(
            self.render_report_view(snapshot.report, snapshot.taken_at),
            self.render_log_view(snapshot.log),
        )
        local = snapshot.taken_at.astimezone(self.tz) if self.tz else snapshot.taken_at.astimezone()
        return Panel(
            Group(grid),
            title="[bold]reportview[/bold]",
            subtitle=f"Rendered at: {local.strftime('%Y-%m-%d %H:%M:%S %z')}",
            border_style="blue",
        )

    def print_page(self, snapshot: PageSnapshot) -> None:
        self.console.print(self.render_page(snapshot))

    def print_report_view(self, view: View, now: datetime) -> None:
        self.console.print(self.render_report_view(view, now))

    def print_log_view(self, view: View) -> None:
        self.console.print(self.render_log_view(view))

    # ------------------------------------------------------------------
    # Continuous live rendering
    # ------------------------------------------------------------------

    async def render_live(
        self,
        viewer: StatusViewer,
        *,
        refresh_hz: float = 1.0,
        rearm_every: float | None = None,
    ) -> None:
        """Continuously render the page in Rich Live mode.

        Both resources are armed on entry and re-armed every ``rearm_every``
        seconds when given.  Views are followed through
        ``PresentationBinding``, so the page redraws as soon as a resource
        changes and also on every refresh tick (relative times move).
        Runs until cancelled.

        Parameters
        ----------
        viewer:
            The viewer whose resources are shown.
        refresh_hz:
            Redraw rate in Hz.  Default is 1.0.
        rearm_every:
            Seconds between automatic re-arms.  ``None`` arms once.
        """
        interval = 1.0 / max(refresh_hz, 0.1)
        loop = asyncio.get_running_loop()

        with Live(console=self.console, refresh_per_second=refresh_hz, transient=False) as live:
            bindings: dict[str, PresentationBinding] = {}

            def _redraw(_view: View | None = None) -> None:
                if len(bindings) < 2:
                    return
                snapshot = PageSnapshot(
                    report=bindings["report"].view,
                    log=bindings["log"].view,
                    taken_at=datetime.now(timezone.utc),
                )
                live.update(self.render_page(snapshot))

            bindings["report"] = PresentationBinding(viewer.report, _redraw)
            bindings["log"] = PresentationBinding(viewer.log, _redraw)
            _redraw()

            try:
                viewer.arm_all()
                last_armed = loop.time()
                while True:
                    await asyncio.sleep(interval)
                    if rearm_every is not None and loop.time() - last_armed >= rearm_every:
                        logger.debug("MonitorRenderer: re-arming both resources")
                        viewer.arm_all()
                        last_armed = loop.time()
                    _redraw()
            finally:
                for binding in bindings.values():
                    binding.close()
