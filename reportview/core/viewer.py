"""StatusViewer — the page's two resources wired to one transport.

The report resource decodes JSON into ``Report``; the log resource keeps
the raw text.  Each has its own ``TriggerCell``, so the two controls of the
page arm independently.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any

from reportview.bridge.transport import HttpxTransport, Transport
from reportview.config import ViewerConfig
from reportview.core.decoders import decode_report, decode_text
from reportview.core.resource import RemoteResource
from reportview.core.trigger import TriggerCell
from reportview.models.report import Report
from reportview.monitor.projection import PageSnapshot, project

logger = logging.getLogger(__name__)


class StatusViewer:
    """Report and log resources plus the controls that arm them.

    Parameters
    ----------
    config:
        Viewer configuration.  Defaults to a fresh ``ViewerConfig()``.
    transport:
        Transport to share between both resources.  When omitted an
        ``HttpxTransport`` is built from ``config`` and closed by ``aclose()``.
    report_url, log_url:
        Override the endpoints from ``config``.
    """

    def __init__(
        self,
        config: ViewerConfig | None = None,
        *,
        transport: Transport | None = None,
        report_url: str | None = None,
        log_url: str | None = None,
    ) -> None:
        self._config = config or ViewerConfig()
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport(
            timeout_seconds=self._config.request_timeout_seconds,
            follow_redirects=self._config.follow_redirects,
        )

        self.report_trigger = TriggerCell("report")
        self.log_trigger = TriggerCell("log")
        self.report: RemoteResource[Report] = RemoteResource(
            self.report_trigger,
            self._transport,
            report_url or self._config.report_url,
            decode_report,
        )
        self.log: RemoteResource[str] = RemoteResource(
            self.log_trigger,
            self._transport,
            log_url or self._config.log_url,
            decode_text,
        )

    @property
    def config(self) -> ViewerConfig:
        return self._config

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def arm_report(self) -> int:
        return self.report_trigger.arm()

    def arm_log(self) -> int:
        return self.log_trigger.arm()

    def arm_all(self) -> tuple[int, int]:
        return self.arm_report(), self.arm_log()

    def reset_report(self) -> None:
        self.report_trigger.reset()

    def reset_log(self) -> None:
        self.log_trigger.reset()

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def snapshot(self, now: datetime) -> PageSnapshot:
        """Project both resources' latest states, stamped with ``now``."""
        return PageSnapshot(
            report=project(self.report.state),
            log=project(self.log.state),
            taken_at=now,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def settle(self) -> None:
        """Wait for every in-flight fetch of both resources."""
        await asyncio.gather(self.report.settle(), self.log.settle())

    async def aclose(self) -> None:
        await self.report.aclose()
        await self.log.aclose()
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()
        logger.debug("StatusViewer: closed")

    async def __aenter__(self) -> StatusViewer:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
