"""Shared test fixtures for reportview."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest

from reportview.core.trigger import TriggerCell
from reportview.models.errors import TransportError

REPORT_URL = "http://reports.test/report-latest"
LOG_URL = "http://reports.test/log-latest"


# ---------------------------------------------------------------------------
# Gated transport — the test decides when, and in which order, responses land
# ---------------------------------------------------------------------------


class GatedCall:
    """One GET waiting for the test to respond or fail it."""

    def __init__(self, url: str) -> None:
        self.url = url
        self.released = asyncio.Event()
        self.body = b""
        self.error: str | None = None

    def respond(self, body: bytes) -> None:
        self.body = body
        self.released.set()

    def fail(self, detail: str) -> None:
        self.error = detail
        self.released.set()


class GatedTransport:
    """``Transport`` whose calls block until released by the test."""

    def __init__(self) -> None:
        self.calls: list[GatedCall] = []

    async def get(self, url: str) -> bytes:
        call = GatedCall(url)
        self.calls.append(call)
        await call.released.wait()
        if call.error is not None:
            raise TransportError(call.error)
        return call.body


@pytest.fixture
def gated_transport() -> GatedTransport:
    """Provide a transport whose responses are released manually."""
    return GatedTransport()


@pytest.fixture
def drain() -> Callable[[], Awaitable[None]]:
    """Provide a coroutine that lets scheduled tasks run until they block."""

    async def _drain() -> None:
        for _ in range(10):
            await asyncio.sleep(0)

    return _drain


# ---------------------------------------------------------------------------
# Report payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def make_report_payload() -> Callable[..., dict[str, Any]]:
    """Factory fixture: a report JSON object with sensible defaults."""

    def _factory(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "artifacts": "https://artifacts.test/builds/42/",
            "message": "Merge branch 'fix-login'",
            "ref": "refs/heads/main",
            "start": {"time": 1_700_000_000},
            "finish": {"time": 1_700_003_661, "ok": True},
        }
        payload.update(overrides)
        return payload

    return _factory


@pytest.fixture
def report_body(make_report_payload: Callable[..., dict[str, Any]]) -> bytes:
    """Convenience: a valid finished report as response bytes."""
    return json.dumps(make_report_payload()).encode()


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


@pytest.fixture
def make_mock_client() -> Callable[..., httpx.AsyncClient]:
    """Factory fixture: an AsyncClient answering from a handler function."""

    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _factory


@pytest.fixture
def endpoint_handler(report_body: bytes) -> Callable[[httpx.Request], httpx.Response]:
    """A handler serving a valid report and a plain-text log."""

    def _handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == REPORT_URL:
            return httpx.Response(200, content=report_body)
        if str(request.url) == LOG_URL:
            return httpx.Response(200, text="step 1/2 ok\nstep 2/2 ok\n")
        return httpx.Response(404)

    return _handler


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------


@pytest.fixture
def trigger() -> TriggerCell:
    """Provide a fresh, disarmed TriggerCell."""
    return TriggerCell("test")


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed current instant: 1_700_007_200, two hours after the default start."""
    return datetime(2023, 11, 15, 0, 13, 20, tzinfo=timezone.utc)


@pytest.fixture
def report_url() -> str:
    return REPORT_URL


@pytest.fixture
def log_url() -> str:
    return LOG_URL
