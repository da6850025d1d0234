"""Integration test: StatusViewer end to end.

Wires both resources to one HTTP transport over an in-process endpoint and
walks the page through arm, resolve, re-arm and reset, including a slow
older response that must never overwrite a newer one.
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from reportview.bridge.transport import HttpxTransport
from reportview.core.viewer import StatusViewer
from reportview.models.errors import NetworkError
from reportview.models.resource import NotTriggered, Ok, Pending, Resolved
from reportview.monitor.projection import ViewKind


@pytest.fixture
def viewer_factory(make_mock_client, report_url, log_url):
    def _factory(handler) -> StatusViewer:
        transport = HttpxTransport(client=make_mock_client(handler))
        return StatusViewer(transport=transport, report_url=report_url, log_url=log_url)

    return _factory


class TestViewerFlow:
    @pytest.mark.asyncio
    async def test_page_before_any_request(self, viewer_factory, endpoint_handler, fixed_now):
        async with viewer_factory(endpoint_handler) as viewer:
            snapshot = viewer.snapshot(fixed_now)
            assert snapshot.report.kind == ViewKind.NEUTRAL
            assert snapshot.log.kind == ViewKind.NEUTRAL
            assert snapshot.taken_at == fixed_now

    @pytest.mark.asyncio
    async def test_arm_all_resolves_both(self, viewer_factory, endpoint_handler, fixed_now):
        async with viewer_factory(endpoint_handler) as viewer:
            assert viewer.arm_all() == (1, 1)
            snapshot = viewer.snapshot(fixed_now)
            assert snapshot.report.kind == ViewKind.LOADING
            assert snapshot.log.kind == ViewKind.LOADING

            await viewer.settle()
            snapshot = viewer.snapshot(fixed_now)
            assert snapshot.report.kind == ViewKind.SUCCESS
            assert snapshot.report.value.ref == "refs/heads/main"
            assert snapshot.log.kind == ViewKind.SUCCESS
            assert snapshot.log.value == "step 1/2 ok\nstep 2/2 ok\n"

    @pytest.mark.asyncio
    async def test_resources_are_independent(self, viewer_factory, endpoint_handler):
        async with viewer_factory(endpoint_handler) as viewer:
            viewer.arm_log()
            await viewer.settle()
            assert viewer.report.state == NotTriggered()
            assert isinstance(viewer.log.state, Resolved)

            viewer.arm_report()
            viewer.arm_report()
            await viewer.settle()
            assert viewer.report.state.generation == 2
            assert viewer.log.state.generation == 1

    @pytest.mark.asyncio
    async def test_one_endpoint_failing(self, viewer_factory, report_body, report_url):
        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == report_url:
                return httpx.Response(200, content=report_body)
            return httpx.Response(502)

        async with viewer_factory(handler) as viewer:
            viewer.arm_all()
            await viewer.settle()
            assert isinstance(viewer.report.state.result, Ok)
            error = viewer.log.state.result.error
            assert isinstance(error, NetworkError)
            assert "HTTP 502" in error.detail

    @pytest.mark.asyncio
    async def test_reset_returns_page_to_neutral(self, viewer_factory, endpoint_handler, fixed_now):
        async with viewer_factory(endpoint_handler) as viewer:
            viewer.arm_all()
            await viewer.settle()
            viewer.reset_report()
            viewer.reset_log()
            snapshot = viewer.snapshot(fixed_now)
            assert snapshot.report.kind == ViewKind.NEUTRAL
            assert snapshot.log.kind == ViewKind.NEUTRAL


class TestLatestWinsOverHttp:
    """A slow first response lands after a fast second one and is discarded."""

    @pytest.mark.asyncio
    async def test_slow_stale_response_is_discarded(
        self, make_report_payload, report_url, log_url, make_mock_client
    ):
        first_gate = asyncio.Event()
        requests_seen = 0

        async def handler(request: httpx.Request) -> httpx.Response:
            nonlocal requests_seen
            requests_seen += 1
            if requests_seen == 1:
                await first_gate.wait()
                payload = make_report_payload(ref="refs/heads/slow-first")
            else:
                payload = make_report_payload(ref="refs/heads/fast-second")
            return httpx.Response(200, content=json.dumps(payload).encode())

        transport = HttpxTransport(client=make_mock_client(handler))
        async with StatusViewer(
            transport=transport, report_url=report_url, log_url=log_url
        ) as viewer:
            viewer.arm_report()
            viewer.arm_report()
            assert viewer.report.state == Pending(generation=2)

            for _ in range(200):
                if isinstance(viewer.report.state, Resolved):
                    break
                await asyncio.sleep(0)
            assert viewer.report.state.generation == 2
            assert viewer.report.state.result.value.ref == "refs/heads/fast-second"

            first_gate.set()
            await viewer.settle()
            assert viewer.report.state.generation == 2
            assert viewer.report.state.result.value.ref == "refs/heads/fast-second"
        await transport.aclose()
