"""Unit tests for HttpxTransport — status policy, failure text, client ownership."""

from __future__ import annotations

import httpx
import pytest

from reportview.bridge.transport import HttpxTransport, Transport
from reportview.models.errors import TransportError


class TestHttpxTransport:
    """GET returns the body on 2xx and raises TransportError otherwise."""

    def test_satisfies_protocol(self):
        assert isinstance(HttpxTransport(client=httpx.AsyncClient()), Transport)

    @pytest.mark.asyncio
    async def test_ok_returns_body_bytes(self, make_mock_client, report_url):
        client = make_mock_client(lambda request: httpx.Response(200, content=b"hello"))
        async with HttpxTransport(client=client) as transport:
            assert await transport.get(report_url) == b"hello"

    @pytest.mark.asyncio
    async def test_request_goes_to_given_url(self, make_mock_client, log_url):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, text="")

        async with HttpxTransport(client=make_mock_client(handler)) as transport:
            await transport.get(log_url)
        assert seen == [log_url]

    @pytest.mark.asyncio
    async def test_404_raises_with_status(self, make_mock_client, report_url):
        client = make_mock_client(lambda request: httpx.Response(404))
        async with HttpxTransport(client=client) as transport:
            with pytest.raises(TransportError, match="HTTP 404"):
                await transport.get(report_url)

    @pytest.mark.asyncio
    async def test_server_error_names_url(self, make_mock_client, report_url):
        client = make_mock_client(lambda request: httpx.Response(500))
        async with HttpxTransport(client=client) as transport:
            with pytest.raises(TransportError) as exc_info:
                await transport.get(report_url)
        assert "500" in str(exc_info.value)
        assert report_url in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connect_error_keeps_type_name(self, make_mock_client, report_url):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with HttpxTransport(client=make_mock_client(handler)) as transport:
            with pytest.raises(TransportError) as exc_info:
                await transport.get(report_url)
        assert str(exc_info.value) == "ConnectError: connection refused"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_invalid_url_is_transport_error(self, make_mock_client):
        client = make_mock_client(lambda request: httpx.Response(200))
        async with HttpxTransport(client=client) as transport:
            with pytest.raises(TransportError, match="InvalidURL") as exc_info:
                await transport.get("http://[::1")
        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self, make_mock_client, report_url):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with HttpxTransport(client=make_mock_client(handler)) as transport:
            with pytest.raises(TransportError, match="ReadTimeout"):
                await transport.get(report_url)


class TestClientOwnership:
    @pytest.mark.asyncio
    async def test_passed_client_left_open(self, make_mock_client):
        client = make_mock_client(lambda request: httpx.Response(200))
        transport = HttpxTransport(client=client)
        await transport.aclose()
        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        transport = HttpxTransport(timeout_seconds=1.0)
        await transport.aclose()
        assert transport._client.is_closed is True
