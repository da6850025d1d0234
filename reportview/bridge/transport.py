"""HTTP transport — the only component that talks to the network.

``RemoteResource`` depends on the ``Transport`` protocol, not on httpx: a
transport exposes ``get(url) -> bytes`` and raises ``TransportError`` with a
diagnostic string for any transport-layer failure (unparseable URL,
connection refused, timeout, non-2xx status).  Status-code policy lives here.

``HttpxTransport`` is the production implementation on top of
``httpx.AsyncClient``.  Tests pass a client built on ``httpx.MockTransport``.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from reportview.models.errors import TransportError

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Anything that can GET a URL and hand back the body bytes."""

    async def get(self, url: str) -> bytes:
        """Return the response body, or raise ``TransportError``."""
        ...


class HttpxTransport:
    """``Transport`` backed by a shared ``httpx.AsyncClient``.

    Parameters
    ----------
    timeout_seconds:
        Total per-request timeout handed to httpx.
    follow_redirects:
        Whether 3xx responses are followed.
    client:
        An existing client to use.  When given, the caller owns it and
        ``aclose()`` leaves it open.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 10.0,
        follow_redirects: bool = True,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=follow_redirects,
        )

    async def get(self, url: str) -> bytes:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = (
                f"HTTP {exc.response.status_code} "
                f"{exc.response.reason_phrase} for {url}"
            )
            logger.warning("Transport: %s", detail)
            raise TransportError(detail) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            detail = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
            logger.warning("Transport: GET %s failed: %s", url, detail)
            raise TransportError(detail) from exc

        logger.debug(
            "Transport: GET %s -> %d (%d bytes)",
            url,
            response.status_code,
            len(response.content),
        )
        return response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
