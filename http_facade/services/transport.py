"""Platform-appropriate transport selection."""

from __future__ import annotations

import logging
import sys

import httpx

from http_facade.exceptions import UnsupportedPlatformError

logger = logging.getLogger(__name__)

# Headers the browser manages itself; Fetch rejects or ignores them.
_FORBIDDEN_FETCH_HEADERS = frozenset({"host", "content-length", "connection", "accept-encoding"})


class FetchTransport(httpx.AsyncBaseTransport):
    """Sends requests through the browser Fetch API when running under Pyodide."""

    def __init__(self, *, credentials: str = "include") -> None:
        self.credentials = credentials

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        from pyodide.http import pyfetch  # only importable inside Pyodide

        headers = {
            key: value
            for key, value in request.headers.items()
            if key.lower() not in _FORBIDDEN_FETCH_HEADERS
        }
        body = await request.aread()
        try:
            response = await pyfetch(
                str(request.url),
                method=request.method,
                headers=headers,
                body=body or None,
                credentials=self.credentials,
            )
        except OSError as exc:
            raise httpx.ConnectError(str(exc), request=request) from exc

        content = await response.bytes()
        # The browser has already decoded the payload.
        response_headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() != "content-encoding"
        }
        return httpx.Response(
            response.status,
            headers=response_headers,
            content=content,
            request=request,
        )


def select_transport(platform: str | None = None) -> httpx.AsyncBaseTransport:
    """Return the transport for ``platform`` (defaults to ``sys.platform``)."""

    platform = platform or sys.platform
    if platform == "emscripten":
        logger.debug("Using browser Fetch transport")
        return FetchTransport()
    if platform == "wasi":
        raise UnsupportedPlatformError("Cannot create a client adapter for this platform.")
    return httpx.AsyncHTTPTransport()
