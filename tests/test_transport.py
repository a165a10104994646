"""Tests for platform transport selection."""

from __future__ import annotations

import httpx
import pytest

from http_facade.exceptions import UnsupportedPlatformError
from http_facade.services import FetchTransport, HttpClient, select_transport
from tests.helpers import BASE_URL, StaticTokenProvider


@pytest.mark.parametrize("platform", ["linux", "darwin", "win32"])
def test_native_platforms_use_socket_transport(platform: str) -> None:
    assert isinstance(select_transport(platform), httpx.AsyncHTTPTransport)


def test_browser_platform_uses_fetch_transport() -> None:
    transport = select_transport("emscripten")

    assert isinstance(transport, FetchTransport)
    assert transport.credentials == "include"


def test_unsupported_platform_is_rejected() -> None:
    with pytest.raises(UnsupportedPlatformError, match="Cannot create a client adapter"):
        select_transport("wasi")


def test_client_fails_fast_on_unsupported_platform() -> None:
    with pytest.raises(UnsupportedPlatformError):
        HttpClient(BASE_URL, StaticTokenProvider(None), platform="wasi")


def test_current_platform_is_used_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.platform", "emscripten")

    assert isinstance(select_transport(), FetchTransport)
