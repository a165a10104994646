"""Tests for bearer token injection."""

from __future__ import annotations

import httpx
import pytest

from http_facade.core.auth import BearerAuthHook

from tests.helpers import StaticTokenProvider


def make_request(headers: dict[str, str] | None = None) -> httpx.Request:
    return httpx.Request("GET", "https://api.test/v1/items", headers=headers)


@pytest.mark.asyncio
async def test_token_is_attached_as_bearer_header() -> None:
    hook = BearerAuthHook(StaticTokenProvider("abc"))
    request = make_request()

    await hook(request)

    assert request.headers["Authorization"] == "Bearer abc"


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, ""])
async def test_missing_token_leaves_request_untouched(token: str | None) -> None:
    hook = BearerAuthHook(StaticTokenProvider(token))
    request = make_request()

    await hook(request)

    assert "Authorization" not in request.headers


@pytest.mark.asyncio
async def test_existing_authorization_header_is_overwritten() -> None:
    hook = BearerAuthHook(StaticTokenProvider("fresh"))
    request = make_request({"Authorization": "Basic b2xkOm9sZA=="})

    await hook(request)

    assert request.headers.get_list("Authorization") == ["Bearer fresh"]


@pytest.mark.asyncio
async def test_provider_is_called_for_every_request() -> None:
    provider = StaticTokenProvider("abc")
    hook = BearerAuthHook(provider)

    for _ in range(3):
        await hook(make_request())

    assert provider.calls == 3


@pytest.mark.asyncio
async def test_provider_errors_propagate() -> None:
    async def failing_provider() -> str | None:
        raise RuntimeError("token store unavailable")

    with pytest.raises(RuntimeError, match="token store unavailable"):
        await BearerAuthHook(failing_provider)(make_request())
