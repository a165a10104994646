"""Bearer token injection for outgoing requests."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

import httpx

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Awaitable[str | None]]


class BearerAuthHook:
    """Async request hook adding ``Authorization: Bearer <token>``."""

    def __init__(self, token_provider: TokenProvider) -> None:
        self.token_provider = token_provider

    async def __call__(self, request: httpx.Request) -> None:
        token = await self.token_provider()
        if not token:
            logger.debug("No token available for %s %s", request.method, request.url.path)
            return
        request.headers["Authorization"] = f"Bearer {token}"
