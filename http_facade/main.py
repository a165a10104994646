"""Entrypoint building a configured :class:`HttpClient`."""

from __future__ import annotations

from typing import Any

from http_facade.config import Settings, get_settings
from http_facade.core import TokenProvider
from http_facade.logging import configure_logging
from http_facade.services import HttpClient


def create_client(
    token_provider: TokenProvider,
    settings: Settings | None = None,
    *,
    setup_logging: bool = True,
    **overrides: Any,
) -> HttpClient:
    """Build a client from settings; ``overrides`` go straight to :class:`HttpClient`."""

    settings = settings or get_settings()
    if setup_logging:
        configure_logging(settings.log_level)

    overrides.setdefault("timeouts", settings.timeouts())
    return HttpClient(settings.base_url, token_provider, **overrides)
