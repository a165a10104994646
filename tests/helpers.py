"""Stubs shared by the test modules."""

from __future__ import annotations

from typing import Any

BASE_URL = "https://api.test/v1"


class RecordingLogger:
    def __init__(self) -> None:
        self.infos: list[str] = []
        self.errors: list[str] = []

    def info(self, msg: str, *args: Any) -> None:
        self.infos.append(msg % args)

    def error(self, msg: str, *args: Any) -> None:
        self.errors.append(msg % args)


class StaticTokenProvider:
    def __init__(self, token: str | None) -> None:
        self.token = token
        self.calls = 0

    async def __call__(self) -> str | None:
        self.calls += 1
        return self.token
