"""Caller-controlled cancellation of in-flight requests."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from http_facade.exceptions import RequestCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancelToken:
    """
    Handle a caller can signal to abort the requests it was passed to.

    One token may guard several requests; signalling it aborts all of them
    and fails any later request using it straight away.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason: str | None = None

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str | None = None) -> None:
        if self._event.is_set():
            return
        self.reason = reason
        self._event.set()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token fires first."""

        if self.is_cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise RequestCancelledError(self.reason)

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            waiter.cancel()
            await asyncio.gather(task, waiter, return_exceptions=True)
            raise

        if task.done():
            waiter.cancel()
            return task.result()

        logger.debug("Cancelling in-flight request reason=%s", self.reason)
        task.cancel()
        # The aborted request's own outcome is superseded by the cancellation.
        await asyncio.gather(task, return_exceptions=True)
        raise RequestCancelledError(self.reason)
