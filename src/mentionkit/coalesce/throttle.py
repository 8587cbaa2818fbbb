"""Throttle with a shared result.

Wraps an expensive zero-argument coroutine function (the full workspace file
scan). One physical invocation per window; every call inside the window
gets the in-flight or last completed result.

The scan runs in a detached task. Cancelling a caller stops its wait and
nothing else; later callers in the same window still share the result.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from mentionkit.coalesce.detached import spawn

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Throttle(Generic[T]):
    """At most one ``producer()`` run per ``window`` seconds.

    A run that raised is not reused: the next call starts a fresh one even
    inside the window.

    Example:
        >>> find_files = Throttle(workspace.find_files, window=10.0)
        >>> uris = await find_files()
    """

    def __init__(
        self,
        producer: Callable[[], Awaitable[T]],
        window: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._producer = producer
        self._window = window
        self._clock = clock
        self._task: asyncio.Task[T] | None = None
        self._started_at = 0.0
        self.invocations = 0
        """Physical producer runs so far."""

    @property
    def window(self) -> float:
        return self._window

    def _reusable_task(self, now: float) -> asyncio.Task[T] | None:
        """The current run, if it is inside the window and has not failed."""
        task = self._task
        if task is None or now - self._started_at >= self._window:
            return None
        if task.done() and (task.cancelled() or task.exception() is not None):
            return None
        return task

    async def __call__(self) -> T:
        now = self._clock()
        task = self._reusable_task(now)
        if task is None:
            self._started_at = now
            self.invocations += 1
            logger.debug("Throttle window opened, running %r", self._producer)
            task = self._task = spawn(self._producer(), name="mentionkit-throttle")
        return await asyncio.shield(task)
