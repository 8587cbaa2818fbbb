"""Debounce with latest-wins arguments.

Used in front of remote file/symbol search so that typing a query does not
send one request per keystroke. Calls arriving while a call is pending join
it and restart the quiet timer; once the window is quiet the producer runs
once with the most recent arguments and every joined caller receives that
single value (or exception).

An already-sent request is never cancelled. A call arriving after the timer
fired starts a new pending call.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Final, Generic, Literal, TypeVar

from mentionkit.coalesce.detached import spawn

logger = logging.getLogger(__name__)

T = TypeVar("T")

SKIPPED: Final[Literal["skipped"]] = "skipped"
"""Result given to callers whose pending call was dropped by ``cancel()``.

Distinct from any real result, including an empty one.
"""


@dataclass(slots=True)
class _PendingCall:
    future: asyncio.Future
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    timer: asyncio.TimerHandle | None = None
    callers: int = 0


def _mark_retrieved(future: asyncio.Future) -> None:
    # Every caller may have been cancelled; avoid "exception never retrieved"
    if not future.cancelled():
        future.exception()


class Debounce(Generic[T]):
    """Run ``producer(*args)`` once per burst of calls, with the last arguments.

    Example:
        >>> search = Debounce(client.get_remote_files, wait=0.5)
        >>> a, b = await asyncio.gather(search(repos, "fo"), search(repos, "foo"))
        >>> a is b  # both answered by the "foo" request
        True
    """

    def __init__(self, producer: Callable[..., Awaitable[T]], wait: float) -> None:
        self._producer = producer
        self._wait = wait
        self._pending: _PendingCall | None = None
        self.invocations = 0
        """Physical producer runs so far."""

    @property
    def wait(self) -> float:
        return self._wait

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    async def __call__(self, *args: Any, **kwargs: Any) -> T | Literal["skipped"]:
        loop = asyncio.get_running_loop()

        pending = self._pending
        if pending is None:
            future = loop.create_future()
            future.add_done_callback(_mark_retrieved)
            pending = self._pending = _PendingCall(future=future)
        elif pending.timer is not None:
            pending.timer.cancel()

        pending.args = args
        pending.kwargs = kwargs
        pending.callers += 1
        pending.timer = loop.call_later(self._wait, self._fire, pending)

        return await asyncio.shield(pending.future)

    def _fire(self, pending: _PendingCall) -> None:
        # Clear first so calls made while the request runs open a new window
        if self._pending is pending:
            self._pending = None
        if pending.future.done():
            return
        self.invocations += 1
        logger.debug(
            "Debounce fired for %d coalesced call(s) of %r", pending.callers, self._producer
        )
        spawn(self._run(pending), name="mentionkit-debounce")

    async def _run(self, pending: _PendingCall) -> None:
        try:
            result = await self._producer(*pending.args, **pending.kwargs)
        except Exception as e:
            if not pending.future.done():
                pending.future.set_exception(e)
            return
        if not pending.future.done():
            pending.future.set_result(result)

    def cancel(self) -> bool:
        """Drop the pending call; its callers receive ``SKIPPED``.

        Returns:
            True if a pending call was dropped.
        """
        pending = self._pending
        if pending is None:
            return False
        self._pending = None
        if pending.timer is not None:
            pending.timer.cancel()
        if not pending.future.done():
            pending.future.set_result(SKIPPED)
        return True
