"""Awaiting work that must not be cancelled.

Some collaborator calls cannot be interrupted (the editor's workspace
symbol lookup) or must not be (the shared file scan, whose result is
cached for other callers). ``run_detached`` runs such work in its own task
and only shields the caller's wait: cancelling the caller stops the wait,
never the work, and no cleanup happens on the caller's behalf.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Strong references so detached tasks are not garbage collected mid-flight
_background_tasks: set[asyncio.Task] = set()


def _forget(task: asyncio.Task) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        return
    # Mark the exception as retrieved; every awaiting caller already saw it
    exc = task.exception()
    if exc is not None:
        logger.debug("Detached task %s failed: %r", task.get_name(), exc)


def spawn(awaitable: Awaitable[T], *, name: str | None = None) -> "asyncio.Task[T]":
    """Start ``awaitable`` as a task that outlives its callers."""
    task = asyncio.ensure_future(awaitable)
    if name is not None:
        task.set_name(name)
    _background_tasks.add(task)
    task.add_done_callback(_forget)
    return task


async def run_detached(awaitable: Awaitable[T], *, name: str | None = None) -> T:
    """Await ``awaitable`` without letting caller cancellation reach it."""
    return await asyncio.shield(spawn(awaitable, name=name))
