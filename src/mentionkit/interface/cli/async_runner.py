"""Running async code from click commands."""

import asyncio
import functools
from collections.abc import Callable, Coroutine
from typing import Any, ParamSpec, TypeVar

T = TypeVar("T")
P = ParamSpec("P")


def async_command(
    f: Callable[P, Coroutine[Any, Any, T]],
) -> Callable[P, T]:
    """Decorator that lets a click command be written as a coroutine.

    Usage:
        @click.command()
        @async_command
        async def my_command(arg: str) -> None:
            ...
    """

    @functools.wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        return asyncio.run(f(*args, **kwargs))

    return wrapper
