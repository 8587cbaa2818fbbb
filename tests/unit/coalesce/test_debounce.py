"""Tests for the latest-wins debounce."""

import asyncio

import pytest

from mentionkit.coalesce import SKIPPED, Debounce

WAIT = 0.02


class TestDebounce:
    """Bursts collapse into one call with the last arguments."""

    @pytest.mark.asyncio
    async def test_burst_resolves_every_caller_with_last_result(self) -> None:
        """Calls A, B, C inside the window all receive result(C)."""
        seen: list[str] = []

        async def producer(query: str) -> str:
            seen.append(query)
            return f"result({query})"

        debounce = Debounce(producer, wait=WAIT)
        results = await asyncio.gather(debounce("A"), debounce("B"), debounce("C"))

        assert results == ["result(C)", "result(C)", "result(C)"]
        assert seen == ["C"]
        assert debounce.invocations == 1

    @pytest.mark.asyncio
    async def test_keyword_arguments_are_latest_too(self) -> None:
        async def producer(repos: list[str], query: str) -> tuple[list[str], str]:
            return repos, query

        debounce = Debounce(producer, wait=WAIT)
        results = await asyncio.gather(
            debounce(["r1"], query="fo"),
            debounce(["r2"], query="foo"),
        )

        assert results == [(["r2"], "foo"), (["r2"], "foo")]

    @pytest.mark.asyncio
    async def test_calls_after_fire_start_a_new_window(self) -> None:
        async def producer(query: str) -> str:
            return query

        debounce = Debounce(producer, wait=WAIT)
        assert await debounce("first") == "first"
        assert await debounce("second") == "second"
        assert debounce.invocations == 2

    @pytest.mark.asyncio
    async def test_exception_reaches_every_joined_caller(self) -> None:
        async def producer(query: str) -> str:
            raise ConnectionError(f"backend down for {query}")

        debounce = Debounce(producer, wait=WAIT)
        results = await asyncio.gather(
            debounce("a"), debounce("ab"), return_exceptions=True
        )

        assert all(isinstance(r, ConnectionError) for r in results)
        assert str(results[0]) == "backend down for ab"

    @pytest.mark.asyncio
    async def test_cancel_resolves_pending_callers_with_skipped(self) -> None:
        calls = 0

        async def producer(query: str) -> str:
            nonlocal calls
            calls += 1
            return query

        debounce = Debounce(producer, wait=WAIT)
        pending = asyncio.create_task(debounce("abandoned"))
        await asyncio.sleep(0)

        assert debounce.has_pending
        assert debounce.cancel() is True
        assert await pending == SKIPPED

        await asyncio.sleep(WAIT * 2)
        assert calls == 0
        assert debounce.cancel() is False

    @pytest.mark.asyncio
    async def test_in_flight_request_is_not_cancelled(self) -> None:
        """A new burst during a running request gets its own run."""
        release = asyncio.Event()

        async def producer(query: str) -> str:
            if query == "slow":
                await release.wait()
            return query

        debounce = Debounce(producer, wait=WAIT)
        slow = asyncio.create_task(debounce("slow"))
        await asyncio.sleep(WAIT * 3)
        assert not debounce.has_pending

        fast = await debounce("fast")
        release.set()

        assert fast == "fast"
        assert await slow == "slow"
        assert debounce.invocations == 2
