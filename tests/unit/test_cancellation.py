"""Unit tests for cancelling upstream work on client disconnect"""

import asyncio
import pytest
from types import SimpleNamespace
from scorecard_gateway.api.cancellation import run_until_disconnect


class FakeRequest:
    """Reports a disconnect after a number of polls (never, if None)"""

    def __init__(self, disconnect_after: int | None = None):
        self.disconnect_after = disconnect_after
        self.polls = 0
        self.url = SimpleNamespace(path="/api/schools")

    async def is_disconnected(self) -> bool:
        self.polls += 1
        return self.disconnect_after is not None and self.polls > self.disconnect_after


async def test_returns_result_when_client_stays():
    async def work():
        await asyncio.sleep(0.01)
        return "page"

    assert await run_until_disconnect(FakeRequest(), work(), poll_seconds=0.001) == "page"


async def test_cancels_upstream_call_on_disconnect():
    cancelled = asyncio.Event()

    async def slow_upstream():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    with pytest.raises(asyncio.CancelledError):
        await run_until_disconnect(FakeRequest(disconnect_after=2), slow_upstream(), poll_seconds=0.001)

    assert cancelled.is_set()


async def test_errors_from_work_propagate():
    async def failing():
        raise ValueError("bad page")

    with pytest.raises(ValueError):
        await run_until_disconnect(FakeRequest(), failing(), poll_seconds=0.001)
