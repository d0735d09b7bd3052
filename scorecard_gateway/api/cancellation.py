"""Cancel in-flight upstream work when the HTTP client goes away"""

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

from starlette.requests import Request

from scorecard_gateway.config import settings

T = TypeVar("T")


async def run_until_disconnect(
    request: Request,
    awaitable: Awaitable[T],
    poll_seconds: Optional[float] = None,
) -> T:
    """
    Await `awaitable` as a task, cancelling it if the client disconnects first.

    The disconnect surfaces as asyncio.CancelledError to the caller.
    """
    interval = poll_seconds or settings.disconnect_poll_seconds
    task = asyncio.ensure_future(awaitable)

    async def watch() -> None:
        while not task.done():
            if await request.is_disconnected():
                logging.info("Client disconnected, cancelling upstream call", extra={"path": request.url.path})
                task.cancel()
                return
            await asyncio.sleep(interval)

    watcher = asyncio.create_task(watch())
    try:
        return await task
    finally:
        watcher.cancel()
