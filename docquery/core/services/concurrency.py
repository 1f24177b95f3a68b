"""Helpers for awaiting blocking SDK calls from the event loop."""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


async def run_blocking(func: Callable[..., T], *args: Any, timeout: float | None = None) -> T:
    """Run ``func(*args)`` in a worker thread and await its result.

    The timeout clock starts once a worker thread picks the call up, so time
    spent queued behind other calls in the executor does not count.

    Args:
        func: Blocking callable (HTTP request, SDK call, file parsing).
        *args: Positional arguments for ``func``.
        timeout: Seconds the call may run before ``TimeoutError``; None or 0
            waits indefinitely.

    Returns:
        Whatever ``func`` returns.
    """
    if not timeout:
        return await asyncio.to_thread(func, *args)

    loop = asyncio.get_running_loop()
    started = asyncio.Event()

    def call() -> T:
        loop.call_soon_threadsafe(started.set)
        return func(*args)

    job = asyncio.ensure_future(asyncio.to_thread(call))
    try:
        await started.wait()
    except asyncio.CancelledError:
        job.cancel()
        raise
    return await asyncio.wait_for(job, timeout=timeout)
