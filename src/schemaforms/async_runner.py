"""Run form coroutines (submissions) from sync hosts such as the CLI."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, TypeVar

from schemaforms.exceptions import AsyncExecutionError

if TYPE_CHECKING:
    from collections.abc import Coroutine

T = TypeVar("T")


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion from any calling context.

    Without a running loop the coroutine runs on a fresh loop in the calling
    thread and its exceptions propagate unchanged. Inside a running loop it
    runs on a worker thread with its own loop, and failures are wrapped.

    Args:
        coro: The coroutine to run.

    Raises:
        AsyncExecutionError: If the coroutine fails while run on the worker thread.

    Returns:
        The result of the coroutine.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="schemaforms-async") as pool:
        future = pool.submit(asyncio.run, coro)
        try:
            return future.result()
        except Exception as exc:
            raise AsyncExecutionError(result=exc) from exc
