"""Concurrent request batches.

Batches run on the current event loop with ``asyncio.gather``. Every call in
a batch runs to completion before anything is reported: results come back in
index order, or the first failure (by index) is re-raised once the whole
batch has settled. There is no retry and no partial-result mode.
"""

import asyncio
from typing import Awaitable, Callable, List, TypeVar

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 5


async def run_concurrently(
    factory: Callable[[int], Awaitable[T]],
    count: int = DEFAULT_BATCH_SIZE,
) -> List[T]:
    """Start ``count`` independent calls at once and wait for all of them.

    Parameters
    - factory: Called with the index ``0..count-1``; returns an awaitable
    - count: Batch size
    """
    if count < 1:
        raise ValueError(f"count must be positive, got {count}")

    results = await asyncio.gather(
        *(factory(index) for index in range(count)), return_exceptions=True
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
