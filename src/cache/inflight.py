# src/cache/inflight.py - v1
"""Registry of in-flight resolutions, one task per artifact key.

Callers for a key that already has a running task await that task instead of
starting a second one. Tasks are awaited through ``asyncio.shield`` so a
caller that gets cancelled leaves the work running for the other waiters.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InFlightRegistry(Generic[T]):
    """Map from key to the task currently producing its result."""

    def __init__(self) -> None:
        self._tasks: dict[Hashable, asyncio.Task[T]] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, key: Hashable) -> bool:
        task = self._tasks.get(key)
        return task is not None and not task.done()

    async def run(
        self, key: Hashable, factory: Callable[[], Awaitable[T]]
    ) -> tuple[T, bool]:
        """Run ``factory`` for ``key`` unless a run is already in flight.

        Returns:
            ``(result, shared)`` where ``shared`` is True when the caller
            joined an existing run. Exceptions from the run propagate to
            every waiter.
        """
        task = self._tasks.get(key)
        shared = task is not None and not task.done()
        if not shared:
            task = asyncio.ensure_future(factory())
            self._tasks[key] = task
            task.add_done_callback(lambda t, k=key: self._discard(k, t))
        else:
            logger.debug("Joining in-flight resolution for %s", key)

        return await asyncio.shield(task), shared

    def _discard(self, key: Hashable, task: asyncio.Task[T]) -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]
        # Mark the exception retrieved when every waiter was cancelled.
        if not task.cancelled():
            task.exception()
