"""In-process memoization for computed artifacts."""

import asyncio
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Default number of computed artifacts kept alive
DEFAULT_MAX_ENTRIES = 64


class ComputedArtifactCache:
    """
    Cache of computed artifacts keyed by artifact name and input identity.

    Concurrent requests for the same key await one shared task, so each
    artifact is computed at most once per input. Failed computations are
    dropped so a later request can retry.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        """
        Initialize the cache.

        Args:
            max_entries: Entries kept before the least recently used is evicted
        """
        self.max_entries = max_entries
        # key -> (input object, task); the input is held so its id stays unique
        self._entries: OrderedDict[tuple[str, int], tuple[Any, asyncio.Task]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    async def get_or_compute(
        self,
        name: str,
        data: Any,
        compute: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Return the cached artifact for `data`, computing it if needed.

        Args:
            name: Computed artifact name
            data: Input the artifact is derived from (keyed by identity)
            compute: Zero-argument coroutine factory producing the artifact

        Returns:
            The computed artifact
        """
        key = (name, id(data))
        entry = self._entries.get(key)

        if entry is not None:
            task = entry[1]
            self._entries.move_to_end(key)
            logger.debug("computed_artifact_cache_hit", artifact=name, done=task.done())
            if task.done() and not task.cancelled() and task.exception() is None:
                return task.result()
        else:
            logger.debug("computed_artifact_cache_miss", artifact=name)
            task = asyncio.ensure_future(compute())
            self._entries[key] = (data, task)
            self._evict()

        try:
            # Shielded so an abandoned caller does not cancel other waiters
            return await asyncio.shield(task)
        except Exception:
            current = self._entries.get(key)
            if current is not None and current[1] is task:
                del self._entries[key]
            raise

    def _evict(self) -> None:
        while len(self._entries) > self.max_entries:
            (name, _), _ = self._entries.popitem(last=False)
            logger.debug("computed_artifact_evicted", artifact=name)
