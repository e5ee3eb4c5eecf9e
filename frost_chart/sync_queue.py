from __future__ import annotations

from collections import deque
from typing import Any, Callable, Hashable


class SyncQueue:
    """FIFO of deferred callbacks drained in one synchronization phase."""

    def __init__(self) -> None:
        self._queue: deque[tuple[Hashable | None, Callable[..., Any], tuple[Any, ...]]] = deque()
        self._keys: set[Hashable] = set()

    def __len__(self) -> int:
        return len(self._queue)

    def schedule(self, fn: Callable[..., Any], *args: Any) -> None:
        self._queue.append((None, fn, args))

    def schedule_once(self, key: Hashable, fn: Callable[..., Any], *args: Any) -> bool:
        if key in self._keys:
            return False
        self._keys.add(key)
        self._queue.append((key, fn, args))
        return True

    def flush(self) -> int:
        """Run queued callbacks in order, including ones they schedule; returns the count run."""
        ran = 0
        while self._queue:
            key, fn, args = self._queue.popleft()
            if key is not None:
                self._keys.discard(key)
            fn(*args)
            ran += 1
        return ran

    def clear(self) -> None:
        self._queue.clear()
        self._keys.clear()
