"""Per-key mutual exclusion within one process."""

import threading
from contextlib import contextmanager
from typing import Iterator


class KeyedLock:
    """Hands out one lock per key; different keys never block each other.

    Locks are reference-counted and dropped once no caller holds or waits
    on them, so the table does not grow with every key ever seen.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._refs: dict[str, int] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._refs[key] = self._refs.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._refs[key] -= 1
                if self._refs[key] == 0:
                    del self._refs[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
