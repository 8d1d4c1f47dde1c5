"""Per-key locks that are dropped once nobody holds or waits for them."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:
    """One mutex per key; distinct keys never block each other.

    An entry lives only while some thread holds or waits on it, so the
    table does not grow with every key ever seen.
    """

    def __init__(self):
        self._entries: dict[str, list] = {}  # key -> [lock, holders + waiters]
        self._guard = threading.Lock()

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]
