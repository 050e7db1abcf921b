"""Per-owner mutual exclusion for cart writes.

Every write to an owner's cart is a read-modify-write, so writes for the same
owner must not interleave. Locks are created on first use and dropped once the
last holder releases them. Multi-owner acquisition always happens in sorted
key order, so two holders can never wait on each other.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field


@dataclass
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


class OwnerLocks:
    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def _checkout(self, key: str) -> _Entry:
        with self._guard:
            entry = self._entries.setdefault(key, _Entry())
            entry.holders += 1
            return entry

    def _checkin(self, key: str) -> None:
        with self._guard:
            entry = self._entries[key]
            entry.holders -= 1
            if entry.holders == 0:
                del self._entries[key]

    @contextmanager
    def hold(self, *keys: str):
        """Hold the locks for ``keys`` (deduplicated, in sorted order)."""
        ordered = sorted(set(keys))
        acquired: list[tuple[str, _Entry]] = []
        try:
            for key in ordered:
                entry = self._checkout(key)
                try:
                    entry.lock.acquire()
                except BaseException:
                    self._checkin(key)
                    raise
                acquired.append((key, entry))
            yield tuple(ordered)
        finally:
            for key, entry in reversed(acquired):
                entry.lock.release()
                self._checkin(key)

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


owner_locks = OwnerLocks()
