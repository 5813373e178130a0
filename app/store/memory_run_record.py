"""In-process run record store used for local runs and tests."""

from __future__ import annotations

import math
import threading
import time
from typing import Callable

from app.domain import RunRecord

from .interfaces import RunRecordStorePort


class InMemoryRunRecordStore(RunRecordStorePort):
    """Dictionary-backed run record store with lazy expiry.

    Expired entries are dropped on the next access. A lock keeps every
    operation atomic for concurrent request handlers.
    """

    def __init__(self, clock: Callable[[], float] | None = None):
        """Initialize in-memory run record store.

        Args:
            clock: Optional monotonic clock returning seconds.

        Returns:
            None: This initializer does not return a value.

        Raises:
            ValueError: This initializer does not raise value errors.
        """

        self._clock = clock or time.monotonic
        self._entries: dict[str, tuple[RunRecord, float]] = {}
        self._lock = threading.Lock()

    def store_get(self, key: str) -> RunRecord | None:
        with self._lock:
            entry = self._store_live_entry(key)
            return entry[0] if entry is not None else None

    def store_set(self, record: RunRecord, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        with self._lock:
            self._entries[record.key] = (record, self._clock() + ttl_seconds)

    def store_expire(self, key: str, ttl_seconds: int) -> bool:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        with self._lock:
            entry = self._store_live_entry(key)
            if entry is None:
                return False
            self._entries[key] = (entry[0], self._clock() + ttl_seconds)
            return True

    def store_delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def store_ttl(self, key: str) -> int | None:
        with self._lock:
            entry = self._store_live_entry(key)
            if entry is None:
                return None
            return math.ceil(entry[1] - self._clock())

    def _store_live_entry(self, key: str) -> tuple[RunRecord, float] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry[1] <= self._clock():
            del self._entries[key]
            return None
        return entry
