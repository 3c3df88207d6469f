"""
Base Repository - Admission Engine
admission/repositories/base.py

Base class for the in-process reference stores: guarded access to the
backing dict and per-record locks for single-writer discipline. A record
lock lives only while some writer holds or waits for it.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Generator, Hashable, List


class BaseRepository:
    """Base repository with store-level and per-record locking."""

    def __init__(self):
        self._store_lock = threading.RLock()
        # key -> [lock, number of writers holding or waiting]
        self._record_locks: Dict[Hashable, List] = {}

    @contextmanager
    def locked_store(self) -> Generator[None, None, None]:
        """Context manager guarding reads and writes of the backing store."""
        with self._store_lock:
            yield

    @contextmanager
    def locked_record(self, key: Hashable) -> Generator[None, None, None]:
        """Context manager holding the per-record writer lock."""
        with self._store_lock:
            entry = self._record_locks.get(key)
            if entry is None:
                entry = self._record_locks[key] = [threading.Lock(), 0]
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._store_lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._record_locks[key]

    def active_record_locks(self) -> int:
        """Number of records currently held or awaited by a writer."""
        with self._store_lock:
            return len(self._record_locks)
