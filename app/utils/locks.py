"""
Readers-Writer Lock

A small synchronization primitive for shared in-memory state.

WHY not threading.Lock?
=======================
FastAPI runs plain `def` endpoints in a thread pool, so several requests
can touch the book store at the same time. Most of them only read.
A plain mutex would serialize those reads for no reason.

With RWLock:
- Any number of readers may hold the lock together
- A writer holds it alone (no readers, no other writers)
- Waiting writers block new readers, so writers are not starved

Usage:
    lock = RWLock()

    with lock.read_lock():
        ...  # shared access

    with lock.write_lock():
        ...  # exclusive access

The lock is NOT reentrant: taking read_lock() inside write_lock()
(or the other way round) on the same thread deadlocks.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class RWLock:
    """Writer-preferring readers-writer lock built on threading.Condition."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a held read lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            except BaseException:
                # Readers may be parked behind this writer.
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a held write lock")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_lock(self) -> Iterator[None]:
        """Hold shared (read) access for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_lock(self) -> Iterator[None]:
        """Hold exclusive (write) access for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
