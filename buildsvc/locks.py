"""Reader/writer lock for in-process shared state.

The standard library only ships exclusive locks, so this module builds a
shared/exclusive lock on top of threading.Condition. Waiting writers
block new readers, which keeps a steady stream of reads from starving
mutations.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """A non-reentrant reader/writer lock.

    Any number of readers may hold the lock at once. A writer holds it
    alone. Neither side is reentrant: acquiring the write lock while
    holding the read lock on the same thread deadlocks.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the shared lock for the duration of the block.

        Yields:
            None while the shared lock is held.
        """
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the exclusive lock for the duration of the block.

        Yields:
            None while the exclusive lock is held.
        """
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
                if not self._writers_waiting:
                    self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()

    @property
    def readers(self) -> int:
        """Number of threads currently holding the shared lock."""
        with self._cond:
            return self._readers

    @property
    def write_held(self) -> bool:
        """Whether a writer currently holds the lock."""
        with self._cond:
            return self._writer


__all__ = ["ReadWriteLock"]
