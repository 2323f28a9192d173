"""
Entity-scoped exclusive locks.

Each compound operation (submit, decide, book, assign...) holds the locks
of the project and the people it touches for its whole duration. Two
operations on disjoint entities run concurrently; nothing ever waits on
a capacity resource, it fails fast instead.
"""

import threading
from contextlib import contextmanager


def project_key(project_name: str) -> str:
    return f"project:{project_name}"


def person_key(nric: str) -> str:
    return f"person:{nric}"


class LockManager:
    """
    Hands out one re-entrant lock per key.

    Locks are always acquired in sorted key order, so two operations that
    need overlapping key sets cannot deadlock each other.

    Usage:
        with locks.hold(project_key(project.name), person_key(person.nric)):
            ...
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = {}

    def _lock_for(self, key: str):
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, *keys):
        ordered = sorted({k for k in keys if k})
        acquired = []
        try:
            for key in ordered:
                lock = self._lock_for(key)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
