"""
Typed, keyed in-memory collections.

One EntityStore holds one kind of record. Keys are unique per store;
iteration order is insertion order. Stores never cascade: removing a
project does not touch applications that name it. Keeping related stores
consistent is the lifecycle components' job.
"""

import logging
import threading
from typing import Callable, Optional

from ..errors import DuplicateKeyError, NotFoundError
from ..models import Result

logger = logging.getLogger(__name__)


class EntityStore:
    """
    Insertion-ordered index of records keyed by a natural or generated key.

    Usage:
        projects = EntityStore("project", key=lambda p: p.name)
        projects.add(project)                      # Result
        projects.find_by_key("Acacia Breeze")      # Project or None
        projects.find_all(lambda p: p.is_visible)  # list, safe to iterate again

    add/remove are serialized by an internal lock so that two threads
    inserting the same key cannot both succeed.
    """

    def __init__(self, kind: str, key: Callable):
        self.kind = kind
        self._key = key
        self._items = {}
        self._lock = threading.RLock()

    def add(self, entity) -> Result:
        key = self._key(entity)
        with self._lock:
            if key in self._items:
                return Result.failure(DuplicateKeyError(f"{self.kind} '{key}' already exists"))
            self._items[key] = entity
        logger.debug("Stored %s %s", self.kind, key)
        return Result.success(entity)

    def remove(self, key) -> Result:
        with self._lock:
            entity = self._items.pop(key, None)
        if entity is None:
            return Result.failure(NotFoundError(f"{self.kind} '{key}' not found"))
        logger.debug("Removed %s %s", self.kind, key)
        return Result.success(entity)

    def find_by_key(self, key) -> Optional[object]:
        return self._items.get(key)

    def find_all(self, predicate: Optional[Callable] = None) -> list:
        """
        Return matching records in insertion order.

        The result is a snapshot list, so it can be walked any number of
        times and is unaffected by later inserts.
        """
        with self._lock:
            items = list(self._items.values())
        if predicate is None:
            return items
        return [item for item in items if predicate(item)]

    def find_one(self, predicate: Callable) -> Optional[object]:
        for item in self.find_all():
            if predicate(item):
                return item
        return None

    def __contains__(self, key):
        return key in self._items

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self.find_all())
