from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from threading import RLock
from typing import Dict, List, Optional

from .models import Task

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for task storage backends."""

    @abstractmethod
    def list(self) -> List[Task]:
        """Return a snapshot of all stored tasks."""

    @abstractmethod
    def get(self, task_id: int) -> Optional[Task]:
        """Return a Task by id, or None if not found."""

    @abstractmethod
    def save(self, task: Task) -> Task:
        """
        Insert or overwrite a Task keyed by its id.
        A Task without an id is assigned the next one before it is stored.
        """

    @abstractmethod
    def delete_by_id(self, task_id: int) -> bool:
        """Delete a Task by id. Return True if deleted, False if not found."""

    @abstractmethod
    def exists_by_id(self, task_id: int) -> bool:
        """Return whether a Task with this id is stored."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored tasks."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every stored task."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository.

    Ids come from a counter starting at 1 and are never reused, even after
    deletion or clear(). Tasks are copied on the way in and on the way out,
    so callers only change stored state through save().
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: Dict[int, Task] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def list(self) -> List[Task]:
        with self._lock:
            return [replace(t) for t in self._items.values()]

    def get(self, task_id: int) -> Optional[Task]:
        with self._lock:
            item = self._items.get(task_id)
            return None if item is None else replace(item)

    def save(self, task: Task) -> Task:
        # Allocation and insertion share the lock so concurrent saves never
        # observe a half-registered id.
        with self._lock:
            if task.id is None:
                task.id = self._allocate_id()
                logger.debug("Assigned id=%s", task.id)
            self._items[task.id] = replace(task)
            return replace(task)

    def delete_by_id(self, task_id: int) -> bool:
        with self._lock:
            return self._items.pop(task_id, None) is not None

    def exists_by_id(self, task_id: int) -> bool:
        with self._lock:
            return task_id in self._items

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
