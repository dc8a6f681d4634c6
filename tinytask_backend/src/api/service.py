from __future__ import annotations

import logging
from typing import List, Optional

from .errors import InvalidTaskError, TaskNotFoundError
from .models import Task
from .repositories import Repository

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 3


# PUBLIC_INTERFACE
class TaskService:
    """
    Business rules for tasks, sitting between the HTTP layer and the repository.

    get_by_id raises TaskNotFoundError for a missing id, while toggle and delete
    report absence through their return value (None / False) and leave the
    choice of status code to the caller.
    """

    def __init__(self, repository: Repository) -> None:
        self._repository = repository

    def list_all(self) -> List[Task]:
        """Return every stored task."""
        return self._repository.list()

    def get_by_id(self, task_id: int) -> Task:
        """
        Return the task with this id.

        Raises:
            TaskNotFoundError: if no task matches.
        """
        task = self._repository.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def create(self, task: Optional[Task]) -> Task:
        """
        Validate and store a new task.

        The caller's id and done flag are ignored: the repository always
        assigns a fresh id and new tasks start not done. The title is stored
        as given; trimming only applies to the checks.

        Raises:
            InvalidTaskError: with the message of the first failing rule.
        """
        task = self._validate(task)
        task.id = None
        task.done = False
        created = self._repository.save(task)
        logger.info("Created todo id=%s", created.id)
        return created

    def toggle(self, task_id: int) -> Optional[Task]:
        """Flip the done flag of a task. Return the updated task, or None if not found."""
        task = self._repository.get(task_id)
        if task is None:
            logger.debug("Toggle miss id=%s", task_id)
            return None
        task.done = not task.done
        updated = self._repository.save(task)
        logger.info("Toggled todo id=%s done=%s", updated.id, updated.done)
        return updated

    def delete(self, task_id: int) -> bool:
        """Delete a task. Return True if deleted, False if not found."""
        deleted = self._repository.delete_by_id(task_id)
        if deleted:
            logger.info("Deleted todo id=%s", task_id)
        else:
            logger.debug("Delete miss id=%s", task_id)
        return deleted

    @staticmethod
    def _validate(task: Optional[Task]) -> Task:
        if task is None:
            raise InvalidTaskError("Todo cannot be null")
        title = task.title
        if title is None or not title.strip():
            raise InvalidTaskError("Title is required")
        if len(title.strip()) < MIN_TITLE_LENGTH:
            raise InvalidTaskError(f"Title must be at least {MIN_TITLE_LENGTH} characters")
        return task
