from __future__ import annotations


class TaskError(Exception):
    """Base class for domain errors raised by the task service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# PUBLIC_INTERFACE
class InvalidTaskError(TaskError):
    """Raised when a task fails validation on create."""


# PUBLIC_INTERFACE
class TaskNotFoundError(TaskError):
    """Raised when no task matches the requested id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Todo not found with id: {task_id}")
        self.task_id = task_id
