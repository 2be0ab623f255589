"""Task repository interface."""

from typing import Protocol

from deskup.core.models import TaskItem


class TaskRepository(Protocol):
    """Interface for reading and completing tasks in any backend."""

    def fetch_open(self) -> list[TaskItem]:
        """Fetch all tasks that are not done."""
        ...

    def mark_done(self, task_id: str) -> None:
        """Set a task's status to done."""
        ...
