"""Task storage interface."""

from typing import Protocol

from gtd.core.task_list import TaskList


class TaskStore(Protocol):
    """Interface for loading and saving the whole task list."""

    def load(self) -> TaskList:
        """Load every stored task. Ids follow storage order, starting at 0."""
        ...

    def save(self, task_list: TaskList) -> None:
        """Replace the stored tasks with `task_list`."""
        ...
