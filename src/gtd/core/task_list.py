"""Addressable collection of tasks keyed by dense integer ids."""

from typing import Callable, Iterator

from gtd.errors import NotFoundError

from .tasks import Task


class TaskList:
    """
    Tasks keyed by integer id.

    Ids are handed out by `append` as the current size, so a list that has only
    been appended to holds exactly the ids 0..len-1 in insertion order. Lists
    returned by `select` keep the ids of the list they came from and may be
    sparse; they are for display only and never get saved.
    """

    def __init__(self, tasks: dict[int, Task] | None = None):
        self._tasks: dict[int, Task] = dict(tasks) if tasks else {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskList):
            return NotImplemented
        return self._tasks == other._tasks

    def __repr__(self) -> str:
        return f"TaskList({self._tasks!r})"

    def ids(self) -> list[int]:
        return sorted(self._tasks)

    def items(self) -> list[tuple[int, Task]]:
        """(id, task) pairs in ascending id order."""
        return sorted(self._tasks.items(), key=lambda pair: pair[0])

    def append(self, task: Task) -> int:
        """Add a task under the next free id and return that id."""
        task_id = len(self._tasks)
        self._tasks[task_id] = task
        return task_id

    def replace(self, task_id: int, task: Task) -> None:
        """Overwrite the task stored under an existing id."""
        if task_id not in self._tasks:
            raise NotFoundError(
                task_id,
                NotFoundError.NEGATIVE if task_id < 0 else NotFoundError.MISSING,
            )
        self._tasks[task_id] = task

    def get_by_id(self, task_id: int) -> Task:
        if task_id < 0:
            raise NotFoundError(task_id, NotFoundError.NEGATIVE)
        if task_id not in self._tasks:
            raise NotFoundError(task_id, NotFoundError.MISSING)
        return self._tasks[task_id]

    def select(self, predicate: Callable[[Task], bool]) -> "TaskList":
        """New list of the tasks matching `predicate`, ids unchanged."""
        return TaskList({i: t for i, t in self.items() if predicate(t)})

    def render(self) -> str:
        return "".join(f"{task_id}: {task.render()}\n" for task_id, task in self.items())

    def __str__(self) -> str:
        return self.render()
