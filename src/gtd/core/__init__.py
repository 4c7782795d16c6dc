"""Functional core - pure business logic with no I/O."""

from .tasks import Task, is_due_today, is_pending
from .task_list import TaskList

__all__ = [
    "Task",
    "is_pending",
    "is_due_today",
    "TaskList",
]
