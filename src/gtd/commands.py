"""Operation layer shared by the interpreter and the CLI.

A handful of generic operations (add, query one, query many, update) do all
the loading and saving. What they select or change is passed in as a
Selector or Mutator, so "pending", "due today" and "all" are the same query
with a different selector, and tick/untick the same update with a different
mutator.

Every operation reloads from the store, so nothing is cached between calls.
"""

import logging
import re
from datetime import date
from typing import Callable

from .core.task_list import TaskList
from .core.tasks import Task, is_due_today, is_pending, parse_date
from .errors import InvalidInputError, ParseError
from .ports.task_store import TaskStore

logger = logging.getLogger(__name__)

Selector = Callable[[TaskList], TaskList]
Mutator = Callable[[Task], None]

# Optional sign, then ASCII digits only
_TASK_ID_RE = re.compile(r"[+-]?[0-9]+")


# ============== Selectors & Mutators ==============


def select_pending(task_list: TaskList) -> TaskList:
    return task_list.select(is_pending)


def select_due_today(task_list: TaskList) -> TaskList:
    return task_list.select(is_due_today)


def select_all(task_list: TaskList) -> TaskList:
    return task_list


def tick(task: Task) -> None:
    task.tick()


def untick(task: Task) -> None:
    task.untick()


# ============== Input Parsing ==============


def parse_due_date(raw: str) -> date:
    """Parse a YYYY-MM-DD due date."""
    try:
        return parse_date(raw.strip("\r\n"))
    except ValueError:
        raise ParseError("Error reading date")


def parse_task_id(raw: str | int) -> int:
    if isinstance(raw, int):
        return raw
    raw = raw.strip("\r\n")
    if not _TASK_ID_RE.fullmatch(raw):
        raise InvalidInputError("Task num not recognised")
    return int(raw)


# ============== Operations ==============


def add(store: TaskStore, description: str, due: str) -> str:
    """Add a pending task due on `due` (YYYY-MM-DD)."""
    if "\t" in description or "\n" in description or "\r" in description:
        raise InvalidInputError("Description must not contain tabs or newlines")
    try:
        description.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidInputError("Description is not valid text")

    task = Task(description=description, done=False, due=parse_due_date(due))

    task_list = store.load()
    task_id = task_list.append(task)
    store.save(task_list)
    logger.debug(f"Added task {task_id}: {description!r} due {task.due}")
    return "Done."


def query_one(store: TaskStore, task_id: str | int) -> str:
    """Render a single task."""
    task_id = parse_task_id(task_id)
    return store.load().get_by_id(task_id).render()


def query_many(store: TaskStore, selector: Selector) -> str:
    """Render whatever `selector` picks out of the current tasks."""
    result = selector(store.load())
    logger.debug(f"Query {getattr(selector, '__name__', selector)} matched {len(result)} task(s)")
    return result.render()


def update(store: TaskStore, task_id: str | int, mutator: Mutator) -> str:
    """Apply `mutator` to one task and save."""
    task_id = parse_task_id(task_id)

    task_list = store.load()
    task = task_list.get_by_id(task_id)
    mutator(task)
    task_list.replace(task_id, task)
    store.save(task_list)
    logger.debug(f"Updated task {task_id} with {getattr(mutator, '__name__', mutator)}")
    return "Done."
