"""Text command interpreter.

Maps one line of user input to one operation call. Arguments are separated
by tabs:

    todo                          pending tasks
    today                         tasks due today
    all                           every task
    show<TAB>ID                   one task
    add<TAB>DESCRIPTION<TAB>DATE  new task, DATE as YYYY-MM-DD
    tick<TAB>ID                   mark done
    untick<TAB>ID                 mark not done

Bad input comes back as a message; StorageUnavailableError is left to the
caller.
"""

import logging

from . import commands
from .errors import InvalidInputError, UserError
from .ports.task_store import TaskStore

logger = logging.getLogger(__name__)

QUERIES = {
    "todo": commands.select_pending,
    "today": commands.select_due_today,
    "all": commands.select_all,
}

UPDATES = {
    "tick": commands.tick,
    "untick": commands.untick,
}


def split_command(line: str) -> list[str]:
    """Split a raw input line into its tab-separated fields."""
    return line.strip("\r\n").split("\t")


def _expect_fields(parts: list[str], count: int) -> None:
    if len(parts) != count:
        raise InvalidInputError("Error reading input")


def dispatch(parts: list[str], store: TaskStore) -> str:
    """Run the operation named by parts[0]. Raises GtdError on failure."""
    name = parts[0].strip()
    logger.debug(f"Dispatching {name!r} with {len(parts) - 1} argument(s)")

    if name in QUERIES:
        return commands.query_many(store, QUERIES[name])
    if name == "show":
        _expect_fields(parts, 2)
        return commands.query_one(store, parts[1])
    if name == "add":
        _expect_fields(parts, 3)
        return commands.add(store, parts[1], parts[2])
    if name in UPDATES:
        _expect_fields(parts, 2)
        return commands.update(store, parts[1], UPDATES[name])

    raise InvalidInputError("Invalid command")


def interpret(line: str, store: TaskStore) -> str:
    """Run one command line and return the reply to show the user."""
    try:
        return dispatch(split_command(line), store)
    except UserError as e:
        return str(e)
