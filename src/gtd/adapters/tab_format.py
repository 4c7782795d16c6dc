"""Tab-separated line format for stored tasks.

One task per line: description, done flag ("1"/"0") and due date (YYYY-MM-DD),
separated by tabs. No header and no escaping.
"""

import logging
from collections.abc import Iterable

from gtd.core.task_list import TaskList
from gtd.core.tasks import Task, format_date, parse_date
from gtd.errors import ParseError

logger = logging.getLogger(__name__)

FIELD_SEP = "\t"


def format_line(task: Task) -> str:
    """Serialize a task to one line, without the trailing newline."""
    done = "1" if task.done else "0"
    return FIELD_SEP.join([task.description, done, format_date(task.due)])


def parse_line(line: str | bytes) -> Task:
    """Parse one stored line. Raises ParseError if it is malformed.

    Raw bytes are decoded as UTF-8 first; undecodable lines count as malformed.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"not valid UTF-8 ({e.reason} at byte {e.start})")

    parts = line.rstrip("\r\n").split(FIELD_SEP)
    if len(parts) != 3:
        raise ParseError(f"expected 3 fields, got {len(parts)}")

    description, done, due_raw = parts
    if done not in ("0", "1"):
        raise ParseError(f"bad done flag {done!r}")

    try:
        due = parse_date(due_raw)
    except ValueError:
        raise ParseError(f"bad due date {due_raw!r}")

    return Task(description=description, done=done == "1", due=due)


def parse_lines(
    lines: Iterable[str | bytes], strict: bool = False, source: str = "<tasks>"
) -> tuple[TaskList, list[int]]:
    """
    Build a TaskList from stored lines.

    Ids come from line order alone. Blank lines are ignored. Malformed lines
    are logged and skipped, or raise ParseError when `strict` is set.

    Returns: (task_list, skipped_line_numbers)
    """
    task_list = TaskList()
    skipped: list[int] = []

    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            task = parse_line(line)
        except ParseError as e:
            if strict:
                raise ParseError(f"{source}:{lineno}: {e}") from e
            logger.warning(f"Skipping malformed line {lineno} in {source}: {e}")
            skipped.append(lineno)
            continue
        task_list.append(task)

    return task_list, skipped


def format_lines(task_list: TaskList) -> list[str]:
    """Serialize every task in id order, one newline-terminated line each."""
    return [format_line(task) + "\n" for _, task in task_list.items()]
