"""Pure task domain logic - no I/O dependencies."""

import calendar
import re
from dataclasses import dataclass, field
from datetime import date, datetime

# Zero-padded YYYY-MM-DD, ASCII digits only
_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


def _as_date(value: date) -> date:
    """Drop the time of day from a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass
class Task:
    """A single task: what to do, whether it's done, and when it's due."""

    description: str
    done: bool = False
    due: date = field(default_factory=date.today)

    def tick(self) -> None:
        self.done = True

    def untick(self) -> None:
        self.done = False

    def render(self) -> str:
        """One-line human-readable form, e.g. 'Buy milk' due 1 January 2024 (DONE)."""
        due = _as_date(self.due)
        line = f"'{self.description}' due {due.day} {calendar.month_name[due.month]} {due.year}"
        if self.done:
            line += " (DONE)"
        return line

    def __str__(self) -> str:
        return self.render()


def is_pending(task: Task) -> bool:
    return not task.done


def is_due_today(task: Task, as_of: date | None = None) -> bool:
    """
    True if the task falls due on the same calendar day as `as_of`.

    Compares year, month and day only. Pure function - no I/O.
    """
    as_of = _as_date(as_of or date.today())
    due = _as_date(task.due)
    return (due.year, due.month, due.day) == (as_of.year, as_of.month, as_of.day)


def parse_date(raw: str) -> date:
    """Parse a zero-padded YYYY-MM-DD date. Raises ValueError otherwise."""
    match = _DATE_RE.fullmatch(raw)
    if not match:
        raise ValueError(f"not a YYYY-MM-DD date: {raw!r}")
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


def format_date(value: date) -> str:
    """YYYY-MM-DD with a zero-padded year, readable by parse_date."""
    value = _as_date(value)
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
