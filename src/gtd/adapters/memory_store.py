"""In-memory task storage adapter."""

from gtd.core.task_list import TaskList

from .tab_format import format_lines, parse_lines


class InMemoryTaskStore:
    """
    Task storage held in a list of lines.

    Implements TaskStore protocol. Goes through the same line format as
    FileTaskStore, so loads never share Task objects with earlier saves.
    """

    def __init__(self, lines: list[str] | None = None, strict: bool = False):
        self.lines: list[str] = list(lines) if lines else []
        self.strict = strict
        self.skipped_lines: list[int] = []
        self.saves = 0

    def load(self) -> TaskList:
        task_list, self.skipped_lines = parse_lines(self.lines, strict=self.strict, source="<memory>")
        return task_list

    def save(self, task_list: TaskList) -> None:
        self.lines = format_lines(task_list)
        self.saves += 1
