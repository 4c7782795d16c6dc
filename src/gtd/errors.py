"""Error types shared by the core, the stores and the command layer."""


class GtdError(Exception):
    """Base class for all gtd errors."""

    pass


class UserError(GtdError):
    """Recoverable error caused by bad input. The message is safe to show."""

    pass


class NotFoundError(UserError):
    """Raised when a task id does not address a task."""

    NEGATIVE = "negative"
    MISSING = "missing"

    def __init__(self, task_id: int, reason: str = MISSING):
        self.task_id = task_id
        self.reason = reason
        if reason == self.NEGATIVE:
            message = "ID must not be negative."
        else:
            message = "Task not found."
        super().__init__(message)


class InvalidInputError(UserError):
    """Raised for malformed commands, field counts or ids."""

    pass


class ParseError(UserError):
    """Raised when a date or a stored line cannot be parsed."""

    pass


class StorageUnavailableError(GtdError):
    """Raised when the backing file cannot be created, read or replaced.

    Fatal: callers should stop rather than keep working on stale state.
    """

    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(message)
