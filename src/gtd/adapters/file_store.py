"""Flat-file task storage adapter."""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from gtd.core.task_list import TaskList
from gtd.errors import StorageUnavailableError

from .tab_format import format_lines, parse_lines

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_SUFFIX = ".bak"


class FileTaskStore:
    """
    Tab-separated flat-file task storage.

    Implements TaskStore protocol. The whole file is read on every load and
    rewritten on every save. The new contents go to a temp file first and are
    moved over the primary file with os.replace, so a failed save leaves the
    previous file intact. The previous file is also copied to
    `<path><backup_suffix>` on each save.

    There is no locking: two stores writing the same path race, and the last
    save wins.
    """

    def __init__(
        self,
        path: Path | str,
        backup_suffix: str = DEFAULT_BACKUP_SUFFIX,
        strict: bool = False,
    ):
        self.path = Path(path).expanduser()
        self.backup_suffix = backup_suffix
        self.strict = strict
        self.skipped_lines: list[int] = []

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(self.path.name + self.backup_suffix)

    def _create_empty(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch()
        except OSError as e:
            logger.error(f"Could not create task file {self.path}: {e}")
            raise StorageUnavailableError(f"Could not create task file {self.path}: {e}", self.path) from e
        logger.info(f"Created empty task file {self.path}")

    def load(self) -> TaskList:
        """Load all tasks. Creates an empty file if none exists yet."""
        if not self.path.exists():
            self._create_empty()
            self.skipped_lines = []
            return TaskList()

        try:
            # Raw bytes: parse_line reports undecodable lines as malformed
            with open(self.path, "rb") as f:
                task_list, skipped = parse_lines(f, strict=self.strict, source=str(self.path))
        except OSError as e:
            logger.error(f"Could not read task file {self.path}: {e}")
            raise StorageUnavailableError(f"Could not read task file {self.path}: {e}", self.path) from e

        self.skipped_lines = skipped
        if skipped:
            logger.warning(f"Skipped {len(skipped)} malformed line(s) in {self.path}: {skipped}")
        return task_list

    def _rotate_backup(self) -> None:
        """Copy the current file to the backup path. Best effort."""
        if not self.path.exists():
            logger.warning(f"No task file at {self.path}; skipping backup")
            return
        try:
            shutil.copy2(self.path, self.backup_path)
        except OSError as e:
            logger.warning(f"Could not write backup {self.backup_path}: {e}")

    def save(self, task_list: TaskList) -> None:
        """Write all tasks, keeping the previous file as a backup."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        except OSError as e:
            logger.error(f"Could not create temp file next to {self.path}: {e}")
            raise StorageUnavailableError(f"Could not write task file {self.path}: {e}", self.path) from e

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                f.writelines(format_lines(task_list))
                f.flush()
                os.fsync(f.fileno())
            if self.path.exists():
                shutil.copymode(self.path, temp_path)
            self._rotate_backup()
            os.replace(temp_path, self.path)
        except OSError as e:
            cleanup_note = _remove_quietly(temp_path)
            logger.error(f"Could not save task file {self.path}: {e}{cleanup_note}")
            raise StorageUnavailableError(f"Could not write task file {self.path}: {e}", self.path) from e

        logger.info(f"Saved {len(task_list)} task(s) to {self.path}")


def _remove_quietly(path: str) -> str:
    """Remove a leftover temp file. Returns a note for the log if that fails."""
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        return f" (temp file {path} left behind: {e})"
    return ""
