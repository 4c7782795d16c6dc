"""Configuration management for gtd."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .adapters.file_store import DEFAULT_BACKUP_SUFFIX, FileTaskStore

logger = logging.getLogger(__name__)

GTD_HOME = Path(os.environ.get("GTD_HOME", Path.home() / "gtd"))
CONFIG_FILE = GTD_HOME / "config" / "gtd.conf"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Config:
    """gtd configuration."""

    tasks_file: Path = field(default_factory=lambda: GTD_HOME / "tasks.txt")
    backup_suffix: str = DEFAULT_BACKUP_SUFFIX
    strict_load: bool = False
    log_level: str = "WARNING"

    def make_store(self, tasks_file: Path | str | None = None) -> FileTaskStore:
        """Build the file store this configuration points at."""
        return FileTaskStore(
            tasks_file or self.tasks_file,
            backup_suffix=self.backup_suffix,
            strict=self.strict_load,
        )


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    # Quoted values may be followed by a comment: "value" # comment
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_bool(key: str, value: str, default: bool) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    logger.warning(f"Ignoring invalid boolean for {key.upper()}: {value!r}")
    return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from gtd.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "tasks_file":
                if value:
                    config.tasks_file = Path(value).expanduser()
            case "backup_suffix":
                if value:
                    config.backup_suffix = value
            case "strict_load":
                config.strict_load = _parse_bool(key, value, config.strict_load)
            case "log_level":
                config.log_level = value.upper() or config.log_level
            case _:
                logger.debug(f"Ignoring unknown config key {key.upper()}")

    return config
