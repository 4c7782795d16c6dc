"""Adapters - I/O implementations of ports."""

from .file_store import FileTaskStore
from .memory_store import InMemoryTaskStore

__all__ = [
    "FileTaskStore",
    "InMemoryTaskStore",
]
