"""Storage backends behind the ``Storage`` protocol."""

from .base import Storage
from .memory import MemoryStorage
from .sql import SqlStorage

__all__ = ["Storage", "MemoryStorage", "SqlStorage"]
