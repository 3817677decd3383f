"""Mini README: Built-in storage backends.

Each module defines a ``LedgerRepository`` subclass and registers it with
``REGISTRY`` on import. New backends should follow the same pattern, or ship
in a separate package and publish a ``budgetwidget.storage`` entry point.
"""

from .json_file import JsonFileRepository
from .memory import MemoryRepository

__all__ = ["JsonFileRepository", "MemoryRepository"]
