"""Mini README: Persisted-store gateway for the ledger.

Re-exports the ``LedgerRepository`` interface, the backend registry, and the
built-in backends. The package is divided into ``base`` for the abstract
gateway and record format, ``registry`` for backend lookup, and ``backends``
for concrete implementations.
"""

from .base import LedgerRepository
from .registry import REGISTRY, RepositoryRegistry
from . import backends  # noqa: F401  # ensure built-in backends register on import
from .backends import JsonFileRepository, MemoryRepository

__all__ = [
    "JsonFileRepository",
    "LedgerRepository",
    "MemoryRepository",
    "REGISTRY",
    "RepositoryRegistry",
]
