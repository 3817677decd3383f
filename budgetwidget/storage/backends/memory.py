"""Mini README: In-memory ledger storage for tests and throwaway sessions.

Structure:
    * MemoryRepository - stores raw record text in a plain dictionary.

Passing the same dictionary to a second repository simulates a restart, which
is how the tests exercise reload and corrupt-data behaviour without touching
the file system.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..base import LedgerRepository
from ..registry import REGISTRY


class MemoryRepository(LedgerRepository):
    """Keep the serialised ledger in a dictionary keyed by storage key."""

    backend_name = "memory"

    def __init__(self, store: Optional[Dict[str, str]] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.store: Dict[str, str] = store if store is not None else {}

    def read_raw(self) -> Optional[str]:
        return self.store.get(self.storage_key)

    def write_raw(self, payload: str) -> None:
        self.store[self.storage_key] = payload


REGISTRY.register(MemoryRepository)
