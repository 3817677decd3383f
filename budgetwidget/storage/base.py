"""Mini README: Abstract repository describing how the ledger is persisted.

Structure:
    * LedgerRepository - abstract gateway with ``load`` and ``save``.

The base class owns the JSON record format and the fallback rules for damaged
data, so backends only move raw text to and from one storage key. A missing
record, unreadable JSON, or a payload that is not an object all load as the
default empty ledger; the problem is logged and never raised, because a broken
store must not prevent the widget from starting.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Optional

from ..ledger.state import DEFAULT_THEME, LedgerState
from ..logging_utils import get_logger

if TYPE_CHECKING:
    from ..configuration import BudgetWidgetSettings

LOGGER = get_logger(__name__)

DEFAULT_STORAGE_KEY = "budget_widget_state"


class LedgerRepository(ABC):
    """Base interface for persisted-store backends."""

    backend_name: str = "generic"

    def __init__(self, *, storage_key: str = DEFAULT_STORAGE_KEY, default_theme: str = DEFAULT_THEME) -> None:
        if not storage_key:
            raise ValueError("Storage key cannot be blank")
        self.storage_key = storage_key
        self.default_theme = default_theme
        LOGGER.debug("Initialising %s repository for key '%s'", self.backend_name, storage_key)

    @classmethod
    def from_settings(cls, settings: "BudgetWidgetSettings") -> "LedgerRepository":
        """Build the backend from application settings."""

        return cls(storage_key=settings.storage_key, default_theme=settings.default_theme)

    @abstractmethod
    def read_raw(self) -> Optional[str]:
        """Return the stored text for the key, or ``None`` when nothing is stored."""

    @abstractmethod
    def write_raw(self, payload: str) -> None:
        """Replace the stored text for the key."""

    def load(self) -> LedgerState:
        """Decode the stored record, falling back to the default ledger."""

        raw = self.read_raw()
        if raw is None or not raw.strip():
            LOGGER.debug("No stored ledger under '%s'; starting empty", self.storage_key)
            return self._default_state()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as error:
            LOGGER.warning("Stored ledger under '%s' is not valid JSON (%s); starting empty", self.storage_key, error)
            return self._default_state()
        if not isinstance(payload, dict):
            LOGGER.warning("Stored ledger under '%s' is not an object; starting empty", self.storage_key)
            return self._default_state()
        return LedgerState.from_dict(payload, default_theme=self.default_theme)

    def save(self, state: LedgerState) -> None:
        """Encode and store the full record."""

        self.write_raw(json.dumps(state.as_dict(), ensure_ascii=False, indent=2))
        LOGGER.debug("Saved ledger with %s transactions to '%s'", len(state.transactions), self.storage_key)

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for UI displays."""

        return {"backend": self.backend_name, "storage_key": self.storage_key}

    def _default_state(self) -> LedgerState:
        return LedgerState(theme=self.default_theme)
