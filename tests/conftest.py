"""Mini README: Shared fixtures for the budget widget tests.

Provides an in-memory store, a deterministic clock, and a factory that builds
ledger managers over the same store so tests can simulate restarts.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict

import pytest

from budgetwidget.configuration import get_settings
from budgetwidget.ledger import LedgerStateManager
from budgetwidget.storage import MemoryRepository

START = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)


class TickingClock:
    """Return a new minute on every call so timestamps stay ordered."""

    def __init__(self, start: datetime = START) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(minutes=1)
        return value


@pytest.fixture
def store() -> Dict[str, str]:
    return {}


@pytest.fixture
def make_ledger(store: Dict[str, str]) -> Callable[[], LedgerStateManager]:
    def factory() -> LedgerStateManager:
        return LedgerStateManager(
            MemoryRepository(store),
            clock=TickingClock(),
            default_categories=["Verpflegung", "Sparen", "Sonstiges"],
        )

    return factory


@pytest.fixture
def ledger(make_ledger) -> LedgerStateManager:
    return make_ledger()


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a temporary data directory for the duration of a test."""

    monkeypatch.setenv("BUDGETWIDGET_DATA_DIRECTORY", str(tmp_path))
    monkeypatch.setenv("BUDGETWIDGET_STORAGE_BACKEND", "json")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
