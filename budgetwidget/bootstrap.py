"""Mini README: Application shell wiring for the budget widget.

Structure:
    * build_ledger_manager - create the storage backend and the one
      ``LedgerStateManager`` for this process from settings.

The web app and the CLI both call this at start-up and then pass the manager
to their handlers, so no module keeps the ledger in a global variable.
"""

from __future__ import annotations

from typing import Optional

from .configuration import BudgetWidgetSettings, get_settings
from .ledger import LedgerStateManager
from .logging_utils import get_logger
from .storage import REGISTRY

LOGGER = get_logger(__name__)


def build_ledger_manager(settings: Optional[BudgetWidgetSettings] = None) -> LedgerStateManager:
    """Construct the ledger manager backed by the configured repository."""

    settings = settings or get_settings()
    if settings.storage_backend not in REGISTRY.available_backends():
        REGISTRY.discover_plugins()
    repository = REGISTRY.create(settings.storage_backend, settings=settings)
    LOGGER.info("Ledger storage: %s", repository.metadata())
    return LedgerStateManager(
        repository,
        placeholder_description=settings.placeholder_description,
        fallback_category=settings.fallback_category,
        default_categories=settings.default_categories,
    )
