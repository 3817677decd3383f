"""Mini README: Backend registry enabling pluggable ledger storage.

Structure:
    * RepositoryRegistry - manages registration and instantiation of
      ``LedgerRepository`` implementations.

Built-in backends register on import. Third-party packages can add more by
exposing classes under the ``budgetwidget.storage`` entry-point group and
calling ``discover_plugins``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Type

from ..logging_utils import get_logger
from ..utils.plugin_loader import load_entry_point_plugins
from .base import LedgerRepository

if TYPE_CHECKING:
    from ..configuration import BudgetWidgetSettings

LOGGER = get_logger(__name__)

PLUGIN_GROUP = "budgetwidget.storage"


class RepositoryRegistry:
    """Simple registry for mapping backend identifiers to classes."""

    def __init__(self) -> None:
        self._backends: Dict[str, Type[LedgerRepository]] = {}

    def register(self, backend: Type[LedgerRepository]) -> Type[LedgerRepository]:
        """Register a repository class; returns it so it can be used as a decorator."""

        identifier = backend.backend_name.lower()
        LOGGER.debug("Registering storage backend '%s'", identifier)
        self._backends[identifier] = backend
        return backend

    def available_backends(self) -> Iterable[str]:
        """Return iterable of backend identifiers for display."""

        return sorted(self._backends.keys())

    def create(self, identifier: str, *, settings: "BudgetWidgetSettings") -> LedgerRepository:
        """Instantiate the backend matching the identifier."""

        backend_cls = self._backends.get(identifier.lower())
        if not backend_cls:
            raise KeyError(f"Unknown storage backend '{identifier}'")
        LOGGER.info("Creating storage backend '%s'", identifier)
        return backend_cls.from_settings(settings)

    def discover_plugins(self, group: str = PLUGIN_GROUP) -> int:
        """Register repository classes published by installed packages."""

        registered = 0
        for plugin in load_entry_point_plugins(group):
            if isinstance(plugin, type) and issubclass(plugin, LedgerRepository):
                self.register(plugin)
                registered += 1
            else:
                LOGGER.warning("Entry point object %r is not a LedgerRepository; skipping", plugin)
        return registered


REGISTRY = RepositoryRegistry()
