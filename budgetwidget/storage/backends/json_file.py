"""Mini README: File-backed ledger storage.

Structure:
    * JsonFileRepository - keeps the record in ``<directory>/<key>.json``.

Writes go to a temporary sibling file that is then moved over the target, so
an interrupted save leaves the previous record intact instead of a truncated
file.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional

from ...logging_utils import get_logger
from ..base import LedgerRepository
from ..registry import REGISTRY

if TYPE_CHECKING:
    from ...configuration import BudgetWidgetSettings

LOGGER = get_logger(__name__)


class JsonFileRepository(LedgerRepository):
    """Persist the ledger as a JSON document on disk."""

    backend_name = "json"

    def __init__(self, directory: Path, **kwargs) -> None:
        super().__init__(**kwargs)
        self.directory = Path(directory)
        self.path = self.directory / f"{self.storage_key}.json"

    @classmethod
    def from_settings(cls, settings: "BudgetWidgetSettings") -> "JsonFileRepository":
        return cls(
            settings.data_directory,
            storage_key=settings.storage_key,
            default_theme=settings.default_theme,
        )

    def read_raw(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as error:
            LOGGER.warning("Ledger file %s is not UTF-8 text: %s", self.path, error)
            return None
        except OSError as error:
            LOGGER.warning("Ledger file %s could not be read: %s", self.path, error)
            return None

    def write_raw(self, payload: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        handle, temp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{self.storage_key}.", suffix=".tmp")
        try:
            with os.fdopen(handle, "w", encoding="utf-8") as temp_file:
                temp_file.write(payload)
            os.replace(temp_name, self.path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise

    def metadata(self) -> Dict[str, str]:
        details = super().metadata()
        details["path"] = str(self.path)
        return details


REGISTRY.register(JsonFileRepository)
