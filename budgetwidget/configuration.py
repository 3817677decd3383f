"""Mini README: Centralised configuration models and helpers for the budget widget.

Structure:
    * BudgetWidgetSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``BUDGETWIDGET_`` environment variables,
    choose the storage backend, and set interface ports. The configuration is
    cached so validation runs once per process; tests call
    ``get_settings.cache_clear()`` after patching the environment.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CATEGORIES = [
    "Handyabo",
    "Fonds",
    "Eltern",
    "Verpflegung",
    "Frisör",
    "Sparen",
    "Geschenke",
    "Sonstiges",
]


class BudgetWidgetSettings(BaseSettings):
    """Runtime configuration for the budget widget."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGETWIDGET_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied when the CLI or web app starts.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted ledger record.",
    )
    storage_backend: str = Field(
        "json",
        description="Registered repository backend used to persist the ledger.",
    )
    storage_key: str = Field(
        "budget_widget_state",
        description="Key under which the ledger record is stored.",
        min_length=1,
    )
    currency: str = Field(
        "CHF",
        description="Currency label shown next to amounts. Amounts themselves are unitless.",
    )
    default_theme: str = Field("standard", description="Theme applied until the user picks one.")
    default_categories: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORIES),
        description="Categories offered in the entry form before any are recorded.",
    )
    placeholder_description: str = Field(
        "—",
        description="Description stored when a transaction is entered without one.",
    )
    fallback_category: str = Field(
        "Sonstiges",
        description="Category stored when a transaction is entered without one.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the dashboard to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the dashboard exposes.",
        ge=1,
        le=65535,
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[Union[str, Path]]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value or "data").expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("storage_backend")
    @classmethod
    def _normalise_backend(cls, value: str) -> str:
        return value.strip().lower()


@lru_cache()
def get_settings() -> BudgetWidgetSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return BudgetWidgetSettings()
