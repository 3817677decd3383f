"""Mini README: Render category aggregates to PNG charts.

Structure:
    * ChartKind - enum of the supported chart styles (bar, doughnut).
    * category_palette - deterministic colours, one per category.
    * CategoryChartRenderer - draws the aggregate with matplotlib and returns
      PNG bytes suitable for an HTTP response or a file.

Figures are built through ``matplotlib.figure.Figure`` rather than pyplot, so
rendering needs no GUI backend and keeps no global figure state.
"""

from __future__ import annotations

import colorsys
import io
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import List, Mapping, Tuple

import numpy as np
from matplotlib.figure import Figure

from ..errors import EmptyExport
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

RGB = Tuple[float, float, float]


class ChartKind(str, Enum):
    """Enumerate the chart styles offered for export."""

    BAR = "bar"
    DOUGHNUT = "doughnut"

    @classmethod
    def from_str(cls, value: str) -> "ChartKind":
        """Coerce arbitrary casing into a valid chart kind."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported chart kind: {value}") from error


def category_palette(count: int) -> List[RGB]:
    """Hues step 60 degrees per category at 80% saturation and 55% lightness."""

    return [colorsys.hls_to_rgb(((index * 60) % 360) / 360.0, 0.55, 0.80) for index in range(count)]


class CategoryChartRenderer:
    """Draw per-category sums as bar or doughnut charts."""

    def __init__(self, *, currency: str = "CHF", size: Tuple[float, float] = (6.4, 4.0), dpi: int = 100) -> None:
        self.currency = currency
        self.size = size
        self.dpi = dpi

    def render(self, aggregate: Mapping[str, Decimal], kind: ChartKind = ChartKind.BAR) -> bytes:
        """Return PNG bytes for the aggregate, keeping its key order on the axis."""

        if not aggregate:
            raise EmptyExport("No category data to chart")
        labels = list(aggregate.keys())
        values = np.array([float(amount) for amount in aggregate.values()])
        colors = category_palette(len(labels))

        figure = Figure(figsize=self.size, dpi=self.dpi)
        axes = figure.add_subplot(1, 1, 1)
        if kind is ChartKind.DOUGHNUT:
            self._draw_doughnut(axes, labels, values, colors)
        else:
            self._draw_bar(axes, labels, values, colors)
        figure.tight_layout()

        buffer = io.BytesIO()
        figure.savefig(buffer, format="png")
        LOGGER.debug("Rendered %s chart with %s categories", kind.value, len(labels))
        return buffer.getvalue()

    def export(self, aggregate: Mapping[str, Decimal], destination: Path, kind: ChartKind = ChartKind.BAR) -> Path:
        """Write the rendered chart to ``destination``."""

        payload = self.render(aggregate, kind)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(payload)
        LOGGER.info("Exported %s chart to %s", kind.value, destination)
        return destination

    def _draw_bar(self, axes, labels: List[str], values: np.ndarray, colors: List[RGB]) -> None:
        positions = np.arange(len(labels))
        axes.bar(positions, values, color=colors)
        axes.set_xticks(positions)
        axes.set_xticklabels(labels, rotation=30, ha="right")
        axes.set_ylabel(f"Betrag {self.currency}")
        axes.set_ylim(bottom=0)

    def _draw_doughnut(self, axes, labels: List[str], values: np.ndarray, colors: List[RGB]) -> None:
        shares = values / values.sum() * 100.0
        wedges = axes.pie(values, colors=colors, startangle=90, counterclock=False, wedgeprops={"width": 0.4})[0]
        axes.legend(
            wedges,
            [f"{label} ({share:.0f}%)" for label, share in zip(labels, shares)],
            loc="center left",
            bbox_to_anchor=(1.0, 0.5),
            frameon=False,
        )
        axes.set_aspect("equal")
