"""Mini README: Tests for CSV and chart exports.

Validates the CSV column order and quoting, the dated download names, and
that the chart renderer produces PNG data for both chart styles while
refusing to draw an empty aggregate.
"""

from __future__ import annotations

import csv
import io
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from budgetwidget.errors import EmptyExport
from budgetwidget.export import (
    CSV_HEADER,
    CategoryChartRenderer,
    ChartKind,
    category_palette,
    chart_filename,
    csv_filename,
    transactions_to_csv,
)
from budgetwidget.ledger import Transaction

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _transaction(identifier: str, description: str, amount: str, category: str) -> Transaction:
    return Transaction(
        transaction_id=identifier,
        description=description,
        amount=Decimal(amount),
        category=category,
        created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )


def test_csv_has_header_and_escapes_fields() -> None:
    payload = transactions_to_csv(
        [
            _transaction("txn_0001", "Coffee", "4.5", "Verpflegung"),
            _transaction("txn_0002", 'Pizza, "large"', "12.50", "Verpflegung"),
        ]
    )

    lines = payload.splitlines()
    assert lines[0] == "category,description,amount,date"
    assert lines[1] == "Verpflegung,Coffee,4.5,2024-05-01T12:00:00+00:00"
    assert lines[2] == 'Verpflegung,"Pizza, ""large""",12.50,2024-05-01T12:00:00+00:00'

    rows = list(csv.reader(io.StringIO(payload)))
    assert tuple(rows[0]) == CSV_HEADER
    assert rows[2][1] == 'Pizza, "large"'


def test_csv_keeps_chronological_order_from_ledger(ledger) -> None:
    ledger.add_transaction("first", 1, "A")
    ledger.add_transaction("second", 2, "B")

    rows = list(csv.reader(io.StringIO(ledger.to_csv())))
    assert [row[1] for row in rows[1:]] == ["first", "second"]


def test_csv_of_nothing_raises_empty_export() -> None:
    with pytest.raises(EmptyExport):
        transactions_to_csv([])


def test_export_filenames_use_iso_dates() -> None:
    day = date(2024, 5, 1)
    assert csv_filename(day) == "verlauf_2024-05-01.csv"
    assert chart_filename(day) == "diagramm_2024-05-01.png"


def test_palette_steps_hue_by_sixty_degrees() -> None:
    palette = category_palette(7)
    assert len(palette) == 7
    assert palette[0] == pytest.approx((0.91, 0.19, 0.19), abs=0.01)
    assert palette[6] == palette[0]


@pytest.mark.parametrize("kind", [ChartKind.BAR, ChartKind.DOUGHNUT])
def test_renderer_produces_png(kind) -> None:
    renderer = CategoryChartRenderer(size=(4.0, 3.0), dpi=50)
    payload = renderer.render({"Verpflegung": Decimal("42.5"), "Handyabo": Decimal("29.9")}, kind)
    assert payload.startswith(PNG_SIGNATURE)


def test_renderer_writes_file(tmp_path) -> None:
    renderer = CategoryChartRenderer(size=(4.0, 3.0), dpi=50)
    destination = renderer.export({"Sparen": Decimal("100")}, tmp_path / "charts" / chart_filename(date(2024, 5, 1)))
    assert destination.read_bytes().startswith(PNG_SIGNATURE)


def test_renderer_refuses_empty_aggregate() -> None:
    with pytest.raises(EmptyExport):
        CategoryChartRenderer().render({})


def test_chart_kind_parsing() -> None:
    assert ChartKind.from_str(" Doughnut ") is ChartKind.DOUGHNUT
    with pytest.raises(ValueError):
        ChartKind.from_str("pie3d")
