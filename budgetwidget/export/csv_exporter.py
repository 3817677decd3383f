"""Mini README: CSV export of the transaction history.

Structure:
    * CSV_HEADER - fixed column order used by every export.
    * transactions_to_csv - serialise transactions into CSV text.
    * csv_filename / chart_filename - dated download names.

Rows follow insertion order so the file reads chronologically. Fields holding
commas, quotes, or line breaks are wrapped in double quotes with embedded
quotes doubled, as spreadsheet tools expect.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import TYPE_CHECKING, Iterable, Optional

from ..errors import EmptyExport
from ..logging_utils import get_logger

if TYPE_CHECKING:
    from ..ledger.state import Transaction

LOGGER = get_logger(__name__)

CSV_HEADER = ("category", "description", "amount", "date")


def transactions_to_csv(transactions: Iterable["Transaction"]) -> str:
    """Return UTF-8 ready CSV text; raise ``EmptyExport`` when there are no rows."""

    rows = list(transactions)
    if not rows:
        raise EmptyExport("No transactions to export")

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for transaction in rows:
        writer.writerow(
            [
                transaction.category,
                transaction.description,
                format(transaction.amount, "f"),
                transaction.created_at.isoformat(),
            ]
        )
    LOGGER.debug("Serialised %s transactions to CSV", len(rows))
    return buffer.getvalue()


def csv_filename(day: Optional[date] = None) -> str:
    """Download name for history exports, e.g. ``verlauf_2024-05-01.csv``."""

    return f"verlauf_{(day or date.today()).isoformat()}.csv"


def chart_filename(day: Optional[date] = None) -> str:
    """Download name for chart exports, e.g. ``diagramm_2024-05-01.png``."""

    return f"diagramm_{(day or date.today()).isoformat()}.png"
