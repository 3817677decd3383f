"""Mini README: Export helpers for the transaction history.

Exports the CSV serialiser and the matplotlib chart renderer together with the
dated filenames used for downloads (``verlauf_<date>.csv`` and
``diagramm_<date>.png``).
"""

from .chart_exporter import CategoryChartRenderer, ChartKind, category_palette
from .csv_exporter import CSV_HEADER, chart_filename, csv_filename, transactions_to_csv

__all__ = [
    "CSV_HEADER",
    "CategoryChartRenderer",
    "ChartKind",
    "category_palette",
    "chart_filename",
    "csv_filename",
    "transactions_to_csv",
]
