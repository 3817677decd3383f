"""Mini README: Package initialiser for the budget widget.

The budget widget tracks a monthly budget and the expenses recorded against
it. Subpackages are split by concern: ``ledger`` holds the state manager,
``storage`` the persisted-store gateway, ``export`` the CSV and chart
exporters and ``interface`` the web dashboard. Only the logger factory is
re-exported here so importing the package stays free of heavy dependencies.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]

__version__ = "0.3.0"
