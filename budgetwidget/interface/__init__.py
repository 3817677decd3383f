"""Mini README: Interactive interfaces for the budget widget.

Exports the FastAPI application factory that powers the browser dashboard.
The Typer command line lives in ``main_budget_widget.py`` at the repository
root and shares the same ledger wiring through ``budgetwidget.bootstrap``.
"""

from .web_app import create_application

__all__ = ["create_application"]
