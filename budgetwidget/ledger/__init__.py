"""Mini README: Ledger state for the budget widget.

The package owns the in-memory model of one user's budget: the transaction
value objects, the derived summary, and ``LedgerStateManager`` which applies
mutations and persists them through a ``LedgerRepository``. Error kinds are
re-exported from ``budgetwidget.errors`` so callers can import everything the
ledger raises from one place.
"""

from ..errors import (
    EmptyExport,
    InvalidAmount,
    InvalidBudget,
    InvalidProfile,
    LedgerError,
    TransactionNotFound,
)
from .manager import LedgerStateManager
from .state import LedgerState, LedgerSummary, Transaction, parse_amount

__all__ = [
    "EmptyExport",
    "InvalidAmount",
    "InvalidBudget",
    "InvalidProfile",
    "LedgerError",
    "LedgerState",
    "LedgerStateManager",
    "LedgerSummary",
    "Transaction",
    "TransactionNotFound",
    "parse_amount",
]
