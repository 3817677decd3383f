"""Mini README: Error kinds raised by the budget widget core.

Structure:
    * LedgerError - base class, a ``ValueError`` so generic handlers still apply.
    * InvalidAmount / InvalidBudget / InvalidProfile - rejected user input.
    * TransactionNotFound - lookup of an unknown identifier.
    * EmptyExport - CSV or chart export requested without any transactions.

Every validation error is raised before state changes, so callers can show the
message and carry on with the previous ledger untouched.
"""

from __future__ import annotations


class LedgerError(ValueError):
    """Base class for recoverable ledger errors."""


class InvalidAmount(LedgerError):
    """Transaction amount is missing, non-numeric, or not strictly positive."""


class InvalidBudget(LedgerError):
    """Budget value is non-numeric or negative."""


class InvalidProfile(LedgerError):
    """Display name or theme preference is blank."""


class TransactionNotFound(LedgerError, KeyError):
    """No transaction is registered under the requested identifier."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message for HTTP details.
        return str(self.args[0]) if self.args else ""


class EmptyExport(LedgerError):
    """Export was requested while the ledger holds no transactions."""
