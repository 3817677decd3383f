"""Mini README: Ledger state manager owning the budget and its transactions.

Structure:
    * LedgerStateManager - validates input, mutates state, persists after
      every change, and derives summaries, aggregates, and filtered views.

The manager is constructed once by the application shell and passed to the
web app or CLI. It loads the persisted record at construction and writes the
full record for each accepted mutation before adopting it, so a failed save
leaves the previous state in place. Totals are recomputed from the
transaction list on every read so they cannot drift from the stored entries.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional

from ..errors import (
    EmptyExport,
    InvalidAmount,
    InvalidBudget,
    InvalidProfile,
    TransactionNotFound,
)
from ..export.csv_exporter import transactions_to_csv
from ..logging_utils import get_logger
from .state import (
    ZERO,
    LedgerState,
    LedgerSummary,
    Transaction,
    format_transaction_id,
    parse_amount,
)

if TYPE_CHECKING:
    from ..storage.base import LedgerRepository

LOGGER = get_logger(__name__)

DEFAULT_PLACEHOLDER = "—"
DEFAULT_FALLBACK_CATEGORY = "Sonstiges"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LedgerStateManager:
    """Single owner of the ledger state for one user session."""

    def __init__(
        self,
        repository: LedgerRepository,
        *,
        clock: Callable[[], datetime] = _utc_now,
        placeholder_description: str = DEFAULT_PLACEHOLDER,
        fallback_category: str = DEFAULT_FALLBACK_CATEGORY,
        default_categories: Optional[Iterable[str]] = None,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._placeholder = placeholder_description
        self._fallback_category = fallback_category
        self._default_categories = list(default_categories or [])
        self._state = repository.load()
        LOGGER.debug(
            "Ledger loaded with %s transactions and budget %s",
            len(self._state.transactions),
            self._state.budget,
        )

    # ------------------------------------------------------------------
    # Read-only views

    @property
    def state(self) -> LedgerState:
        return self._state

    @property
    def budget(self) -> Decimal:
        return self._state.budget

    @property
    def user_name(self) -> str:
        return self._state.name

    @property
    def theme(self) -> str:
        return self._state.theme

    @property
    def needs_name(self) -> bool:
        """True until the first-run name prompt has been answered."""

        return not self._state.name

    def list_transactions(self, *, newest_first: bool = False) -> List[Transaction]:
        """Return the history in chronological order, or reversed for the history view."""

        transactions = list(self._state.transactions)
        if newest_first:
            transactions.reverse()
        return transactions

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction, raising informative errors when missing."""

        for transaction in self._state.transactions:
            if transaction.transaction_id == transaction_id:
                return transaction
        raise TransactionNotFound(f"Transaction {transaction_id} not found")

    # ------------------------------------------------------------------
    # Mutations

    def set_budget(self, amount: object) -> Decimal:
        """Replace the budget; negative or non-numeric input leaves it unchanged."""

        try:
            value = parse_amount(amount)
        except ValueError as error:
            raise InvalidBudget(f"Invalid budget: {error}") from error
        if value < ZERO:
            raise InvalidBudget(f"Budget cannot be negative, got {value}")
        self._commit(replace(self._state, budget=value))
        LOGGER.info("Budget set to %s", value)
        return value

    def add_transaction(self, description: Optional[str], amount: object, category: Optional[str]) -> Transaction:
        """Append a new expense after validating the amount."""

        try:
            value = parse_amount(amount)
        except ValueError as error:
            raise InvalidAmount(f"Invalid amount: {error}") from error
        if value <= ZERO:
            raise InvalidAmount(f"Amount must be positive, got {value}")

        sequence = self._state.last_sequence + 1
        transaction = Transaction(
            transaction_id=format_transaction_id(sequence),
            description=(description or "").strip() or self._placeholder,
            amount=value,
            category=(category or "").strip() or self._fallback_category,
            created_at=self._clock(),
        )
        self._commit(
            replace(
                self._state,
                transactions=[*self._state.transactions, transaction],
                last_sequence=sequence,
            )
        )
        LOGGER.info(
            "Recorded transaction %s: %s %s (%s)",
            transaction.transaction_id,
            transaction.category,
            transaction.amount,
            transaction.description,
        )
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        """Remove the matching entry; unknown identifiers are a silent no-op."""

        remaining = [t for t in self._state.transactions if t.transaction_id != transaction_id]
        if len(remaining) == len(self._state.transactions):
            LOGGER.debug("Delete ignored, %s is not in the ledger", transaction_id)
            return False
        self._commit(replace(self._state, transactions=remaining))
        LOGGER.info("Deleted transaction %s", transaction_id)
        return True

    def reset_all(self) -> int:
        """Clear the history while keeping budget and preferences."""

        cleared = len(self._state.transactions)
        self._commit(replace(self._state, transactions=[]))
        LOGGER.info("History reset, %s transactions removed", cleared)
        return cleared

    def set_user_name(self, name: Optional[str]) -> str:
        value = (name or "").strip()
        if not value:
            raise InvalidProfile("Name cannot be blank")
        self._commit(replace(self._state, name=value))
        LOGGER.info("Display name updated")
        return value

    def set_theme(self, theme: Optional[str]) -> str:
        value = (theme or "").strip()
        if not value:
            raise InvalidProfile("Theme cannot be blank")
        self._commit(replace(self._state, theme=value))
        LOGGER.info("Theme switched to %s", value)
        return value

    # ------------------------------------------------------------------
    # Derived data

    def compute_summary(self) -> LedgerSummary:
        """Return spent and remaining; remaining is clamped at zero when overspent."""

        spent = sum((t.amount for t in self._state.transactions), ZERO)
        budget = self._state.budget
        return LedgerSummary(
            budget=budget,
            spent=spent,
            remaining=max(ZERO, budget - spent),
            over_budget=spent > budget,
            transaction_count=len(self._state.transactions),
        )

    def aggregate_by_category(self) -> Dict[str, Decimal]:
        """Sum amounts per category, keyed in first-seen order."""

        sums: Dict[str, Decimal] = {}
        for transaction in self._state.transactions:
            sums[transaction.category] = sums.get(transaction.category, ZERO) + transaction.amount
        return sums

    def distinct_categories(self) -> List[str]:
        """Sorted categories currently present, for the filter choices."""

        return sorted({t.category for t in self._state.transactions})

    def category_choices(self) -> List[str]:
        """Entry-form categories: configured defaults, then any extra ones in use."""

        choices = list(self._default_categories)
        for category in self.aggregate_by_category():
            if category not in choices:
                choices.append(category)
        return choices

    def filter_transactions(self, text_query: Optional[str] = "", category_filter: Optional[str] = "") -> List[Transaction]:
        """Chronological entries matching both the text query and the category filter."""

        needle = (text_query or "").strip().lower()
        category = category_filter or ""
        return [
            transaction
            for transaction in self._state.transactions
            if (not needle or transaction.matches(needle))
            and (not category or transaction.category == category)
        ]

    def to_csv(self) -> str:
        """Serialise the full history; raises ``EmptyExport`` when there is none."""

        return transactions_to_csv(self._state.transactions)

    def require_transactions(self) -> None:
        """Raise ``EmptyExport`` when there is nothing to export."""

        if not self._state.transactions:
            raise EmptyExport("No transactions to export")

    def snapshot(self) -> Dict[str, Any]:
        """Persisted record plus derived data, ready for JSON responses."""

        payload = self._state.as_dict()
        payload["summary"] = self.compute_summary().as_dict()
        payload["needs_name"] = self.needs_name
        return payload

    def _commit(self, state: LedgerState) -> None:
        # Saved first; a failed save leaves the current state untouched.
        self._repository.save(state)
        self._state = state
