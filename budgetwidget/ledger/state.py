"""Mini README: Value objects describing the persisted ledger.

Structure:
    * Transaction - immutable expense entry with serialisation helpers.
    * LedgerState - budget, ordered transactions, and profile preferences.
    * LedgerSummary - derived totals; recomputed on every read, never stored.
    * parse_amount - coerce user input into a finite ``Decimal``.

Serialised records use JSON numbers for money. Amounts are rebuilt through
their shortest text form so ``4.5`` reloads as ``Decimal("4.5")`` rather than
the binary expansion of the float. Decoding is tolerant: the persisted record
is user-owned data and a damaged entry must never stop the widget starting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

ID_PREFIX = "txn_"
DEFAULT_THEME = "standard"
ZERO = Decimal("0")


def format_transaction_id(sequence: int) -> str:
    """Render the identifier issued for the given sequence number."""

    return f"{ID_PREFIX}{sequence:04d}"


def sequence_of(transaction_id: str) -> Optional[int]:
    """Return the numeric suffix of ``txn_NNNN`` identifiers, ``None`` otherwise."""

    if not transaction_id.startswith(ID_PREFIX):
        return None
    suffix = transaction_id[len(ID_PREFIX):]
    return int(suffix) if suffix.isdigit() else None


def parse_amount(value: object) -> Decimal:
    """Coerce numbers and numeric strings into a finite ``Decimal``.

    Raises ``ValueError`` for booleans, blanks, non-numeric text, NaN,
    infinities, and values that change when stored as a JSON number (too many
    significant digits, underflow to zero, overflow). Sign checks are left to
    the caller because budgets and transaction amounts disagree on whether
    zero is acceptable.
    """

    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a numeric amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Amount is blank")
        try:
            amount = Decimal(text)
        except InvalidOperation as error:
            raise ValueError(f"Not a numeric amount: {value!r}") from error
    else:
        raise ValueError(f"Not a numeric amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    if Decimal(repr(float(amount))) != amount:
        raise ValueError(f"Amount cannot be stored exactly: {value!r}")
    return amount


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        # Browser exports end in "Z", which older fromisoformat releases reject.
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise ValueError(f"Unsupported timestamp: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _json_number(amount: Decimal) -> Any:
    return int(amount) if amount == amount.to_integral_value() else float(amount)


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single recorded expense."""

    transaction_id: str
    description: str
    amount: Decimal
    category: str
    created_at: datetime

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match against description or category."""

        return needle in self.description.lower() or needle in self.category.lower()

    def as_dict(self) -> Dict[str, Any]:
        """Export the transaction with JSON-serialisable values."""

        return {
            "id": self.transaction_id,
            "description": self.description,
            "amount": _json_number(self.amount),
            "category": self.category,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], *, transaction_id: Optional[str] = None) -> "Transaction":
        """Rebuild a transaction, accepting the browser's ``desc``/``date`` keys."""

        identifier = payload.get("id") or transaction_id
        if not isinstance(identifier, str) or not identifier:
            raise ValueError("Transaction identifier is missing")
        description = payload.get("description", payload.get("desc"))
        category = payload.get("category")
        if not isinstance(description, str) or not isinstance(category, str):
            raise ValueError("Transaction description and category must be strings")
        amount = parse_amount(payload.get("amount"))
        if amount <= ZERO:
            raise ValueError(f"Transaction amount must be positive, got {amount}")
        created_at = _parse_timestamp(payload.get("created_at", payload.get("date")))
        return cls(
            transaction_id=identifier,
            description=description,
            amount=amount,
            category=category,
            created_at=created_at,
        )


@dataclass(frozen=True, slots=True)
class LedgerSummary:
    """Totals derived from the current ledger state."""

    budget: Decimal
    spent: Decimal
    remaining: Decimal
    over_budget: bool
    transaction_count: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "budget": _json_number(self.budget),
            "spent": _json_number(self.spent),
            "remaining": _json_number(self.remaining),
            "over_budget": self.over_budget,
            "transaction_count": self.transaction_count,
        }


@dataclass(slots=True)
class LedgerState:
    """Everything persisted under the storage key."""

    name: str = ""
    budget: Decimal = ZERO
    transactions: List[Transaction] = field(default_factory=list)
    theme: str = DEFAULT_THEME
    last_sequence: int = 0

    def as_dict(self) -> Dict[str, Any]:
        """Export the persisted record."""

        return {
            "name": self.name,
            "budget": _json_number(self.budget),
            "transactions": [transaction.as_dict() for transaction in self.transactions],
            "theme": self.theme,
            "last_sequence": self.last_sequence,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], *, default_theme: str = DEFAULT_THEME) -> "LedgerState":
        """Rebuild state from a decoded record, dropping entries that fail validation."""

        name = payload.get("name")
        theme = payload.get("theme")
        try:
            budget = parse_amount(payload.get("budget", 0))
        except ValueError:
            LOGGER.warning("Ignoring unreadable budget %r", payload.get("budget"))
            budget = ZERO
        if budget < ZERO:
            LOGGER.warning("Ignoring negative budget %s", budget)
            budget = ZERO

        raw_sequence = payload.get("last_sequence", 0)
        last_sequence = raw_sequence if isinstance(raw_sequence, int) and not isinstance(raw_sequence, bool) else 0

        raw_transactions = payload.get("transactions") or []
        if not isinstance(raw_transactions, list):
            LOGGER.warning("Ignoring transactions payload of type %s", type(raw_transactions).__name__)
            raw_transactions = []

        for entry in raw_transactions:
            if isinstance(entry, Mapping) and isinstance(entry.get("id"), str):
                last_sequence = max(last_sequence, sequence_of(entry["id"]) or 0)

        transactions: List[Transaction] = []
        seen_ids = set()
        for position, entry in enumerate(raw_transactions):
            if not isinstance(entry, Mapping):
                LOGGER.warning("Dropping transaction #%s: not an object", position)
                continue
            fallback_id = None
            if not entry.get("id"):
                last_sequence += 1
                fallback_id = format_transaction_id(last_sequence)
            try:
                transaction = Transaction.from_dict(entry, transaction_id=fallback_id)
            except ValueError as error:
                LOGGER.warning("Dropping transaction #%s: %s", position, error)
                continue
            if transaction.transaction_id in seen_ids:
                LOGGER.warning("Dropping duplicate transaction %s", transaction.transaction_id)
                continue
            seen_ids.add(transaction.transaction_id)
            transactions.append(transaction)

        return cls(
            name=name.strip() if isinstance(name, str) else "",
            budget=budget,
            transactions=transactions,
            theme=theme if isinstance(theme, str) and theme.strip() else default_theme,
            last_sequence=last_sequence,
        )
