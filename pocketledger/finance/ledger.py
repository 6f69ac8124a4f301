"""Mini README: Value objects describing ledger entries and their aggregates.

Structure:
    * TransactionType - enum naming the direction encoded by an amount's sign.
    * Transaction - dataclass for a single signed, dated, categorised entry.
    * MonthSummary / LedgerSummary - aggregate figures shown to users.
    * signed_amount, sum_balance, sum_income, sum_expenses - pure helpers.

Amounts are ``Decimal`` and carry their own direction: positive values are
income, negative values are expenses. Timestamps are truncated to the minute
on construction so values read back from storage compare equal to what was
written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List

from .months import DEFAULT_MONTH_FORMAT, format_month_label

ZERO = Decimal("0")


class TransactionType(str, Enum):
    """Direction of a transaction, derived from the sign of its amount."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error

    @classmethod
    def from_amount(cls, amount: Decimal) -> "TransactionType":
        return cls.EXPENSE if amount < 0 else cls.INCOME


def to_decimal(value: object) -> Decimal:
    """Coerce ints, floats and numeric strings to ``Decimal`` without float noise."""

    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    return Decimal(str(value))


def truncate_to_minute(moment: datetime) -> datetime:
    return moment.replace(second=0, microsecond=0)


def signed_amount(magnitude: object, transaction_type: TransactionType | str) -> Decimal:
    """Apply the direction to a user-entered magnitude.

    Expenses become ``-abs(magnitude)`` and income ``abs(magnitude)``, so a
    caller can pass either a bare figure or an already signed one.
    """

    if isinstance(transaction_type, str):
        transaction_type = TransactionType.from_str(transaction_type)
    value = abs(to_decimal(magnitude))
    return -value if transaction_type is TransactionType.EXPENSE else value


@dataclass(slots=True)
class Transaction:
    """A ledger entry; ``id`` stays 0 until the store assigns one."""

    amount: Decimal
    description: str
    category: str
    occurred_at: datetime = field(default_factory=datetime.now)
    image_paths: List[str] = field(default_factory=list)
    id: int = 0

    def __post_init__(self) -> None:
        self.amount = to_decimal(self.amount)
        self.occurred_at = truncate_to_minute(self.occurred_at)
        self.image_paths = [str(path) for path in self.image_paths]

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def transaction_type(self) -> TransactionType:
        return TransactionType.from_amount(self.amount)

    def month_label(self, fmt: str = DEFAULT_MONTH_FORMAT) -> str:
        return format_month_label(self.occurred_at, fmt)

    def add_image_path(self, path: str) -> None:
        """Queue a receipt reference; it is persisted by ``LedgerStore.create``."""

        self.image_paths.append(str(path))

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with serialisable values."""

        return {
            "id": self.id,
            "amount": float(self.amount),
            "transaction_type": self.transaction_type.value,
            "description": self.description,
            "category": self.category,
            "occurred_at": self.occurred_at.isoformat(),
            "image_paths": list(self.image_paths),
        }


def sum_balance(transactions: Iterable[Transaction]) -> Decimal:
    return sum((transaction.amount for transaction in transactions), ZERO)


def sum_income(transactions: Iterable[Transaction]) -> Decimal:
    return sum((transaction.amount for transaction in transactions if transaction.amount > 0), ZERO)


def sum_expenses(transactions: Iterable[Transaction]) -> Decimal:
    return sum((transaction.amount for transaction in transactions if transaction.amount < 0), ZERO)


@dataclass(slots=True)
class MonthSummary:
    """Income, expenses and profit/loss for one month label."""

    month_label: str
    income: Decimal
    expenses: Decimal
    transaction_count: int

    @property
    def profit_loss(self) -> Decimal:
        # expenses are already negative
        return self.income + self.expenses

    @property
    def outcome(self) -> str:
        """Classify the month as ``profit``, ``loss`` or ``even``."""

        if self.profit_loss > 0:
            return "profit"
        if self.profit_loss < 0:
            return "loss"
        return "even"

    def as_dict(self) -> Dict[str, object]:
        return {
            "month_label": self.month_label,
            "income": float(self.income),
            "expenses": float(self.expenses),
            "profit_loss": float(self.profit_loss),
            "outcome": self.outcome,
            "transaction_count": self.transaction_count,
        }


@dataclass(slots=True)
class LedgerSummary:
    """Totals across every stored transaction."""

    balance: Decimal
    income: Decimal
    expenses: Decimal
    transaction_count: int

    def as_dict(self) -> Dict[str, object]:
        return {
            "balance": float(self.balance),
            "income": float(self.income),
            "expenses": float(self.expenses),
            "transaction_count": self.transaction_count,
        }
