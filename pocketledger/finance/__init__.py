"""Mini README: Finance value objects for Pocket Ledger.

This package groups the transaction model, its aggregate summaries, and the
month label helpers used to scope listings and statistics to a calendar
month. Nothing here touches storage; ``pocketledger.storage`` persists these
objects.
"""

from .ledger import (
    LedgerSummary,
    MonthSummary,
    Transaction,
    TransactionType,
    signed_amount,
    sum_balance,
    sum_expenses,
    sum_income,
)
from .months import (
    DEFAULT_MONTH_FORMAT,
    current_month_label,
    format_month_label,
    month_bounds,
    next_month_label,
    parse_month_label,
    previous_month_label,
)

__all__ = [
    "DEFAULT_MONTH_FORMAT",
    "LedgerSummary",
    "MonthSummary",
    "Transaction",
    "TransactionType",
    "current_month_label",
    "format_month_label",
    "month_bounds",
    "next_month_label",
    "parse_month_label",
    "previous_month_label",
    "signed_amount",
    "sum_balance",
    "sum_expenses",
    "sum_income",
]
