"""Mini README: Core package initializer for Pocket Ledger.

Pocket Ledger records signed, dated, categorised transactions with optional
receipt image references and reports balance, income and expenses overall or
per calendar month. Subpackages: ``finance`` (value objects and month labels),
``storage`` (SQLite-backed store) and ``interface`` (HTTP API).
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
