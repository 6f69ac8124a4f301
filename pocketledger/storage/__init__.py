"""Mini README: Persistence layer for Pocket Ledger.

``DatabaseManager`` owns the SQLite connection and schema; ``LedgerStore``
exposes the CRUD and aggregate operations the interfaces call. Use
``open_ledger`` to build a ready store from settings.
"""

from .database import SCHEMA_VERSION, TIMESTAMP_FORMAT, DatabaseManager
from .store import LedgerStore, open_ledger

__all__ = [
    "DatabaseManager",
    "LedgerStore",
    "SCHEMA_VERSION",
    "TIMESTAMP_FORMAT",
    "open_ledger",
]
