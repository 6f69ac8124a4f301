"""Mini README: SQLite connection and schema management for the ledger.

Structure:
    * DatabaseManager - lazily opens one connection, creates and migrates the schema.
    * TIMESTAMP_FORMAT - the fixed text layout of ``transactions.occurred_at``.

The schema is two tables: ``transactions`` and ``transaction_images``, the
latter cascading on delete of its parent. Foreign keys are switched on for
every connection so the cascade is enforced by SQLite itself. The database
records ``SCHEMA_VERSION`` in ``PRAGMA user_version``; files written by the
earlier mobile release (timestamp column named ``date``) are upgraded in place.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional, Union

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

SCHEMA_VERSION = 2
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class DatabaseManager:
    """Own the SQLite connection used by ``LedgerStore``."""

    def __init__(self, db_path: Union[str, Path]) -> None:
        self.db_path = str(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            LOGGER.debug("Opening ledger database at %s", self.db_path)
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self) -> None:
        """Create schema and upgrade legacy layouts."""

        conn = self.get_connection()
        self._migrate_schema(conn)
        self._create_schema(conn)
        conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        conn.commit()
        LOGGER.debug("Ledger schema ready (version %s)", SCHEMA_VERSION)

    def schema_version(self) -> int:
        return self.get_connection().execute("PRAGMA user_version").fetchone()[0]

    def _migrate_schema(self, conn: sqlite3.Connection) -> None:
        """Idempotent column renames for databases created by older releases."""

        cols = {row[1] for row in conn.execute("PRAGMA table_info(transactions)").fetchall()}
        if "date" in cols and "occurred_at" not in cols:
            LOGGER.info("Migrating legacy ledger schema in %s", self.db_path)
            conn.execute("ALTER TABLE transactions RENAME COLUMN date TO occurred_at")

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS transactions (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                amount      REAL,
                description TEXT,
                category    TEXT,
                occurred_at TEXT
            );

            CREATE TABLE IF NOT EXISTS transaction_images (
                image_id       INTEGER PRIMARY KEY AUTOINCREMENT,
                transaction_id INTEGER REFERENCES transactions(id) ON DELETE CASCADE,
                image_path     TEXT
            );

            CREATE INDEX IF NOT EXISTS idx_transactions_occurred_at
                ON transactions(occurred_at);
            CREATE INDEX IF NOT EXISTS idx_transaction_images_transaction_id
                ON transaction_images(transaction_id);
        """)

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None
