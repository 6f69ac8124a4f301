"""Mini README: Durable ledger store backed by SQLite.

Structure:
    * LedgerStore - CRUD over transactions and their receipt image references,
      plus overall and month-scoped aggregates.
    * open_ledger - startup factory wiring settings, database and store.

Writes run inside a single SQLite transaction each, so a transaction and its
image rows appear (or disappear) together. Month queries accept the same
labels the interfaces display ("Mar 2025") but filter on a calendar range
internally. Timestamps that cannot be parsed are replaced by the current
time and logged rather than raised; any ``sqlite3.Error`` propagates to the
caller unchanged.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..configuration import LedgerSettings, get_settings
from ..finance.ledger import (
    ZERO,
    LedgerSummary,
    MonthSummary,
    Transaction,
    sum_balance,
    sum_expenses,
    sum_income,
    to_decimal,
)
from ..finance.months import DEFAULT_MONTH_FORMAT, format_month_label, month_bounds
from ..logging_utils import get_logger
from .database import TIMESTAMP_FORMAT, DatabaseManager

LOGGER = get_logger(__name__)

# Stay well below SQLITE_MAX_VARIABLE_NUMBER on older builds.
_IN_CLAUSE_CHUNK = 500


class LedgerStore:
    """Persist transactions and derive balance, income and expense figures."""

    def __init__(self, database: DatabaseManager, *, month_format: str = DEFAULT_MONTH_FORMAT) -> None:
        self._db = database
        self.month_format = month_format

    # ------------------------------------------------------------------
    # Row mapping
    # ------------------------------------------------------------------
    def _select(self) -> str:
        return "SELECT id, amount, description, category, occurred_at FROM transactions"

    def _parse_timestamp(self, row_id: int, raw: Optional[str]) -> datetime:
        try:
            return datetime.strptime(raw, TIMESTAMP_FORMAT)
        except (TypeError, ValueError):
            fallback = datetime.now().replace(second=0, microsecond=0)
            LOGGER.warning(
                "Transaction %s has unreadable timestamp %r; substituting %s",
                row_id,
                raw,
                fallback.strftime(TIMESTAMP_FORMAT),
            )
            return fallback

    def _row_to_model(self, row: sqlite3.Row, image_paths: List[str]) -> Transaction:
        return Transaction(
            id=row["id"],
            amount=to_decimal(row["amount"]),
            description=row["description"] or "",
            category=row["category"] or "",
            occurred_at=self._parse_timestamp(row["id"], row["occurred_at"]),
            image_paths=image_paths,
        )

    def _image_lookup(self, transaction_ids: List[int]) -> Dict[int, List[str]]:
        """Fetch image paths for many transactions; returns {id: [path, ...]}."""

        conn = self._db.get_connection()
        lookup: Dict[int, List[str]] = {}
        for start in range(0, len(transaction_ids), _IN_CLAUSE_CHUNK):
            chunk = transaction_ids[start:start + _IN_CLAUSE_CHUNK]
            placeholders = ",".join("?" * len(chunk))
            rows = conn.execute(
                f"""SELECT transaction_id, image_path
                    FROM transaction_images
                    WHERE transaction_id IN ({placeholders})
                    ORDER BY image_id ASC""",
                chunk,
            ).fetchall()
            for row in rows:
                lookup.setdefault(row["transaction_id"], []).append(row["image_path"])
        return lookup

    def _hydrate(self, rows: Iterable[sqlite3.Row]) -> List[Transaction]:
        rows = list(rows)
        images = self._image_lookup([row["id"] for row in rows])
        return [self._row_to_model(row, images.get(row["id"], [])) for row in rows]

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def create(self, transaction: Transaction) -> int:
        """Insert the transaction with its image references and return the new id."""

        conn = self._db.get_connection()
        with conn:
            cursor = conn.execute(
                """INSERT INTO transactions (amount, description, category, occurred_at)
                   VALUES (?, ?, ?, ?)""",
                (
                    float(transaction.amount),
                    transaction.description,
                    transaction.category,
                    transaction.occurred_at.strftime(TIMESTAMP_FORMAT),
                ),
            )
            transaction_id = cursor.lastrowid
            conn.executemany(
                "INSERT INTO transaction_images (transaction_id, image_path) VALUES (?, ?)",
                [(transaction_id, path) for path in transaction.image_paths],
            )
        LOGGER.info(
            "Created transaction %s (%s, %s images)",
            transaction_id,
            transaction.amount,
            len(transaction.image_paths),
        )
        return transaction_id

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        conn = self._db.get_connection()
        row = conn.execute(self._select() + " WHERE id = ?", (transaction_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_model(row, self.image_paths_for(transaction_id))

    def image_paths_for(self, transaction_id: int) -> List[str]:
        """Return the receipt references of one transaction in insertion order."""

        conn = self._db.get_connection()
        rows = conn.execute(
            """SELECT image_path FROM transaction_images
               WHERE transaction_id = ?
               ORDER BY image_id ASC""",
            (transaction_id,),
        ).fetchall()
        return [row["image_path"] for row in rows]

    def list_all(self) -> List[Transaction]:
        """Return every transaction, newest first."""

        conn = self._db.get_connection()
        rows = conn.execute(self._select() + " ORDER BY occurred_at DESC, id DESC").fetchall()
        LOGGER.debug("Loaded %s transactions", len(rows))
        return self._hydrate(rows)

    def list_by_month(self, month_label: str) -> List[Transaction]:
        """Return transactions whose month label equals ``month_label``, newest first.

        A label that parses under ``month_format`` and renders back to exactly
        the same text is turned into a ``[month_start, next_month_start)``
        range evaluated by SQLite. Any other label (unparseable, different
        case, stray whitespace) is compared against each stored timestamp
        rendered with the same pattern, so matching is always exact.
        """

        try:
            start, end = month_bounds(month_label, self.month_format)
        except ValueError:
            start = end = None
        if start is None or format_month_label(start, self.month_format) != month_label:
            LOGGER.debug("Month label %r is not canonical; comparing rendered labels", month_label)
            return [
                transaction
                for transaction in self.list_all()
                if format_month_label(transaction.occurred_at, self.month_format) == month_label
            ]

        conn = self._db.get_connection()
        rows = conn.execute(
            self._select()
            + """ WHERE occurred_at >= ? AND occurred_at < ?
                  ORDER BY occurred_at DESC, id DESC""",
            (start.strftime(TIMESTAMP_FORMAT), end.strftime(TIMESTAMP_FORMAT)),
        ).fetchall()
        # Rows whose text sorts into range but fails to parse fall back to "now".
        return [
            transaction
            for transaction in self._hydrate(rows)
            if start <= transaction.occurred_at < end
        ]

    def delete_by_id(self, transaction_id: int) -> None:
        """Delete a transaction; its image references go with it."""

        conn = self._db.get_connection()
        with conn:
            cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
        if cursor.rowcount:
            LOGGER.info("Deleted transaction %s", transaction_id)
        else:
            LOGGER.debug("Delete ignored; transaction %s does not exist", transaction_id)

    def update_by_id(self, transaction: Transaction) -> int:
        """Overwrite the editable fields of ``transaction.id``.

        Image references are left untouched. Returns the number of rows
        changed; 0 means no such transaction exists.
        """

        conn = self._db.get_connection()
        with conn:
            cursor = conn.execute(
                """UPDATE transactions
                   SET amount = ?, description = ?, category = ?, occurred_at = ?
                   WHERE id = ?""",
                (
                    float(transaction.amount),
                    transaction.description,
                    transaction.category,
                    transaction.occurred_at.strftime(TIMESTAMP_FORMAT),
                    transaction.id,
                ),
            )
        if cursor.rowcount:
            LOGGER.info("Updated transaction %s", transaction.id)
        else:
            LOGGER.debug("Update ignored; transaction %s does not exist", transaction.id)
        return cursor.rowcount

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------
    def _sum_amounts(self, where: str = "") -> Decimal:
        conn = self._db.get_connection()
        rows = conn.execute(f"SELECT amount FROM transactions {where}").fetchall()
        return sum((to_decimal(row["amount"]) for row in rows), ZERO)

    def total_balance(self) -> Decimal:
        return self._sum_amounts()

    def total_income(self) -> Decimal:
        return self._sum_amounts("WHERE amount > 0")

    def total_expenses(self) -> Decimal:
        return self._sum_amounts("WHERE amount < 0")

    def balance_for_month(self, month_label: str) -> Decimal:
        return sum_balance(self.list_by_month(month_label))

    def income_for_month(self, month_label: str) -> Decimal:
        return sum_income(self.list_by_month(month_label))

    def expenses_for_month(self, month_label: str) -> Decimal:
        return sum_expenses(self.list_by_month(month_label))

    def month_summary(self, month_label: str) -> MonthSummary:
        """Aggregate one month from a single listing query."""

        transactions = self.list_by_month(month_label)
        return MonthSummary(
            month_label=month_label,
            income=sum_income(transactions),
            expenses=sum_expenses(transactions),
            transaction_count=len(transactions),
        )

    def summary(self) -> LedgerSummary:
        """Totals and count derived from one read, so they always agree."""

        conn = self._db.get_connection()
        amounts = [to_decimal(row["amount"]) for row in conn.execute("SELECT amount FROM transactions")]
        return LedgerSummary(
            balance=sum(amounts, ZERO),
            income=sum((amount for amount in amounts if amount > 0), ZERO),
            expenses=sum((amount for amount in amounts if amount < 0), ZERO),
            transaction_count=len(amounts),
        )


def open_ledger(settings: Optional[LedgerSettings] = None) -> LedgerStore:
    """Startup factory: open (creating if needed) the configured database."""

    settings = settings or get_settings()
    database_path = Path(settings.database_path)
    database_path.parent.mkdir(parents=True, exist_ok=True)
    database = DatabaseManager(database_path)
    database.initialize()
    LOGGER.info("Ledger opened at %s", database_path)
    return LedgerStore(database, month_format=settings.month_label_format)
