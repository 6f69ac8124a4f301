"""Mini README: FastAPI-powered JSON API for Pocket Ledger.

Structure:
    * TransactionPayload / TransactionUpdatePayload - validated request bodies.
    * create_application - application factory wiring routes to a LedgerStore.

The API is a thin layer over ``LedgerStore``: it validates input, converts
transactions to JSON, and maps missing ids to 404 responses. Rendering
amounts as currency and storing receipt images are left to clients; image
paths are accepted as opaque strings.

Routes call the store directly from the event loop, so requests touch the
shared SQLite connection one at a time.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..finance import (
    Transaction,
    current_month_label,
    next_month_label,
    previous_month_label,
)
from ..logging_utils import get_logger
from ..storage import LedgerStore, open_ledger

LOGGER = get_logger(__name__)


class TransactionPayload(BaseModel):
    """Body accepted when recording a new transaction."""

    amount: Decimal = Field(..., description="Signed amount; negative for expenses.")
    description: str = ""
    category: str = ""
    occurred_at: Optional[datetime] = Field(
        None, description="When the transaction happened; defaults to now."
    )
    image_paths: List[str] = Field(default_factory=list)


class TransactionUpdatePayload(BaseModel):
    """Body accepted when editing a transaction; images are not editable."""

    amount: Decimal
    description: str = ""
    category: str = ""
    occurred_at: datetime


def create_application(store: Optional[LedgerStore] = None) -> FastAPI:
    """Create the FastAPI application with routes bound to ``store``."""

    app = FastAPI(title="Pocket Ledger", version="0.1.0")
    ledger = store or open_ledger()
    month_format = ledger.month_format

    @app.get("/transactions")
    async def list_transactions(month: Optional[str] = Query(None)) -> JSONResponse:
        """Return all transactions, or only those in ``month``, newest first."""

        transactions = ledger.list_by_month(month) if month else ledger.list_all()
        LOGGER.debug("Returning %s transactions (month=%s)", len(transactions), month)
        return JSONResponse({"transactions": [transaction.as_dict() for transaction in transactions]})

    @app.get("/transactions/{transaction_id}")
    async def get_transaction(transaction_id: int) -> JSONResponse:
        transaction = ledger.get_by_id(transaction_id)
        if transaction is None:
            raise HTTPException(status_code=404, detail=f"Transaction {transaction_id} not found")
        return JSONResponse(transaction.as_dict())

    @app.post("/transactions", status_code=201)
    async def create_transaction(payload: TransactionPayload) -> JSONResponse:
        """Persist a new transaction and return its id."""

        transaction = Transaction(
            amount=payload.amount,
            description=payload.description,
            category=payload.category,
            occurred_at=payload.occurred_at or datetime.now(),
            image_paths=payload.image_paths,
        )
        transaction_id = ledger.create(transaction)
        return JSONResponse({"id": transaction_id}, status_code=201)

    @app.put("/transactions/{transaction_id}")
    async def update_transaction(
        transaction_id: int, payload: TransactionUpdatePayload
    ) -> JSONResponse:
        """Overwrite the editable fields of a transaction."""

        updated = ledger.update_by_id(
            Transaction(
                id=transaction_id,
                amount=payload.amount,
                description=payload.description,
                category=payload.category,
                occurred_at=payload.occurred_at,
            )
        )
        if not updated:
            raise HTTPException(status_code=404, detail=f"Transaction {transaction_id} not found")
        return JSONResponse(ledger.get_by_id(transaction_id).as_dict())

    @app.delete("/transactions/{transaction_id}", status_code=204)
    async def delete_transaction(transaction_id: int) -> Response:
        ledger.delete_by_id(transaction_id)
        return Response(status_code=204)

    @app.get("/summary")
    async def summary(month: Optional[str] = Query(None)) -> JSONResponse:
        """Overall totals, or income/expenses/profit-loss for one month."""

        if month:
            return JSONResponse(ledger.month_summary(month).as_dict())
        return JSONResponse(ledger.summary().as_dict())

    def _navigation(label: str) -> JSONResponse:
        try:
            payload = {
                "label": label,
                "previous": previous_month_label(label, month_format),
                "next": next_month_label(label, month_format),
            }
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(payload)

    @app.get("/months")
    async def current_month() -> JSONResponse:
        """Navigation for the month containing today."""

        return _navigation(current_month_label(month_format))

    @app.get("/months/{label}")
    async def month_navigation(label: str) -> JSONResponse:
        """Return the neighbours of ``label``."""

        return _navigation(label)

    return app
