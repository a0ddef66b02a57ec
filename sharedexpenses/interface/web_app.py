"""Mini README: FastAPI JSON interface over the expense ledger.

Structure:
    * create_application - application factory wiring routes to a ledger.
    * ExpensePayload / DebtPayload - request bodies for the two mutations.

The interface is a thin adapter: every route delegates to ``ExpenseLedger``
or the report helpers and translates ``ValidationError`` into HTTP 400. The
ledger is created from settings unless one is injected, which is how tests
drive the routes against an in-memory store.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..configuration import get_settings
from ..errors import ValidationError
from ..ledger import Debt, ExpenseLedger, create_ledger
from ..logging_utils import get_logger
from ..reports import build_report, spending_by_participant

LOGGER = get_logger(__name__)


class ExpensePayload(BaseModel):
    """New expense as submitted by a client."""

    model_config = ConfigDict(populate_by_name=True)

    description: str
    amount: float
    paid_by: str = Field(alias="paidBy")
    participants: List[str]
    receipt_attachment: Optional[str] = Field(None, alias="receiptAttachment")


class DebtPayload(BaseModel):
    """Debt the client wants to mark as settled."""

    model_config = ConfigDict(populate_by_name=True)

    from_user: str = Field(alias="from")
    to_user: str = Field(alias="to")
    amount: float


def create_application(ledger: Optional[ExpenseLedger] = None) -> FastAPI:
    """Create the FastAPI application with routes bound to ``ledger``."""

    settings = get_settings()
    app = FastAPI(title="Shared Expenses", version="0.1.0")
    ledger = ledger or create_ledger(settings)
    period_days = settings.report_period_days

    @app.get("/roster")
    async def roster() -> JSONResponse:
        """List the participants expenses can be shared between."""

        return JSONResponse({"roster": list(ledger.roster)})

    @app.get("/expenses")
    async def list_expenses() -> JSONResponse:
        """Return expenses, most recent first."""

        expenses = [expense.as_dict() for expense in ledger.get_expenses()]
        LOGGER.debug("Returning %s expenses", len(expenses))
        return JSONResponse({"expenses": expenses})

    @app.post("/expenses", status_code=201)
    async def add_expense(payload: ExpensePayload) -> JSONResponse:
        """Record a new expense."""

        try:
            expense = ledger.add_expense(
                payload.description,
                payload.amount,
                payload.paid_by,
                payload.participants,
                payload.receipt_attachment,
            )
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(expense.as_dict(), status_code=201)

    @app.get("/balance")
    async def balance(unsettled_only: bool = False) -> JSONResponse:
        """Return the freshly derived balance."""

        state = ledger.get_balance()
        payload = state.as_dict()
        if unsettled_only:
            payload["debts"] = [debt.as_dict() for debt in state.unsettled_debts]
        return JSONResponse(payload)

    @app.post("/debts/settle")
    async def settle_debt(payload: DebtPayload) -> JSONResponse:
        """Mark a debt as settled."""

        debt = Debt(from_user=payload.from_user, to_user=payload.to_user, amount=payload.amount)
        try:
            record = ledger.settle_debt(debt)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        LOGGER.debug("Settlement request handled for %s -> %s", record.from_user, record.to_user)
        return JSONResponse(record.as_dict())

    @app.get("/report")
    async def report() -> JSONResponse:
        """Return the aggregates report exporters render from."""

        return JSONResponse(build_report(ledger.get_expenses(), period_days=period_days).as_dict())

    @app.get("/spending")
    async def spending() -> JSONResponse:
        """Return how much each participant has paid."""

        return JSONResponse(spending_by_participant(ledger.get_expenses(), ledger.roster))

    return app
