"""Mini README: Ledger records shared by the balance engine and mutation service.

Structure:
    * round2 - half-away-from-zero rounding to cents.
    * Expense - an amount fronted by one participant and shared by several.
    * Debt - a directed obligation; settled debts are the only persisted ones.
    * BalanceState - derived totals, net positions and debts (never stored).
    * encode_* / decode_* - JSON array codecs used by the ledger store.

Records serialise with the camelCase field names the store has always used
(``paidBy``, ``receiptAttachment``, ``isSettled``) so files written by earlier
clients stay readable.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Tuple

from ..errors import PersistenceError

CENT = Decimal("0.01")


def round2(value: float) -> float:
    """Round to two decimals, halves going away from zero (1.005 -> 1.01)."""

    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP))


def _parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError("Dates must be provided as ISO strings or date/datetime instances.")


@dataclass(slots=True)
class Expense:
    """A single shared expense."""

    id: str
    description: str
    amount: float
    paid_by: str
    participants: List[str]
    date: date
    receipt_attachment: str

    def as_dict(self) -> Dict[str, object]:
        """Export the expense with JSON-serialisable values."""

        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "paidBy": self.paid_by,
            "participants": list(self.participants),
            "date": self.date.isoformat(),
            "receiptAttachment": self.receipt_attachment,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "Expense":
        if not isinstance(payload.get("participants"), list):
            raise TypeError("Expense participants must be a list of names.")
        return cls(
            id=str(payload["id"]),
            description=str(payload["description"]),
            amount=float(payload["amount"]),
            paid_by=str(payload["paidBy"]),
            participants=[str(name) for name in payload["participants"]],
            date=_parse_date(payload["date"]),
            receipt_attachment=str(payload["receiptAttachment"]),
        )


@dataclass(frozen=True, slots=True)
class Debt:
    """``from_user`` owes ``to_user`` the given amount."""

    from_user: str
    to_user: str
    amount: float
    is_settled: bool = False

    @property
    def key(self) -> Tuple[str, str, float]:
        """Identity used to deduplicate settlements."""

        return (self.from_user, self.to_user, self.amount)

    def settled(self) -> "Debt":
        return replace(self, is_settled=True)

    def as_dict(self) -> Dict[str, object]:
        return {
            "from": self.from_user,
            "to": self.to_user,
            "amount": self.amount,
            "isSettled": self.is_settled,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "Debt":
        return cls(
            from_user=str(payload["from"]),
            to_user=str(payload["to"]),
            amount=float(payload["amount"]),
            is_settled=bool(payload.get("isSettled", False)),
        )


@dataclass(slots=True)
class BalanceState:
    """Derived view of the ledger, recomputed on every read."""

    total_spent: float
    debts: List[Debt]
    net_positions: Dict[str, float] = field(default_factory=dict)

    @property
    def unsettled_debts(self) -> List[Debt]:
        return [debt for debt in self.debts if not debt.is_settled]

    @property
    def settled_debts(self) -> List[Debt]:
        return [debt for debt in self.debts if debt.is_settled]

    def as_dict(self) -> Dict[str, object]:
        return {
            "totalSpent": self.total_spent,
            "debts": [debt.as_dict() for debt in self.debts],
            "netPositions": dict(self.net_positions),
        }


def encode_expenses(expenses: Iterable[Expense]) -> str:
    return json.dumps([expense.as_dict() for expense in expenses], ensure_ascii=False)


def encode_debts(debts: Iterable[Debt]) -> str:
    return json.dumps([debt.as_dict() for debt in debts], ensure_ascii=False)


def _decode_array(payload: str, what: str) -> List[Dict[str, object]]:
    try:
        records = json.loads(payload)
    except json.JSONDecodeError as error:
        raise PersistenceError(f"Stored {what} are not valid JSON") from error
    if not isinstance(records, list):
        raise PersistenceError(f"Stored {what} must be a JSON array")
    return records


def _require_records(records: List[object], what: str) -> List[Dict[str, object]]:
    for record in records:
        if not isinstance(record, dict):
            raise PersistenceError(f"Stored {what} must be JSON objects, got {record!r}")
    return records


def decode_expenses(payload: str) -> List[Expense]:
    """Decode a stored JSON array of expenses, raising PersistenceError on bad data.

    Records must satisfy the expense invariants: a positive finite amount and
    at least one participant.
    """

    records = _require_records(_decode_array(payload, "expenses"), "expenses")
    try:
        expenses = [Expense.from_dict(record) for record in records]
    except (KeyError, TypeError, ValueError) as error:
        raise PersistenceError(f"Stored expense record is malformed: {error}") from error
    for expense in expenses:
        if not math.isfinite(expense.amount) or expense.amount <= 0:
            raise PersistenceError(f"Stored expense {expense.id} has a non-positive amount")
        if not expense.participants:
            raise PersistenceError(f"Stored expense {expense.id} has no participants")
    return expenses


def decode_debts(payload: str) -> List[Debt]:
    """Decode a stored JSON array of settled debts, forcing ``is_settled``."""

    records = _require_records(_decode_array(payload, "settled debts"), "settled debts")
    try:
        return [Debt.from_dict(record).settled() for record in records]
    except (KeyError, TypeError, ValueError) as error:
        raise PersistenceError(f"Stored settled debt is malformed: {error}") from error
