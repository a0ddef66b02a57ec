"""Mini README: Expense mutation service owning the authoritative ledger lists.

Structure:
    * ExpenseLedger - validates and records expenses and settlements, derives
      balances on demand and mirrors every change into a ``LedgerStore``.
    * demo_expenses - deterministic fixtures used to seed empty stores.
    * create_ledger - builds a file-backed ledger from application settings.

State lives on the ``ExpenseLedger`` instance handed to each caller; there is
no module-level ledger. Mutations update memory first and then persist. A
failed write is logged and the in-memory change stands, so the durable copy is
a best-effort mirror refreshed by the next successful save.
"""

from __future__ import annotations

import math
import time
from datetime import date
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..configuration import DEFAULT_ROSTER, SharedExpensesSettings, get_settings
from ..errors import PersistenceError, ValidationError
from ..logging_utils import get_logger
from ..storage import JsonFileStore, LedgerStore
from .balance import compute_balance
from .models import (
    BalanceState,
    Debt,
    Expense,
    decode_debts,
    decode_expenses,
    encode_debts,
    encode_expenses,
    round2,
)

LOGGER = get_logger(__name__)

EXPENSES_KEY = "shared-expenses:expenses"
SETTLED_KEY = "shared-expenses:settled"


def demo_expenses() -> List[Expense]:
    """Return deterministic demo expenses, most recent first."""

    return [
        Expense(
            id="e1",
            description="Cena Restaurante",
            amount=150.0,
            paid_by="Juan",
            participants=["Juan", "María", "Pedro"],
            date=date(2025, 10, 15),
            receipt_attachment="uri_restaurante.png",
        ),
        Expense(
            id="e2",
            description="Supermercado",
            amount=280.0,
            paid_by="María",
            participants=["Juan", "María"],
            date=date(2025, 10, 14),
            receipt_attachment="uri_supermercado.png",
        ),
        Expense(
            id="e3",
            description="Uber",
            amount=45.0,
            paid_by="Pedro",
            participants=["Juan", "María", "Pedro"],
            date=date(2025, 10, 13),
            receipt_attachment="uri_uber.png",
        ),
        Expense(
            id="e4",
            description="Café",
            amount=25.0,
            paid_by="Juan",
            participants=["Juan", "María"],
            date=date(2025, 10, 12),
            receipt_attachment="uri_cafe.png",
        ),
    ]


class ExpenseLedger:
    """Own the expense and settled-debt lists for one session."""

    def __init__(
        self,
        store: LedgerStore,
        *,
        roster: Sequence[str] = DEFAULT_ROSTER,
        seed_expenses: Optional[Iterable[Expense]] = None,
        expenses_key: str = EXPENSES_KEY,
        settled_key: str = SETTLED_KEY,
        today: Callable[[], date] = date.today,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not roster:
            raise ValueError("A ledger needs at least one participant.")
        self._store = store
        self._roster = tuple(roster)
        self._expenses_key = expenses_key
        self._settled_key = settled_key
        self._today = today
        self._clock = clock
        self._last_id = 0
        self._expenses: List[Expense] = []
        self._settled: List[Debt] = []
        self._load(list(seed_expenses or []))
        LOGGER.debug(
            "Expense ledger initialised with %s expenses and %s settled debts (store=%s)",
            len(self._expenses),
            len(self._settled),
            store.metadata(),
        )

    @property
    def roster(self) -> Tuple[str, ...]:
        return self._roster

    def _load(self, seed: List[Expense]) -> None:
        """Read both lists once; unreadable data falls back to the seed."""

        try:
            raw_expenses = self._store.load(self._expenses_key)
            raw_settled = self._store.load(self._settled_key)
            self._expenses = decode_expenses(raw_expenses) if raw_expenses is not None else seed
            self._settled = decode_debts(raw_settled) if raw_settled is not None else []
        except PersistenceError as error:
            LOGGER.error("Could not load ledger data, starting from seed: %s", error)
            self._expenses = seed
            self._settled = []
        for expense in self._expenses:
            if expense.id.isdigit():
                self._last_id = max(self._last_id, int(expense.id))

    def _persist(self) -> None:
        try:
            self._store.save(self._expenses_key, encode_expenses(self._expenses))
            self._store.save(self._settled_key, encode_debts(self._settled))
        except PersistenceError as error:
            LOGGER.error("Ledger changes kept in memory only: %s", error)

    def _next_id(self) -> str:
        """Millisecond timestamp, bumped so ids stay strictly increasing."""

        candidate = int(self._clock() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return str(self._last_id)

    def _require_member(self, name: object, role: str) -> str:
        if not isinstance(name, str) or name not in self._roster:
            raise ValidationError(f"{role} '{name}' is not part of the roster.")
        return name

    def add_expense(
        self,
        description: str,
        amount: float,
        paid_by: str,
        participants: Iterable[str],
        receipt_attachment: Optional[str],
    ) -> Expense:
        """Validate and record a new expense, most recent first."""

        if not isinstance(description, str) or not description.strip():
            raise ValidationError("Description is required.")
        if isinstance(amount, bool):
            raise ValidationError("Amount must be a number.")
        try:
            numeric_amount = float(amount)
        except (TypeError, ValueError) as error:
            raise ValidationError(f"Amount must be a number, got {amount!r}.") from error
        if not math.isfinite(numeric_amount) or round2(numeric_amount) <= 0:
            raise ValidationError("Amount must be a positive value.")
        self._require_member(paid_by, "Payer")
        if isinstance(participants, str):
            raise ValidationError("Participants must be a collection of names.")
        shared_by = list(participants or [])
        if not shared_by:
            raise ValidationError("At least one participant must share the expense.")
        for participant in shared_by:
            self._require_member(participant, "Participant")
        if not isinstance(receipt_attachment, str) or not receipt_attachment.strip():
            raise ValidationError("A receipt attachment is required.")

        expense = Expense(
            id=self._next_id(),
            description=description,
            amount=round2(numeric_amount),
            paid_by=paid_by,
            participants=shared_by,
            date=self._today(),
            receipt_attachment=receipt_attachment,
        )
        self._expenses.insert(0, expense)
        LOGGER.info(
            "Recorded expense %s: %.2f paid by %s for %s",
            expense.id,
            expense.amount,
            expense.paid_by,
            ", ".join(expense.participants),
        )
        self._persist()
        return expense

    def settle_debt(self, debt: Debt) -> Debt:
        """Mark a debt as settled; settling the same debt again is a no-op."""

        self._require_member(debt.from_user, "Debtor")
        self._require_member(debt.to_user, "Creditor")
        if debt.from_user == debt.to_user:
            raise ValidationError("A participant cannot settle a debt with themselves.")
        if isinstance(debt.amount, bool) or not isinstance(debt.amount, (int, float)):
            raise ValidationError("Debt amount must be a number.")
        if not math.isfinite(debt.amount) or debt.amount <= 0:
            raise ValidationError("Debt amount must be positive.")

        for existing in self._settled:
            if existing.key == debt.key:
                LOGGER.debug("Debt %s -> %s %.2f already settled", debt.from_user, debt.to_user, debt.amount)
                return existing

        # No check against the live balance: a stale amount is accepted as given.
        record = debt.settled()
        self._settled.append(record)
        LOGGER.info("Settled debt %s -> %s %.2f", record.from_user, record.to_user, record.amount)
        self._persist()
        return record

    def get_expenses(self) -> List[Expense]:
        return list(self._expenses)

    def get_settled_debts(self) -> List[Debt]:
        return list(self._settled)

    def get_balance(self) -> BalanceState:
        """Derive a fresh balance from the current lists."""

        return compute_balance(self._expenses, self._settled, self._roster)


def create_ledger(settings: Optional[SharedExpensesSettings] = None) -> ExpenseLedger:
    """Build a ledger backed by the JSON file store described by ``settings``."""

    settings = settings or get_settings()
    seed = demo_expenses() if settings.seed_demo_expenses else []
    return ExpenseLedger(
        JsonFileStore(settings.data_directory),
        roster=settings.roster,
        seed_expenses=seed,
        expenses_key=settings.expenses_key,
        settled_key=settings.settled_key,
    )
