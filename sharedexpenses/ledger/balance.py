"""Mini README: Balance engine turning expenses into simplified debts.

Structure:
    * compute_balance - pure function ``(expenses, settled_debts) -> BalanceState``.
    * simplify_debts - greedy debtor/creditor matching over rounded net positions.

How it works:
    1. Every roster participant starts with a net contribution of zero.
    2. The payer of an expense is credited the full amount and each
       participant is charged ``amount / len(participants)`` (unrounded).
    3. Nets are rounded to cents. Positive nets are creditors, negative nets
       are debtors; both keep roster order so results are reproducible.
    4. Two pointers walk debtors and creditors, transferring the smaller of
       the two open balances until either side runs out. Transfers of a cent
       or less are treated as division noise and not emitted.
    5. Previously settled debts are appended, flagged as settled. Live debts
       are not netted against them, so a debt settled while the underlying
       expenses are unchanged shows up twice (once live, once settled).

The engine never mutates its inputs and has no failure modes; callers are
expected to pass expenses that already satisfy the ledger invariants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from ..configuration import DEFAULT_ROSTER
from ..logging_utils import get_logger
from .models import BalanceState, Debt, Expense, round2

LOGGER = get_logger(__name__)

NOISE_THRESHOLD = 0.01


@dataclass(slots=True)
class _OpenBalance:
    user: str
    amount: float


def net_contributions(
    expenses: Iterable[Expense], roster: Sequence[str] = DEFAULT_ROSTER
) -> Dict[str, float]:
    """Return unrounded paid-minus-share totals keyed in roster order."""

    nets: Dict[str, float] = {user: 0.0 for user in roster}
    for expense in expenses:
        nets[expense.paid_by] = nets.get(expense.paid_by, 0.0) + expense.amount
        amount_per_person = expense.amount / len(expense.participants)
        for participant in expense.participants:
            nets[participant] = nets.get(participant, 0.0) - amount_per_person
    return nets


def simplify_debts(net_positions: Dict[str, float]) -> List[Debt]:
    """Reduce rounded net positions into a short list of directed debts."""

    creditors = [_OpenBalance(user, amount) for user, amount in net_positions.items() if amount > 0]
    debtors = [_OpenBalance(user, -amount) for user, amount in net_positions.items() if amount < 0]

    debts: List[Debt] = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        transfer = min(debtor.amount, creditor.amount)
        if transfer > NOISE_THRESHOLD:
            debts.append(Debt(from_user=debtor.user, to_user=creditor.user, amount=round2(transfer)))
        debtor.amount -= transfer
        creditor.amount -= transfer
        if debtor.amount < NOISE_THRESHOLD:
            i += 1
        if creditor.amount < NOISE_THRESHOLD:
            j += 1
    return debts


def compute_balance(
    expenses: Iterable[Expense],
    settled_debts: Iterable[Debt],
    roster: Sequence[str] = DEFAULT_ROSTER,
) -> BalanceState:
    """Compute total spend, net positions and debts for a ledger snapshot."""

    expenses = list(expenses)
    total_spent = 0.0
    for expense in expenses:
        total_spent += expense.amount

    net_positions = {
        user: round2(amount) for user, amount in net_contributions(expenses, roster).items()
    }
    live_debts = simplify_debts(net_positions)
    carried = [debt.settled() for debt in settled_debts]
    LOGGER.debug(
        "Computed balance from %s expenses: %s live debts, %s settled",
        len(expenses),
        len(live_debts),
        len(carried),
    )
    return BalanceState(
        total_spent=total_spent,
        debts=live_debts + carried,
        net_positions=net_positions,
    )
