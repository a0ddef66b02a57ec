"""Mini README: Shared expense ledger core.

The ``balance`` module holds the pure balance engine, ``service`` owns the
mutable expense and settlement lists, and ``models`` defines the records and
their JSON shapes.
"""

from .balance import NOISE_THRESHOLD, compute_balance, net_contributions, simplify_debts
from .models import BalanceState, Debt, Expense, round2
from .service import ExpenseLedger, create_ledger, demo_expenses

__all__ = [
    "BalanceState",
    "Debt",
    "Expense",
    "ExpenseLedger",
    "NOISE_THRESHOLD",
    "compute_balance",
    "create_ledger",
    "demo_expenses",
    "net_contributions",
    "round2",
    "simplify_debts",
]
