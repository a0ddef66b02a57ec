"""Mini README: Report aggregates handed to document exporters.

Structure:
    * ExpenseCategory - closed set of display categories.
    * categorise - keyword match from an expense description to a category.
    * ExpenseReport - ``{totalSpent, averagePerPeriod, amountByCategory, expenses}``.
    * build_report - aggregate an expense list into an ``ExpenseReport``.
    * spending_by_participant - how much each roster member paid.

Categories are a display convenience only and never feed into balances.
Keywords cover the Spanish labels the tracker was first used with as well as
their English equivalents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Tuple

from ..configuration import DEFAULT_ROSTER
from ..ledger.models import Expense
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_PERIOD_DAYS = 15


class ExpenseCategory(str, Enum):
    """Display categories for report breakdowns."""

    RESTAURANTS = "Restaurants"
    GROCERIES = "Groceries"
    TRANSPORT = "Transport"
    COFFEE = "Coffee"
    OTHER = "Other"


# First match wins, so order matters.
_CATEGORY_KEYWORDS: Tuple[Tuple[ExpenseCategory, Tuple[str, ...]], ...] = (
    (ExpenseCategory.RESTAURANTS, ("cena", "restaurante", "restaurant", "dinner")),
    (ExpenseCategory.GROCERIES, ("supermercado", "supermarket", "grocer")),
    (ExpenseCategory.TRANSPORT, ("uber", "transporte", "transport", "taxi")),
    (ExpenseCategory.COFFEE, ("café", "cafe", "coffee")),
)


def categorise(description: str) -> ExpenseCategory:
    """Map free-text descriptions onto a category, defaulting to ``OTHER``."""

    lowered = description.lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return ExpenseCategory.OTHER


@dataclass(slots=True)
class ExpenseReport:
    """Aggregates consumed by report exporters."""

    total_spent: float
    average_per_period: float
    amount_by_category: Dict[str, float]
    expenses: List[Expense] = field(default_factory=list)

    def as_dict(self) -> Dict[str, object]:
        return {
            "totalSpent": self.total_spent,
            "averagePerPeriod": self.average_per_period,
            "amountByCategory": dict(self.amount_by_category),
            "expenses": [expense.as_dict() for expense in self.expenses],
        }


def build_report(
    expenses: Iterable[Expense], *, period_days: int = DEFAULT_PERIOD_DAYS
) -> ExpenseReport:
    """Summarise expenses by total, per-period average and category."""

    if period_days < 1:
        raise ValueError("Report period must span at least one day.")
    expenses = list(expenses)
    total_spent = sum(expense.amount for expense in expenses)
    average = total_spent / period_days if expenses else 0.0

    amount_by_category: Dict[str, float] = {}
    for expense in expenses:
        label = categorise(expense.description).value
        amount_by_category[label] = amount_by_category.get(label, 0.0) + expense.amount

    LOGGER.debug(
        "Built report over %s expenses (%s categories, period=%s days)",
        len(expenses),
        len(amount_by_category),
        period_days,
    )
    return ExpenseReport(
        total_spent=total_spent,
        average_per_period=average,
        amount_by_category=amount_by_category,
        expenses=expenses,
    )


def spending_by_participant(
    expenses: Iterable[Expense], roster: Sequence[str] = DEFAULT_ROSTER
) -> Dict[str, object]:
    """Return what each participant paid and the even share per participant."""

    paid: Dict[str, float] = {user: 0.0 for user in roster}
    for expense in expenses:
        paid[expense.paid_by] = paid.get(expense.paid_by, 0.0) + expense.amount
    total = sum(paid.values())
    return {
        "paidBy": paid,
        "averagePerParticipant": total / len(roster) if roster else 0.0,
    }
