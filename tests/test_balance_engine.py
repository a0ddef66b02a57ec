"""Mini README: Tests for the balance engine and debt simplification.

Covers the two-expense walkthrough (Juan, María, Pedro), the accounting
properties every balance must hold (conservation, exact totals, bounded
transfer count, no self-debts, determinism) and the carry-forward of settled
debts alongside live ones.
"""

from __future__ import annotations

import random
from datetime import date
from typing import List

import pytest

from sharedexpenses.ledger import Debt, Expense, compute_balance, round2, simplify_debts

ROSTER = ("Juan", "María", "Pedro")


def _expense(expense_id: str, amount: float, paid_by: str, participants: List[str]) -> Expense:
    return Expense(
        id=expense_id,
        description=f"Expense {expense_id}",
        amount=amount,
        paid_by=paid_by,
        participants=participants,
        date=date(2025, 10, 15),
        receipt_attachment=f"receipt-{expense_id}.png",
    )


def _walkthrough_expenses() -> List[Expense]:
    return [
        _expense("a", 150.0, "Juan", ["Juan", "María", "Pedro"]),
        _expense("b", 280.0, "María", ["Juan", "María"]),
    ]


def _random_expenses(seed: int, count: int = 25) -> List[Expense]:
    rng = random.Random(seed)
    expenses = []
    for index in range(count):
        participants = rng.sample(ROSTER, rng.randint(1, len(ROSTER)))
        expenses.append(
            _expense(
                str(index),
                round2(rng.uniform(0.5, 500.0)),
                rng.choice(ROSTER),
                list(participants),
            )
        )
    return expenses


def test_walkthrough_produces_expected_debts() -> None:
    """Two expenses reduce to two transfers towards María."""

    balance = compute_balance(_walkthrough_expenses(), [], ROSTER)

    assert balance.total_spent == pytest.approx(430.0)
    assert balance.net_positions == {"Juan": -40.0, "María": 90.0, "Pedro": -50.0}
    assert balance.debts == [
        Debt(from_user="Juan", to_user="María", amount=40.0),
        Debt(from_user="Pedro", to_user="María", amount=50.0),
    ]


def test_settled_debt_coexists_with_identical_live_debt() -> None:
    """Settled debts are appended, not netted against live ones."""

    settled = [Debt(from_user="Juan", to_user="María", amount=40.0)]

    balance = compute_balance(_walkthrough_expenses(), settled, ROSTER)

    assert balance.debts == [
        Debt(from_user="Juan", to_user="María", amount=40.0),
        Debt(from_user="Pedro", to_user="María", amount=50.0),
        Debt(from_user="Juan", to_user="María", amount=40.0, is_settled=True),
    ]
    assert [debt.key for debt in balance.settled_debts] == [("Juan", "María", 40.0)]
    assert len(balance.unsettled_debts) == 2


def test_empty_ledger_has_no_debts() -> None:
    balance = compute_balance([], [], ROSTER)

    assert balance.total_spent == 0.0
    assert balance.debts == []
    assert balance.net_positions == {"Juan": 0.0, "María": 0.0, "Pedro": 0.0}


def test_uneven_split_stays_within_cent_noise() -> None:
    """A three-way split of 100 leaves the leftover cent with the payer."""

    balance = compute_balance([_expense("x", 100.0, "Pedro", list(ROSTER))], [], ROSTER)

    assert balance.net_positions == {"Juan": -33.33, "María": -33.33, "Pedro": 66.67}
    assert balance.debts == [
        Debt(from_user="Juan", to_user="Pedro", amount=33.33),
        Debt(from_user="María", to_user="Pedro", amount=33.33),
    ]


def test_debtors_and_creditors_follow_roster_order() -> None:
    """Ties are broken by roster order rather than by amount."""

    expenses = [
        _expense("1", 30.0, "Pedro", ["Juan", "María", "Pedro"]),
        _expense("2", 30.0, "María", ["Juan", "María", "Pedro"]),
    ]

    balance = compute_balance(expenses, [], ROSTER)

    assert [(debt.from_user, debt.to_user, debt.amount) for debt in balance.debts] == [
        ("Juan", "María", 10.0),
        ("Juan", "Pedro", 10.0),
    ]


def test_names_outside_roster_are_appended() -> None:
    balance = compute_balance([_expense("1", 20.0, "Ana", ["Ana", "Juan"])], [], ROSTER)

    assert list(balance.net_positions) == ["Juan", "María", "Pedro", "Ana"]
    assert balance.debts == [Debt(from_user="Juan", to_user="Ana", amount=10.0)]


def test_simplify_skips_sub_cent_transfers() -> None:
    debts = simplify_debts({"Juan": -0.01, "María": 0.01})

    assert debts == []


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_balance_properties_hold_for_random_ledgers(seed: int) -> None:
    """Conservation, exact totals, bounded transfers and no self-debts."""

    expenses = _random_expenses(seed)

    balance = compute_balance(expenses, [], ROSTER)

    credits = sum(amount for amount in balance.net_positions.values() if amount > 0)
    debits = sum(-amount for amount in balance.net_positions.values() if amount < 0)
    assert credits == pytest.approx(debits, abs=0.011)

    assert balance.total_spent == sum(expense.amount for expense in expenses)

    creditors = sum(1 for amount in balance.net_positions.values() if amount > 0)
    debtors = sum(1 for amount in balance.net_positions.values() if amount < 0)
    assert len(balance.unsettled_debts) <= max(debtors + creditors - 1, 0)

    for debt in balance.debts:
        assert debt.from_user != debt.to_user
        assert balance.net_positions[debt.from_user] < 0
        assert balance.net_positions[debt.to_user] > 0


def test_compute_balance_is_deterministic() -> None:
    expenses = _random_expenses(99)
    settled = [Debt(from_user="Pedro", to_user="Juan", amount=12.5)]

    first = compute_balance(expenses, settled, ROSTER)
    second = compute_balance(list(expenses), list(settled), ROSTER)

    assert first == second


def test_compute_balance_does_not_mutate_inputs() -> None:
    expenses = _walkthrough_expenses()
    settled = [Debt(from_user="Juan", to_user="María", amount=40.0)]

    compute_balance(expenses, settled, ROSTER)

    assert settled == [Debt(from_user="Juan", to_user="María", amount=40.0)]
    assert [expense.amount for expense in expenses] == [150.0, 280.0]


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1.005, 1.01), (2.675, 2.68), (-1.005, -1.01), (10.0, 10.0), (33.333333, 33.33)],
)
def test_round2_rounds_halves_away_from_zero(value: float, expected: float) -> None:
    assert round2(value) == expected
