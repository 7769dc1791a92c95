"""Tests for greedy settlement suggestions."""

from src.domain.models import MemberBalance
from src.domain.services.settlement import (
    settlement_residual,
    suggest_settlements,
)


def _balance(uid: str, net_cents: int) -> MemberBalance:
    return MemberBalance(
        uid=uid,
        name=f"Name {uid}",
        contributed_cents=0,
        owes_cents=0,
        net_cents=net_cents,
    )


def _as_tuples(suggestions) -> list[tuple[str, str, int]]:
    return [(s.from_uid, s.to_uid, s.amount_cents) for s in suggestions]


def test_two_debtors_pay_one_creditor() -> None:
    """Both debtors and the creditor are exhausted together."""
    balances = [_balance("A", -30), _balance("B", -10), _balance("C", 40)]

    suggestions = suggest_settlements(balances)

    assert _as_tuples(suggestions) == [("A", "C", 30), ("B", "C", 10)]
    assert suggestions[0].from_name == "Name A"
    assert suggestions[0].to_name == "Name C"


def test_debtor_with_partial_payments_moves_to_next_creditor() -> None:
    """A stays on the debtor side until fully paid."""
    balances = [_balance("A", -50), _balance("B", 30), _balance("C", 10)]

    suggestions = suggest_settlements(balances)

    assert _as_tuples(suggestions) == [("A", "B", 30), ("A", "C", 10)]


def test_zero_balances_produce_no_suggestions() -> None:
    balances = [_balance("A", 0), _balance("B", 0)]

    assert suggest_settlements(balances) == []


def test_empty_balances_produce_no_suggestions() -> None:
    assert suggest_settlements([]) == []


def test_partition_keeps_incoming_order() -> None:
    """Debtors and creditors are matched in the order they arrive."""
    balances = [
        _balance("A", -70),
        _balance("B", -20),
        _balance("Z", 0),
        _balance("C", 50),
        _balance("D", 40),
    ]

    suggestions = suggest_settlements(balances)

    assert _as_tuples(suggestions) == [
        ("A", "C", 50),
        ("A", "D", 20),
        ("B", "D", 20),
    ]
    assert len(suggestions) <= 2 + 2 - 1


def test_surplus_is_left_as_residual() -> None:
    """Unequal sides stop when debtors run out."""
    balances = [_balance("A", -10), _balance("B", 25)]

    suggestions = suggest_settlements(balances)

    assert _as_tuples(suggestions) == [("A", "B", 10)]
    assert settlement_residual(balances) == 15


def test_shortfall_is_left_as_residual() -> None:
    balances = [_balance("A", -40), _balance("B", 15)]

    suggestions = suggest_settlements(balances)

    assert _as_tuples(suggestions) == [("A", "B", 15)]
    assert settlement_residual(balances) == -25


def test_balanced_pool_has_no_residual() -> None:
    balances = [_balance("A", -30), _balance("B", -10), _balance("C", 40)]

    assert settlement_residual(balances) == 0
