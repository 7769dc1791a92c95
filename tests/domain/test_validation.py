"""Tests for entry-time validation and edit permissions."""

import pytest

from src.domain.models import Expense, Member
from src.domain.policies.entry_permissions import can_edit_entry, is_organizer
from src.domain.services.validation import (
    validate_contribution,
    validate_expense,
    validate_settlement,
)


def _expense(**overrides) -> Expense:
    values = {
        "title": "Dinner",
        "amount_cents": 1000,
        "paid_by_uid": "a",
        "split_between_uids": ["a", "b"],
    }
    values.update(overrides)
    return Expense(**values)


@pytest.mark.parametrize("amount", [0, -1])
def test_contribution_must_be_positive(amount: int) -> None:
    with pytest.raises(ValueError):
        validate_contribution(amount)


def test_contribution_accepts_positive_amount() -> None:
    validate_contribution(1)


def test_valid_equal_expense_passes() -> None:
    validate_expense(_expense())


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount_cents": 0},
        {"title": "   "},
        {"paid_by_uid": ""},
        {"split_between_uids": ["", "  "]},
        {"split_type": "weights"},
    ],
)
def test_invalid_expense_is_rejected(overrides: dict) -> None:
    with pytest.raises(ValueError):
        validate_expense(_expense(**overrides))


def test_exact_split_must_sum_to_amount() -> None:
    with pytest.raises(ValueError, match="sum to 900"):
        validate_expense(
            _expense(
                split_type="exact",
                split_exact_cents={"a": 600, "b": 300},
            )
        )


def test_exact_split_matching_amount_passes() -> None:
    validate_expense(
        _expense(split_type="EXACT", split_exact_cents={"a": 700, "b": 300})
    )


def test_exact_split_rejects_non_participants() -> None:
    with pytest.raises(ValueError, match="non-participants"):
        validate_expense(
            _expense(
                split_type="exact",
                split_exact_cents={"a": 500, "b": 300, "c": 200},
            )
        )


def test_percent_split_must_total_ten_thousand_bps() -> None:
    with pytest.raises(ValueError, match="9999"):
        validate_expense(
            _expense(
                split_type="percent",
                split_percent_bps={"a": 3333, "b": 6666},
            )
        )


def test_percent_split_rejects_out_of_range_bps() -> None:
    with pytest.raises(ValueError, match="out of range"):
        validate_expense(
            _expense(
                split_type="percent",
                split_percent_bps={"a": 12000, "b": -2000},
            )
        )


def test_percent_split_of_one_hundred_percent_passes() -> None:
    validate_expense(
        _expense(
            split_type="percent",
            split_percent_bps={"a": 2500, "b": 7500},
        )
    )


def test_settlement_between_roster_members_passes() -> None:
    validate_settlement("a", "b", 100, ["a", "b"])


@pytest.mark.parametrize(
    ("from_uid", "to_uid", "amount"),
    [("a", "b", 0), ("a", "a", 100), ("a", "ghost", 100)],
)
def test_invalid_settlement_is_rejected(
    from_uid: str,
    to_uid: str,
    amount: int,
) -> None:
    with pytest.raises(ValueError):
        validate_settlement(from_uid, to_uid, amount, ["a", "b"])


def test_owner_and_organizer_can_edit_entries() -> None:
    members = [
        Member(uid="a", name="Ann"),
        Member(uid="b", name="Ben"),
        Member(uid="o", name="Org", role="organizer"),
    ]

    assert can_edit_entry("a", "a", members)
    assert can_edit_entry("a", "o", members)
    assert not can_edit_entry("a", "b", members)
    assert not can_edit_entry("a", "", members)
    assert is_organizer("o", members)
    assert not is_organizer("a", members)


def test_owner_removed_from_roster_cannot_edit() -> None:
    members = [Member(uid="o", name="Org", role="organizer")]

    assert not can_edit_entry("a", "a", members)
    assert can_edit_entry("a", "o", members)
