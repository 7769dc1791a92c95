"""Entry-time validation for pool records.

The ledger itself accepts anything; these checks run before a record is
persisted so that malformed entries never reach it.
"""

from collections.abc import Iterable

from src.domain.constants import (
    BASIS_POINTS_TOTAL,
    SPLIT_EXACT,
    SPLIT_PERCENT,
    SPLIT_TYPES,
)
from src.domain.models import Expense
from src.domain.services.ledger import normalize_participants


def validate_contribution(amount_cents: int) -> None:
    """Reject non-positive contribution amounts.

    Raises:
        ValueError: If the amount is zero or negative.
    """
    if amount_cents <= 0:
        raise ValueError(
            f"Contribution amount must be positive: {amount_cents}"
        )


def validate_expense(expense: Expense) -> None:
    """Check an expense and its split allocation before it is stored.

    Args:
        expense: Expense as entered by the user.

    Raises:
        ValueError: If the amount, title, payer, participants or split
            allocation are invalid.
    """
    if expense.amount_cents <= 0:
        raise ValueError(
            f"Expense amount must be positive: {expense.amount_cents}"
        )
    if not expense.title.strip():
        raise ValueError("Expense title is required")
    if not expense.paid_by_uid.strip():
        raise ValueError("Expense payer is required")

    participants = normalize_participants(expense.split_between_uids)
    if not participants:
        raise ValueError("Expense needs at least one participant")

    split_type = (expense.split_type or "").strip().lower()
    if split_type not in SPLIT_TYPES:
        raise ValueError(f"Unknown split type: {expense.split_type}")

    if split_type == SPLIT_EXACT:
        _validate_exact_split(
            expense.amount_cents,
            participants,
            expense.split_exact_cents,
        )
    elif split_type == SPLIT_PERCENT:
        _validate_percent_split(participants, expense.split_percent_bps)


def validate_settlement(
    from_uid: str,
    to_uid: str,
    amount_cents: int,
    member_uids: Iterable[str],
) -> None:
    """Check a settlement between two roster members.

    Raises:
        ValueError: If the amount is not positive, both ends are the same
            member, or either end is not on the roster.
    """
    if amount_cents <= 0:
        raise ValueError(
            f"Settlement amount must be positive: {amount_cents}"
        )
    if from_uid == to_uid:
        raise ValueError("Settlement payer and receiver must differ")
    roster = set(member_uids)
    for uid in (from_uid, to_uid):
        if uid not in roster:
            raise ValueError(f"Settlement member is not on the trip: {uid}")


def _validate_exact_split(
    amount_cents: int,
    participants: list[str],
    exact_cents: dict[str, int],
) -> None:
    _reject_outsiders(participants, exact_cents)
    for uid, cents in exact_cents.items():
        if cents < 0:
            raise ValueError(f"Exact share is negative for {uid}: {cents}")
    allocated = sum(exact_cents.get(uid, 0) for uid in participants)
    if allocated != amount_cents:
        raise ValueError(
            f"Exact shares sum to {allocated}, expected {amount_cents}"
        )


def _validate_percent_split(
    participants: list[str],
    percent_bps: dict[str, int],
) -> None:
    _reject_outsiders(participants, percent_bps)
    for uid, bps in percent_bps.items():
        if bps < 0 or bps > BASIS_POINTS_TOTAL:
            raise ValueError(f"Percent share out of range for {uid}: {bps}")
    allocated = sum(percent_bps.get(uid, 0) for uid in participants)
    if allocated != BASIS_POINTS_TOTAL:
        raise ValueError(
            f"Percent shares sum to {allocated} bps, "
            f"expected {BASIS_POINTS_TOTAL}"
        )


def _reject_outsiders(participants: list[str], allocation: dict) -> None:
    outsiders = sorted(uid for uid in allocation if uid not in participants)
    if outsiders:
        raise ValueError(
            f"Split allocation references non-participants: {outsiders}"
        )


__all__ = [
    "validate_contribution",
    "validate_expense",
    "validate_settlement",
]
