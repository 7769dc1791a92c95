"""Ledger aggregation for the trip pool.

Folds the roster and the raw contribution, expense and settlement records
into one balance per roster member. Everything here is a pure function over
integer cents: no I/O, no logging, and identical inputs always produce
identical outputs.
"""

from collections.abc import Iterable, Sequence

from src.domain.constants import (
    BASIS_POINTS_TOTAL,
    SPLIT_EQUAL,
    SPLIT_EXACT,
    SPLIT_PERCENT,
    SPLIT_TYPES,
)
from src.domain.models import (
    Contribution,
    Expense,
    Member,
    MemberBalance,
    PoolBalances,
    Settlement,
)


def compute_balances(
    members: Iterable[Member],
    contributions: Iterable[Contribution],
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement],
) -> PoolBalances:
    """Compute per-member balances and pool totals.

    Only roster members appear in the output. Contributions, expense shares
    and settlements that reference uids outside the roster still count in
    the pool totals but never in a member balance.

    Args:
        members: Trip roster, possibly with duplicate uids.
        contributions: Contributions recorded for the trip.
        expenses: Expenses recorded for the trip.
        settlements: Settlements recorded for the trip.

    Returns:
        PoolBalances: Balances sorted by ascending net cents plus totals.
    """
    contributions = list(contributions)
    expenses = list(expenses)

    total_contributed = sum(item.amount_cents for item in contributions)
    total_spent = sum(item.amount_cents for item in expenses)

    names: dict[str, str] = {}
    for member in members:
        if member.uid not in names:
            names[member.uid] = member.name or member.uid
    roster = list(names)

    contributed = {uid: 0 for uid in roster}
    owes = {uid: 0 for uid in roster}

    for contribution in contributions:
        if contribution.uid in contributed:
            contributed[contribution.uid] += contribution.amount_cents

    for expense in expenses:
        for uid, share in compute_expense_shares(expense):
            if uid in owes:
                owes[uid] += share

    net = {uid: contributed[uid] - owes[uid] for uid in roster}
    for settlement in settlements:
        if settlement.from_uid not in net or settlement.to_uid not in net:
            continue
        net[settlement.from_uid] += settlement.amount_cents
        net[settlement.to_uid] -= settlement.amount_cents

    balances = [
        MemberBalance(
            uid=uid,
            name=names[uid],
            contributed_cents=contributed[uid],
            owes_cents=owes[uid],
            net_cents=net[uid],
        )
        for uid in roster
    ]
    balances.sort(key=lambda balance: balance.net_cents)

    return PoolBalances(
        balances=balances,
        total_contributed_cents=total_contributed,
        total_spent_cents=total_spent,
    )


def compute_expense_shares(expense: Expense) -> list[tuple[str, int]]:
    """Allocate an expense between its participants.

    Args:
        expense: Expense to split.

    Returns:
        list[tuple[str, int]]: ``(uid, cents)`` pairs in participant order.
        Empty when the expense has no usable participants.
    """
    participants = normalize_participants(expense.split_between_uids)
    if not participants:
        return []

    split_type = normalize_split_type(expense.split_type)
    if split_type == SPLIT_EXACT:
        return _exact_shares(participants, expense.split_exact_cents)
    if split_type == SPLIT_PERCENT:
        return _percent_shares(
            participants,
            expense.amount_cents,
            expense.split_percent_bps,
        )
    return _equal_shares(participants, expense.amount_cents)


def normalize_participants(uids: Iterable[str]) -> list[str]:
    """Return distinct, non-blank uids in first-seen order."""
    seen: list[str] = []
    for uid in uids:
        if not uid or not uid.strip():
            continue
        if uid not in seen:
            seen.append(uid)
    return seen


def normalize_split_type(split_type: str | None) -> str:
    """Lower-case the split type, falling back to ``equal`` when unknown."""
    candidate = (split_type or "").strip().lower()
    if candidate in SPLIT_TYPES:
        return candidate
    return SPLIT_EQUAL


def _exact_shares(
    participants: Sequence[str],
    exact_cents: dict[str, int],
) -> list[tuple[str, int]]:
    shares = []
    for uid in participants:
        cents = exact_cents.get(uid, 0)
        if cents > 0:
            shares.append((uid, cents))
    return shares


def _percent_shares(
    participants: Sequence[str],
    amount_cents: int,
    percent_bps: dict[str, int],
) -> list[tuple[str, int]]:
    # Floor division only; the rounding remainder is left unallocated.
    return [
        (uid, amount_cents * percent_bps.get(uid, 0) // BASIS_POINTS_TOTAL)
        for uid in participants
    ]


def _equal_shares(
    participants: Sequence[str],
    amount_cents: int,
) -> list[tuple[str, int]]:
    base, remainder = divmod(amount_cents, len(participants))
    return [
        (uid, base + 1 if index < remainder else base)
        for index, uid in enumerate(participants)
    ]


__all__ = [
    "compute_balances",
    "compute_expense_shares",
    "normalize_participants",
    "normalize_split_type",
]
