"""Domain models for trip pool records.

These are the raw facts supplied by the repository: the trip roster and the
contributions, expenses and settlements recorded against the pool. All
monetary amounts are integer cents.
"""

from dataclasses import dataclass, field
from datetime import datetime

from src.domain.constants import ROLE_MEMBER, SPLIT_EQUAL


@dataclass(frozen=True)
class Member:
    """Trip roster entry.

    Attributes:
        uid: Stable member identifier.
        name: Display name.
        email: Optional contact address.
        role: ``member`` or ``organizer``.
    """

    uid: str
    name: str
    email: str = ""
    role: str = ROLE_MEMBER


@dataclass(frozen=True)
class Contribution:
    """Money added to the pool by a member."""

    uid: str
    amount_cents: int
    note: str = ""
    created_at: datetime | None = None
    id: str = ""
    name: str = ""


@dataclass(frozen=True)
class Expense:
    """Money spent from the pool and split between participants.

    Attributes:
        amount_cents: Total expense amount.
        paid_by_uid: Member who logged the payment.
        split_between_uids: Participants sharing the cost, in entry order.
        split_type: ``equal``, ``exact`` or ``percent`` (case-insensitive).
        split_exact_cents: Cents owed per participant for ``exact`` splits.
        split_percent_bps: Basis points per participant for ``percent`` splits.
        title: Free-text label.
        paid_by_name: Payer display name at entry time.
        created_at: Entry timestamp.
        id: Repository identifier.
    """

    amount_cents: int
    paid_by_uid: str
    split_between_uids: list[str] = field(default_factory=list)
    split_type: str = SPLIT_EQUAL
    split_exact_cents: dict[str, int] = field(default_factory=dict)
    split_percent_bps: dict[str, int] = field(default_factory=dict)
    title: str = ""
    paid_by_name: str = ""
    created_at: datetime | None = None
    id: str = ""


@dataclass(frozen=True)
class Settlement:
    """Recorded payment between two members. Append-only."""

    from_uid: str
    to_uid: str
    amount_cents: int
    note: str = ""
    created_at: datetime | None = None
    id: str = ""
    from_name: str = ""
    to_name: str = ""


__all__ = ["Member", "Contribution", "Expense", "Settlement"]
