"""Domain models derived from the pool ledger."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MemberBalance:
    """Per-member ledger position.

    Attributes:
        uid: Member identifier.
        name: Display name resolved from the roster.
        contributed_cents: Sum of the member's contributions.
        owes_cents: Sum of the member's allocated expense shares.
        net_cents: Contributed minus owed, adjusted by recorded settlements.
    """

    uid: str
    name: str
    contributed_cents: int
    owes_cents: int
    net_cents: int


@dataclass(frozen=True)
class SuggestedSettlement:
    """Proposed, not yet recorded, payment between two members."""

    from_uid: str
    to_uid: str
    amount_cents: int
    from_name: str = ""
    to_name: str = ""


@dataclass(frozen=True)
class PoolBalances:
    """Balances for every roster member plus pool totals."""

    balances: list[MemberBalance]
    total_contributed_cents: int
    total_spent_cents: int

    @property
    def pool_balance_cents(self) -> int:
        """Return total contributed minus total spent."""
        return self.total_contributed_cents - self.total_spent_cents


__all__ = ["MemberBalance", "SuggestedSettlement", "PoolBalances"]
