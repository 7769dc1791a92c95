"""Domain models package."""

from .balances import MemberBalance, PoolBalances, SuggestedSettlement
from .pool import Contribution, Expense, Member, Settlement

__all__ = [
    "Member",
    "Contribution",
    "Expense",
    "Settlement",
    "MemberBalance",
    "SuggestedSettlement",
    "PoolBalances",
]
