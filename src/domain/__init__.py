"""Domain package for the trip pool ledger rules and models."""

from .constants import (
    BASIS_POINTS_TOTAL,
    ROLE_MEMBER,
    ROLE_ORGANIZER,
    SPLIT_EQUAL,
    SPLIT_EXACT,
    SPLIT_PERCENT,
    SPLIT_TYPES,
)
from .models import (
    Contribution,
    Expense,
    Member,
    MemberBalance,
    PoolBalances,
    Settlement,
    SuggestedSettlement,
)
from .policies import can_edit_entry, is_organizer
from .services import (
    compute_balances,
    compute_expense_shares,
    normalize_participants,
    normalize_split_type,
    settlement_residual,
    suggest_settlements,
    validate_contribution,
    validate_expense,
    validate_settlement,
)

__all__ = [
    "Member",
    "Contribution",
    "Expense",
    "Settlement",
    "MemberBalance",
    "SuggestedSettlement",
    "PoolBalances",
    "BASIS_POINTS_TOTAL",
    "ROLE_MEMBER",
    "ROLE_ORGANIZER",
    "SPLIT_EQUAL",
    "SPLIT_EXACT",
    "SPLIT_PERCENT",
    "SPLIT_TYPES",
    "can_edit_entry",
    "is_organizer",
    "compute_balances",
    "compute_expense_shares",
    "normalize_participants",
    "normalize_split_type",
    "settlement_residual",
    "suggest_settlements",
    "validate_contribution",
    "validate_expense",
    "validate_settlement",
]
