"""Domain services package."""

from .ledger import (
    compute_balances,
    compute_expense_shares,
    normalize_participants,
    normalize_split_type,
)
from .settlement import settlement_residual, suggest_settlements
from .validation import (
    validate_contribution,
    validate_expense,
    validate_settlement,
)

__all__ = [
    "compute_balances",
    "compute_expense_shares",
    "normalize_participants",
    "normalize_split_type",
    "suggest_settlements",
    "settlement_residual",
    "validate_contribution",
    "validate_expense",
    "validate_settlement",
]
