"""Domain constants for the trip pool ledger."""

SPLIT_EQUAL = "equal"
SPLIT_EXACT = "exact"
SPLIT_PERCENT = "percent"

SPLIT_TYPES = (SPLIT_EQUAL, SPLIT_EXACT, SPLIT_PERCENT)

# 10000 basis points = 100%.
BASIS_POINTS_TOTAL = 10000

ROLE_MEMBER = "member"
ROLE_ORGANIZER = "organizer"


__all__ = [
    "SPLIT_EQUAL",
    "SPLIT_EXACT",
    "SPLIT_PERCENT",
    "SPLIT_TYPES",
    "BASIS_POINTS_TOTAL",
    "ROLE_MEMBER",
    "ROLE_ORGANIZER",
]
