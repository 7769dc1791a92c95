"""Application port for trip pool storage."""

from dataclasses import dataclass, field
from typing import Protocol

from src.domain.models import Contribution, Expense, Member, Settlement


@dataclass(frozen=True)
class PoolSnapshot:
    """One consistent generation of a trip's pool collections."""

    trip_id: str
    members: list[Member] = field(default_factory=list)
    contributions: list[Contribution] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    settlements: list[Settlement] = field(default_factory=list)


class PoolRepositoryPort(Protocol):
    """Port exposing storage for trip rosters and pool records."""

    def fetch_snapshot(self, trip_id: str) -> PoolSnapshot:
        """Return members, contributions, expenses and settlements together."""

    def add_member(self, trip_id: str, member: Member) -> None:
        """Insert or replace a roster member."""

    def fetch_contribution(
        self,
        trip_id: str,
        contribution_id: str,
    ) -> Contribution | None:
        """Return a single contribution or None."""

    def add_contribution(
        self,
        trip_id: str,
        contribution: Contribution,
    ) -> Contribution:
        """Persist a contribution and return it with its id."""

    def update_contribution(
        self,
        trip_id: str,
        contribution_id: str,
        amount_cents: int,
        note: str,
    ) -> None:
        """Update the amount and note of a contribution."""

    def delete_contribution(self, trip_id: str, contribution_id: str) -> None:
        """Delete a contribution."""

    def fetch_expense(self, trip_id: str, expense_id: str) -> Expense | None:
        """Return a single expense or None."""

    def add_expense(self, trip_id: str, expense: Expense) -> Expense:
        """Persist an expense and return it with its id."""

    def update_expense(
        self,
        trip_id: str,
        expense_id: str,
        title: str,
        amount_cents: int,
    ) -> None:
        """Update the title and amount of an expense."""

    def delete_expense(self, trip_id: str, expense_id: str) -> None:
        """Delete an expense."""

    def add_settlement(
        self,
        trip_id: str,
        settlement: Settlement,
    ) -> Settlement:
        """Append a settlement and return it with its id."""


__all__ = ["PoolSnapshot", "PoolRepositoryPort"]
