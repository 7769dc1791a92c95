"""In-memory repository for trip pool records.

Used for local demos (``POOL_BACKEND=memory``) and as a fake in tests.
"""

from dataclasses import replace
from threading import Lock
from uuid import uuid4

from src.application.ports.pool_repository import (
    PoolRepositoryPort,
    PoolSnapshot,
)
from src.domain.models import Contribution, Expense, Member, Settlement


class InMemoryPoolRepository(PoolRepositoryPort):
    """Dictionary-backed repository keyed by trip id."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._members: dict[str, dict[str, Member]] = {}
        self._contributions: dict[str, dict[str, Contribution]] = {}
        self._expenses: dict[str, dict[str, Expense]] = {}
        self._settlements: dict[str, list[Settlement]] = {}

    def fetch_snapshot(self, trip_id: str) -> PoolSnapshot:
        with self._lock:
            return PoolSnapshot(
                trip_id=trip_id,
                members=list(self._members.get(trip_id, {}).values()),
                contributions=list(
                    self._contributions.get(trip_id, {}).values()
                ),
                expenses=list(self._expenses.get(trip_id, {}).values()),
                settlements=list(self._settlements.get(trip_id, [])),
            )

    def add_member(self, trip_id: str, member: Member) -> None:
        with self._lock:
            self._members.setdefault(trip_id, {})[member.uid] = member

    def fetch_contribution(
        self,
        trip_id: str,
        contribution_id: str,
    ) -> Contribution | None:
        with self._lock:
            return self._contributions.get(trip_id, {}).get(contribution_id)

    def add_contribution(
        self,
        trip_id: str,
        contribution: Contribution,
    ) -> Contribution:
        stored = replace(contribution, id=contribution.id or uuid4().hex)
        with self._lock:
            self._contributions.setdefault(trip_id, {})[stored.id] = stored
        return stored

    def update_contribution(
        self,
        trip_id: str,
        contribution_id: str,
        amount_cents: int,
        note: str,
    ) -> None:
        with self._lock:
            items = self._contributions.get(trip_id, {})
            if contribution_id in items:
                items[contribution_id] = replace(
                    items[contribution_id],
                    amount_cents=amount_cents,
                    note=note,
                )

    def delete_contribution(self, trip_id: str, contribution_id: str) -> None:
        with self._lock:
            self._contributions.get(trip_id, {}).pop(contribution_id, None)

    def fetch_expense(self, trip_id: str, expense_id: str) -> Expense | None:
        with self._lock:
            return self._expenses.get(trip_id, {}).get(expense_id)

    def add_expense(self, trip_id: str, expense: Expense) -> Expense:
        stored = replace(expense, id=expense.id or uuid4().hex)
        with self._lock:
            self._expenses.setdefault(trip_id, {})[stored.id] = stored
        return stored

    def update_expense(
        self,
        trip_id: str,
        expense_id: str,
        title: str,
        amount_cents: int,
    ) -> None:
        with self._lock:
            items = self._expenses.get(trip_id, {})
            if expense_id in items:
                items[expense_id] = replace(
                    items[expense_id],
                    title=title,
                    amount_cents=amount_cents,
                )

    def delete_expense(self, trip_id: str, expense_id: str) -> None:
        with self._lock:
            self._expenses.get(trip_id, {}).pop(expense_id, None)

    def add_settlement(
        self,
        trip_id: str,
        settlement: Settlement,
    ) -> Settlement:
        stored = replace(settlement, id=settlement.id or uuid4().hex)
        with self._lock:
            self._settlements.setdefault(trip_id, []).append(stored)
        return stored


__all__ = ["InMemoryPoolRepository"]
