"""Use case to compute balances and settle-up suggestions for a trip."""

from dataclasses import dataclass, field

from src.application.ports.pool_repository import (
    PoolRepositoryPort,
    PoolSnapshot,
)
from src.domain.models import (
    Contribution,
    Expense,
    Member,
    MemberBalance,
    Settlement,
    SuggestedSettlement,
)
from src.domain.services.ledger import compute_balances
from src.domain.services.settlement import (
    settlement_residual,
    suggest_settlements,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class PoolLedgerView:
    """Ledger output for presentation and export.

    Attributes:
        trip_id: Trip the ledger belongs to.
        members: Roster used for the computation.
        balances: Member balances sorted by ascending net cents.
        total_contributed_cents: Sum of all contributions.
        total_spent_cents: Sum of all expenses.
        pool_balance_cents: Contributed minus spent.
        suggested_settlements: Greedy payment suggestions.
        settlement_history: Recorded settlements, newest first.
        contributions: Recorded contributions in storage order.
        expenses: Recorded expenses in storage order.
    """

    trip_id: str
    members: list[Member] = field(default_factory=list)
    balances: list[MemberBalance] = field(default_factory=list)
    total_contributed_cents: int = 0
    total_spent_cents: int = 0
    pool_balance_cents: int = 0
    suggested_settlements: list[SuggestedSettlement] = field(
        default_factory=list
    )
    settlement_history: list[Settlement] = field(default_factory=list)
    contributions: list[Contribution] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)


class GetPoolLedgerUseCase:
    """Compute the pool ledger from one repository snapshot."""

    def __init__(self, repository: PoolRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            repository: Port supplying trip pool snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, trip_id: str) -> PoolLedgerView:
        """Return balances, totals and suggestions for a trip.

        Args:
            trip_id: Trip identifier.

        Returns:
            PoolLedgerView: Ledger computed from a single snapshot.
        """
        snapshot = self._repository.fetch_snapshot(trip_id)
        self._logger.info(
            f"Fetched pool snapshot for trip={trip_id}: "
            f"members={len(snapshot.members)}, "
            f"contributions={len(snapshot.contributions)}, "
            f"expenses={len(snapshot.expenses)}, "
            f"settlements={len(snapshot.settlements)}"
        )
        return self.build_ledger_view(snapshot)

    def build_ledger_view(self, snapshot: PoolSnapshot) -> PoolLedgerView:
        """Run the aggregator and suggester against one snapshot.

        Callers that receive snapshots from a change feed can call this for
        every new snapshot; only the latest result is meaningful.

        Args:
            snapshot: Consistent generation of the four pool collections.

        Returns:
            PoolLedgerView: Ledger for the snapshot.
        """
        pool = compute_balances(
            snapshot.members,
            snapshot.contributions,
            snapshot.expenses,
            snapshot.settlements,
        )
        suggestions = suggest_settlements(pool.balances)

        residual = settlement_residual(pool.balances)
        if residual:
            self._logger.warning(
                f"Suggestions leave {residual} cents unsettled "
                f"for trip={snapshot.trip_id}"
            )
        self._logger.info(
            f"Pool ledger computed for trip={snapshot.trip_id}: "
            f"contributed={pool.total_contributed_cents}, "
            f"spent={pool.total_spent_cents}, "
            f"suggestions={len(suggestions)}"
        )

        history = sorted(
            snapshot.settlements,
            key=_settlement_sort_key,
            reverse=True,
        )
        return PoolLedgerView(
            trip_id=snapshot.trip_id,
            members=list(snapshot.members),
            balances=pool.balances,
            total_contributed_cents=pool.total_contributed_cents,
            total_spent_cents=pool.total_spent_cents,
            pool_balance_cents=pool.pool_balance_cents,
            suggested_settlements=suggestions,
            settlement_history=history,
            contributions=list(snapshot.contributions),
            expenses=list(snapshot.expenses),
        )


def _settlement_sort_key(settlement: Settlement) -> float:
    if settlement.created_at is None:
        return float("-inf")
    return settlement.created_at.timestamp()


__all__ = ["GetPoolLedgerUseCase", "PoolLedgerView"]
