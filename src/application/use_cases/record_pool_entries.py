"""Use case for recording and editing trip pool entries.

Validation and edit permissions are checked here, before anything reaches
the repository, so the ledger only ever sees well-formed records.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from src.application.ports.pool_repository import PoolRepositoryPort
from src.domain.constants import ROLE_MEMBER, ROLE_ORGANIZER
from src.domain.models import Contribution, Expense, Member, Settlement
from src.domain.policies.entry_permissions import (
    can_edit_entry,
    is_organizer,
)
from src.domain.services.ledger import (
    normalize_participants,
    normalize_split_type,
)
from src.domain.services.validation import (
    validate_contribution,
    validate_expense,
    validate_settlement,
)
from src.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordPoolEntriesUseCase:
    """Manage the roster and record pool entries for a trip."""

    def __init__(
        self,
        repository: PoolRepositoryPort,
        logger=None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port storing trip pool records.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Optional callable returning the creation timestamp.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._clock = clock or _utc_now

    def add_member(
        self,
        trip_id: str,
        member: Member,
        actor_uid: str = "",
    ) -> Member:
        """Put a member on the trip roster.

        The first member of a trip becomes its organizer. Afterwards only an
        organizer may add people; re-adding a uid replaces its entry.

        Raises:
            ValueError: If the uid is blank or the role is unknown.
            PermissionError: If the roster is not empty and the actor is not
                an organizer.
        """
        uid = member.uid.strip()
        if not uid:
            raise ValueError("Member id is required")
        if member.role not in (ROLE_MEMBER, ROLE_ORGANIZER):
            raise ValueError(f"Unknown member role: {member.role}")
        members = self._members(trip_id)
        if not members:
            role = ROLE_ORGANIZER
        elif is_organizer(actor_uid, members):
            role = member.role
        else:
            raise PermissionError("Only a trip organizer can add members")

        stored = replace(
            member,
            uid=uid,
            name=member.name.strip() or uid,
            role=role,
        )
        self._repository.add_member(trip_id, stored)
        self._logger.info(
            f"Member uid={uid} added to trip={trip_id} as {role}"
        )
        return stored

    def add_contribution(
        self,
        trip_id: str,
        actor: Member,
        amount_cents: int,
        note: str = "",
    ) -> Contribution:
        """Record money added to the pool by the acting member.

        Raises:
            ValueError: If the amount is not positive.
            PermissionError: If the actor is not on the trip roster.
        """
        validate_contribution(amount_cents)
        members = self._members(trip_id)
        self._require_member(actor.uid, members)
        contribution = Contribution(
            uid=actor.uid,
            name=actor.name,
            amount_cents=amount_cents,
            note=note.strip(),
            created_at=self._clock(),
        )
        stored = self._repository.add_contribution(trip_id, contribution)
        self._logger.info(
            f"Contribution {stored.id} of {amount_cents} cents "
            f"recorded for uid={actor.uid} on trip={trip_id}"
        )
        return stored

    def update_contribution(
        self,
        trip_id: str,
        actor_uid: str,
        contribution_id: str,
        amount_cents: int,
        note: str = "",
    ) -> None:
        """Edit the amount and note of a contribution.

        Raises:
            ValueError: If the amount is not positive.
            LookupError: If the contribution does not exist.
            PermissionError: If the actor is neither owner nor organizer.
        """
        validate_contribution(amount_cents)
        contribution = self._get_contribution(trip_id, contribution_id)
        self._require_edit(trip_id, contribution.uid, actor_uid)
        self._repository.update_contribution(
            trip_id,
            contribution_id,
            amount_cents,
            note.strip(),
        )
        self._logger.info(
            f"Contribution {contribution_id} updated by uid={actor_uid}: "
            f"{contribution.amount_cents} -> {amount_cents} cents"
        )

    def delete_contribution(
        self,
        trip_id: str,
        actor_uid: str,
        contribution_id: str,
    ) -> None:
        """Delete a contribution of the actor, or any one for an organizer."""
        contribution = self._get_contribution(trip_id, contribution_id)
        self._require_edit(trip_id, contribution.uid, actor_uid)
        self._repository.delete_contribution(trip_id, contribution_id)
        self._logger.info(
            f"Contribution {contribution_id} deleted by uid={actor_uid}"
        )

    def add_expense(self, trip_id: str, expense: Expense) -> Expense:
        """Record an expense after validating its split allocation.

        Participants are normalized (distinct, non-blank) and the split type
        is stored lower-cased.

        Raises:
            ValueError: If the expense or its split allocation is invalid.
            PermissionError: If the payer or a participant is not on the trip.
        """
        validate_expense(expense)
        members = self._members(trip_id)
        self._require_member(expense.paid_by_uid, members)
        participants = normalize_participants(expense.split_between_uids)
        for uid in participants:
            self._require_member(uid, members)

        normalized = replace(
            expense,
            title=expense.title.strip(),
            split_between_uids=participants,
            split_type=normalize_split_type(expense.split_type),
            created_at=self._clock(),
        )
        stored = self._repository.add_expense(trip_id, normalized)
        self._logger.info(
            f"Expense {stored.id} of {stored.amount_cents} cents "
            f"({stored.split_type} split between {len(participants)}) "
            f"recorded on trip={trip_id}"
        )
        return stored

    def update_expense(
        self,
        trip_id: str,
        actor_uid: str,
        expense_id: str,
        title: str,
        amount_cents: int,
    ) -> None:
        """Edit the title and amount of an expense.

        Exact splits are fixed to the original amount, so their amount
        cannot change without re-entering the expense.

        Raises:
            ValueError: If the title or amount is invalid.
            LookupError: If the expense does not exist.
            PermissionError: If the actor is neither payer nor organizer.
        """
        expense = self._get_expense(trip_id, expense_id)
        validate_expense(
            replace(expense, title=title, amount_cents=amount_cents)
        )
        self._require_edit(trip_id, expense.paid_by_uid, actor_uid)
        self._repository.update_expense(
            trip_id,
            expense_id,
            title.strip(),
            amount_cents,
        )
        self._logger.info(
            f"Expense {expense_id} updated by uid={actor_uid}: "
            f"{expense.amount_cents} -> {amount_cents} cents"
        )

    def delete_expense(
        self,
        trip_id: str,
        actor_uid: str,
        expense_id: str,
    ) -> None:
        """Delete an expense paid by the actor or removed by an organizer."""
        expense = self._get_expense(trip_id, expense_id)
        self._require_edit(trip_id, expense.paid_by_uid, actor_uid)
        self._repository.delete_expense(trip_id, expense_id)
        self._logger.info(f"Expense {expense_id} deleted by uid={actor_uid}")

    def record_settlement(
        self,
        trip_id: str,
        from_member: Member,
        to_uid: str,
        amount_cents: int,
        note: str = "",
    ) -> Settlement:
        """Append a payment from the acting member to another member.

        Raises:
            ValueError: If the amount or the members are invalid.
        """
        members = self._members(trip_id)
        validate_settlement(
            from_member.uid,
            to_uid,
            amount_cents,
            (member.uid for member in members),
        )
        to_name = next(
            (member.name for member in members if member.uid == to_uid),
            to_uid,
        )
        settlement = Settlement(
            from_uid=from_member.uid,
            from_name=from_member.name,
            to_uid=to_uid,
            to_name=to_name,
            amount_cents=amount_cents,
            note=note.strip(),
            created_at=self._clock(),
        )
        stored = self._repository.add_settlement(trip_id, settlement)
        self._logger.info(
            f"Settlement {stored.id}: uid={from_member.uid} paid "
            f"uid={to_uid} {amount_cents} cents on trip={trip_id}"
        )
        return stored

    def _members(self, trip_id: str) -> list[Member]:
        return self._repository.fetch_snapshot(trip_id).members

    def _get_contribution(
        self,
        trip_id: str,
        contribution_id: str,
    ) -> Contribution:
        contribution = self._repository.fetch_contribution(
            trip_id,
            contribution_id,
        )
        if contribution is None:
            raise LookupError(f"Unknown contribution: {contribution_id}")
        return contribution

    def _get_expense(self, trip_id: str, expense_id: str) -> Expense:
        expense = self._repository.fetch_expense(trip_id, expense_id)
        if expense is None:
            raise LookupError(f"Unknown expense: {expense_id}")
        return expense

    def _require_edit(
        self,
        trip_id: str,
        owner_uid: str,
        actor_uid: str,
    ) -> None:
        members = self._members(trip_id)
        if not can_edit_entry(owner_uid, actor_uid, members):
            self._logger.warning(
                f"Edit denied for uid={actor_uid} on entry owned by "
                f"uid={owner_uid} (trip={trip_id})"
            )
            raise PermissionError(
                "Only the entry owner or a trip organizer can change it"
            )

    @staticmethod
    def _require_member(uid: str, members: list[Member]) -> None:
        if not any(member.uid == uid for member in members):
            raise PermissionError(f"Member is not on the trip: {uid}")


__all__ = ["RecordPoolEntriesUseCase"]
