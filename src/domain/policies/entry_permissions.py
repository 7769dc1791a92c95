"""Who may edit or delete recorded pool entries."""

from collections.abc import Iterable

from src.domain.constants import ROLE_ORGANIZER
from src.domain.models import Member


def is_organizer(uid: str, members: Iterable[Member]) -> bool:
    """Return True when the uid holds the organizer role on the roster."""
    return any(
        member.uid == uid and member.role == ROLE_ORGANIZER
        for member in members
    )


def can_edit_entry(
    owner_uid: str,
    actor_uid: str,
    members: Iterable[Member],
) -> bool:
    """Return True when the actor may edit or delete an entry.

    Args:
        owner_uid: Contributor of a contribution or payer of an expense.
        actor_uid: Member attempting the change.
        members: Current trip roster.

    Returns:
        bool: True for the entry owner or any trip organizer, provided the
        actor is still on the roster.
    """
    roster = list(members)
    if not actor_uid or not any(m.uid == actor_uid for m in roster):
        return False
    if actor_uid == owner_uid:
        return True
    return is_organizer(actor_uid, roster)


__all__ = ["can_edit_entry", "is_organizer"]
