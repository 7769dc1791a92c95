"""Domain policies package."""

from .entry_permissions import can_edit_entry, is_organizer

__all__ = ["can_edit_entry", "is_organizer"]
