"""Small helpers shared by the chore services."""

from __future__ import annotations

__all__ = ["set_updated_content"]


def set_updated_content(old: str, new: str | None) -> str:
    """Return the value a field takes after an update.

    ``None`` or an empty string keep ``old``; the word ``null`` clears the
    field; anything else replaces it.
    """
    if not new:
        return old
    if new == "null":
        return ""
    return new