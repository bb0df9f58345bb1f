"""Validation of chores before they are stored."""

from __future__ import annotations

from choretracker.cronexpr import CronSyntaxError, parse
from choretracker.domain import Chore

__all__ = ["ValidationError", "DefaultValidator"]


class ValidationError(ValueError):
    """Raised when a chore misses required data or has a bad schedule."""


class DefaultValidator:
    """Requires an id, a title and a parsable cron schedule."""

    def validate(self, chore: Chore) -> None:
        """Raise :class:`ValidationError` when ``chore`` is not valid."""
        if chore.id == 0:
            raise ValidationError("chore id is not set")
        if chore.title == "":
            raise ValidationError("chore title is not set")
        if chore.schedule == "":
            raise ValidationError("chore schedule is not set")
        try:
            parse(chore.schedule)
        except CronSyntaxError as exc:
            raise ValidationError(f"chore schedule is invalid: {exc}") from exc