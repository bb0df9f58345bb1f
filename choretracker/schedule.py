"""Cron entries held as their five separate fields."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

__all__ = ["CronEntry", "new_entry"]


@dataclass(frozen=True)
class CronEntry:
    """A five-field cron schedule with an optional comment."""

    schedule: list[str] = field(default_factory=list)
    comment: str = ""

    def with_comment(self, comment: str) -> CronEntry:
        """Return a copy of the entry carrying ``comment``."""
        return replace(self, comment=comment)

    def validate(self) -> None:
        """Raise ``ValueError`` unless the schedule has exactly five fields."""
        if len(self.schedule) != 5:
            shown = " ".join(self.schedule)
            raise ValueError(f"cron expect 5 values in shedule: [{shown}]")


def new_entry(schedule: list[str]) -> CronEntry:
    """Create an entry for the given schedule fields."""
    return CronEntry(schedule=list(schedule))