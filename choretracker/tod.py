"""Times of day written as ``HH:MM``."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["TOD", "time_of_day", "parse_tod"]

_TOD_FINDER = re.compile(r"(\d+):(\d+)", re.ASCII)


@dataclass(frozen=True)
class TOD:
    """A time of day in hours and minutes."""

    hours: int = 0
    minutes: int = 0

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"


def _validate(tod: TOD) -> None:
    if tod.hours < 0:
        raise ValueError("invalid tod: hours are negative")
    if tod.minutes < 0:
        raise ValueError("invalid tod: minutes are negative")
    if tod.hours > 23:
        raise ValueError("invalid tod: hours are more than 23")
    if tod.minutes > 59:
        raise ValueError("invalid tod: minutes are more than 59")


def parse_tod(text: str) -> TOD:
    """Find the first ``H:M`` in ``text`` and return it as a valid time of day."""
    match = _TOD_FINDER.search(text)
    if match is None:
        raise ValueError(f"invalid string provided: '{text}'")
    tod = TOD(int(match.group(1)), int(match.group(2)))
    _validate(tod)
    return tod


def time_of_day(text: str) -> TOD:
    """Return the time of day written in ``text``."""
    return parse_tod(text)