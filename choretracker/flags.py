"""Command-line flags of the chore tracker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = [
    "GLOBAL_CLI",
    "CHORE_TITLE",
    "CHORE_DESCRIPTION",
    "CHORE_AUTHOR",
    "CHORE_SCHEDULE",
    "CHORE_COMMENT",
    "CHORE_ID",
    "Flag",
    "TUI",
    "TITLE",
    "DESCRIPTION",
    "AUTHOR",
    "SCHEDULE",
    "COMMENT",
    "ID",
]

GLOBAL_CLI = "cli"
CHORE_TITLE = "title"
CHORE_DESCRIPTION = "description"
CHORE_AUTHOR = "author"
CHORE_SCHEDULE = "schedule"
CHORE_COMMENT = "comment"
CHORE_ID = "id"


@dataclass(frozen=True)
class Flag:
    """A named command-line option and the value it carries."""

    name: str
    usage: str = ""
    aliases: tuple[str, ...] = ()
    value: Any = None
    hide_default: bool = False

    def names(self) -> list[str]:
        """The flag's name followed by its aliases."""
        return [self.name, *self.aliases]

    def get(self) -> Any:
        """The value the flag carries."""
        return self.value


TUI = Flag(GLOBAL_CLI, "run in cli-mode", value=False)
TITLE = Flag(CHORE_TITLE, "use chore title variable", ("t",), "")
DESCRIPTION = Flag(CHORE_DESCRIPTION, "use chore description variable", ("d",), "")
AUTHOR = Flag(CHORE_AUTHOR, "use chore author variable", ("a",), "")
SCHEDULE = Flag(CHORE_SCHEDULE, "use chore schedule variable", ("s",), "")
COMMENT = Flag(CHORE_COMMENT, "use chore comment variable", ("c",), "")
ID = Flag(
    CHORE_ID,
    "use chore id variable (required for cli-mode)",
    ("i",),
    0,
    hide_default=True,
)