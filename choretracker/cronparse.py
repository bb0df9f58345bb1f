"""Parsing of the individual fields of a cron time expression."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "CronSyntaxError",
    "FieldDescriptor",
    "DayOfMonthSpec",
    "DayOfWeekSpec",
    "GENERIC_DEFAULT_LIST",
    "YEAR_DEFAULT_LIST",
    "NUMBER_TOKENS",
    "MONTH_TOKENS",
    "DOW_TOKENS",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY_OF_MONTH",
    "MONTH",
    "DAY_OF_WEEK",
    "YEAR",
    "normalize",
    "parse_field",
    "parse_day_of_month",
    "parse_day_of_week",
]


class CronSyntaxError(ValueError):
    """Raised when a cron expression or one of its fields is malformed."""


GENERIC_DEFAULT_LIST: tuple[int, ...] = tuple(range(60))
YEAR_DEFAULT_LIST: tuple[int, ...] = tuple(range(1970, 2100))

NUMBER_TOKENS: Mapping[str, int] = {
    **{str(n): n for n in range(60)},
    **{f"{n:02d}": n for n in range(60)},
    **{str(year): year for year in YEAR_DEFAULT_LIST},
}

_MONTH_NAMES = (
    ("jan", "january"),
    ("feb", "february"),
    ("mar", "march"),
    ("apr", "april"),
    ("may",),
    ("jun", "june"),
    ("jul", "july"),
    ("aug", "august"),
    ("sep", "september"),
    ("oct", "october"),
    ("nov", "november"),
    ("dec", "december"),
)

MONTH_TOKENS: Mapping[str, int] = {
    token: number
    for number, names in enumerate(_MONTH_NAMES, start=1)
    for token in (str(number), *names)
}

_DOW_NAMES = (
    ("sun", "sunday"),
    ("mon", "monday"),
    ("tue", "tuesday"),
    ("wed", "wednesday"),
    ("thu", "thursday"),
    ("fri", "friday"),
    ("sat", "saturday"),
)

DOW_TOKENS: Mapping[str, int] = {
    **{
        token: number
        for number, names in enumerate(_DOW_NAMES)
        for token in (str(number), *names)
    },
    "7": 0,
}


@dataclass(frozen=True)
class FieldDescriptor:
    """Describes the bounds, defaults and accepted values of one cron field."""

    name: str
    minimum: int
    maximum: int
    default_list: tuple[int, ...]
    value_pattern: str
    tokens: Mapping[str, int] = field(default_factory=lambda: NUMBER_TOKENS)

    def value_of(self, token: str) -> int:
        """Return the number a token stands for, or 0 when it is unknown."""
        return self.tokens.get(token, 0)


SECOND = FieldDescriptor(
    name="second",
    minimum=0,
    maximum=59,
    default_list=GENERIC_DEFAULT_LIST[0:60],
    value_pattern=r"0?[0-9]|[1-5][0-9]",
)
MINUTE = FieldDescriptor(
    name="minute",
    minimum=0,
    maximum=59,
    default_list=GENERIC_DEFAULT_LIST[0:60],
    value_pattern=r"0?[0-9]|[1-5][0-9]",
)
HOUR = FieldDescriptor(
    name="hour",
    minimum=0,
    maximum=23,
    default_list=GENERIC_DEFAULT_LIST[0:24],
    value_pattern=r"0?[0-9]|1[0-9]|2[0-3]",
)
DAY_OF_MONTH = FieldDescriptor(
    name="day-of-month",
    minimum=1,
    maximum=31,
    default_list=GENERIC_DEFAULT_LIST[1:32],
    value_pattern=r"0?[1-9]|[12][0-9]|3[01]",
)
MONTH = FieldDescriptor(
    name="month",
    minimum=1,
    maximum=12,
    default_list=GENERIC_DEFAULT_LIST[1:13],
    value_pattern=(
        r"0?[1-9]|1[012]|jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec|"
        r"january|february|march|april|march|april|june|july|august|"
        r"september|october|november|december"
    ),
    tokens=MONTH_TOKENS,
)
DAY_OF_WEEK = FieldDescriptor(
    name="day-of-week",
    minimum=0,
    maximum=6,
    default_list=GENERIC_DEFAULT_LIST[0:7],
    value_pattern=(
        r"0?[0-7]|sun|mon|tue|wed|thu|fri|sat|"
        r"sunday|monday|tuesday|wednesday|thursday|friday|saturday"
    ),
    tokens=DOW_TOKENS,
)
YEAR = FieldDescriptor(
    name="year",
    minimum=1970,
    maximum=2099,
    default_list=YEAR_DEFAULT_LIST,
    value_pattern=r"19[789][0-9]|20[0-9]{2}",
)

_LAYOUT_WILDCARD = r"\*|\?"
_LAYOUT_VALUE = r"(%value%)"
_LAYOUT_RANGE = r"(%value%)-(%value%)"
_LAYOUT_WILDCARD_AND_INTERVAL = r"\*/(\d+)"
_LAYOUT_VALUE_AND_INTERVAL = r"(%value%)/(\d+)"
_LAYOUT_RANGE_AND_INTERVAL = r"(%value%)-(%value%)/(\d+)"
_LAYOUT_LAST_DOM = r"l"
_LAYOUT_WORKDOM = r"(%value%)w"
_LAYOUT_LAST_WORKDOM = r"lw"
_LAYOUT_DOW_OF_LAST_WEEK = r"(%value%)l"
_LAYOUT_DOW_OF_SPECIFIC_WEEK = r"(%value%)#([1-5])"

_ENTRY_FINDER = re.compile(r"[^,]+")

_ALIASES = {
    "@yearly": "0 0 0 1 1 * *",
    "@annually": "0 0 0 1 1 * *",
    "@monthly": "0 0 0 1 * * *",
    "@weekly": "0 0 0 * * 0 *",
    "@daily": "0 0 0 * * * *",
    "@hourly": "0 0 * * * * *",
}
_ALIAS_FINDER = re.compile("|".join(re.escape(alias) for alias in _ALIASES))


@lru_cache(maxsize=None)
def _layout(layout: str, value_pattern: str) -> re.Pattern[str]:
    return re.compile(layout.replace("%value%", value_pattern), re.ASCII)


class _Kind(Enum):
    NONE = auto()
    ONE = auto()
    SPAN = auto()
    ALL = auto()


@dataclass(frozen=True)
class _Directive:
    kind: _Kind
    text: str
    first: int = 0
    last: int = 0
    step: int = 1

    def values(self) -> range:
        return range(self.first, self.last + 1, self.step)


@dataclass
class DayOfMonthSpec:
    """What the day-of-month field selects."""

    restricted: bool = True
    last_day: bool = False
    last_workday: bool = False
    days: set[int] = field(default_factory=set)
    workdays: set[int] = field(default_factory=set)


@dataclass
class DayOfWeekSpec:
    """What the day-of-week field selects.

    ``specific_week_days`` holds ``(week - 1) * 7 + weekday`` for ``D#W``
    directives; ``last_week_days`` holds weekdays given as ``DL``.
    """

    restricted: bool = True
    days: set[int] = field(default_factory=set)
    specific_week_days: set[int] = field(default_factory=set)
    last_week_days: set[int] = field(default_factory=set)


def normalize(cron_line: str) -> str:
    """Replace the built-in ``@`` aliases with their full expressions."""
    return _ALIAS_FINDER.sub(lambda match: _ALIASES[match.group(0)], cron_line)


def _interval(token: str, entry: str, descriptor: FieldDescriptor) -> int:
    step = NUMBER_TOKENS.get(token, 0)
    if step < 1 or step > descriptor.maximum:
        raise CronSyntaxError(f"invalid interval {entry}")
    return step


def _parse_entry(entry: str, descriptor: FieldDescriptor) -> _Directive:
    normal = entry.lower()
    pattern = descriptor.value_pattern

    if _layout(_LAYOUT_WILDCARD, pattern).fullmatch(normal):
        return _Directive(
            _Kind.ALL, entry, descriptor.minimum, descriptor.maximum, 1
        )
    if _layout(_LAYOUT_VALUE, pattern).fullmatch(normal):
        return _Directive(_Kind.ONE, entry, descriptor.value_of(normal))
    if match := _layout(_LAYOUT_RANGE, pattern).fullmatch(normal):
        return _Directive(
            _Kind.SPAN,
            entry,
            descriptor.value_of(match.group(1)),
            descriptor.value_of(match.group(2)),
            1,
        )
    if match := _layout(_LAYOUT_WILDCARD_AND_INTERVAL, pattern).fullmatch(normal):
        return _Directive(
            _Kind.SPAN,
            entry,
            descriptor.minimum,
            descriptor.maximum,
            _interval(match.group(1), normal, descriptor),
        )
    if match := _layout(_LAYOUT_VALUE_AND_INTERVAL, pattern).fullmatch(normal):
        return _Directive(
            _Kind.SPAN,
            entry,
            descriptor.value_of(match.group(1)),
            descriptor.maximum,
            _interval(match.group(2), normal, descriptor),
        )
    if match := _layout(_LAYOUT_RANGE_AND_INTERVAL, pattern).fullmatch(normal):
        return _Directive(
            _Kind.SPAN,
            entry,
            descriptor.value_of(match.group(1)),
            descriptor.value_of(match.group(2)),
            _interval(match.group(3), normal, descriptor),
        )
    return _Directive(_Kind.NONE, entry)


def _parse_directives(text: str, descriptor: FieldDescriptor) -> list[_Directive]:
    entries = _ENTRY_FINDER.findall(text)
    if not entries:
        raise CronSyntaxError(f"{descriptor.name} field: missing directive")
    return [_parse_entry(entry, descriptor) for entry in entries]


def parse_field(text: str, descriptor: FieldDescriptor) -> list[int]:
    """Return the sorted values a simple cron field selects."""
    values: set[int] = set()
    for directive in _parse_directives(text, descriptor):
        if directive.kind is _Kind.NONE:
            raise CronSyntaxError(
                f"syntax error in {descriptor.name} field: '{directive.text}'"
            )
        if directive.kind is _Kind.ALL:
            return list(descriptor.default_list)
        if directive.kind is _Kind.ONE:
            values.add(directive.first)
        else:
            values.update(directive.values())
    return sorted(values)


def parse_day_of_month(text: str) -> DayOfMonthSpec:
    """Parse the day-of-month field, including ``L``, ``LW`` and ``nW``."""
    spec = DayOfMonthSpec()
    pattern = DAY_OF_MONTH.value_pattern
    for directive in _parse_directives(text, DAY_OF_MONTH):
        if directive.kind is _Kind.NONE:
            normal = directive.text.lower()
            if _layout(_LAYOUT_LAST_DOM, pattern).fullmatch(normal):
                spec.last_day = True
            elif _layout(_LAYOUT_LAST_WORKDOM, pattern).fullmatch(normal):
                spec.last_workday = True
            elif match := _layout(_LAYOUT_WORKDOM, pattern).fullmatch(normal):
                spec.workdays.add(DAY_OF_MONTH.value_of(match.group(1)))
            else:
                raise CronSyntaxError(
                    f"syntax error in day-of-month field: '{directive.text}'"
                )
        elif directive.kind is _Kind.ONE:
            spec.days.add(directive.first)
        else:
            spec.days.update(directive.values())
            if directive.kind is _Kind.ALL:
                spec.restricted = False
    return spec


def parse_day_of_week(text: str) -> DayOfWeekSpec:
    """Parse the day-of-week field, including ``DL`` and ``D#W``."""
    spec = DayOfWeekSpec()
    pattern = DAY_OF_WEEK.value_pattern
    for directive in _parse_directives(text, DAY_OF_WEEK):
        if directive.kind is _Kind.NONE:
            normal = directive.text.lower()
            if match := _layout(_LAYOUT_DOW_OF_LAST_WEEK, pattern).fullmatch(normal):
                spec.last_week_days.add(DAY_OF_WEEK.value_of(match.group(1)))
            elif match := _layout(_LAYOUT_DOW_OF_SPECIFIC_WEEK, pattern).fullmatch(
                normal
            ):
                week = DAY_OF_WEEK.value_of(match.group(2))
                weekday = DAY_OF_WEEK.value_of(match.group(1)) % 7
                spec.specific_week_days.add((week - 1) * 7 + weekday)
            else:
                raise CronSyntaxError(
                    f"syntax error in day-of-week field: '{directive.text}'"
                )
        elif directive.kind is _Kind.ONE:
            spec.days.add(directive.first)
        else:
            spec.days.update(directive.values())
            if directive.kind is _Kind.ALL:
                spec.restricted = False
    return spec