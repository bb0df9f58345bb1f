"""Cron time expressions and the search for their next matching instants."""

from __future__ import annotations

import calendar
import re
from bisect import bisect_left
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from choretracker.cronparse import (
    DAY_OF_MONTH,
    DAY_OF_WEEK,
    HOUR,
    MINUTE,
    MONTH,
    SECOND,
    YEAR,
    YEAR_DEFAULT_LIST,
    CronSyntaxError,
    DayOfMonthSpec,
    DayOfWeekSpec,
    normalize,
    parse_day_of_month,
    parse_day_of_week,
    parse_field,
)

__all__ = ["Expression", "parse", "must_parse", "CronSyntaxError"]

_FIELD_FINDER = re.compile(r"[^\t\n\f\r ]+")

_DOW_NORMALIZED_OFFSETS: tuple[tuple[int, ...], ...] = (
    (1, 8, 15, 22, 29),
    (2, 9, 16, 23, 30),
    (3, 10, 17, 24, 31),
    (4, 11, 18, 25),
    (5, 12, 19, 26),
    (6, 13, 20, 27),
    (7, 14, 21, 28),
)


def _sunday_based_weekday(day: date) -> int:
    """Weekday number with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def _workday_of_month(target: date, last_day: int) -> int:
    """Nearest weekday to ``target`` without leaving its month."""
    dom = target.day
    weekday = _sunday_based_weekday(target)
    if weekday == 6:
        dom = dom - 1 if dom > 1 else dom + 2
    elif weekday == 0:
        dom = dom + 1 if dom < last_day else dom - 2
    return dom


@dataclass
class Expression:
    """A parsed cron time expression."""

    expression: str
    seconds: list[int]
    minutes: list[int]
    hours: list[int]
    days_of_month: DayOfMonthSpec
    months: list[int]
    days_of_week: DayOfWeekSpec
    years: list[int] = field(default_factory=lambda: list(YEAR_DEFAULT_LIST))

    def next(self, from_time: datetime | None) -> datetime | None:
        """Return the first matching instant strictly after ``from_time``.

        The result keeps the time zone of ``from_time``.  ``None`` is returned
        when no matching instant exists or when ``from_time`` is ``None``.
        """
        if from_time is None:
            return None
        t = from_time

        i = bisect_left(self.years, t.year)
        if i == len(self.years):
            return None
        if t.year != self.years[i]:
            return self._next_year(t)

        i = bisect_left(self.months, t.month)
        if i == len(self.months):
            return self._next_year(t)
        if t.month != self.months[i]:
            return self._next_month(t)

        days = self._actual_days_of_month(t.year, t.month)
        if not days:
            return self._next_month(t)

        i = bisect_left(days, t.day)
        if i == len(days):
            return self._next_month(t)
        if t.day != days[i]:
            return self._next_day_of_month(t)

        i = bisect_left(self.hours, t.hour)
        if i == len(self.hours):
            return self._next_day_of_month(t)
        if t.hour != self.hours[i]:
            return self._next_hour(t)

        i = bisect_left(self.minutes, t.minute)
        if i == len(self.minutes):
            return self._next_hour(t)
        if t.minute != self.minutes[i]:
            return self._next_minute(t)

        i = bisect_left(self.seconds, t.second)
        if i == len(self.seconds):
            return self._next_minute(t)

        return self._next_second(t)

    def next_n(self, from_time: datetime | None, n: int) -> list[datetime]:
        """Return up to ``n`` matching instants after ``from_time``, ascending."""
        found: list[datetime] = []
        if n <= 0:
            return found
        current = self.next(from_time)
        while current is not None:
            found.append(current)
            if len(found) == n:
                break
            current = self._next_second(current)
        return found

    def _at(
        self,
        t: datetime,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
    ) -> datetime:
        return datetime(year, month, day, hour, minute, second, tzinfo=t.tzinfo)

    def _next_year(self, t: datetime) -> datetime | None:
        start = bisect_left(self.years, t.year + 1)
        for year in self.years[start:]:
            for month in self.months:
                days = self._actual_days_of_month(year, month)
                if days:
                    return self._at(
                        t,
                        year,
                        month,
                        days[0],
                        self.hours[0],
                        self.minutes[0],
                        self.seconds[0],
                    )
        return None

    def _next_month(self, t: datetime) -> datetime | None:
        start = bisect_left(self.months, t.month + 1)
        for month in self.months[start:]:
            days = self._actual_days_of_month(t.year, month)
            if days:
                return self._at(
                    t,
                    t.year,
                    month,
                    days[0],
                    self.hours[0],
                    self.minutes[0],
                    self.seconds[0],
                )
        return self._next_year(t)

    def _next_day_of_month(self, t: datetime) -> datetime | None:
        days = self._actual_days_of_month(t.year, t.month)
        i = bisect_left(days, t.day + 1)
        if i == len(days):
            return self._next_month(t)
        return self._at(
            t,
            t.year,
            t.month,
            days[i],
            self.hours[0],
            self.minutes[0],
            self.seconds[0],
        )

    def _next_hour(self, t: datetime) -> datetime | None:
        i = bisect_left(self.hours, t.hour + 1)
        if i == len(self.hours):
            return self._next_day_of_month(t)
        return self._at(
            t, t.year, t.month, t.day, self.hours[i], self.minutes[0], self.seconds[0]
        )

    def _next_minute(self, t: datetime) -> datetime | None:
        i = bisect_left(self.minutes, t.minute + 1)
        if i == len(self.minutes):
            return self._next_hour(t)
        return self._at(
            t, t.year, t.month, t.day, t.hour, self.minutes[i], self.seconds[0]
        )

    def _next_second(self, t: datetime) -> datetime | None:
        i = bisect_left(self.seconds, t.second + 1)
        if i == len(self.seconds):
            return self._next_minute(t)
        return self._at(t, t.year, t.month, t.day, t.hour, t.minute, self.seconds[i])

    def _actual_days_of_month(self, year: int, month: int) -> list[int]:
        """Days of the given month that both day fields together select."""
        dom = self.days_of_month
        dow = self.days_of_week
        first = date(year, month, 1)
        last_day = calendar.monthrange(year, month)[1]

        if not dom.restricted and not dow.restricted:
            return list(range(1, last_day + 1))

        selected: set[int] = set()

        if dom.restricted:
            if dom.last_day:
                selected.add(last_day)
            if dom.last_workday:
                selected.add(
                    _workday_of_month(date(year, month, last_day), last_day)
                )
            selected.update(day for day in dom.days if day <= last_day)
            selected.update(
                _workday_of_month(first + timedelta(days=day - 1), last_day)
                for day in dom.workdays
                if day <= last_day
            )

        if dow.restricted:
            offset = 7 - _sunday_based_weekday(first)
            for weekday in dow.days:
                week = _DOW_NORMALIZED_OFFSETS[(offset + weekday) % 7]
                selected.update(week[:4])
                if len(week) > 4 and week[4] <= last_day:
                    selected.add(week[4])
            for value in dow.specific_week_days:
                day = 1 + 7 * (value // 7) + (offset + value) % 7
                if day <= last_day:
                    selected.add(day)
            last_week_origin = date(year, month, last_day - 6)
            offset = 7 - _sunday_based_weekday(last_week_origin)
            for weekday in dow.last_week_days:
                day = last_week_origin.day + (offset + weekday) % 7
                if day <= last_day:
                    selected.add(day)

        return sorted(selected)


def parse(cron_line: str) -> Expression:
    """Parse a cron line of 5 to 7 fields, or one of the ``@`` aliases.

    Raises :class:`CronSyntaxError` when the expression is malformed.
    """
    cron = normalize(cron_line)
    fields = _FIELD_FINDER.findall(cron)
    if len(fields) < 5:
        raise CronSyntaxError("missing field(s)")
    fields = fields[:7]

    if len(fields) == 7:
        seconds = parse_field(fields[0], SECOND)
        rest = fields[1:]
    else:
        seconds = [0]
        rest = fields

    minutes = parse_field(rest[0], MINUTE)
    hours = parse_field(rest[1], HOUR)
    days_of_month = parse_day_of_month(rest[2])
    months = parse_field(rest[3], MONTH)
    days_of_week = parse_day_of_week(rest[4])
    years = (
        parse_field(rest[5], YEAR) if len(rest) > 5 else list(YEAR_DEFAULT_LIST)
    )

    return Expression(
        expression=cron_line,
        seconds=seconds,
        minutes=minutes,
        hours=hours,
        days_of_month=days_of_month,
        months=months,
        days_of_week=days_of_week,
        years=years,
    )


def must_parse(cron_line: str) -> Expression:
    """Parse a cron line that is expected to be well formed.

    Raises :class:`CronSyntaxError` when it is not.
    """
    return parse(cron_line)