from datetime import datetime, timedelta, timezone

import pytest

from choretracker.cronexpr import CronSyntaxError, must_parse, parse

FULL = "%Y-%m-%d %H:%M:%S"
DAY = "%a %Y-%m-%d %H:%M"

CRON_TESTS = [
    (
        "* * * * * * *",
        FULL,
        [
            ("2013-01-01 00:00:00", "2013-01-01 00:00:01"),
            ("2013-01-01 00:00:59", "2013-01-01 00:01:00"),
            ("2013-01-01 00:59:59", "2013-01-01 01:00:00"),
            ("2013-01-01 23:59:59", "2013-01-02 00:00:00"),
            ("2013-02-28 23:59:59", "2013-03-01 00:00:00"),
            ("2016-02-28 23:59:59", "2016-02-29 00:00:00"),
            ("2012-12-31 23:59:59", "2013-01-01 00:00:00"),
        ],
    ),
    (
        "*/5 * * * * * *",
        FULL,
        [
            ("2013-01-01 00:00:00", "2013-01-01 00:00:05"),
            ("2013-01-01 00:00:59", "2013-01-01 00:01:00"),
            ("2013-01-01 00:59:59", "2013-01-01 01:00:00"),
            ("2013-01-01 23:59:59", "2013-01-02 00:00:00"),
            ("2013-02-28 23:59:59", "2013-03-01 00:00:00"),
            ("2016-02-28 23:59:59", "2016-02-29 00:00:00"),
            ("2012-12-31 23:59:59", "2013-01-01 00:00:00"),
        ],
    ),
    (
        "* * * * *",
        FULL,
        [
            ("2013-01-01 00:00:00", "2013-01-01 00:01:00"),
            ("2013-01-01 00:00:59", "2013-01-01 00:01:00"),
            ("2013-01-01 00:59:00", "2013-01-01 01:00:00"),
            ("2013-01-01 23:59:00", "2013-01-02 00:00:00"),
            ("2013-02-28 23:59:00", "2013-03-01 00:00:00"),
            ("2016-02-28 23:59:00", "2016-02-29 00:00:00"),
            ("2012-12-31 23:59:00", "2013-01-01 00:00:00"),
        ],
    ),
    (
        "17-43/5 * * * *",
        FULL,
        [
            ("2013-01-01 00:00:00", "2013-01-01 00:17:00"),
            ("2013-01-01 00:16:59", "2013-01-01 00:17:00"),
            ("2013-01-01 00:30:00", "2013-01-01 00:32:00"),
            ("2013-01-01 00:50:00", "2013-01-01 01:17:00"),
            ("2013-01-01 23:50:00", "2013-01-02 00:17:00"),
            ("2013-02-28 23:50:00", "2013-03-01 00:17:00"),
            ("2016-02-28 23:50:00", "2016-02-29 00:17:00"),
            ("2012-12-31 23:50:00", "2013-01-01 00:17:00"),
        ],
    ),
    (
        "15-30/4,55 * * * *",
        FULL,
        [
            ("2013-01-01 00:00:00", "2013-01-01 00:15:00"),
            ("2013-01-01 00:16:00", "2013-01-01 00:19:00"),
            ("2013-01-01 00:30:00", "2013-01-01 00:55:00"),
            ("2013-01-01 00:55:00", "2013-01-01 01:15:00"),
            ("2013-01-01 23:55:00", "2013-01-02 00:15:00"),
            ("2013-02-28 23:55:00", "2013-03-01 00:15:00"),
            ("2016-02-28 23:55:00", "2016-02-29 00:15:00"),
            ("2012-12-31 23:54:00", "2012-12-31 23:55:00"),
            ("2012-12-31 23:55:00", "2013-01-01 00:15:00"),
        ],
    ),
    (
        "0 0 * * MON",
        DAY,
        [
            ("2013-01-01 00:00:00", "Mon 2013-01-07 00:00"),
            ("2013-01-28 00:00:00", "Mon 2013-02-04 00:00"),
            ("2013-12-30 00:30:00", "Mon 2014-01-06 00:00"),
        ],
    ),
    (
        "0 0 * * friday",
        DAY,
        [
            ("2013-01-01 00:00:00", "Fri 2013-01-04 00:00"),
            ("2013-01-28 00:00:00", "Fri 2013-02-01 00:00"),
            ("2013-12-30 00:30:00", "Fri 2014-01-03 00:00"),
        ],
    ),
    (
        "0 0 * * 6,7",
        DAY,
        [
            ("2013-01-01 00:00:00", "Sat 2013-01-05 00:00"),
            ("2013-01-28 00:00:00", "Sat 2013-02-02 00:00"),
            ("2013-12-30 00:30:00", "Sat 2014-01-04 00:00"),
        ],
    ),
    (
        "0 0 * * 6#5",
        DAY,
        [("2013-09-02 00:00:00", "Sat 2013-11-30 00:00")],
    ),
    (
        "0 0 14W * *",
        DAY,
        [
            ("2013-03-31 00:00:00", "Mon 2013-04-15 00:00"),
            ("2013-08-31 00:00:00", "Fri 2013-09-13 00:00"),
        ],
    ),
    (
        "0 0 30W * *",
        DAY,
        [
            ("2013-03-02 00:00:00", "Fri 2013-03-29 00:00"),
            ("2013-06-02 00:00:00", "Fri 2013-06-28 00:00"),
            ("2013-09-02 00:00:00", "Mon 2013-09-30 00:00"),
            ("2013-11-02 00:00:00", "Fri 2013-11-29 00:00"),
        ],
    ),
    (
        "0 0 L * *",
        DAY,
        [
            ("2013-09-02 00:00:00", "Mon 2013-09-30 00:00"),
            ("2014-01-01 00:00:00", "Fri 2014-01-31 00:00"),
            ("2014-02-01 00:00:00", "Fri 2014-02-28 00:00"),
            ("2016-02-15 00:00:00", "Mon 2016-02-29 00:00"),
        ],
    ),
    (
        "0 0 LW * *",
        DAY,
        [
            ("2013-09-02 00:00:00", "Mon 2013-09-30 00:00"),
            ("2013-11-02 00:00:00", "Fri 2013-11-29 00:00"),
            ("2014-08-15 00:00:00", "Fri 2014-08-29 00:00"),
        ],
    ),
]

CASES = [
    (expr, layout, start, expected)
    for expr, layout, times in CRON_TESTS
    for start, expected in times
]


def _utc(text: str) -> datetime:
    return datetime.strptime(text, FULL).replace(tzinfo=timezone.utc)


@pytest.mark.parametrize("expr,layout,start,expected", CASES)
def test_expressions(expr, layout, start, expected):
    result = parse(expr).next(_utc(start))
    assert result.strftime(layout) == expected


def test_zero_when_year_has_passed():
    assert must_parse("* * * * * 1980").next(_utc("2013-08-31 00:00:00")) is None


def test_future_year_matches():
    result = must_parse("* * * * * 2050").next(_utc("2013-08-31 00:00:00"))
    assert result == datetime(2050, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def test_none_start_gives_none():
    assert must_parse("* * * * * 2099").next(None) is None


def test_next_n_fifth_saturday():
    expected = [
        datetime(2013, 11, 30, tzinfo=timezone.utc),
        datetime(2014, 3, 29, tzinfo=timezone.utc),
        datetime(2014, 5, 31, tzinfo=timezone.utc),
        datetime(2014, 8, 30, tzinfo=timezone.utc),
        datetime(2014, 11, 29, tzinfo=timezone.utc),
    ]
    result = must_parse("0 0 * * 6#5").next_n(_utc("2013-09-02 08:44:30"), 5)
    assert result == expected


def test_next_n_every_five_minutes():
    expected = [
        "Mon, 2 Sep 2013 08:45:00",
        "Mon, 2 Sep 2013 08:50:00",
        "Mon, 2 Sep 2013 08:55:00",
        "Mon, 2 Sep 2013 09:00:00",
        "Mon, 2 Sep 2013 09:05:00",
    ]
    result = must_parse("*/5 * * * *").next_n(_utc("2013-09-02 08:44:32"), 5)
    formatted = [f"{t:%a}, {t.day} {t:%b %Y %H:%M:%S}" for t in result]
    assert formatted == expected


@pytest.mark.parametrize(
    "expr",
    ["*/60 * * * * *", "*/61 * * * * *", "2/60 * * * * *", "2-20/61 * * * * *"],
)
def test_interval_too_large_is_rejected(expr):
    with pytest.raises(CronSyntaxError):
        parse(expr)


def test_example_leap_days():
    start = datetime(2013, 8, 31, tzinfo=timezone.utc)
    result = must_parse("0 0 29 2 *").next_n(start, 5)
    assert [t.strftime("%a, %d %b %Y %H:%M:%S %Z") for t in result] == [
        "Mon, 29 Feb 2016 00:00:00 UTC",
        "Sat, 29 Feb 2020 00:00:00 UTC",
        "Thu, 29 Feb 2024 00:00:00 UTC",
        "Tue, 29 Feb 2028 00:00:00 UTC",
        "Sun, 29 Feb 2032 00:00:00 UTC",
    ]


def test_missing_fields():
    with pytest.raises(CronSyntaxError, match="missing field"):
        parse("* * * *")


def test_bad_field_syntax():
    with pytest.raises(CronSyntaxError):
        parse("x * * * *")


def test_hourly_alias():
    result = parse("@hourly").next(_utc("2013-01-01 00:30:00"))
    assert result == _utc("2013-01-01 01:00:00")


def test_time_zone_is_kept():
    zone = timezone(timedelta(hours=3))
    start = datetime(2013, 1, 1, 10, 0, 0, tzinfo=zone)
    result = parse("30 12 * * *").next(start)
    assert result == datetime(2013, 1, 1, 12, 30, tzinfo=zone)
    assert result.tzinfo is zone


def test_next_n_zero_is_empty():
    assert parse("* * * * *").next_n(_utc("2013-01-01 00:00:00"), 0) == []


def test_next_n_stops_when_no_match_left():
    assert parse("* * * * * 1980").next_n(_utc("2013-01-01 00:00:00"), 3) == []


def test_never_matching_date_returns_none():
    assert parse("0 0 30 2 *").next(_utc("2013-01-01 00:00:00")) is None


def test_next_n_is_strictly_increasing():
    result = parse("0 9 1,15 * mon").next_n(_utc("2013-01-01 00:00:00"), 20)
    assert len(result) == 20
    assert all(a < b for a, b in zip(result, result[1:]))
    assert all(t.day in (1, 15) or t.weekday() == 0 for t in result)
    assert all((t.hour, t.minute) == (9, 0) for t in result)