import pytest

from choretracker.tod import TOD, parse_tod, time_of_day


def test_parse_simple():
    assert parse_tod("07:30") == TOD(7, 30)


def test_str_pads_with_zeros():
    assert str(TOD(7, 5)) == "07:05"


@pytest.mark.parametrize("text", ["07:00", "21:30"])
def test_round_trip(text):
    assert str(parse_tod(text)) == text


def test_parse_finds_time_inside_text():
    assert parse_tod("at 9:15 sharp") == TOD(9, 15)


def test_hours_too_large():
    with pytest.raises(ValueError, match="hours are more than 23"):
        parse_tod("24:00")


def test_minutes_too_large():
    with pytest.raises(ValueError, match="minutes are more than 59"):
        parse_tod("12:60")


def test_no_time_in_text():
    with pytest.raises(ValueError, match="invalid string provided"):
        parse_tod("noon")


def test_time_of_day_matches_parse():
    assert time_of_day("21:30") == parse_tod("21:30")