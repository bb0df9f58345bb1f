import pytest

from choretracker.helpers import set_updated_content


@pytest.mark.parametrize(
    ("old", "new", "expected"),
    [
        ("kept", None, "kept"),
        ("kept", "", "kept"),
        ("kept", "null", ""),
        ("kept", "fresh", "fresh"),
        ("", "fresh", "fresh"),
    ],
)
def test_set_updated_content(old, new, expected):
    assert set_updated_content(old, new) == expected