import pytest

from fanchart.dates import (
    age_years,
    date2str,
    is_deceased_young,
    is_killed_in_action,
    lifetime_description,
    parse_year,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1880-01-15", "15. Jan 1880"),
        ("x1944-03-01", "1. Mar 1944"),
        ("1880", "1880"),
        ("#abt. 1880", "#abt. 1880"),
        (None, ""),
    ],
)
def test_date2str(value, expected):
    assert date2str(value, locale="en") == expected


def test_killed_in_action():
    assert is_killed_in_action("x1944-03-01")
    assert not is_killed_in_action("1944-03-01")
    assert parse_year("x1944-03-01") == 1944


@pytest.mark.parametrize(
    "birth, death, is_dead, expected",
    [
        ("1880-01-15", "1944", False, "1880-1944"),
        ("1880", None, False, "*1880"),
        (None, "1944", True, "†1944"),
        (None, None, True, "†"),
        (None, None, False, ""),
    ],
)
def test_lifetime_description(birth, death, is_dead, expected):
    assert lifetime_description(birth, death, is_dead) == expected


def test_age():
    assert age_years("1900-06-10", "1910-06-09") == 9
    assert age_years("1900-06-10", "1910-06-10") == 10
    assert age_years("1900", "1950") == 50
    assert age_years("1900", None) is None
    assert age_years("1950", "1900") is None


def test_deceased_young():
    assert is_deceased_young("1900-01-01", "1918-01-01")
    assert not is_deceased_young("1900-01-01", "1919-01-02")
    assert not is_deceased_young("1900", None)
