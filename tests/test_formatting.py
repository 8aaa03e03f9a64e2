from datetime import date, datetime

import pytest

from app.utils.formatting import (
    format_currency,
    format_date,
    format_percent,
    from_minor_units,
    to_minor_units,
)


@pytest.mark.parametrize("minor, expected", [
    (0, "$0"),
    (223000, "$2,230"),
    (123456, "$1,235"),
    (123449, "$1,234"),
    (-50000, "-$500"),
])
def test_format_currency(minor, expected):
    assert format_currency(minor) == expected


def test_format_date_accepts_strings_and_dates():
    assert format_date("2025-01-05") == "Jan 5, 2025"
    assert format_date("2025-12-31T23:59:00") == "Dec 31, 2025"
    assert format_date(date(2024, 2, 29)) == "Feb 29, 2024"
    assert format_date(datetime(2024, 7, 4, 8, 30)) == "Jul 4, 2024"
    assert format_date(None) == ""


def test_format_percent():
    assert format_percent(16.666) == "17%"
    assert format_percent(16.666, 1) == "16.7%"


@pytest.mark.parametrize("raw, expected", [
    ("2230.00", 223000),
    ("2,230", 223000),
    ("$19.99", 1999),
    ("0.005", 1),
    (".5", 50),
    (2230.5, 223050),
])
def test_to_minor_units(raw, expected):
    assert to_minor_units(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "1.2.3", "12a"])
def test_to_minor_units_rejects_garbage(raw):
    with pytest.raises(ValueError):
        to_minor_units(raw)


def test_from_minor_units():
    assert from_minor_units(223000) == "2230"
    assert from_minor_units(223050) == "2230.5"
    assert from_minor_units(1999) == "19.99"
    assert from_minor_units(0) == "0"
