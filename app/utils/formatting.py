# Shared helpers for money and date display

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

CURRENCY_SYMBOL = "$"
MINOR_UNITS_PER_MAJOR = 100


def format_currency(amount_minor: int) -> str:
    """
    Formats integer minor units as whole TWD, e.g. 123456 -> "$1,235".
    """
    major = (Decimal(amount_minor) / MINOR_UNITS_PER_MAJOR).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    sign = "-" if major < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(int(major)):,}"


def format_date(value: Union[str, date, datetime, None]) -> str:
    """Short US style date, e.g. "Jan 5, 2025". Empty for missing values."""
    if value is None or value == "":
        return ""
    d = _to_date(value)
    return f"{d:%b} {d.day}, {d.year}"


def format_percent(value: float, digits: int = 0) -> str:
    return f"{value:.{digits}f}%"


def to_minor_units(raw: Union[str, int, float, Decimal]) -> int:
    """
    Converts decimal currency input ("2,230.00", "$2230", 2230.5) to integer
    minor units, rounding half up: "2230.00" -> 223000.
    """
    s = str(raw).replace(",", "").replace(CURRENCY_SYMBOL, "").strip()
    if not re.match(r"^-?\d+(?:\.\d*)?$|^-?\.\d+$", s):
        raise ValueError(f"Unrecognized amount format: {raw!r}")
    try:
        value = Decimal(s)
    except InvalidOperation:
        raise ValueError(f"Unrecognized amount format: {raw!r}")
    return int((value * MINOR_UNITS_PER_MAJOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount_minor: int) -> str:
    """223000 -> "2230", 223050 -> "2230.5" (form pre-fill value)."""
    value = (Decimal(amount_minor) / MINOR_UNITS_PER_MAJOR).normalize()
    return format(value, "f")


def _to_date(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # accepts "2025-01-05" and full ISO timestamps
    return date.fromisoformat(str(value)[:10])
