"""
Display formatting for money and dates (Vietnamese conventions).

Usage:
    format_currency(1500000)            -> "1.500.000\u00a0₫"
    format_date(date(2025, 3, 7))       -> "07/03/2025"
    format_datetime(datetime(...))      -> "14:05 - 07/03/2025"
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

# no-break space between the number and the symbol, as vi-VN locales print it
_CURRENCY_SUFFIX = "\u00a0₫"

MONTH_NAMES = [f"Tháng {m}" for m in range(1, 13)]


def format_currency(amount: Union[int, float]) -> str:
    """
    Format an amount as VND: no minor unit, '.' groups thousands.
    Halves round away from zero.
    """
    whole = int(Decimal(str(amount)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    formatted = f"{abs(whole):,}".replace(",", ".")
    sign = "-" if whole < 0 else ""
    return f"{sign}{formatted}{_CURRENCY_SUFFIX}"


def format_date(d: date) -> str:
    return d.strftime("%d/%m/%Y")


def format_datetime(dt: datetime) -> str:
    return dt.strftime("%H:%M - %d/%m/%Y")


def month_name(month: int) -> str:
    if month < 1 or month > 12:
        raise ValueError("Month must be 1–12")
    return MONTH_NAMES[month - 1]


def color_brightness(color: str) -> str:
    """
    Tell whether text on top of `color` should be dark or light.

    Accepts "#rgb" or "#rrggbb" (leading '#' optional). Anything else
    is treated as "dark".
    """
    hex_part = color.lstrip("#")
    if len(hex_part) == 3:
        hex_part = "".join(ch * 2 for ch in hex_part)
    if len(hex_part) != 6:
        return "dark"
    try:
        r = int(hex_part[0:2], 16)
        g = int(hex_part[2:4], 16)
        b = int(hex_part[4:6], 16)
    except ValueError:
        return "dark"

    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "dark" if luminance > 0.5 else "light"
