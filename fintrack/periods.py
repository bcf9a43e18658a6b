# fintrack/periods.py
"""
Helpers for working with monthly reporting periods.

Definitions
- period: a calendar month identified by (month, year)
- ym: integer YYYYMM, e.g., 202501 for Jan 2025

Public API:
- Period(month, year)              # .start / .end inclusive calendar dates
- month_bounds(month, year)        -> (first day, last day)
- current_month_year(today)        -> (month, year)
- month_year_range(months, today)  -> [Period, ...] newest first
- ym_from_date(date)               -> int
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Tuple

__all__ = [
    "Period",
    "month_bounds",
    "current_month_year",
    "month_year_range",
    "ym_from_date",
]


def _check_month(month: int) -> None:
    if month < 1 or month > 12:
        raise ValueError("Month must be 1–12")


def month_bounds(month: int, year: int) -> Tuple[date, date]:
    """
    Inclusive [start, end] of a calendar month, in wall-clock dates.
    The end is "day 0 of the next month": December rolls into year + 1.
    """
    _check_month(month)
    start = date(year, month, 1)
    if month == 12:
        next_first = date(year + 1, 1, 1)
    else:
        next_first = date(year, month + 1, 1)
    return start, next_first - timedelta(days=1)


@dataclass(frozen=True)
class Period:
    month: int
    year: int

    def __post_init__(self) -> None:
        _check_month(self.month)

    @property
    def start(self) -> date:
        return month_bounds(self.month, self.year)[0]

    @property
    def end(self) -> date:
        return month_bounds(self.month, self.year)[1]

    @classmethod
    def containing(cls, d: date) -> "Period":
        return cls(month=d.month, year=d.year)

    def previous(self) -> "Period":
        if self.month == 1:
            return Period(month=12, year=self.year - 1)
        return Period(month=self.month - 1, year=self.year)


def current_month_year(today: Optional[date] = None) -> Tuple[int, int]:
    """(month, year) of today's local date."""
    d = today or date.today()
    return d.month, d.year


def month_year_range(months: int = 6, today: Optional[date] = None) -> List[Period]:
    """
    The last `months` periods ending with the current one, newest first.
    Example (today in Feb 2025, months=3): 02/2025, 01/2025, 12/2024.
    """
    if months < 1:
        raise ValueError("months must be >= 1")
    period = Period.containing(today or date.today())
    result = [period]
    for _ in range(months - 1):
        period = period.previous()
        result.append(period)
    return result


def ym_from_date(d: date) -> int:
    """Convert a Python date to YYYYMM integer. Example: 2025-01-15 -> 202501."""
    return d.year * 100 + d.month
