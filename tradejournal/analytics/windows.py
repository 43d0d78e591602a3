"""Date windows for filtering trades.

Trade dates are compared as ISO strings, which sort the same way as the
dates they represent.
"""

import calendar
from datetime import date, timedelta
from enum import Enum
from typing import Iterable

from tradejournal.models import TradeRecord


class Window(str, Enum):
    """Rolling windows anchored at today."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"

    @property
    def days(self) -> int:
        return {"today": 0, "week": 7, "month": 30}[self.value]


class EquityPeriod(str, Enum):
    """Lookback periods for the equity curve."""

    SEVEN_DAYS = "7d"
    ONE_MONTH = "1m"
    TWELVE_MONTHS = "12m"

    @property
    def label(self) -> str:
        return {"7d": "7 Days", "1m": "1 Month", "12m": "12 Months"}[self.value]


def shift_months(day: date, months: int) -> date:
    """Move a date by whole calendar months, clamping the day of month."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def window_start(window: Window, today: date) -> date:
    return today - timedelta(days=window.days)


def period_start(period: EquityPeriod, today: date) -> date:
    if period is EquityPeriod.ONE_MONTH:
        return shift_months(today, -1)
    if period is EquityPeriod.TWELVE_MONTHS:
        return shift_months(today, -12)
    return today - timedelta(days=7)


def filter_range(
    trades: Iterable[TradeRecord], start: date, end: date
) -> list[TradeRecord]:
    """Trades dated within [start, end], inclusive, in input order."""
    lo, hi = start.isoformat(), end.isoformat()
    return [t for t in trades if lo <= t.date.isoformat() <= hi]


def filter_window(
    trades: Iterable[TradeRecord], window: Window, today: date
) -> list[TradeRecord]:
    return filter_range(trades, window_start(window, today), today)


def filter_period(
    trades: Iterable[TradeRecord], period: EquityPeriod, today: date
) -> list[TradeRecord]:
    return filter_range(trades, period_start(period, today), today)


def filter_month(
    trades: Iterable[TradeRecord], year: int, month: int
) -> list[TradeRecord]:
    """Trades dated in one calendar month."""
    return [t for t in trades if t.date.year == year and t.date.month == month]


def last_months(today: date, count: int = 6) -> list[tuple[int, int]]:
    """(year, month) pairs for the last ``count`` months, oldest first.

    The current month is the last entry.
    """
    first = date(today.year, today.month, 1)
    return [
        (d.year, d.month)
        for d in (shift_months(first, -i) for i in range(count - 1, -1, -1))
    ]
