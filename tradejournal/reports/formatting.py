"""Display formatting for money, dates and ratios."""

import math
from datetime import date
from typing import Optional


def format_currency(amount: Optional[float], symbol: str = "$") -> str:
    """Absolute amount with thousands separators, e.g. ``$1,234.50``."""
    if amount is None or math.isnan(amount):
        return f"{symbol}0.00"
    return f"{symbol}{abs(amount):,.2f}"


def format_balance(amount: Optional[float], symbol: str = "$") -> str:
    """Balance with a minus sign only when negative, e.g. ``-$400.00``."""
    if amount is not None and amount < 0:
        return f"-{format_currency(amount, symbol)}"
    return format_currency(amount, symbol)


def format_signed(amount: Optional[float], symbol: str = "$") -> str:
    """Amount with an explicit sign, e.g. ``+$50.00`` or ``-$12.30``."""
    if amount is None or math.isnan(amount):
        return f"{symbol}0.00"
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percent(value: float, places: int = 1, signed: bool = False) -> str:
    text = f"{value:.{places}f}%"
    if signed and value >= 0:
        text = "+" + text
    return text


def format_ratio(value: float) -> str:
    return f"{value:.2f}"


def format_date(day: date) -> str:
    """Short form, e.g. ``Jan 5, 2024``."""
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def format_date_long(day: date) -> str:
    """Long form, e.g. ``Friday, January 5, 2024``."""
    return f"{day.strftime('%A, %B')} {day.day}, {day.year}"


def outcome_label(pnl: float) -> str:
    if pnl > 0:
        return "WIN"
    if pnl < 0:
        return "LOSS"
    return "BREAK EVEN"
