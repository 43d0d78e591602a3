"""Performance metrics computed from trade lists.

Every function here is pure: it reads the trades it is given and returns
a fresh result. Nothing is cached between calls.
"""

from collections import defaultdict
from datetime import date
from datetime import date as date_type
from enum import Enum
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field

from tradejournal.models import TradeRecord

# Reported instead of infinity when there are profits but no losses.
RATIO_CAP = 999.0

OPENING_LABEL = "Starting Balance"


class Outcome(str, Enum):
    WIN = "win"
    LOSS = "loss"
    BREAK_EVEN = "break_even"


def classify(pnl: float) -> Outcome:
    if pnl > 0:
        return Outcome.WIN
    if pnl < 0:
        return Outcome.LOSS
    return Outcome.BREAK_EVEN


class EquityPoint(BaseModel):
    """One balance on the equity curve."""

    label: str = Field(..., description="Opening label or trade date/time")
    balance: float = Field(..., description="Running balance after this point")
    trade_id: Optional[int] = Field(default=None, description="None for the opening point")

    model_config = {"frozen": True}

    @property
    def is_opening(self) -> bool:
        return self.trade_id is None


class Streak(BaseModel):
    """The run of same-signed outcomes ending at the most recent trade."""

    outcome: Optional[Outcome] = Field(default=None, description="None when no streak is active")
    length: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    def describe(self) -> str:
        if self.outcome is None or self.length == 0:
            return "No active streak"
        noun = "win" if self.outcome is Outcome.WIN else "loss"
        if self.length > 1:
            noun = "wins" if noun == "win" else "losses"
        return f"{self.length} {noun}"


class DayTotal(BaseModel):
    date: date_type
    pnl: float

    model_config = {"frozen": True}


class DaySummary(BaseModel):
    """Trades on one calendar date and their combined P&L."""

    date: date_type
    trades: list[TradeRecord] = Field(default_factory=list)
    total_pnl: float = 0.0

    @property
    def trade_count(self) -> int:
        return len(self.trades)


class PerformanceSummary(BaseModel):
    """Headline statistics for a set of trades."""

    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    break_even_trades: int = 0
    win_rate: float = Field(default=0.0, ge=0, le=100)
    gross_profit: float = 0.0
    gross_loss: float = Field(default=0.0, ge=0)
    net_pnl: float = 0.0
    profit_factor: float = Field(default=0.0, ge=0)
    risk_reward_ratio: float = Field(default=0.0, ge=0)
    avg_win: float = 0.0
    avg_loss: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0
    trading_days: int = 0
    avg_trades_per_day: float = 0.0

    model_config = {"frozen": True}


# ==================== Ordering ====================


def sort_chronological(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Oldest first by (date, time)."""
    return sorted(trades, key=lambda t: t.sort_key)


def sort_recent_first(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    return sorted(trades, key=lambda t: t.sort_key, reverse=True)


# ==================== Sums and ratios ====================


def total_pnl(trades: Iterable[TradeRecord]) -> float:
    return sum(t.pnl for t in trades)


def gross_profit(trades: Iterable[TradeRecord]) -> float:
    return sum(t.pnl for t in trades if t.pnl > 0)


def gross_loss(trades: Iterable[TradeRecord]) -> float:
    """Magnitude of all losing P&L (always >= 0)."""
    return abs(sum(t.pnl for t in trades if t.pnl < 0))


def count_outcomes(trades: Iterable[TradeRecord]) -> dict[Outcome, int]:
    counts = {Outcome.WIN: 0, Outcome.LOSS: 0, Outcome.BREAK_EVEN: 0}
    for trade in trades:
        counts[classify(trade.pnl)] += 1
    return counts


def capped_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, with RATIO_CAP for x/0 and 0 for 0/0."""
    if denominator > 0:
        return numerator / denominator
    return RATIO_CAP if numerator > 0 else 0.0


def win_rate(trades: Iterable[TradeRecord]) -> float:
    """Winning share of decided trades as a percentage.

    Break-even trades are left out of the denominator. Returns 0 when no
    trade won or lost.
    """
    counts = count_outcomes(trades)
    decided = counts[Outcome.WIN] + counts[Outcome.LOSS]
    if decided == 0:
        return 0.0
    return counts[Outcome.WIN] / decided * 100


def profit_factor(trades: Iterable[TradeRecord]) -> float:
    trades = list(trades)
    return capped_ratio(gross_profit(trades), gross_loss(trades))


def average_win(trades: Iterable[TradeRecord]) -> float:
    wins = [t.pnl for t in trades if t.pnl > 0]
    return sum(wins) / len(wins) if wins else 0.0


def average_loss(trades: Iterable[TradeRecord]) -> float:
    """Mean losing P&L (negative, or 0 without losses)."""
    losses = [t.pnl for t in trades if t.pnl < 0]
    return sum(losses) / len(losses) if losses else 0.0


def risk_reward_ratio(trades: Iterable[TradeRecord]) -> float:
    trades = list(trades)
    return capped_ratio(average_win(trades), abs(average_loss(trades)))


def account_balance(starting_balance: float, trades: Iterable[TradeRecord]) -> float:
    return starting_balance + total_pnl(trades)


# ==================== Equity ====================


def equity_label(trade: TradeRecord) -> str:
    return f"{trade.date.strftime('%b')} {trade.date.day} {trade.time}"


def equity_series(
    trades: Iterable[TradeRecord], starting_balance: float
) -> list[EquityPoint]:
    """Running balance, applying trades in chronological order.

    The first point is always the opening balance. Each later point adds
    one trade's P&L, so the series has one more point than trades.
    """
    balance = starting_balance
    points = [EquityPoint(label=OPENING_LABEL, balance=balance)]
    for trade in sort_chronological(trades):
        balance += trade.pnl
        points.append(
            EquityPoint(label=equity_label(trade), balance=balance, trade_id=trade.id)
        )
    return points


# ==================== Streaks ====================


def max_consecutive(trades: Iterable[TradeRecord], outcome: Outcome) -> int:
    """Longest chronological run of a single outcome."""
    best = 0
    current = 0
    for trade in sort_chronological(trades):
        if classify(trade.pnl) is outcome:
            current += 1
            best = max(best, current)
        else:
            current = 0
    return best


def max_consecutive_wins(trades: Iterable[TradeRecord]) -> int:
    return max_consecutive(trades, Outcome.WIN)


def max_consecutive_losses(trades: Iterable[TradeRecord]) -> int:
    return max_consecutive(trades, Outcome.LOSS)


def current_streak(trades: Iterable[TradeRecord]) -> Optional[Streak]:
    """Streak ending at the most recent trade, or None with no trades.

    Break-even always ends a streak. When the most recent trade broke
    even, no streak is active.
    """
    ordered = sort_recent_first(trades)
    if not ordered:
        return None

    outcome = classify(ordered[0].pnl)
    if outcome is Outcome.BREAK_EVEN:
        return Streak()

    length = 0
    for trade in ordered:
        if classify(trade.pnl) is not outcome:
            break
        length += 1
    return Streak(outcome=outcome, length=length)


# ==================== Days ====================


def daily_totals(trades: Iterable[TradeRecord]) -> dict[date, float]:
    """Summed P&L per trading date, oldest date first."""
    totals: dict[date, float] = defaultdict(float)
    for trade in trades:
        totals[trade.date] += trade.pnl
    return dict(sorted(totals.items()))


def best_day(trades: Iterable[TradeRecord]) -> Optional[DayTotal]:
    """Date with the highest summed P&L. Ties go to the earliest date."""
    totals = daily_totals(trades)
    if not totals:
        return None
    day = max(totals, key=lambda d: (totals[d], -d.toordinal()))
    return DayTotal(date=day, pnl=totals[day])


def worst_day(trades: Iterable[TradeRecord]) -> Optional[DayTotal]:
    """Date with the lowest summed P&L. Ties go to the earliest date."""
    totals = daily_totals(trades)
    if not totals:
        return None
    day = min(totals, key=lambda d: (totals[d], d.toordinal()))
    return DayTotal(date=day, pnl=totals[day])


def trading_days(trades: Iterable[TradeRecord]) -> int:
    return len({t.date for t in trades})


def day_summary(trades: Iterable[TradeRecord], day: date) -> DaySummary:
    day_trades = [t for t in trades if t.date == day]
    return DaySummary(date=day, trades=day_trades, total_pnl=total_pnl(day_trades))


# ==================== Growth ====================


def months_elapsed(first: date, today: date) -> int:
    """Calendar months between two dates, never less than 1."""
    months = (today.year - first.year) * 12 + (today.month - first.month)
    return max(1, months)


def average_monthly_growth(
    trades: Sequence[TradeRecord], starting_balance: float, today: date
) -> float:
    if not trades:
        return 0.0
    first = min(t.date for t in trades)
    growth = account_balance(starting_balance, trades) - starting_balance
    return growth / months_elapsed(first, today)


def summarize(trades: Iterable[TradeRecord]) -> PerformanceSummary:
    trades = list(trades)
    if not trades:
        return PerformanceSummary()

    counts = count_outcomes(trades)
    pnls = [t.pnl for t in trades]
    days = trading_days(trades)
    return PerformanceSummary(
        total_trades=len(trades),
        winning_trades=counts[Outcome.WIN],
        losing_trades=counts[Outcome.LOSS],
        break_even_trades=counts[Outcome.BREAK_EVEN],
        win_rate=win_rate(trades),
        gross_profit=gross_profit(trades),
        gross_loss=gross_loss(trades),
        net_pnl=total_pnl(trades),
        profit_factor=profit_factor(trades),
        risk_reward_ratio=risk_reward_ratio(trades),
        avg_win=average_win(trades),
        avg_loss=average_loss(trades),
        largest_win=max((p for p in pnls if p > 0), default=0.0),
        largest_loss=min((p for p in pnls if p < 0), default=0.0),
        trading_days=days,
        avg_trades_per_day=len(trades) / days,
    )
