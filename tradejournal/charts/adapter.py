"""Chart-ready series built from the aggregation engine.

The shapes here mirror what a charting library wants: parallel label and
value lists, one dataset per chart.
"""

import calendar
from datetime import date, datetime
from datetime import date as date_type
from typing import Sequence

from pydantic import BaseModel, Field

from tradejournal.analytics import (
    EquityPeriod,
    Outcome,
    count_outcomes,
    equity_series,
    filter_month,
    filter_period,
    gross_loss,
    gross_profit,
    last_months,
    profit_factor,
)
from tradejournal.models import JournalSnapshot, TradeRecord


class ChartSeries(BaseModel):
    """Parallel labels and values for one dataset."""

    title: str = Field(..., description="Dataset label")
    labels: list[str] = Field(default_factory=list)
    values: list[float] = Field(default_factory=list)

    def as_pairs(self) -> list[tuple[str, float]]:
        return list(zip(self.labels, self.values))


class CalendarDay(BaseModel):
    date: date_type
    trade_count: int = 0
    pnl: float = 0.0

    @property
    def has_trades(self) -> bool:
        return self.trade_count > 0


class CalendarMonth(BaseModel):
    """Per-day activity for every day of one month."""

    year: int
    month: int
    days: list[CalendarDay] = Field(default_factory=list)

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    @property
    def first_weekday(self) -> int:
        """Weekday of the 1st, Sunday = 0."""
        return (date(self.year, self.month, 1).weekday() + 1) % 7

    @property
    def total_pnl(self) -> float:
        return sum(day.pnl for day in self.days)


def equity_chart(
    snapshot: JournalSnapshot,
    now: datetime,
    period: EquityPeriod = EquityPeriod.SEVEN_DAYS,
) -> ChartSeries:
    """Account balance curve for trades inside the lookback period."""
    trades = filter_period(snapshot.trades, period, now.date())
    points = equity_series(trades, snapshot.starting_balance)
    return ChartSeries(
        title="Account Balance",
        labels=[p.label for p in points],
        values=[p.balance for p in points],
    )


def outcome_distribution(trades: Sequence[TradeRecord]) -> ChartSeries:
    counts = count_outcomes(trades)
    return ChartSeries(
        title="Trade Outcomes",
        labels=["Winning Trades", "Losing Trades", "Break Even"],
        values=[
            float(counts[Outcome.WIN]),
            float(counts[Outcome.LOSS]),
            float(counts[Outcome.BREAK_EVEN]),
        ],
    )


def profit_loss_distribution(trades: Sequence[TradeRecord]) -> ChartSeries:
    return ChartSeries(
        title="Profit vs Loss",
        labels=["Total Profit", "Total Loss"],
        values=[gross_profit(trades), gross_loss(trades)],
    )


def monthly_profit_factor(
    trades: Sequence[TradeRecord], now: datetime, months: int = 6
) -> ChartSeries:
    """Profit factor per calendar month, oldest month first."""
    labels = []
    values = []
    for year, month in last_months(now.date(), months):
        labels.append(date(year, month, 1).strftime("%b %y"))
        values.append(profit_factor(filter_month(trades, year, month)))
    return ChartSeries(title="Profit Factor", labels=labels, values=values)


def calendar_month(trades: Sequence[TradeRecord], year: int, month: int) -> CalendarMonth:
    """Trade count and P&L for each day of a month."""
    in_month = filter_month(trades, year, month)
    days = []
    for day_number in range(1, calendar.monthrange(year, month)[1] + 1):
        day = date(year, month, day_number)
        day_trades = [t for t in in_month if t.date == day]
        days.append(
            CalendarDay(
                date=day,
                trade_count=len(day_trades),
                pnl=sum(t.pnl for t in day_trades),
            )
        )
    return CalendarMonth(year=year, month=month, days=days)
