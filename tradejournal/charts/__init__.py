"""Chart data adapter for TradeJournal."""

from tradejournal.charts.adapter import (
    CalendarDay,
    CalendarMonth,
    ChartSeries,
    calendar_month,
    equity_chart,
    monthly_profit_factor,
    outcome_distribution,
    profit_loss_distribution,
)

__all__ = [
    "CalendarDay",
    "CalendarMonth",
    "ChartSeries",
    "calendar_month",
    "equity_chart",
    "monthly_profit_factor",
    "outcome_distribution",
    "profit_loss_distribution",
]
