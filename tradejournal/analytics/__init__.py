"""Aggregation engine: pure metrics over the journal's trades."""

from tradejournal.analytics.metrics import (
    OPENING_LABEL,
    RATIO_CAP,
    DaySummary,
    DayTotal,
    EquityPoint,
    Outcome,
    PerformanceSummary,
    Streak,
    account_balance,
    average_loss,
    average_monthly_growth,
    average_win,
    best_day,
    classify,
    count_outcomes,
    current_streak,
    daily_totals,
    day_summary,
    equity_series,
    gross_loss,
    gross_profit,
    max_consecutive_losses,
    max_consecutive_wins,
    months_elapsed,
    profit_factor,
    risk_reward_ratio,
    sort_chronological,
    sort_recent_first,
    summarize,
    total_pnl,
    trading_days,
    win_rate,
    worst_day,
)
from tradejournal.analytics.recommendations import (
    analytics_recommendations,
    dashboard_recommendations,
)
from tradejournal.analytics.windows import (
    EquityPeriod,
    Window,
    filter_month,
    filter_period,
    filter_range,
    filter_window,
    last_months,
    period_start,
    shift_months,
    window_start,
)

__all__ = [
    "OPENING_LABEL",
    "RATIO_CAP",
    "DaySummary",
    "DayTotal",
    "EquityPoint",
    "Outcome",
    "PerformanceSummary",
    "Streak",
    "account_balance",
    "average_loss",
    "average_monthly_growth",
    "average_win",
    "best_day",
    "classify",
    "count_outcomes",
    "current_streak",
    "daily_totals",
    "day_summary",
    "equity_series",
    "gross_loss",
    "gross_profit",
    "max_consecutive_losses",
    "max_consecutive_wins",
    "months_elapsed",
    "profit_factor",
    "risk_reward_ratio",
    "sort_chronological",
    "sort_recent_first",
    "summarize",
    "total_pnl",
    "trading_days",
    "win_rate",
    "worst_day",
    "analytics_recommendations",
    "dashboard_recommendations",
    "EquityPeriod",
    "Window",
    "filter_month",
    "filter_period",
    "filter_range",
    "filter_window",
    "last_months",
    "period_start",
    "shift_months",
    "window_start",
]
