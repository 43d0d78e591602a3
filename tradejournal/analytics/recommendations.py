"""Rule-based advisory text for reports."""

from datetime import date
from typing import Sequence

from tradejournal.analytics.metrics import (
    max_consecutive_losses,
    profit_factor,
    win_rate,
)
from tradejournal.models import MAX_TRADES_PER_DAY, TradeRecord

MIN_SAMPLE_SIZE = 10
MAX_LOSING_STREAK = 3

DEFAULT_RECOMMENDATION = "Continue with current strategy. All metrics are within good ranges"


def analytics_recommendations(trades: Sequence[TradeRecord]) -> list[str]:
    """Canned advice keyed off sample size, win rate, profit factor and streaks."""
    rate = win_rate(trades)
    factor = profit_factor(trades)
    recommendations = []

    if len(trades) < MIN_SAMPLE_SIZE:
        recommendations.append(
            "Need more trades for accurate analysis (minimum 10 trades recommended)"
        )

    if rate < 40:
        recommendations.append("Focus on improving win rate through better trade selection")
    elif rate > 60:
        recommendations.append("Excellent win rate! Consider increasing position sizes carefully")

    if factor < 1.5:
        recommendations.append("Work on improving profit factor through better risk management")
    elif factor > 3:
        recommendations.append("Outstanding profit factor! Maintain your current strategy")

    if max_consecutive_losses(trades) > MAX_LOSING_STREAK:
        recommendations.append("Reduce consecutive losses by taking breaks after losing streaks")

    if not recommendations:
        recommendations.append(DEFAULT_RECOMMENDATION)
    return recommendations


def dashboard_recommendations(
    trades: Sequence[TradeRecord], starting_balance: float, today: date
) -> list[str]:
    """The three dashboard hints: daily limit, win rate and account growth."""
    today_count = sum(1 for t in trades if t.date == today)
    balance = starting_balance + sum(t.pnl for t in trades)

    if today_count < MAX_TRADES_PER_DAY:
        daily = "Consider taking more trades today to reach your daily limit."
    else:
        daily = "Daily trade limit reached. Good discipline!"

    if win_rate(trades) < 50:
        rate = "Focus on improving win rate through better trade selection."
    else:
        rate = "Excellent win rate! Maintain consistency."

    if balance > starting_balance:
        growth = "Account is growing. Continue with current strategy."
    else:
        growth = "Review trading strategy for improvement."

    return [daily, rate, growth]
