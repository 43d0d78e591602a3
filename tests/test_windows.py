"""Tests for date windows."""

from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics import (
    EquityPeriod,
    Window,
    filter_month,
    filter_period,
    filter_range,
    filter_window,
    last_months,
    period_start,
    shift_months,
    total_pnl,
    window_start,
)
from tradejournal.models import TradeRecord

TODAY = date(2024, 3, 31)


def make_trade(day: date, pnl: float = 10.0) -> TradeRecord:
    return TradeRecord(
        id=day.toordinal(),
        date=day,
        time="12:00",
        trade_number=1,
        pair="EURUSD",
        strategy="Breakout",
        pnl=pnl,
    )


class TestWindows:
    def test_window_starts(self):
        assert window_start(Window.TODAY, TODAY) == TODAY
        assert window_start(Window.WEEK, TODAY) == date(2024, 3, 24)
        assert window_start(Window.MONTH, TODAY) == date(2024, 3, 1)

    def test_week_is_inclusive_on_both_ends(self):
        trades = [make_trade(TODAY - timedelta(days=n)) for n in range(10)]
        week = filter_window(trades, Window.WEEK, TODAY)

        assert len(week) == 8
        assert min(t.date for t in week) == date(2024, 3, 24)

    def test_today_only(self):
        trades = [make_trade(TODAY), make_trade(TODAY - timedelta(days=1))]

        assert filter_window(trades, Window.TODAY, TODAY) == [trades[0]]

    def test_future_trades_excluded(self):
        trades = [make_trade(TODAY + timedelta(days=1))]

        assert filter_window(trades, Window.MONTH, TODAY) == []

    def test_weekly_pnl_example(self):
        trades = [make_trade(date(2024, 1, 1), 100), make_trade(date(2024, 1, 2), -50)]

        assert total_pnl(filter_window(trades, Window.WEEK, date(2024, 1, 3))) == 50

    @given(
        offsets=st.lists(st.integers(min_value=-5, max_value=60), max_size=30),
        window=st.sampled_from(list(Window)),
    )
    @settings(max_examples=50)
    def test_filter_keeps_input_order(self, offsets: list[int], window: Window):
        trades = [make_trade(TODAY - timedelta(days=n)) for n in offsets]
        kept = filter_window(trades, window, TODAY)

        assert kept == [t for t in trades if window_start(window, TODAY) <= t.date <= TODAY]

    def test_filter_range(self):
        trades = [make_trade(date(2024, 1, d)) for d in (1, 5, 10)]

        assert [t.date.day for t in filter_range(trades, date(2024, 1, 5), date(2024, 1, 10))] == [5, 10]


class TestMonths:
    @pytest.mark.parametrize(
        "day, months, expected",
        [
            (date(2024, 3, 31), -1, date(2024, 2, 29)),
            (date(2024, 1, 15), -1, date(2023, 12, 15)),
            (date(2024, 3, 31), -12, date(2023, 3, 31)),
            (date(2024, 2, 29), -12, date(2023, 2, 28)),
            (date(2024, 11, 30), 2, date(2025, 1, 30)),
        ],
    )
    def test_shift_months(self, day: date, months: int, expected: date):
        assert shift_months(day, months) == expected

    def test_period_starts(self):
        assert period_start(EquityPeriod.SEVEN_DAYS, TODAY) == date(2024, 3, 24)
        assert period_start(EquityPeriod.ONE_MONTH, TODAY) == date(2024, 2, 29)
        assert period_start(EquityPeriod.TWELVE_MONTHS, TODAY) == date(2023, 3, 31)

    def test_filter_period(self):
        trades = [make_trade(date(2023, 3, 30)), make_trade(date(2023, 3, 31)), make_trade(TODAY)]

        assert len(filter_period(trades, EquityPeriod.TWELVE_MONTHS, TODAY)) == 2

    def test_last_months_oldest_first(self):
        assert last_months(date(2024, 2, 10)) == [
            (2023, 9), (2023, 10), (2023, 11), (2023, 12), (2024, 1), (2024, 2),
        ]

    def test_filter_month(self):
        trades = [make_trade(date(2024, 2, 29)), make_trade(date(2024, 3, 1)), make_trade(date(2023, 2, 1))]

        assert [t.date for t in filter_month(trades, 2024, 2)] == [date(2024, 2, 29)]

    def test_period_labels(self):
        assert EquityPeriod("7d").label == "7 Days"
        assert EquityPeriod("12m").label == "12 Months"
