"""Tests for report composition, formatting and output."""

import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from rich.console import Console

from tradejournal.exceptions import NotFound, ValidationError
from tradejournal.models import DreamRecord, JournalSnapshot, TradeRecord
from tradejournal.reports import (
    FILENAME_STEMS,
    ReportComposer,
    ReportScope,
    compose_report,
    format_balance,
    format_currency,
    format_date,
    format_date_long,
    format_percent,
    format_signed,
    render_console,
    render_text,
    write_pdf,
)

NOW = datetime(2024, 1, 3, 10, 0, 0)


def make_trade(day: date, pnl: float, trade_id: int, time: str = "09:30", notes: str = "") -> TradeRecord:
    return TradeRecord(
        id=trade_id,
        date=day,
        time=time,
        trade_number=1,
        pair="EURUSD",
        strategy="Breakout",
        pnl=pnl,
        notes=notes,
    )


@pytest.fixture
def snapshot():
    """Starting 10000 with +100 on Jan 1 and -50 on Jan 2, newest first."""
    return JournalSnapshot(
        trades=(
            make_trade(date(2024, 1, 2), -50, 2),
            make_trade(date(2024, 1, 1), 100, 1),
        ),
        dreams=(
            DreamRecord(id=11, date=date(2024, 1, 2), content="Trade from anywhere"),
            DreamRecord(id=10, date=date(2023, 12, 1), content="Consistent green months"),
        ),
        starting_balance=10000.0,
    )


@pytest.fixture
def composer():
    return ReportComposer()


class TestFormatting:
    def test_currency(self):
        assert format_currency(1234.5) == "$1,234.50"
        assert format_currency(-12.3) == "$12.30"
        assert format_currency(None) == "$0.00"
        assert format_currency(float("nan")) == "$0.00"
        assert format_currency(5, "€") == "€5.00"

    def test_balance(self):
        assert format_balance(1234.5) == "$1,234.50"
        assert format_balance(-400) == "-$400.00"
        assert format_balance(0) == "$0.00"
        assert format_balance(None) == "$0.00"

    def test_signed(self):
        assert format_signed(50) == "+$50.00"
        assert format_signed(-1234.567) == "-$1,234.57"
        assert format_signed(0) == "+$0.00"

    @given(amount=st.floats(min_value=-1e9, max_value=1e9, allow_nan=False))
    @settings(max_examples=50)
    def test_signed_matches_currency(self, amount: float):
        signed = format_signed(amount)

        assert signed[0] in "+-"
        assert signed[1:] == format_currency(amount)

    def test_percent(self):
        assert format_percent(66.666) == "66.7%"
        assert format_percent(5, 2, signed=True) == "+5.00%"
        assert format_percent(-5, 2, signed=True) == "-5.00%"

    def test_dates(self):
        assert format_date(date(2024, 1, 5)) == "Jan 5, 2024"
        assert format_date_long(date(2024, 1, 5)) == "Friday, January 5, 2024"


class TestComposerScopes:
    @pytest.mark.parametrize("scope", list(FILENAME_STEMS))
    def test_filename_and_metadata(self, composer, snapshot, scope):
        document = composer.compose(scope, snapshot, NOW)

        assert document.filename == f"{FILENAME_STEMS[scope]}-2024-01-03.pdf"
        assert document.scope == scope.value
        assert document.generated_at == NOW
        assert document.footer == "TradeJournal - Personal Trading Dashboard"
        assert document.sections

    def test_today_without_trades(self, composer, snapshot):
        document = composer.compose(ReportScope.TODAY, snapshot, NOW)

        assert document.title == "Today's Trading Stats - 2024-01-03"
        summary = document.section("Account Summary")
        assert summary.get("Current Balance") == "$10,050.00"
        assert summary.get("Today's P&L") == "+$0.00"
        assert summary.get("Today's Trades") == "0/4"
        assert document.section("Trades Today").lines == ["No trades recorded today."]

    def test_weekly(self, composer, snapshot):
        document = composer.compose("week", snapshot, NOW)

        assert document.section("Weekly Report (Last 7 Days)").get("Period") == "2023-12-27 to 2024-01-03"
        performance = document.section("Account Performance")
        assert performance.get("Weekly P&L") == "+$50.00"
        assert performance.get("Total Trades") == "2"
        metrics = document.section("Weekly Metrics")
        assert metrics.get("Win Rate") == "50.0%"
        assert len(document.section("Weekly Trades").lines) == 2
        assert document.section("Weekly Trades").lines[0].endswith("LOSS")

    def test_monthly_truncates_trade_list(self, composer):
        trades = tuple(
            make_trade(date(2024, 1, 3) - timedelta(days=i), 10, i + 1)
            for i in range(13)
        )
        snapshot = JournalSnapshot(trades=trades, starting_balance=1000)
        document = composer.compose(ReportScope.MONTH, snapshot, NOW)

        lines = document.section("Recent Trades (Last 10)").lines
        assert len(lines) == 11
        assert lines[-1] == "... and 3 more trades"
        assert document.section("Account Performance").get("Growth %") == "13.0%"

    def test_journal(self, composer, snapshot):
        document = composer.compose(ReportScope.JOURNAL, snapshot, NOW)

        metrics = document.section("Performance Metrics")
        assert metrics.get("Profit Factor") == "2.00"
        assert metrics.get("Net Profit") == "+$50.00"
        assert metrics.get("Total Trades") is None
        trades = document.section("All Trades (2 Total)")
        assert "Notes: No notes provided" in trades.lines[0]

    def test_analytics(self, composer, snapshot):
        document = composer.compose(ReportScope.ANALYTICS, snapshot, NOW)

        extremes = document.section("Extreme Performance")
        assert extremes.get("Best Day") == "Jan 1, 2024: +$100.00"
        assert extremes.get("Worst Day") == "Jan 2, 2024: -$50.00"
        consistency = document.section("Consistency Metrics")
        assert consistency.get("Current Streak") == "1 loss"
        assert consistency.get("Average Trades Per Day") == "1.0"
        profit = document.section("Profit Analysis")
        assert profit.get("Average Loss") == "$50.00"
        assert profit.get("Win/Loss Ratio") == "2.00"
        growth = document.section("Account Growth")
        assert growth.get("Growth %") == "0.5%"
        assert growth.get("Average Monthly Growth") == "+$50.00"
        recommendations = document.section("Recommendations").lines
        assert recommendations[0].startswith("1. Need more trades")

    def test_negative_balance_keeps_sign(self, composer):
        snapshot = JournalSnapshot(
            trades=(make_trade(date(2024, 1, 2), -500, 1),),
            starting_balance=100.0,
        )
        document = composer.compose(ReportScope.ANALYTICS, snapshot, NOW)

        growth = document.section("Account Growth")
        assert growth.get("Current Balance") == "-$400.00"
        assert growth.get("Starting Balance") == "$100.00"

    def test_analytics_empty(self, composer):
        document = composer.compose(ReportScope.ANALYTICS, JournalSnapshot(), NOW)

        assert document.section("Extreme Performance").get("Best Day") == "No trades"
        assert document.section("Consistency Metrics").get("Current Streak") == "No trades"
        assert document.section("Performance Overview").get("Win Rate") == "0.0%"
        assert document.section("Account Growth").get("Growth %") == "0.0%"

    def test_dashboard_truncates_latest_dream(self, composer, snapshot):
        long_dream = DreamRecord(id=99, date=date(2024, 1, 3), content="x" * 150)
        snapshot = snapshot.model_copy(update={"dreams": (long_dream,) + snapshot.dreams})
        document = composer.compose(ReportScope.DASHBOARD, snapshot, NOW)

        dreams = document.section("Dreams & Goals")
        assert dreams.get("Total Dreams Recorded") == "3"
        assert dreams.get("Latest Dream") == "x" * 100 + "..."
        assert document.section("Dashboard Snapshot").get("Account Name") == "Trader"
        assert document.section("Weekly Performance").get("Weekly P&L") == "+$50.00"
        assert len(document.section("Recommendations").lines) == 3

    def test_dreams_newest_first(self, composer, snapshot):
        document = composer.compose(ReportScope.DREAMS, snapshot, NOW)

        stats = document.section("Dream Statistics")
        assert stats.get("First Dream") == "Dec 1, 2023"
        assert stats.get("Latest Dream") == "Jan 2, 2024"
        assert document.section("All Dreams").lines[0] == "Jan 2, 2024: Trade from anywhere"

    def test_all(self, composer, snapshot):
        document = composer.compose(ReportScope.ALL, snapshot, NOW)

        assert document.section("Export Details").get("Total Records") == "4"
        assert len(document.section("Trading Dreams (2 Total)").lines) == 2

    def test_currency_symbol_option(self, snapshot):
        document = compose_report(ReportScope.TODAY, snapshot, NOW, currency_symbol="€")

        assert document.section("Account Summary").get("Current Balance") == "€10,050.00"


class TestTradeReport:
    def test_trade_detail(self, composer, snapshot):
        document = composer.compose(ReportScope.TRADE, snapshot, NOW, trade_id=1)

        assert document.filename == "trade-1-2024-01-01.pdf"
        assert document.title == "Trade Details - EURUSD - Jan 1, 2024"
        assert document.section("Trade Details").get("P&L") == "+$100.00"
        analysis = document.section("Trade Analysis").lines
        assert analysis[-1] == "Successful trade!"
        assert "% of current account balance" in analysis[0]

    def test_losing_trade(self, composer, snapshot):
        document = composer.compose(ReportScope.TRADE, snapshot, NOW, trade_id=2)

        assert document.section("Trade Analysis").lines[-1] == "Learning opportunity - review what happened."

    def test_zero_balance_skips_share(self, composer):
        snapshot = JournalSnapshot(trades=(make_trade(date(2024, 1, 1), 0, 5),))
        document = composer.compose(ReportScope.TRADE, snapshot, NOW, trade_id=5)

        assert document.section("Trade Analysis").lines == ["Successful trade!"]

    def test_unknown_trade(self, composer, snapshot):
        with pytest.raises(NotFound):
            composer.compose(ReportScope.TRADE, snapshot, NOW, trade_id=404)

    def test_requires_id(self, composer, snapshot):
        with pytest.raises(ValidationError):
            composer.compose(ReportScope.TRADE, snapshot, NOW)


class TestRendering:
    def test_render_text(self, composer, snapshot):
        document = composer.compose(ReportScope.WEEK, snapshot, NOW)
        text = render_text(document)

        assert text.startswith("Weekly Trading Performance Report\n")
        assert "Generated: 2024-01-03 10:00:00" in text
        assert "Weekly P&L: +$50.00" in text
        assert text.rstrip().endswith("TradeJournal - Personal Trading Dashboard")

    def test_render_console(self, composer, snapshot):
        console = Console(record=True, width=120)
        render_console(composer.compose(ReportScope.ANALYTICS, snapshot, NOW), console)
        output = console.export_text()

        assert "Trading Analytics Report" in output
        assert "Performance Overview" in output
        assert "+$100.00" in output

    def test_write_pdf_to_directory(self, composer, snapshot):
        document = composer.compose(ReportScope.DASHBOARD, snapshot, NOW)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_pdf(document, Path(tmpdir))

            assert path.name == "dashboard-report-2024-01-03.pdf"
            assert path.read_bytes().startswith(b"%PDF")

    def test_write_pdf_with_non_latin_text(self, snapshot):
        composer = ReportComposer(currency_symbol="₹", footer="Journal ✓")
        document = composer.compose(ReportScope.ALL, snapshot, NOW)
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "exports" / "backup.pdf"
            path = write_pdf(document, target)

            assert path == target
            assert target.stat().st_size > 0
