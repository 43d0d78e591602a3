"""Report composition.

Turns a journal snapshot into a ReportDocument: an ordered list of titled
sections holding label/value entries and per-trade lines. Layout, paging
and file output belong to the renderers in this package.
"""

from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from tradejournal.analytics import (
    Outcome,
    Window,
    analytics_recommendations,
    average_monthly_growth,
    best_day,
    count_outcomes,
    current_streak,
    dashboard_recommendations,
    filter_window,
    max_consecutive_losses,
    max_consecutive_wins,
    summarize,
    total_pnl,
    win_rate,
    window_start,
    worst_day,
)
from tradejournal.analytics.metrics import DayTotal
from tradejournal.config import DEFAULT_FOOTER
from tradejournal.exceptions import NotFound, ValidationError
from tradejournal.models import (
    MAX_TRADES_PER_DAY,
    JournalSnapshot,
    ReportDocument,
    ReportEntry,
    ReportSection,
    TradeRecord,
)
from tradejournal.reports.formatting import (
    format_balance,
    format_currency,
    format_date,
    format_percent,
    format_ratio,
    format_signed,
    outcome_label,
)

LATEST_DREAM_PREVIEW = 100


class ReportScope(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    JOURNAL = "journal"
    ANALYTICS = "analytics"
    DASHBOARD = "dashboard"
    DREAMS = "dreams"
    ALL = "all"
    TRADE = "trade"


FILENAME_STEMS = {
    ReportScope.TODAY: "today-stats",
    ReportScope.WEEK: "weekly-stats",
    ReportScope.MONTH: "monthly-stats",
    ReportScope.JOURNAL: "trading-journal",
    ReportScope.ANALYTICS: "analytics-report",
    ReportScope.DASHBOARD: "dashboard-report",
    ReportScope.DREAMS: "dreams-journal",
    ReportScope.ALL: "complete-trading-data",
}


def _section(title: str, entries: Optional[list[tuple[str, str]]] = None, lines: Optional[list[str]] = None) -> ReportSection:
    return ReportSection(
        title=title,
        entries=[ReportEntry(label=label, value=value) for label, value in entries or []],
        lines=lines or [],
    )


class ReportComposer:
    """Builds report documents for each scope."""

    def __init__(
        self,
        currency_symbol: str = "$",
        footer: str = DEFAULT_FOOTER,
        account_name: str = "Trader",
    ):
        self.currency_symbol = currency_symbol
        self.footer = footer
        self.account_name = account_name
        self._builders: dict[ReportScope, Callable] = {
            ReportScope.TODAY: self._today,
            ReportScope.WEEK: self._week,
            ReportScope.MONTH: self._month,
            ReportScope.JOURNAL: self._journal,
            ReportScope.ANALYTICS: self._analytics,
            ReportScope.DASHBOARD: self._dashboard,
            ReportScope.DREAMS: self._dreams,
            ReportScope.ALL: self._all,
        }

    def compose(
        self,
        scope: ReportScope,
        snapshot: JournalSnapshot,
        now: datetime,
        trade_id: Optional[int] = None,
    ) -> ReportDocument:
        """Build the report for a scope.

        Args:
            scope: Which report to build.
            snapshot: Journal contents to report on.
            now: Generation time; also anchors the rolling windows.
            trade_id: Required for the single-trade report.

        Raises:
            ValidationError: If the trade report is requested without an ID.
            NotFound: If trade_id does not match a trade.
        """
        scope = ReportScope(scope)
        if scope is ReportScope.TRADE:
            if trade_id is None:
                raise ValidationError("A trade ID is required for a trade report", fields=["trade_id"])
            return self._trade(snapshot, now, trade_id)

        title, sections = self._builders[scope](snapshot, now)
        return ReportDocument(
            scope=scope.value,
            title=title,
            generated_at=now,
            sections=sections,
            footer=self.footer,
            filename=f"{FILENAME_STEMS[scope]}-{now.date().isoformat()}.pdf",
        )

    # ==================== Helpers ====================

    def _money(self, amount: float) -> str:
        return format_currency(amount, self.currency_symbol)

    def _balance(self, amount: float) -> str:
        return format_balance(amount, self.currency_symbol)

    def _signed(self, amount: float) -> str:
        return format_signed(amount, self.currency_symbol)

    def _day(self, day: Optional[DayTotal]) -> str:
        if day is None:
            return "No trades"
        return f"{format_date(day.date)}: {self._signed(day.pnl)}"

    def _account_entries(self, snapshot: JournalSnapshot) -> list[tuple[str, str]]:
        account = snapshot.account
        return [
            ("Current Balance", self._balance(account.account_balance)),
            ("Starting Balance", self._balance(account.starting_balance)),
            ("Total Growth", self._signed(account.growth)),
            ("Growth %", format_percent(account.growth_percent)),
        ]

    def _outcome_entries(self, trades: list[TradeRecord]) -> list[tuple[str, str]]:
        counts = count_outcomes(trades)
        return [
            ("Winning Trades", str(counts[Outcome.WIN])),
            ("Losing Trades", str(counts[Outcome.LOSS])),
            ("Break Even", str(counts[Outcome.BREAK_EVEN])),
            ("Win Rate", format_percent(win_rate(trades))),
        ]

    def _performance_entries(self, trades: list[TradeRecord]) -> list[tuple[str, str]]:
        summary = summarize(trades)
        return [
            ("Total Trades", str(summary.total_trades)),
            ("Winning Trades", str(summary.winning_trades)),
            ("Losing Trades", str(summary.losing_trades)),
            ("Break Even Trades", str(summary.break_even_trades)),
            ("Win Rate", format_percent(summary.win_rate)),
            ("Total Profit", self._money(summary.gross_profit)),
            ("Total Loss", self._money(summary.gross_loss)),
            ("Net Profit", self._signed(summary.net_pnl)),
            ("Profit Factor", format_ratio(summary.profit_factor)),
        ]

    def _trade_line(self, trade: TradeRecord) -> str:
        return (
            f"{trade.date.isoformat()} {trade.time} - Trade {trade.trade_number}: "
            f"{trade.pair} | {trade.strategy} | P&L: {self._signed(trade.pnl)} | "
            f"{outcome_label(trade.pnl)}"
        )

    def _journal_line(self, trade: TradeRecord) -> str:
        return (
            f"{trade.date.isoformat()} {trade.time} | Trade {trade.trade_number} | "
            f"{trade.pair} | {trade.strategy} | P&L: {self._signed(trade.pnl)} | "
            f"Notes: {trade.notes}"
        )

    @staticmethod
    def _numbered(items: list[str]) -> list[str]:
        return [f"{i}. {item}" for i, item in enumerate(items, 1)]

    # ==================== Scopes ====================

    def _today(self, snapshot: JournalSnapshot, now: datetime):
        today = now.date()
        trades = filter_window(snapshot.trades, Window.TODAY, today)

        lines = [
            f"Trade {t.trade_number} ({t.time}): {t.pair} | {t.strategy} | "
            f"P&L: {self._signed(t.pnl)} | Notes: {t.notes}"
            for t in trades
        ] or ["No trades recorded today."]

        sections = [
            _section("Account Summary", [
                ("Current Balance", self._balance(snapshot.account_balance)),
                ("Starting Balance", self._balance(snapshot.starting_balance)),
                ("Today's P&L", self._signed(total_pnl(trades))),
                ("Today's Trades", f"{len(trades)}/{MAX_TRADES_PER_DAY}"),
            ]),
            _section("Trades Today", lines=lines),
            _section("Performance Metrics", self._outcome_entries(trades)),
        ]
        return f"Today's Trading Stats - {today.isoformat()}", sections

    def _week(self, snapshot: JournalSnapshot, now: datetime):
        today = now.date()
        start = window_start(Window.WEEK, today)
        trades = filter_window(snapshot.trades, Window.WEEK, today)
        pnl = total_pnl(trades)

        sections = [
            _section("Weekly Report (Last 7 Days)", [
                ("Period", f"{start.isoformat()} to {today.isoformat()}"),
            ]),
            _section("Account Performance", [
                ("Current Balance", self._balance(snapshot.account_balance)),
                ("Starting Balance", self._balance(snapshot.starting_balance)),
                ("Weekly P&L", self._signed(pnl)),
                ("Total Trades", str(len(trades))),
            ]),
            _section(
                "Weekly Trades",
                lines=[self._trade_line(t) for t in trades] or ["No trades recorded this week."],
            ),
            _section("Weekly Metrics", self._outcome_entries(trades) + [
                ("Average Daily P&L", self._signed(pnl / 7)),
            ]),
        ]
        return "Weekly Trading Performance Report", sections

    def _month(self, snapshot: JournalSnapshot, now: datetime):
        today = now.date()
        start = window_start(Window.MONTH, today)
        trades = filter_window(snapshot.trades, Window.MONTH, today)
        summary = summarize(trades)
        account = snapshot.account

        recent = [self._trade_line(t) for t in trades[:10]]
        if len(trades) > 10:
            recent.append(f"... and {len(trades) - 10} more trades")

        sections = [
            _section("Monthly Report (Last 30 Days)", [
                ("Period", f"{start.isoformat()} to {today.isoformat()}"),
            ]),
            _section("Account Performance", [
                ("Current Balance", self._balance(account.account_balance)),
                ("Starting Balance", self._balance(account.starting_balance)),
                ("Monthly P&L", self._signed(summary.net_pnl)),
                ("Total Growth", self._signed(account.growth)),
                ("Growth %", format_percent(account.growth_percent)),
                ("Total Trades", str(summary.total_trades)),
            ]),
            _section("Trade Summary", [
                ("Winning Trades", str(summary.winning_trades)),
                ("Losing Trades", str(summary.losing_trades)),
                ("Win Rate", format_percent(summary.win_rate)),
                ("Total Profit", self._money(summary.gross_profit)),
                ("Total Loss", self._money(summary.gross_loss)),
            ]),
            _section(
                "Recent Trades (Last 10)",
                lines=recent or ["No trades recorded this month."],
            ),
        ]
        return "Monthly Trading Performance Report", sections

    def _journal(self, snapshot: JournalSnapshot, now: datetime):
        trades = list(snapshot.trades)
        sections = [
            _section(
                "Account Summary",
                self._account_entries(snapshot) + [("Total Trades", str(len(trades)))],
            ),
            _section("Performance Metrics", self._performance_entries(trades)[1:]),
            _section(
                f"All Trades ({len(trades)} Total)",
                lines=[self._journal_line(t) for t in trades] or ["No trades recorded yet."],
            ),
            _section("Journal Notes", lines=[
                f"Generated on: {now.date().isoformat()}",
                "This journal contains your complete trading history.",
                "Review regularly to identify patterns and improve performance.",
            ]),
        ]
        return "Complete Trading Journal - All Trades", sections

    def _analytics(self, snapshot: JournalSnapshot, now: datetime):
        trades = list(snapshot.trades)
        summary = summarize(trades)
        account = snapshot.account
        streak = current_streak(trades)

        sections = [
            _section("Performance Overview", [
                ("Total Trades", str(summary.total_trades)),
                ("Winning Trades", str(summary.winning_trades)),
                ("Losing Trades", str(summary.losing_trades)),
                ("Win Rate", format_percent(summary.win_rate)),
                ("Profit Factor", format_ratio(summary.profit_factor)),
            ]),
            _section("Profit Analysis", [
                ("Total Profit", self._money(summary.gross_profit)),
                ("Total Loss", self._money(summary.gross_loss)),
                ("Net Profit", self._signed(summary.net_pnl)),
                ("Average Win", self._money(summary.avg_win)),
                ("Average Loss", self._money(summary.avg_loss)),
                ("Win/Loss Ratio", format_ratio(summary.risk_reward_ratio)),
            ]),
            _section("Extreme Performance", [
                ("Largest Win", self._signed(summary.largest_win)),
                ("Largest Loss", self._signed(summary.largest_loss)),
                ("Best Day", self._day(best_day(trades))),
                ("Worst Day", self._day(worst_day(trades))),
            ]),
            _section("Consistency Metrics", [
                ("Max Consecutive Wins", str(max_consecutive_wins(trades))),
                ("Max Consecutive Losses", str(max_consecutive_losses(trades))),
                ("Current Streak", streak.describe() if streak else "No trades"),
                ("Average Trades Per Day", f"{summary.avg_trades_per_day:.1f}"),
            ]),
            _section("Account Growth", [
                ("Starting Balance", self._balance(account.starting_balance)),
                ("Current Balance", self._balance(account.account_balance)),
                ("Total Growth", self._signed(account.growth)),
                ("Growth %", format_percent(account.growth_percent)),
                (
                    "Average Monthly Growth",
                    self._signed(average_monthly_growth(trades, account.starting_balance, now.date())),
                ),
            ]),
            _section("Recommendations", lines=self._numbered(analytics_recommendations(trades))),
        ]
        return "Trading Analytics Report", sections

    def _dashboard(self, snapshot: JournalSnapshot, now: datetime):
        today = now.date()
        trades = list(snapshot.trades)
        today_trades = filter_window(trades, Window.TODAY, today)
        week_trades = filter_window(trades, Window.WEEK, today)
        month_trades = filter_window(trades, Window.MONTH, today)
        summary = summarize(trades)
        week_pnl = total_pnl(week_trades)
        month_pnl = total_pnl(month_trades)

        if snapshot.dreams:
            latest = snapshot.dreams[0].content
            if len(latest) > LATEST_DREAM_PREVIEW:
                latest = latest[:LATEST_DREAM_PREVIEW] + "..."
        else:
            latest = "No dreams yet"

        sections = [
            _section("Dashboard Snapshot", [
                ("Report Date", today.isoformat()),
                ("Account Name", self.account_name),
                ("Trading Period", "Active"),
            ]),
            _section("Account Overview", self._account_entries(snapshot)),
            _section("Daily Performance", [
                ("Today's P&L", self._signed(total_pnl(today_trades))),
                ("Today's Trades", f"{len(today_trades)}/{MAX_TRADES_PER_DAY}"),
                (
                    "Daily Target Progress",
                    f"{len(today_trades) / MAX_TRADES_PER_DAY * 100:.0f}%",
                ),
            ]),
            _section("Weekly Performance", [
                ("Weekly P&L", self._signed(week_pnl)),
                ("Weekly Trades", str(len(week_trades))),
                ("Average Daily P&L", self._signed(week_pnl / 7)),
            ]),
            _section("Monthly Performance", [
                ("Monthly P&L", self._signed(month_pnl)),
                ("Monthly Trades", str(len(month_trades))),
                ("Average Daily P&L", self._signed(month_pnl / 30)),
            ]),
            _section("Performance Metrics", [
                ("Total Trades", str(summary.total_trades)),
                ("Win Rate", format_percent(summary.win_rate)),
                ("Profit Factor", format_ratio(summary.profit_factor)),
                ("Risk/Reward Ratio", format_ratio(summary.risk_reward_ratio)),
            ]),
            _section(
                "Recent Activity (Last 5 Trades)",
                lines=[self._trade_line(t) for t in trades[:5]] or ["No trades recorded yet."],
            ),
            _section("Dreams & Goals", [
                ("Total Dreams Recorded", str(len(snapshot.dreams))),
                ("Latest Dream", latest),
            ]),
            _section(
                "Recommendations",
                lines=self._numbered(
                    dashboard_recommendations(trades, snapshot.starting_balance, today)
                ),
            ),
        ]
        return "Professional Trading Dashboard Report", sections

    def _dreams(self, snapshot: JournalSnapshot, now: datetime):
        dreams = sorted(snapshot.dreams, key=lambda d: d.date, reverse=True)
        if dreams:
            first = format_date(dreams[-1].date)
            latest = format_date(dreams[0].date)
        else:
            first = latest = "N/A"

        sections = [
            _section("Dream Statistics", [
                ("Total Dreams", str(len(dreams))),
                ("First Dream", first),
                ("Latest Dream", latest),
            ]),
            _section(
                "All Dreams",
                lines=[f"{format_date(d.date)}: {d.content}" for d in dreams]
                or ["No dreams recorded yet."],
            ),
            _section("Dream Analysis", lines=[
                "Dreams are powerful tools for manifesting trading success.",
                "Review these regularly to stay aligned with your goals.",
                "Use these dreams as motivation during challenging times.",
            ]),
        ]
        return "Trading Dreams Journal", sections

    def _all(self, snapshot: JournalSnapshot, now: datetime):
        trades = list(snapshot.trades)
        dreams = list(snapshot.dreams)
        sections = [
            _section("Account Information", self._account_entries(snapshot)),
            _section("Performance Summary", self._performance_entries(trades)),
            _section(
                "All Trades",
                lines=[self._journal_line(t) for t in trades] or ["No trades recorded yet."],
            ),
            _section(
                f"Trading Dreams ({len(dreams)} Total)",
                lines=[f"{format_date(d.date)}: {d.content}" for d in dreams]
                or ["No dreams recorded yet."],
            ),
            _section("Export Details", [
                ("Generated", now.strftime("%Y-%m-%d %H:%M:%S")),
                ("Total Records", str(len(trades) + len(dreams))),
                ("File Format", "PDF"),
            ]),
        ]
        return "Complete Trading Data Backup", sections

    def _trade(self, snapshot: JournalSnapshot, now: datetime, trade_id: int) -> ReportDocument:
        trade = next((t for t in snapshot.trades if t.id == trade_id), None)
        if trade is None:
            raise NotFound("trade", trade_id)

        trades = list(snapshot.trades)
        balance = snapshot.account_balance
        analysis = []
        if balance:
            share = abs(trade.pnl / balance * 100)
            analysis.append(f"This trade represents {share:.2f}% of current account balance.")
        analysis.append(
            "Successful trade!" if trade.pnl >= 0 else "Learning opportunity - review what happened."
        )

        sections = [
            _section("Trade Details", [
                ("Date", format_date(trade.date)),
                ("Time", trade.time),
                ("Trade Number", str(trade.trade_number)),
                ("Currency Pair", trade.pair),
                ("Strategy", trade.strategy),
                ("P&L", self._signed(trade.pnl)),
                ("Notes", trade.notes),
            ]),
            _section("Account Information", self._account_entries(snapshot)),
            _section("Performance Summary", [
                ("Total Trades", str(len(trades))),
                ("Winning Trades", str(sum(1 for t in trades if t.pnl > 0))),
                ("Losing Trades", str(sum(1 for t in trades if t.pnl < 0))),
                ("Win Rate", format_percent(win_rate(trades))),
            ]),
            _section("Trade Analysis", lines=analysis),
        ]
        return ReportDocument(
            scope=ReportScope.TRADE.value,
            title=f"Trade Details - {trade.pair} - {format_date(trade.date)}",
            generated_at=now,
            sections=sections,
            footer=self.footer,
            filename=f"trade-{trade.id}-{trade.date.isoformat()}.pdf",
        )


def compose_report(
    scope: ReportScope,
    snapshot: JournalSnapshot,
    now: datetime,
    trade_id: Optional[int] = None,
    **options,
) -> ReportDocument:
    """Shortcut for ReportComposer(**options).compose(...)."""
    return ReportComposer(**options).compose(scope, snapshot, now, trade_id=trade_id)
