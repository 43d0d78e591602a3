"""Statistics commands for TradeJournal CLI.

Performance summary, equity curve and the monthly calendar view.
"""

from datetime import date, datetime
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics import (
    EquityPeriod,
    Window,
    average_monthly_growth,
    best_day,
    current_streak,
    filter_window,
    max_consecutive_losses,
    max_consecutive_wins,
    summarize,
    worst_day,
)
from tradejournal.charts import (
    calendar_month,
    equity_chart,
    monthly_profit_factor,
    outcome_distribution,
    profit_loss_distribution,
)
from tradejournal.cli.common import fail, get_record_store, get_settings, pnl_markup
from tradejournal.exceptions import JournalError
from tradejournal.reports.formatting import (
    format_balance,
    format_currency,
    format_date,
    format_percent,
    format_ratio,
)

console = Console()


@click.command()
@click.option(
    "--window", "-w",
    type=click.Choice(["today", "week", "month", "all"]),
    default="all",
    show_default=True,
    help="Restrict the statistics to a rolling window.",
)
def stats(window: str) -> None:
    """Display performance statistics.

    Shows win rate, profit factor, averages, streaks, best and worst
    days, outcome distribution and profit factor by month.

    \b
    Examples:
      tradejournal stats            # All trades
      tradejournal stats -w week    # Last 7 days
    """
    settings = get_settings()
    symbol = settings.currency_symbol
    now = datetime.now()

    try:
        store = get_record_store(settings)
    except JournalError as e:
        fail(e)

    trades = list(store.trades)
    if window != "all":
        trades = filter_window(trades, Window(window), now.date())

    summary = summarize(trades)
    streak = current_streak(trades)

    def day_text(day) -> str:
        if day is None:
            return "[dim]No trades[/dim]"
        return f"{format_date(day.date)} {pnl_markup(day.pnl, symbol)}"

    table = Table(
        title=f"Performance ({window})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Total Trades", str(summary.total_trades))
    table.add_row("Win Rate", format_percent(summary.win_rate))
    table.add_row("Profit Factor", format_ratio(summary.profit_factor))
    table.add_row("Risk/Reward", format_ratio(summary.risk_reward_ratio))
    table.add_row("Net P&L", pnl_markup(summary.net_pnl, symbol))
    table.add_row("Average Win", format_currency(summary.avg_win, symbol))
    table.add_row("Average Loss", format_currency(summary.avg_loss, symbol))
    table.add_row("Largest Win", pnl_markup(summary.largest_win, symbol))
    table.add_row("Largest Loss", pnl_markup(summary.largest_loss, symbol))
    table.add_row("Max Consecutive Wins", str(max_consecutive_wins(trades)))
    table.add_row("Max Consecutive Losses", str(max_consecutive_losses(trades)))
    table.add_row("Current Streak", streak.describe() if streak else "[dim]No trades[/dim]")
    table.add_row("Best Day", day_text(best_day(trades)))
    table.add_row("Worst Day", day_text(worst_day(trades)))
    table.add_row("Trading Days", str(summary.trading_days))
    table.add_row("Avg Trades / Day", f"{summary.avg_trades_per_day:.1f}")
    table.add_row(
        "Avg Monthly Growth",
        pnl_markup(average_monthly_growth(trades, store.starting_balance, now.date()), symbol),
    )
    console.print(table)

    outcomes = outcome_distribution(trades)
    split = profit_loss_distribution(trades)
    console.print(
        "\n[bold]Outcomes:[/bold] "
        + " | ".join(f"{label}: {int(value)}" for label, value in outcomes.as_pairs())
    )
    console.print(
        "[bold]Profit vs Loss:[/bold] "
        + " | ".join(f"{label}: {format_currency(value, symbol)}" for label, value in split.as_pairs())
    )

    factors = monthly_profit_factor(store.trades, now)
    console.print(
        "[bold]Profit Factor by Month:[/bold] "
        + " | ".join(f"{label}: {format_ratio(value)}" for label, value in factors.as_pairs())
    )


@click.command()
@click.option(
    "--period", "-p",
    type=click.Choice([p.value for p in EquityPeriod]),
    default=EquityPeriod.SEVEN_DAYS.value,
    show_default=True,
    help="Lookback period for the equity curve.",
)
def equity(period: str) -> None:
    """Display the account balance curve.

    The first row is the starting balance; each later row adds one
    trade's P&L, oldest first.
    """
    settings = get_settings()
    symbol = settings.currency_symbol
    try:
        store = get_record_store(settings)
    except JournalError as e:
        fail(e)

    chosen = EquityPeriod(period)
    series = equity_chart(store.snapshot(), datetime.now(), chosen)

    table = Table(
        title=f"{series.title} ({chosen.label})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Point", style="bold")
    table.add_column("Balance", justify="right")
    table.add_column("Change", justify="right")

    previous = None
    for label, value in series.as_pairs():
        change = "" if previous is None else pnl_markup(value - previous, symbol)
        table.add_row(label, format_balance(value, symbol), change)
        previous = value

    console.print(table)


@click.command("calendar")
@click.option("--month", "-m", "month", default=None, help="Month to show (YYYY-MM). Defaults to this month.")
def calendar_view(month: Optional[str]) -> None:
    """Display per-day trade counts and P&L for a month.

    \b
    Examples:
      tradejournal calendar
      tradejournal calendar -m 2024-01
    """
    settings = get_settings()
    symbol = settings.currency_symbol

    if month:
        try:
            parsed = datetime.strptime(month, "%Y-%m")
        except ValueError:
            fail(f"Invalid month '{month}'. Use YYYY-MM.")
        year, month_number = parsed.year, parsed.month
    else:
        today = date.today()
        year, month_number = today.year, today.month

    try:
        store = get_record_store(settings)
    except JournalError as e:
        fail(e)

    view = calendar_month(store.trades, year, month_number)
    active = [d for d in view.days if d.has_trades]

    if not active:
        console.print(Panel(
            f"[dim]No trades in {view.title}[/dim]",
            title="[bold]Calendar[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title=view.title,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Day")
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")

    for cell in active:
        table.add_row(
            cell.date.isoformat(),
            cell.date.strftime("%a"),
            str(cell.trade_count),
            pnl_markup(cell.pnl, symbol),
        )

    console.print(table)
    console.print(
        f"\n[bold]Month P&L:[/bold] {pnl_markup(view.total_pnl, symbol)}"
        f"  [dim]({len(active)} trading days)[/dim]"
    )
