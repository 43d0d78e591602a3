"""Trade commands for TradeJournal CLI.

Handles adding, editing, deleting and listing trades, plus the
per-day view of a single date.
"""

from datetime import date, datetime
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics import Window, day_summary, filter_window
from tradejournal.cli.common import fail, get_record_store, get_settings, pnl_markup
from tradejournal.exceptions import JournalError
from tradejournal.models import MAX_TRADES_PER_DAY, TradeRecord
from tradejournal.reports.formatting import format_date_long, outcome_label

console = Console()

WINDOW_CHOICES = ["today", "week", "month", "all"]


def _trade_table(trades: list[TradeRecord], title: str, symbol: str) -> Table:
    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", style="dim")
    table.add_column("Date", style="bold")
    table.add_column("Time")
    table.add_column("#", justify="center")
    table.add_column("Pair", style="bold")
    table.add_column("Strategy")
    table.add_column("P&L", justify="right")
    table.add_column("Notes", max_width=30)

    for trade in trades:
        notes = trade.notes
        if len(notes) > 30:
            notes = notes[:27] + "..."
        table.add_row(
            str(trade.id),
            trade.date.isoformat(),
            trade.time,
            str(trade.trade_number),
            escape(trade.pair),
            escape(trade.strategy),
            pnl_markup(trade.pnl, symbol),
            escape(notes),
        )
    return table


@click.group()
def trade() -> None:
    """Add, edit, delete and list trades."""


@trade.command("add")
@click.option("--date", "trade_date", default=None, help="Trade date (YYYY-MM-DD). Defaults to today.")
@click.option("--time", "trade_time", default=None, help="Trade time (HH:MM). Defaults to now.")
@click.option("--number", "-n", "trade_number", type=int, required=True, help="Trade number for the day (1-4).")
@click.option("--pair", required=True, help="Instrument, e.g. EURUSD.")
@click.option("--strategy", required=True, help="Strategy label.")
@click.option("--pnl", type=float, required=True, help="Profit or loss of the trade.")
@click.option("--notes", default="", help="Free-text notes.")
def add(
    trade_date: Optional[str],
    trade_time: Optional[str],
    trade_number: int,
    pair: str,
    strategy: str,
    pnl: float,
    notes: str,
) -> None:
    """Record a new trade.

    At most four trades can be recorded for any one date.

    \b
    Examples:
      tradejournal trade add -n 1 --pair EURUSD --strategy Breakout --pnl 120
      tradejournal trade add -n 2 --pair GBPUSD --strategy Reversal --pnl -45.5 \\
          --date 2024-01-05 --time 14:30 --notes "Stopped out"
    """
    settings = get_settings()
    now = datetime.now()

    try:
        store = get_record_store(settings)
        record = store.add_trade({
            "date": trade_date or now.date().isoformat(),
            "time": trade_time or now.strftime("%H:%M"),
            "trade_number": trade_number,
            "pair": pair,
            "strategy": strategy,
            "pnl": pnl,
            "notes": notes,
        })
    except JournalError as e:
        fail(e)

    count = len(store.trades_on(record.date))
    console.print(
        f"[green]✓ Trade added successfully![/green] "
        f"{escape(record.pair)} {pnl_markup(record.pnl, settings.currency_symbol)} "
        f"[dim](ID {record.id}, {count}/{MAX_TRADES_PER_DAY} on {record.date.isoformat()})[/dim]"
    )


@trade.command("edit")
@click.argument("trade_id", type=int)
@click.option("--date", "trade_date", default=None, help="New date (YYYY-MM-DD).")
@click.option("--time", "trade_time", default=None, help="New time (HH:MM).")
@click.option("--number", "-n", "trade_number", type=int, default=None, help="New trade number (1-4).")
@click.option("--pair", default=None, help="New instrument.")
@click.option("--strategy", default=None, help="New strategy label.")
@click.option("--pnl", type=float, default=None, help="New profit or loss.")
@click.option("--notes", default=None, help="New notes.")
def edit(
    trade_id: int,
    trade_date: Optional[str],
    trade_time: Optional[str],
    trade_number: Optional[int],
    pair: Optional[str],
    strategy: Optional[str],
    pnl: Optional[float],
    notes: Optional[str],
) -> None:
    """Edit an existing trade. Fields not given keep their value.

    \b
    Examples:
      tradejournal trade edit 1704448200000 --pnl 95
      tradejournal trade edit 1704448200000 --date 2024-01-06 --notes "Moved"
    """
    changes = {
        "date": trade_date,
        "time": trade_time,
        "trade_number": trade_number,
        "pair": pair,
        "strategy": strategy,
        "pnl": pnl,
        "notes": notes,
    }

    try:
        store = get_record_store()
        current = store.get_trade(trade_id)
        patch = current.model_dump(exclude={"id"})
        patch.update({k: v for k, v in changes.items() if v is not None})
        record = store.update_trade(trade_id, patch)
    except JournalError as e:
        fail(e)

    console.print(f"[green]✓ Trade {record.id} updated successfully![/green]")


@trade.command("delete")
@click.argument("trade_id", type=int)
@click.option(
    "--yes", "-y",
    "confirm",
    is_flag=True,
    default=False,
    help="Skip confirmation prompt.",
)
def delete(trade_id: int, confirm: bool) -> None:
    """Delete a trade."""
    try:
        store = get_record_store()
        record = store.get_trade(trade_id)
    except JournalError as e:
        fail(e)

    if not confirm:
        if not click.confirm(f"Delete trade {record.id} ({record.pair} on {record.date.isoformat()})?"):
            console.print("[dim]Delete cancelled.[/dim]")
            return

    try:
        store.remove_trade(trade_id)
    except JournalError as e:
        fail(e)

    console.print(f"[green]✓ Trade {trade_id} deleted successfully![/green]")


@trade.command("list")
@click.option(
    "--window", "-w",
    type=click.Choice(WINDOW_CHOICES),
    default="all",
    show_default=True,
    help="Only show trades inside this window.",
)
@click.option("--limit", type=int, default=None, help="Show at most this many trades.")
def list_trades(window: str, limit: Optional[int]) -> None:
    """List trades, newest first."""
    settings = get_settings()
    try:
        store = get_record_store(settings)
    except JournalError as e:
        fail(e)

    trades = list(store.trades)
    if window != "all":
        trades = filter_window(trades, Window(window), date.today())

    if not trades:
        console.print(Panel(
            "[dim]No trades recorded yet. Use 'tradejournal trade add' to record one.[/dim]",
            title="[bold]Trades[/bold]",
            border_style="dim",
        ))
        return

    shown = trades[:limit] if limit else trades
    console.print(_trade_table(shown, "Trades", settings.currency_symbol))
    console.print(f"\n[dim]Total: {len(trades)} trades[/dim]")


@trade.command("show")
@click.argument("trade_id", type=int)
def show(trade_id: int) -> None:
    """Show every field of one trade."""
    settings = get_settings()
    try:
        record = get_record_store(settings).get_trade(trade_id)
    except JournalError as e:
        fail(e)

    console.print(Panel(
        f"[bold]Date:[/bold]     {format_date_long(record.date)}\n"
        f"[bold]Time:[/bold]     {record.time}\n"
        f"[bold]Trade #:[/bold]  {record.trade_number}\n"
        f"[bold]Pair:[/bold]     {escape(record.pair)}\n"
        f"[bold]Strategy:[/bold] {escape(record.strategy)}\n"
        f"[bold]P&L:[/bold]      {pnl_markup(record.pnl, settings.currency_symbol)} "
        f"[dim]({outcome_label(record.pnl)})[/dim]\n"
        f"[bold]Notes:[/bold]    {escape(record.notes)}",
        title=f"[bold cyan]Trade {record.id}[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.argument("day", required=False, type=click.DateTime(formats=["%Y-%m-%d"]))
def day(day: Optional[datetime]) -> None:
    """Show the trades and total P&L for one date (default today).

    \b
    Examples:
      tradejournal day              # Today
      tradejournal day 2024-01-05   # A specific date
    """
    settings = get_settings()
    target = day.date() if day else date.today()

    try:
        store = get_record_store(settings)
    except JournalError as e:
        fail(e)

    summary = day_summary(store.trades, target)
    if not summary.trades:
        console.print(Panel(
            f"[dim]No trades on {format_date_long(target)}[/dim]",
            title="[bold]Day View[/bold]",
            border_style="dim",
        ))
        return

    console.print(_trade_table(summary.trades, format_date_long(target), settings.currency_symbol))
    console.print(
        f"\n[bold]Total P&L:[/bold] {pnl_markup(summary.total_pnl, settings.currency_symbol)}"
        f"  [dim]({summary.trade_count}/{MAX_TRADES_PER_DAY} trades)[/dim]"
    )
