"""Account commands for TradeJournal CLI.

Handles the starting balance, the config template and wiping the journal.
"""

import click
from rich.console import Console
from rich.panel import Panel

from tradejournal.cli.common import fail, get_record_store, get_settings, pnl_markup
from tradejournal.config import write_default_config
from tradejournal.exceptions import JournalError
from tradejournal.reports.formatting import format_balance, format_percent

console = Console()


@click.group()
def balance() -> None:
    """Show or set the account balance."""


@balance.command("show")
def show() -> None:
    """Display current balance, starting balance and growth."""
    settings = get_settings()
    symbol = settings.currency_symbol
    try:
        account = get_record_store(settings).account_state()
    except JournalError as e:
        fail(e)

    growth_color = "green" if account.growth >= 0 else "red"
    console.print(Panel(
        f"Current Balance:  [bold]{format_balance(account.account_balance, symbol)}[/bold]\n"
        f"Starting Balance: {format_balance(account.starting_balance, symbol)}\n"
        f"{'─' * 30}\n"
        f"Total Growth:     {pnl_markup(account.growth, symbol)} "
        f"[{growth_color}]({format_percent(account.growth_percent, 2, signed=True)})[/{growth_color}]",
        title="[bold cyan]Account[/bold cyan]",
        border_style="cyan",
    ))


@balance.command("set")
@click.argument("amount")
def set_balance(amount: str) -> None:
    """Set the starting balance the account is measured against.

    \b
    Examples:
      tradejournal balance set 25000
    """
    settings = get_settings()
    try:
        store = get_record_store(settings)
        store.set_starting_balance(amount)
    except JournalError as e:
        fail(e)

    console.print(
        f"[green]✓ Starting balance updated to "
        f"{format_balance(store.starting_balance, settings.currency_symbol)}[/green]"
    )


@click.command()
@click.option(
    "--yes", "-y",
    "confirm",
    is_flag=True,
    default=False,
    help="Skip confirmation prompt.",
)
def clear(confirm: bool) -> None:
    """Delete every trade and dream and reset the balance.

    This cannot be undone.
    """
    settings = get_settings()
    try:
        store = get_record_store(settings)
    except JournalError as e:
        fail(e)

    console.print("[bold red]Clear All Data[/bold red]\n")
    console.print(f"Trades: [yellow]{len(store.trades)}[/yellow]")
    console.print(f"Dreams: [yellow]{len(store.dreams)}[/yellow]\n")

    if not confirm:
        if not click.confirm("Are you sure you want to clear all data? This cannot be undone."):
            console.print("[dim]Clear cancelled.[/dim]")
            return

    store.clear()
    console.print(Panel(
        f"[green]All data has been cleared![/green]\n\n"
        f"Balance: {format_balance(store.starting_balance, settings.currency_symbol)}",
        title="[bold green]Clear Complete[/bold green]",
        border_style="green",
    ))


@click.command()
def init() -> None:
    """Write a config template to the journal directory."""
    settings = get_settings()
    path = write_default_config(settings.home)
    console.print(f"[green]✓ Config file:[/green] {path}")
