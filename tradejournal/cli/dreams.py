"""Dream journal commands for TradeJournal CLI."""

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import fail, get_record_store
from tradejournal.exceptions import JournalError
from tradejournal.reports.formatting import format_date

console = Console()


@click.group()
def dream() -> None:
    """Write down and review trading dreams and goals."""


@dream.command("add")
@click.argument("content")
def add(content: str) -> None:
    """Record a new dream dated today.

    \b
    Examples:
      tradejournal dream add "Trade full time from a beach house"
    """
    try:
        record = get_record_store().add_dream(content)
    except JournalError as e:
        fail(e)

    console.print(f"[green]✓ Dream saved successfully![/green] [dim](ID {record.id})[/dim]")


@dream.command("edit")
@click.argument("dream_id", type=int)
@click.argument("content")
def edit(dream_id: int, content: str) -> None:
    """Replace the text of a dream. Its date is kept."""
    try:
        get_record_store().update_dream(dream_id, content)
    except JournalError as e:
        fail(e)

    console.print(f"[green]✓ Dream {dream_id} updated successfully![/green]")


@dream.command("delete")
@click.argument("dream_id", type=int)
@click.option(
    "--yes", "-y",
    "confirm",
    is_flag=True,
    default=False,
    help="Skip confirmation prompt.",
)
def delete(dream_id: int, confirm: bool) -> None:
    """Delete a dream."""
    try:
        store = get_record_store()
        store.get_dream(dream_id)
    except JournalError as e:
        fail(e)

    if not confirm:
        if not click.confirm(f"Delete dream {dream_id}?"):
            console.print("[dim]Delete cancelled.[/dim]")
            return

    try:
        store.remove_dream(dream_id)
    except JournalError as e:
        fail(e)

    console.print(f"[green]✓ Dream {dream_id} deleted successfully![/green]")


@dream.command("list")
def list_dreams() -> None:
    """List every dream, newest first."""
    try:
        store = get_record_store()
    except JournalError as e:
        fail(e)

    if not store.dreams:
        console.print(Panel(
            "[dim]No dreams yet. Use 'tradejournal dream add' to write one.[/dim]",
            title="[bold]Dreams[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Trading Dreams",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("ID", style="dim")
    table.add_column("Date", style="bold")
    table.add_column("Dream")

    for record in store.dreams:
        table.add_row(str(record.id), format_date(record.date), escape(record.content))

    console.print(table)
    console.print(f"\n[dim]Total: {len(store.dreams)} dreams[/dim]")
