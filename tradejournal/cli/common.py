"""Helpers shared by the TradeJournal commands."""

import logging
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from tradejournal.config import Settings, load_settings
from tradejournal.db.store import KeyValueStore
from tradejournal.exceptions import JournalError
from tradejournal.journal import RecordStore
from tradejournal.reports.formatting import format_signed

logger = logging.getLogger(__name__)

console = Console()


def get_settings() -> Settings:
    """Settings loaded by the root group, or fresh ones outside a CLI run."""
    ctx = click.get_current_context(silent=True)
    if ctx is not None and ctx.obj and "settings" in ctx.obj:
        return ctx.obj["settings"]
    return load_settings()


def _warn(message: str) -> None:
    console.print(f"[yellow]Warning: {message}[/yellow]")


def get_record_store(settings: Optional[Settings] = None) -> RecordStore:
    """Open the journal's record store."""
    settings = settings or get_settings()
    return RecordStore(
        KeyValueStore(settings.db_path),
        default_starting_balance=settings.default_starting_balance,
        notify=_warn,
    )


def fail(error: JournalError | str, title: str = "Error") -> None:
    """Show an error panel and exit with status 1."""
    if isinstance(error, JournalError):
        logger.debug("%s failure: %s", error.category.value, error.message)
        message = error.message
    else:
        message = error
    console.print(Panel(
        f"[red]{escape(message)}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def pnl_markup(amount: float, symbol: str = "$") -> str:
    """Signed amount colored green for gains and red for losses."""
    color = "green" if amount >= 0 else "red"
    return f"[{color}]{format_signed(amount, symbol)}[/{color}]"
