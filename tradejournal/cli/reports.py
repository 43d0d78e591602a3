"""Report commands for TradeJournal CLI.

Composes a report for a scope and prints it, writes it as plain text,
or exports it to PDF.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from tradejournal.cli.common import fail, get_record_store, get_settings
from tradejournal.exceptions import JournalError
from tradejournal.reports import ReportComposer, ReportScope, render_console, render_text, write_pdf

console = Console()


@click.command()
@click.argument("scope", type=click.Choice([s.value for s in ReportScope]))
@click.option("--id", "trade_id", type=int, default=None, help="Trade ID, for the 'trade' scope.")
@click.option("--pdf", "as_pdf", is_flag=True, default=False, help="Export the report to PDF.")
@click.option("--text", "as_text", is_flag=True, default=False, help="Print plain text instead of panels.")
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="PDF file or directory. Defaults to the configured export directory.",
)
def report(
    scope: str,
    trade_id: Optional[int],
    as_pdf: bool,
    as_text: bool,
    output: Optional[Path],
) -> None:
    """Generate a report.

    \b
    Scopes:
      today      Today's trades and metrics
      week       Last 7 days
      month      Last 30 days
      journal    Every trade with notes
      analytics  Full performance analysis with recommendations
      dashboard  One-page overview of every period
      dreams     The dream journal
      all        Complete data backup
      trade      One trade in detail (requires --id)

    \b
    Examples:
      tradejournal report today
      tradejournal report analytics --pdf
      tradejournal report trade --id 1704448200000 --pdf -o ~/Desktop
    """
    settings = get_settings()
    composer = ReportComposer(
        currency_symbol=settings.currency_symbol,
        footer=settings.footer,
    )

    try:
        store = get_record_store(settings)
        document = composer.compose(ReportScope(scope), store.snapshot(), datetime.now(), trade_id=trade_id)
    except JournalError as e:
        fail(e)

    if as_pdf:
        try:
            path = write_pdf(document, output or settings.export_dir)
        except JournalError as e:
            fail(e)
        console.print(f"[green]✓ Report exported:[/green] {path}")
        return

    if as_text:
        click.echo(render_text(document), nl=False)
        return

    render_console(document, console)
