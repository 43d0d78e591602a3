"""Text and terminal renderers for report documents."""

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tradejournal.models import ReportDocument, ReportSection

RULE_WIDTH = 60


def render_text(document: ReportDocument) -> str:
    """Plain-text rendition, one entry or line per row."""
    out = [document.title, "=" * RULE_WIDTH, document.generated_line, ""]
    for section in document.sections:
        out.append(section.title)
        out.append("-" * len(section.title))
        for entry in section.entries:
            out.append(f"{entry.label}: {entry.value}")
        out.extend(section.lines)
        out.append("")
    if document.footer:
        out.append(document.footer)
    return "\n".join(out) + "\n"


def _section_panel(section: ReportSection) -> Panel:
    parts = []
    if section.entries:
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Label", style="dim")
        table.add_column("Value", style="bold")
        for entry in section.entries:
            table.add_row(entry.label, _colorize(entry.value))
        parts.append(table)
    for line in section.lines:
        parts.append(_colorize(line))
    return Panel(
        Group(*parts) if parts else "[dim]Nothing to show[/dim]",
        title=f"[bold]{escape(section.title)}[/bold]",
        title_align="left",
        border_style="cyan",
    )


def _colorize(text: str) -> str:
    """Green for gains, red for losses, judged by the first signed amount."""
    escaped = escape(text)
    for token in text.split():
        if token.startswith("+") and len(token) > 1 and not token[1].isalpha():
            return f"[green]{escaped}[/green]"
        if token.startswith("-") and len(token) > 1 and not token[1].isalpha() and token[1] != "-":
            return f"[red]{escaped}[/red]"
    return escaped


def render_console(document: ReportDocument, console: Console) -> None:
    """Print a document as a header panel followed by one panel per section."""
    console.print(Panel(
        f"[bold]{escape(document.title)}[/bold]\n[dim]{document.generated_line}[/dim]",
        border_style="green",
    ))
    for section in document.sections:
        console.print(_section_panel(section))
    if document.footer:
        console.print(f"[dim]{escape(document.footer)}[/dim]")
