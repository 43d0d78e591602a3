"""Report composition and output."""

from tradejournal.reports.composer import (
    FILENAME_STEMS,
    ReportComposer,
    ReportScope,
    compose_report,
)
from tradejournal.reports.formatting import (
    format_balance,
    format_currency,
    format_date,
    format_date_long,
    format_percent,
    format_ratio,
    format_signed,
    outcome_label,
)
from tradejournal.reports.pdf import build_pdf, write_pdf
from tradejournal.reports.render import render_console, render_text

__all__ = [
    "FILENAME_STEMS",
    "ReportComposer",
    "ReportScope",
    "compose_report",
    "format_balance",
    "format_currency",
    "format_date",
    "format_date_long",
    "format_percent",
    "format_ratio",
    "format_signed",
    "outcome_label",
    "build_pdf",
    "write_pdf",
    "render_console",
    "render_text",
]
