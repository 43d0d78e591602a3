"""CLI commands for TradeJournal.

This package provides the command-line interface for recording trades
and dreams, managing the account balance, and producing statistics
and reports.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
