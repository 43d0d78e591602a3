"""Data models for TradeJournal."""

from tradejournal.models.trade import (
    DEFAULT_NOTES,
    MAX_TRADES_PER_DAY,
    TradeInput,
    TradeRecord,
)
from tradejournal.models.dream import DreamRecord
from tradejournal.models.account import AccountState, JournalSnapshot
from tradejournal.models.report import ReportDocument, ReportEntry, ReportSection

__all__ = [
    "DEFAULT_NOTES",
    "MAX_TRADES_PER_DAY",
    "TradeInput",
    "TradeRecord",
    "DreamRecord",
    "AccountState",
    "JournalSnapshot",
    "ReportDocument",
    "ReportEntry",
    "ReportSection",
]
