"""Record ownership for TradeJournal."""

from tradejournal.journal.records import IdGenerator, RecordStore

__all__ = ["IdGenerator", "RecordStore"]
