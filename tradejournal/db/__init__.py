"""Persistence layer for TradeJournal."""

from tradejournal.db.store import BaseStorage, KeyValueStore

__all__ = ["BaseStorage", "KeyValueStore"]
