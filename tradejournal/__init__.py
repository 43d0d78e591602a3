"""TradeJournal - personal trading journal and performance analytics."""

__version__ = "0.1.0"
