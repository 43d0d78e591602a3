"""Exception hierarchy for TradeJournal."""

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    DAILY_LIMIT = "daily_limit"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"


class JournalError(Exception):
    """Base class for every failure the journal reports to its callers."""

    category: ErrorCategory = ErrorCategory.VALIDATION

    def __init__(self, message: str, category: Optional[ErrorCategory] = None) -> None:
        self.message = message
        if category is not None:
            self.category = category
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(JournalError):
    """A required field is missing or malformed."""

    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, fields: Optional[list[str]] = None) -> None:
        self.fields = fields or []
        super().__init__(message)


class DailyLimitExceeded(JournalError):
    category = ErrorCategory.DAILY_LIMIT

    def __init__(self, trade_date: str, limit: int) -> None:
        self.trade_date = trade_date
        self.limit = limit
        super().__init__(f"Maximum {limit} trades per day reached for {trade_date}")


class NotFound(JournalError):
    category = ErrorCategory.NOT_FOUND

    def __init__(self, kind: str, record_id: int) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} {record_id} not found")


class PersistenceError(JournalError):
    """Storage read or write failed."""

    category = ErrorCategory.PERSISTENCE
