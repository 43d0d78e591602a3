"""Record store for trades, dreams and the account baseline.

The store owns the in-memory record lists for a session. Every mutation
rewrites the affected lists in full through the storage backend. A failed
write is reported through ``notify`` and logged; the in-memory state stays
authoritative for the rest of the session.
"""

import logging
import math
import time
from datetime import date, datetime
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from tradejournal.db.store import BaseStorage
from tradejournal.exceptions import (
    DailyLimitExceeded,
    NotFound,
    PersistenceError,
    ValidationError,
)
from tradejournal.models import (
    MAX_TRADES_PER_DAY,
    AccountState,
    DreamRecord,
    JournalSnapshot,
    TradeInput,
    TradeRecord,
)

logger = logging.getLogger(__name__)

TRADES_KEY = "trades"
DREAMS_KEY = "dreams"
ACCOUNT_BALANCE_KEY = "accountBalance"
STARTING_BALANCE_KEY = "startingBalance"

TradeCandidate = Union[TradeInput, dict[str, Any]]


class IdGenerator:
    """Millisecond-timestamp ids that never repeat within a store.

    Two records created in the same millisecond get consecutive ids.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._last = 0

    def observe(self, ids: list[int]) -> None:
        """Make sure future ids sort after every id already in use."""
        if ids:
            self._last = max(self._last, max(ids))

    def next_id(self) -> int:
        candidate = int(self._clock() * 1000)
        self._last = max(candidate, self._last + 1)
        return self._last


def _validation_error(e: PydanticValidationError) -> ValidationError:
    fields = []
    for err in e.errors():
        loc = err.get("loc") or ()
        if loc:
            fields.append(str(loc[0]))
    fields = sorted(set(fields))
    message = "Please fill all required fields"
    if fields:
        message += f" (invalid: {', '.join(fields)})"
    return ValidationError(message, fields=fields)


def _to_trade_input(candidate: TradeCandidate) -> TradeInput:
    if isinstance(candidate, TradeInput):
        return candidate
    try:
        return TradeInput.model_validate(candidate)
    except PydanticValidationError as e:
        raise _validation_error(e) from e


class RecordStore:
    """Owns trade and dream records plus the starting balance."""

    def __init__(
        self,
        storage: BaseStorage,
        default_starting_balance: float = 10000.0,
        notify: Optional[Callable[[str], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the store and load persisted records.

        Args:
            storage: Key/value persistence backend.
            default_starting_balance: Balance restored by clear().
            notify: Called with a user-facing message when a write fails.
            clock: Returns the current time. Defaults to datetime.now.
        """
        self.storage = storage
        self.default_starting_balance = default_starting_balance
        self._notify = notify
        self._clock = clock or datetime.now
        self._ids = IdGenerator(lambda: self._clock().timestamp())

        self._trades: list[TradeRecord] = []
        self._dreams: list[DreamRecord] = []
        self._starting_balance = 0.0
        self._cached_balance = 0.0
        self.load()

    # ==================== Loading ====================

    def load(self) -> None:
        """Read every list and scalar from storage.

        Missing or corrupt values load as empty lists and zero balances.
        """
        self._trades = self._load_records(TRADES_KEY, TradeRecord)
        self._dreams = self._load_records(DREAMS_KEY, DreamRecord)
        self._starting_balance = self._load_scalar(STARTING_BALANCE_KEY)
        self._cached_balance = self._load_scalar(ACCOUNT_BALANCE_KEY)
        self._ids.observe([t.id for t in self._trades] + [d.id for d in self._dreams])
        logger.info(
            "Loaded %d trades and %d dreams from storage",
            len(self._trades),
            len(self._dreams),
        )

    def _load_records(self, key: str, model: type) -> list:
        try:
            raw = self.storage.get_json(key)
        except (PersistenceError, ValueError) as e:
            logger.warning("Could not read %s, starting empty: %s", key, e)
            return []
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Stored %s is not a list, starting empty", key)
            return []
        try:
            return [model.model_validate(item) for item in raw]
        except PydanticValidationError as e:
            logger.warning("Stored %s is corrupt, starting empty: %s", key, e)
            return []

    def _load_scalar(self, key: str) -> float:
        try:
            raw = self.storage.get_json(key)
        except (PersistenceError, ValueError) as e:
            logger.warning("Could not read %s, using 0: %s", key, e)
            return 0.0
        if raw is None:
            return 0.0
        try:
            value = float(raw)
        except (TypeError, ValueError):
            logger.warning("Stored %s is not a number, using 0", key)
            return 0.0
        return value if math.isfinite(value) else 0.0

    # ==================== Saving ====================

    def _write(self, key: str, value: Any) -> bool:
        try:
            self.storage.set_json(key, value)
        except PersistenceError as e:
            logger.error("Error saving %s: %s", key, e)
            if self._notify:
                self._notify(f"Error saving {key} data")
            return False
        return True

    def _save_trades(self) -> None:
        self._write(
            TRADES_KEY,
            [t.model_dump(mode="json", by_alias=True) for t in self._trades],
        )
        self._save_balances()

    def _save_dreams(self) -> None:
        self._write(DREAMS_KEY, [d.model_dump(mode="json") for d in self._dreams])

    def _save_balances(self) -> None:
        self._cached_balance = self.account_balance
        self._write(ACCOUNT_BALANCE_KEY, self._cached_balance)
        self._write(STARTING_BALANCE_KEY, self._starting_balance)

    def save(self) -> None:
        """Persist every list and scalar."""
        self._save_trades()
        self._save_dreams()

    # ==================== Queries ====================

    @property
    def trades(self) -> tuple[TradeRecord, ...]:
        """All trades, newest insertion first."""
        return tuple(self._trades)

    @property
    def dreams(self) -> tuple[DreamRecord, ...]:
        """All dreams, newest insertion first."""
        return tuple(self._dreams)

    @property
    def starting_balance(self) -> float:
        return self._starting_balance

    @property
    def account_balance(self) -> float:
        """Starting balance plus the P&L of every trade."""
        return self._starting_balance + sum(t.pnl for t in self._trades)

    @property
    def cached_account_balance(self) -> float:
        """The balance last written to storage. Not authoritative."""
        return self._cached_balance

    def account_state(self) -> AccountState:
        return AccountState(
            starting_balance=self._starting_balance,
            account_balance=self.account_balance,
        )

    def snapshot(self) -> JournalSnapshot:
        """Return a read-only copy for analytics and reports."""
        return JournalSnapshot(
            trades=tuple(self._trades),
            dreams=tuple(self._dreams),
            starting_balance=self._starting_balance,
        )

    def get_trade(self, trade_id: int) -> TradeRecord:
        """Get a trade by ID.

        Raises:
            NotFound: If no trade has that ID.
        """
        return self._trades[self._trade_index(trade_id)]

    def get_dream(self, dream_id: int) -> DreamRecord:
        """Get a dream by ID.

        Raises:
            NotFound: If no dream has that ID.
        """
        return self._dreams[self._dream_index(dream_id)]

    def trades_on(self, day: date) -> list[TradeRecord]:
        """Trades recorded for a calendar date, in store order."""
        return [t for t in self._trades if t.date == day]

    def _trade_index(self, trade_id: int) -> int:
        for i, trade in enumerate(self._trades):
            if trade.id == trade_id:
                return i
        raise NotFound("trade", trade_id)

    def _dream_index(self, dream_id: int) -> int:
        for i, dream in enumerate(self._dreams):
            if dream.id == dream_id:
                return i
        raise NotFound("dream", dream_id)

    # ==================== Trades ====================

    def add_trade(self, candidate: TradeCandidate) -> TradeRecord:
        """Validate and store a new trade.

        Args:
            candidate: Trade fields, as a TradeInput or a mapping.

        Returns:
            The stored record with its assigned ID.

        Raises:
            ValidationError: If a required field is missing or malformed.
            DailyLimitExceeded: If the date already has the maximum trades.
        """
        trade_input = _to_trade_input(candidate)

        if len(self.trades_on(trade_input.date)) >= MAX_TRADES_PER_DAY:
            raise DailyLimitExceeded(trade_input.date.isoformat(), MAX_TRADES_PER_DAY)

        record = TradeRecord(id=self._ids.next_id(), **trade_input.model_dump())
        self._trades.insert(0, record)
        self._save_trades()
        logger.info("Added trade %d on %s (%+.2f)", record.id, record.date, record.pnl)
        return record

    def update_trade(self, trade_id: int, patch: TradeCandidate) -> TradeRecord:
        """Replace every mutable field of a trade.

        The daily limit is not rechecked, so moving a trade onto a full
        date is allowed.

        Raises:
            NotFound: If no trade has that ID.
            ValidationError: If the patch is malformed.
        """
        index = self._trade_index(trade_id)
        trade_input = _to_trade_input(patch)

        record = TradeRecord(id=trade_id, **trade_input.model_dump())
        self._trades[index] = record
        self._save_trades()
        logger.info("Updated trade %d", trade_id)
        return record

    def remove_trade(self, trade_id: int) -> TradeRecord:
        """Delete a trade.

        Raises:
            NotFound: If no trade has that ID.
        """
        index = self._trade_index(trade_id)
        record = self._trades.pop(index)
        self._save_trades()
        logger.info("Removed trade %d", trade_id)
        return record

    # ==================== Dreams ====================

    def add_dream(self, content: str, on: Optional[date] = None) -> DreamRecord:
        """Store a new dream dated today unless another date is given.

        Raises:
            ValidationError: If the content is blank.
        """
        try:
            record = DreamRecord(
                id=self._ids.next_id(),
                date=on or self._clock().date(),
                content=content,
            )
        except PydanticValidationError as e:
            raise ValidationError("Please write your dream first", fields=["content"]) from e

        self._dreams.insert(0, record)
        self._save_dreams()
        return record

    def update_dream(self, dream_id: int, content: str) -> DreamRecord:
        """Replace a dream's content in place, keeping its ID and date.

        Raises:
            NotFound: If no dream has that ID.
            ValidationError: If the new content is blank.
        """
        index = self._dream_index(dream_id)
        current = self._dreams[index]
        try:
            record = DreamRecord(id=current.id, date=current.date, content=content)
        except PydanticValidationError as e:
            raise ValidationError("Please write your dream first", fields=["content"]) from e

        self._dreams[index] = record
        self._save_dreams()
        return record

    def remove_dream(self, dream_id: int) -> DreamRecord:
        """Delete a dream.

        Raises:
            NotFound: If no dream has that ID.
        """
        index = self._dream_index(dream_id)
        record = self._dreams.pop(index)
        self._save_dreams()
        return record

    # ==================== Balance ====================

    def set_starting_balance(self, value: Any) -> float:
        """Set the user's baseline balance.

        Raises:
            ValidationError: Unless value is a finite number greater than 0.
        """
        try:
            balance = float(value)
        except (TypeError, ValueError):
            balance = float("nan")
        if not math.isfinite(balance) or balance <= 0:
            raise ValidationError(
                "Please enter a valid starting balance (greater than 0)",
                fields=["startingBalance"],
            )

        self._starting_balance = balance
        self._save_balances()
        logger.info("Starting balance set to %.2f", balance)
        return balance

    def clear(self) -> None:
        """Delete every trade and dream and reset both balances."""
        self._trades = []
        self._dreams = []
        self._starting_balance = self.default_starting_balance
        self.save()
        logger.info("Cleared all journal data")
