"""Trade data models."""

from datetime import date as date_type
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

MAX_TRADES_PER_DAY = 4
DEFAULT_NOTES = "No notes provided"


class TradeInput(BaseModel):
    """Candidate values for creating or replacing a trade."""

    date: date_type = Field(..., description="Trade date")
    time: str = Field(..., description="Wall-clock time of the trade (HH:MM)")
    trade_number: int = Field(
        ...,
        ge=1,
        le=MAX_TRADES_PER_DAY,
        alias="tradeNumber",
        description="Ordinal slot within the trading day",
    )
    pair: str = Field(..., min_length=1, description="Instrument traded")
    strategy: str = Field(..., min_length=1, description="Strategy label")
    pnl: float = Field(..., allow_inf_nan=False, description="Realized P&L")
    notes: str = Field(default=DEFAULT_NOTES, description="Trade notes")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("trade_number", "pnl", mode="before")
    @classmethod
    def _reject_bool(cls, value):
        if isinstance(value, bool):
            raise ValueError("must be a number")
        return value

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        value = value.strip()
        try:
            parsed = datetime.strptime(value, "%H:%M")
        except ValueError:
            raise ValueError("time must be HH:MM") from None
        return parsed.strftime("%H:%M")

    @field_validator("pair", "strategy")
    @classmethod
    def _strip_label(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("notes", mode="before")
    @classmethod
    def _default_notes(cls, value: Optional[str]) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_NOTES
        return value


class TradeRecord(TradeInput):
    """A stored trade."""

    id: int = Field(..., gt=0, description="Unique record ID")

    @property
    def sort_key(self) -> tuple[str, str]:
        """Chronological ordering key (ISO date, HH:MM)."""
        return (self.date.isoformat(), self.time)
