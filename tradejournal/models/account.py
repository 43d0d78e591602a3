"""Account state and journal snapshot models."""

from pydantic import BaseModel, Field

from tradejournal.models.dream import DreamRecord
from tradejournal.models.trade import TradeRecord


class AccountState(BaseModel):
    """Starting baseline and the balance derived from it."""

    starting_balance: float = Field(..., description="User-set baseline")
    account_balance: float = Field(..., description="Starting balance plus total P&L")

    model_config = {"frozen": True}

    @property
    def growth(self) -> float:
        return self.account_balance - self.starting_balance

    @property
    def growth_percent(self) -> float:
        if self.starting_balance <= 0:
            return 0.0
        return self.growth / self.starting_balance * 100


class JournalSnapshot(BaseModel):
    """Read-only copy of the record store handed to analytics and reports.

    Trades and dreams keep the store's newest-first insertion order.
    """

    trades: tuple[TradeRecord, ...] = Field(default=())
    dreams: tuple[DreamRecord, ...] = Field(default=())
    starting_balance: float = Field(default=0.0)

    model_config = {"frozen": True}

    @property
    def account_balance(self) -> float:
        return self.starting_balance + sum(t.pnl for t in self.trades)

    @property
    def account(self) -> AccountState:
        return AccountState(
            starting_balance=self.starting_balance,
            account_balance=self.account_balance,
        )
