"""Tests for the journal data models."""

from datetime import date, datetime

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from tradejournal.analytics.metrics import Outcome, classify
from tradejournal.models import (
    DEFAULT_NOTES,
    AccountState,
    DreamRecord,
    JournalSnapshot,
    ReportDocument,
    ReportEntry,
    ReportSection,
    TradeInput,
    TradeRecord,
)


def make_input(**overrides) -> dict:
    values = {
        "date": "2024-01-05",
        "time": "09:30",
        "trade_number": 1,
        "pair": "EURUSD",
        "strategy": "Breakout",
        "pnl": 100.0,
        "notes": "Clean entry",
    }
    values.update(overrides)
    return values


class TestTradeInput:
    def test_valid_input(self):
        trade = TradeInput.model_validate(make_input())

        assert trade.date == date(2024, 1, 5)
        assert trade.time == "09:30"
        assert trade.trade_number == 1

    def test_accepts_camel_case_alias(self):
        values = make_input()
        values["tradeNumber"] = values.pop("trade_number")

        assert TradeInput.model_validate(values).trade_number == 1

    @pytest.mark.parametrize("notes", ["", "   ", None])
    def test_blank_notes_get_default(self, notes):
        assert TradeInput.model_validate(make_input(notes=notes)).notes == DEFAULT_NOTES

    def test_missing_notes_get_default(self):
        values = make_input()
        del values["notes"]

        assert TradeInput.model_validate(values).notes == DEFAULT_NOTES

    @pytest.mark.parametrize("field", ["date", "time", "trade_number", "pair", "strategy", "pnl"])
    def test_missing_required_field_rejected(self, field):
        values = make_input()
        del values[field]

        with pytest.raises(ValidationError):
            TradeInput.model_validate(values)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"pnl": "abc"},
            {"pnl": float("nan")},
            {"pnl": float("inf")},
            {"trade_number": 0},
            {"trade_number": 5},
            {"pair": "   "},
            {"strategy": ""},
            {"time": "25:00"},
            {"time": "noon"},
            {"date": "2024-13-01"},
        ],
    )
    def test_malformed_field_rejected(self, overrides):
        with pytest.raises(ValidationError):
            TradeInput.model_validate(make_input(**overrides))

    def test_labels_are_stripped(self):
        trade = TradeInput.model_validate(make_input(pair="  GBPUSD ", strategy=" Scalp"))

        assert trade.pair == "GBPUSD"
        assert trade.strategy == "Scalp"

    def test_numeric_string_pnl_accepted(self):
        assert TradeInput.model_validate(make_input(pnl="-45.5")).pnl == -45.5

    def test_frozen(self):
        trade = TradeInput.model_validate(make_input())

        with pytest.raises(ValidationError):
            trade.pnl = 1.0


class TestTradeRecord:
    def test_dump_uses_camel_case(self):
        record = TradeRecord(id=1, **TradeInput.model_validate(make_input()).model_dump())
        dumped = record.model_dump(mode="json", by_alias=True)

        assert dumped["tradeNumber"] == 1
        assert dumped["date"] == "2024-01-05"
        assert "trade_number" not in dumped

    @given(pnl=st.floats(min_value=-1e6, max_value=1e6, allow_nan=False))
    @settings(max_examples=50)
    def test_outcome_follows_pnl_sign(self, pnl: float):
        record = TradeRecord(id=1, **TradeInput.model_validate(make_input(pnl=pnl)).model_dump())
        expected = Outcome.WIN if pnl > 0 else Outcome.LOSS if pnl < 0 else Outcome.BREAK_EVEN

        assert classify(record.pnl) == expected

    @pytest.mark.parametrize("field", ["pnl", "trade_number"])
    def test_booleans_are_not_numbers(self, field: str):
        with pytest.raises(ValidationError):
            TradeInput.model_validate(make_input(**{field: True}))

    def test_sort_key(self):
        record = TradeRecord(id=7, **TradeInput.model_validate(make_input()).model_dump())

        assert record.sort_key == ("2024-01-05", "09:30")

    def test_id_must_be_positive(self):
        with pytest.raises(ValidationError):
            TradeRecord(id=0, **TradeInput.model_validate(make_input()).model_dump())


class TestDreamRecord:
    def test_content_stripped(self):
        dream = DreamRecord(id=1, date=date(2024, 1, 5), content="  Own a boat  ")

        assert dream.content == "Own a boat"

    @pytest.mark.parametrize("content", ["", "   "])
    def test_blank_content_rejected(self, content):
        with pytest.raises(ValidationError):
            DreamRecord(id=1, date=date(2024, 1, 5), content=content)


class TestAccountModels:
    def test_growth(self):
        account = AccountState(starting_balance=10000.0, account_balance=10500.0)

        assert account.growth == pytest.approx(500.0)
        assert account.growth_percent == pytest.approx(5.0)

    def test_growth_percent_zero_without_baseline(self):
        account = AccountState(starting_balance=0.0, account_balance=250.0)

        assert account.growth == pytest.approx(250.0)
        assert account.growth_percent == 0.0

    def test_snapshot_balance(self):
        trades = tuple(
            TradeRecord(id=i + 1, **TradeInput.model_validate(make_input(pnl=pnl)).model_dump())
            for i, pnl in enumerate([100.0, -50.0])
        )
        snapshot = JournalSnapshot(trades=trades, starting_balance=10000.0)

        assert snapshot.account_balance == pytest.approx(10050.0)
        assert snapshot.account.growth == pytest.approx(50.0)


class TestReportDocument:
    def test_lookup_and_flatten(self):
        document = ReportDocument(
            scope="today",
            title="Today",
            generated_at=datetime(2024, 1, 5, 14, 30, 0),
            sections=[
                ReportSection(
                    title="Summary",
                    entries=[ReportEntry(label="Win Rate", value="50.0%")],
                    lines=["Trade 1"],
                )
            ],
            filename="today-stats-2024-01-05.pdf",
        )

        assert document.generated_line == "Generated: 2024-01-05 14:30:00"
        assert document.section("Summary").get("Win Rate") == "50.0%"
        assert document.section("Summary").get("Missing") is None
        assert document.section("Missing") is None
        assert document.to_dict() == {"Summary": {"Win Rate": "50.0%", "lines": ["Trade 1"]}}
