"""Tests for calculator input models."""

from decimal import Decimal

import pytest

from fundcalc.calculator import CashFlowRequest, FundEntry
from fundcalc.calculator.models import coerce_entries


class TestFundEntry:
    """Tests for FundEntry parsing."""

    def test_amount_held_to_cents(self):
        entry = FundEntry(id=1, major_category="股票", target_ratio="0.3333", amount="100.005")
        assert entry.amount == Decimal("100.01")
        assert entry.target_ratio == Decimal("0.3333")

    def test_from_dict_defaults(self):
        entry = FundEntry.from_dict({"id": 7, "amount": "1,234.5"})
        assert entry.major_category == ""
        assert entry.target_ratio == 0
        assert entry.amount == Decimal("1234.50")
        assert entry.minor_category is None
        assert entry.sort_index == 0

    def test_from_dict_blank_minor_is_none(self):
        entry = FundEntry.from_dict({"id": 1, "major_category": "股票", "minor_category": "", "sort_index": "3"})
        assert entry.minor_category is None
        assert entry.sort_index == 3

    def test_from_dict_requires_id(self):
        with pytest.raises(ValueError, match="id is required"):
            FundEntry.from_dict({"major_category": "股票", "amount": 10})

    def test_invalid_amount(self):
        with pytest.raises(ValueError, match="amount"):
            FundEntry(id=1, major_category="股票", target_ratio=0, amount="abc")


class TestCoerceEntries:
    """Tests for entry normalization."""

    def test_mixed_inputs(self):
        entries = coerce_entries([FundEntry(id=1, major_category="股票", target_ratio=0, amount=0), {"id": 2}])
        assert [e.id for e in entries] == [1, 2]

    def test_duplicate_ids(self):
        with pytest.raises(ValueError, match="Duplicate entry id"):
            coerce_entries([{"id": "a"}, {"id": "a"}])


class TestCashFlowRequest:
    """Tests for CashFlowRequest."""

    def test_new_total(self):
        flow = CashFlowRequest("100", "30.5")
        assert not flow.is_empty
        assert flow.new_total(Decimal(1000)) == Decimal("1069.5")

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="incremental_amount must not be negative"):
            CashFlowRequest(incremental_amount=-1)
