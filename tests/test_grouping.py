"""Tests for category grouping and entry sorting."""

import pytest

from fundcalc.calculator import FundEntry, group_by_major_category, group_by_minor_category, sort_entries


def _entry(entry_id, major, minor=None, ratio="0", amount="0", name=""):
    return FundEntry(
        id=entry_id,
        major_category=major,
        minor_category=minor,
        target_ratio=ratio,
        amount=amount,
        fund_name=name,
    )


class TestGroupByMajorCategory:
    """Tests for major category bucketing."""

    def test_configured_order_first(self, major_order):
        entries = [_entry(1, "现金"), _entry(2, "债券"), _entry(3, "股票")]
        groups = group_by_major_category(entries, major_order)
        assert list(groups) == ["股票", "债券", "现金"]

    def test_unknown_categories_appended_in_first_seen_order(self, major_order):
        entries = [_entry(1, "REITs"), _entry(2, "股票"), _entry(3, "Crypto"), _entry(4, "REITs")]
        groups = group_by_major_category(entries, major_order)
        assert list(groups) == ["股票", "REITs", "Crypto"]
        assert [e.id for e in groups["REITs"]] == [1, 4]

    def test_bucket_keeps_input_order(self, major_order):
        entries = [_entry(3, "股票"), _entry(1, "债券"), _entry(2, "股票")]
        groups = group_by_major_category(entries, major_order)
        assert [e.id for e in groups["股票"]] == [3, 2]

    def test_empty_configured_categories_skipped(self, major_order):
        groups = group_by_major_category([_entry(1, "债券")], major_order)
        assert list(groups) == ["债券"]

    def test_no_order_uses_first_seen(self):
        entries = [_entry(1, "B"), _entry(2, "A"), _entry(3, "B")]
        assert list(group_by_major_category(entries)) == ["B", "A"]

    def test_empty_entries(self, major_order):
        assert group_by_major_category([], major_order) == {}


class TestGroupByMinorCategory:
    """Tests for minor category bucketing."""

    def test_missing_minor_uses_none_bucket(self):
        entries = [_entry(1, "股票", "A股"), _entry(2, "股票"), _entry(3, "股票", "A股"), _entry(4, "股票", "")]
        groups = group_by_minor_category(entries)
        assert list(groups) == ["A股", "__none__"]
        assert [e.id for e in groups["A股"]] == [1, 3]
        assert [e.id for e in groups["__none__"]] == [2, 4]

    def test_sorted_within_bucket(self):
        entries = [
            _entry(1, "股票", "A股", amount="100"),
            _entry(2, "股票", "A股", amount="300"),
            _entry(3, "股票", "A股", amount="200"),
        ]
        groups = group_by_minor_category(entries, sort_by="amount")
        assert [e.id for e in groups["A股"]] == [2, 3, 1]


class TestSortEntries:
    """Tests for display ordering."""

    @pytest.fixture
    def entries(self):
        return [
            _entry(1, "股票", ratio="0.2", amount="50", name="b"),
            _entry(2, "股票", ratio="0.1", amount="70", name="a"),
            _entry(3, "股票", ratio="0.2", amount="60", name="c"),
        ]

    def test_default_keeps_order(self, entries):
        assert [e.id for e in sort_entries(entries)] == [1, 2, 3]

    def test_default_follows_sort_index(self):
        entries = [
            FundEntry(id=1, major_category="股票", target_ratio="0.1", amount="1", sort_index=2),
            FundEntry(id=2, major_category="股票", target_ratio="0.1", amount="1", sort_index=0),
            FundEntry(id=3, major_category="股票", target_ratio="0.1", amount="1", sort_index=2),
            FundEntry(id=4, major_category="股票", target_ratio="0.1", amount="1", sort_index=1),
        ]
        assert [e.id for e in sort_entries(entries)] == [2, 4, 1, 3]
        assert [e.id for e in sort_entries(entries, ascending=True)] == [2, 4, 1, 3]

    def test_target_ratio_descending_is_stable(self, entries):
        assert [e.id for e in sort_entries(entries, "target_ratio")] == [1, 3, 2]

    def test_target_ratio_ascending(self, entries):
        assert [e.id for e in sort_entries(entries, "target_ratio", ascending=True)] == [2, 1, 3]

    def test_amount(self, entries):
        assert [e.id for e in sort_entries(entries, "amount")] == [2, 3, 1]

    def test_fund_name(self, entries):
        assert [e.id for e in sort_entries(entries, "fund_name", ascending=True)] == [2, 1, 3]
        assert [e.id for e in sort_entries(entries, "fund_name")] == [3, 1, 2]

    def test_does_not_mutate_input(self, entries):
        sort_entries(entries, "amount")
        assert [e.id for e in entries] == [1, 2, 3]

    def test_unknown_key(self, entries):
        with pytest.raises(ValueError, match="Unknown sort key"):
            sort_entries(entries, "sort_index")
