"""Tests for the weighted cent distributor."""

import random

import pytest

from fundcalc.calculator import distribute_cents_proportional_by_weight


class TestExactSum:
    """Results always add back up to the requested cents."""

    def test_three_two_one_weights(self):
        """1001 over 3:2:1 rounds to 1002, the largest weight gives a cent back."""
        result = distribute_cents_proportional_by_weight([(1, 3), (2, 2), (3, 1)], 1001)
        assert result == {1: 500, 2: 334, 3: 167}
        assert sum(result.values()) == 1001

    def test_mapping_items(self):
        """Items may be mappings with id and weight keys."""
        items = [{"id": 1, "weight": 3}, {"id": 2, "weight": 2}, {"id": 3, "weight": 1}]
        assert sum(distribute_cents_proportional_by_weight(items, 1001).values()) == 1001

    def test_many_random_splits(self):
        rng = random.Random(20240501)
        for _ in range(300):
            count = rng.randint(1, 12)
            items = [(i, rng.choice([0, rng.uniform(0.001, 5000), rng.randint(1, 9)])) for i in range(count)]
            if all(w == 0 for _, w in items):
                items[0] = (0, 1)
            total = rng.randint(0, 10_000_000)
            result = distribute_cents_proportional_by_weight(items, total)
            assert sum(result.values()) == total
            assert all(v >= 0 for v in result.values())

    def test_zero_total(self):
        result = distribute_cents_proportional_by_weight([(1, 2), (2, 1)], 0)
        assert result == {1: 0, 2: 0}


class TestWeights:
    """Weight handling and residual placement."""

    def test_zero_weight_gets_nothing(self):
        assert distribute_cents_proportional_by_weight([(1, 0), (2, 5)], 100) == {1: 0, 2: 100}

    def test_negative_weight_gets_nothing(self):
        """Negative weights are ignored; the residual lands on the first largest weight."""
        result = distribute_cents_proportional_by_weight([(1, -3), (2, 1), (3, 1)], 101)
        assert result == {1: 0, 2: 50, 3: 51}

    def test_tie_goes_to_first_occurrence(self):
        result = distribute_cents_proportional_by_weight([("a", 1), ("b", 1), ("c", 1)], 100)
        assert result == {"a": 34, "b": 33, "c": 33}

    def test_proportional(self):
        result = distribute_cents_proportional_by_weight([(1, 1), (2, 3)], 10000)
        assert result == {1: 2500, 2: 7500}

    def test_string_weights(self):
        result = distribute_cents_proportional_by_weight([(1, "1.5"), (2, "0.5")], 400)
        assert result == {1: 300, 2: 100}


class TestDegenerateInputs:
    """Empty and all-zero item lists."""

    def test_empty_items(self):
        assert distribute_cents_proportional_by_weight([], 500) == {}

    def test_all_zero_weights_with_zero_total(self):
        assert distribute_cents_proportional_by_weight([(1, 0), (2, 0)], 0) == {1: 0, 2: 0}

    def test_all_zero_weights_first_item_absorbs(self):
        """With nothing to weigh by, the first item takes the whole amount."""
        assert distribute_cents_proportional_by_weight([(1, 0), (2, -1)], 250) == {1: 250, 2: 0}


class TestValidation:
    """Programming errors fail fast."""

    def test_negative_total(self):
        with pytest.raises(ValueError, match="must not be negative"):
            distribute_cents_proportional_by_weight([(1, 1)], -1)

    @pytest.mark.parametrize("total", [10.0, "10", True])
    def test_non_integer_total(self, total):
        with pytest.raises(ValueError, match="integer"):
            distribute_cents_proportional_by_weight([(1, 1)], total)

    def test_duplicate_ids(self):
        with pytest.raises(ValueError, match="Duplicate"):
            distribute_cents_proportional_by_weight([(1, 1), (1, 2)], 10)

    def test_non_finite_weight(self):
        with pytest.raises(ValueError, match="finite"):
            distribute_cents_proportional_by_weight([(1, float("nan"))], 10)


class TestNonNegativity:
    """Excess from rounding up never pushes an item below zero."""

    def test_many_half_cent_shares(self):
        """Twelve half-cent shares all round up; the excess comes back in input order."""
        items = [(i, 1) for i in range(12)]
        result = distribute_cents_proportional_by_weight(items, 6)
        assert sum(result.values()) == 6
        assert all(v >= 0 for v in result.values())
        assert result == {**{i: 0 for i in range(6)}, **{i: 1 for i in range(6, 12)}}

    def test_excess_taken_from_largest_weights_first(self):
        result = distribute_cents_proportional_by_weight([(1, 1), (2, 1), (3, 1.5)], 2)
        # Exact shares 0.57, 0.57, 0.86 all round to 1; the heaviest item gives one back
        assert result == {1: 1, 2: 1, 3: 0}
