"""Weighted split of an integer cent amount with an exact-sum guarantee."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any, Union

from fundcalc.calculator.models import EntryId
from fundcalc.utils.money import ZERO, round_half_up, to_decimal

WeightedItem = Union[tuple[EntryId, Any], Mapping[str, Any]]


def _normalize_items(items: Iterable[WeightedItem]) -> list[tuple[EntryId, Decimal]]:
    normalized = []
    seen: set = set()
    for item in items:
        if isinstance(item, Mapping):
            item_id, weight = item["id"], item["weight"]
        else:
            item_id, weight = item
        if item_id in seen:
            raise ValueError(f"Duplicate item id: {item_id!r}")
        seen.add(item_id)
        normalized.append((item_id, to_decimal(weight, "weight")))
    return normalized


def distribute_cents_proportional_by_weight(items: Iterable[WeightedItem], total_cents: int) -> dict[EntryId, int]:
    """Split ``total_cents`` across items in proportion to their weights.

    Each positive-weight item gets ``round_half_up(total_cents * weight / total_weight)``.
    Whatever the independent rounding leaves over (or takes too much) goes to the
    item with the largest weight, first occurrence winning ties, so the result
    always sums to ``total_cents``. Items with weight <= 0 get 0. If handing back
    an excess would push that item below zero, the excess is taken from the
    largest weights downward instead.

    When no item has a positive weight the first item takes the whole amount;
    an empty item list yields an empty mapping.

    Args:
        items: ``(id, weight)`` pairs or mappings with ``id`` and ``weight`` keys
        total_cents: Non-negative amount to split

    Returns:
        dict: id -> cents, in input order

    Raises:
        ValueError: If total_cents is negative or not an integer
    """
    if isinstance(total_cents, bool) or not isinstance(total_cents, int):
        raise ValueError(f"total_cents must be an integer, got {total_cents!r}")
    if total_cents < 0:
        raise ValueError(f"total_cents must not be negative, got {total_cents}")

    weighted = _normalize_items(items)
    result = {item_id: 0 for item_id, _ in weighted}
    if not weighted:
        return result

    total_weight = sum((w for _, w in weighted if w > 0), ZERO)
    if total_weight <= 0:
        if total_cents:
            result[weighted[0][0]] = total_cents
        return result

    allocated = 0
    largest_id = None
    largest_weight = ZERO
    for item_id, weight in weighted:
        if weight <= 0:
            continue
        share = round_half_up(total_cents * weight / total_weight)
        result[item_id] = share
        allocated += share
        if largest_id is None or weight > largest_weight:
            largest_id, largest_weight = item_id, weight

    diff = total_cents - allocated
    if result[largest_id] + diff >= 0:
        result[largest_id] += diff
        return result

    # Many shares rounded up at once: give the excess back from the largest
    # weights down so no item goes negative
    remaining = -diff
    for item_id, _ in sorted(weighted, key=lambda pair: pair[1], reverse=True):
        taken = min(result[item_id], remaining)
        result[item_id] -= taken
        remaining -= taken
        if not remaining:
            break
    return result
