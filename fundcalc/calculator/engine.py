"""Cash-flow distribution toward target ratios over a two-level category tree.

Deposits (allocation) and withdrawals (redemption) run through the same
routine:

1. Group entries by major category and work out how far each category is from
   its target once the cash flow has been applied.
2. Split the cash across the categories that need it, in proportion to that
   need, rounding each category's share to cents on its own.
3. Inside each category, split its cents across the entries that are furthest
   from their own targets (see :mod:`fundcalc.calculator.distributor`).
4. Reconcile the rounding residual on a single entry so the total is exact.

What differs between the two directions (the sign of the need, which entries
may take part, what to do when no category needs anything, and who absorbs
the residual) is captured in :class:`Direction`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from fundcalc.calculator.distributor import distribute_cents_proportional_by_weight
from fundcalc.calculator.grouping import group_by_major_category
from fundcalc.calculator.models import EntryId, FundEntry, coerce_entries
from fundcalc.utils.money import ZERO, from_cents, require_non_negative, to_cents, to_decimal

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Which way cash moves."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


@dataclass
class CategoryState:
    """A major category's position relative to its target after the cash flow."""

    name: str
    entries: list[FundEntry]
    target_ratio: Decimal  # Sum of member target ratios
    current_amount: Decimal
    need: Decimal  # Amount to add (deposit) or remove (withdrawal) to hit target


def build_category_states(
    groups: Mapping[str, list[FundEntry]],
    new_total: Decimal,
    direction: Direction,
) -> list[CategoryState]:
    """Compute each category's need against ``new_total``."""
    states = []
    for name, members in groups.items():
        target_ratio = sum((e.target_ratio for e in members), ZERO)
        current_amount = sum((e.amount for e in members), ZERO)
        target_amount = new_total * target_ratio
        if direction is Direction.DEPOSIT:
            need = target_amount - current_amount
        else:
            need = current_amount - target_amount
        states.append(CategoryState(name, members, target_ratio, current_amount, need))
    return states


def _amount_weights(entries: Iterable[FundEntry]) -> list[tuple[EntryId, Decimal]]:
    return [(e.id, e.amount) for e in entries if e.amount > 0]


def _deposit_weights(state: CategoryState, share: Decimal) -> list[tuple[EntryId, Decimal]]:
    # Only entries with a target take new cash; there is no fallback
    if state.target_ratio <= 0:
        return []
    amount_after = state.current_amount + share
    weights = []
    for entry in state.entries:
        if entry.target_ratio <= 0:
            continue
        need = amount_after * (entry.target_ratio / state.target_ratio) - entry.amount
        if need > 0:
            weights.append((entry.id, need))
    return weights


def _withdrawal_weights(state: CategoryState, share: Decimal) -> list[tuple[EntryId, Decimal]]:
    amount_after = state.current_amount - share
    weights = []
    for entry in state.entries:
        if entry.amount <= 0:
            continue
        relative = entry.target_ratio / state.target_ratio if state.target_ratio > 0 else ZERO
        need = entry.amount - amount_after * relative
        if need > 0:
            weights.append((entry.id, need))
    if not weights:
        logger.debug(f"No overweight entry in {state.name!r}, redeeming pro-rata by amount")
        return _amount_weights(state.entries)
    return weights


def absorb_residual(
    cents: dict[EntryId, int],
    residual: int,
    candidates: Sequence[FundEntry],
    rank: Callable[[FundEntry], Any],
) -> None:
    """Put a rounding residual on the highest-ranked candidate.

    A positive residual goes entirely to the first candidate with the highest
    rank. A negative one is taken from the highest-ranked candidates that still
    hold cents, never driving an entry below zero.
    """
    if residual == 0 or not candidates:
        return
    if residual > 0:
        target = max(candidates, key=rank)
        cents[target.id] += residual
        return

    remaining = -residual
    while remaining > 0:
        holders = [e for e in candidates if cents[e.id] > 0]
        if not holders:
            logger.warning(f"Could not take back {remaining} cents of over-allocation")
            return
        target = max(holders, key=rank)
        taken = min(cents[target.id], remaining)
        cents[target.id] -= taken
        remaining -= taken


def _liquidate(entries: Sequence[FundEntry], total_amount: Decimal) -> dict[EntryId, int]:
    """Redeem every holding in full, reconciled to ``total_amount``."""
    cents = {entry.id: 0 for entry in entries}
    holders = [e for e in entries if e.amount > 0]
    for entry in holders:
        cents[entry.id] = to_cents(entry.amount)
    residual = to_cents(total_amount) - sum(cents.values())
    absorb_residual(cents, residual, holders, rank=lambda e: e.amount)
    return cents


def distribute_cash_flow(
    entries: Sequence[FundEntry],
    total_amount: Decimal,
    cash_amount: Decimal,
    major_order: Sequence[str] | None,
    direction: Direction,
) -> dict[EntryId, int]:
    """Split ``cash_amount`` across entries, in cents, moving each category toward target.

    Callers are expected to have validated their inputs; this only decides how
    the cash is spread.

    Returns:
        dict: entry id -> cents (never negative)
    """
    cents = {entry.id: 0 for entry in entries}
    if cash_amount <= 0 or not entries:
        return cents

    if direction is Direction.DEPOSIT:
        new_total = total_amount + cash_amount
    else:
        new_total = total_amount - cash_amount
        if new_total <= 0:
            logger.debug("Redemption covers the whole portfolio, liquidating all holdings")
            return _liquidate(entries, total_amount)

    groups = group_by_major_category(entries, major_order)
    states = build_category_states(groups, new_total, direction)
    total_need = sum((s.need for s in states if s.need > 0), ZERO)

    if total_need > 0:
        shares = [(s, cash_amount * (s.need / total_need)) for s in states if s.need > 0]
        weigh = _deposit_weights if direction is Direction.DEPOSIT else _withdrawal_weights
    elif direction is Direction.DEPOSIT:
        logger.debug("No underweight category, leaving incremental amount unallocated")
        return cents
    else:
        logger.debug("No overweight category, redeeming pro-rata by current amount")
        shares = [(s, cash_amount * (s.current_amount / total_amount)) for s in states if s.current_amount > 0]
        weigh = lambda state, share: _amount_weights(state.entries)  # noqa: E731

    for state, share in shares:
        distributed = distribute_cents_proportional_by_weight(weigh(state, share), to_cents(share))
        for entry_id, value in distributed.items():
            cents[entry_id] += value

    residual = to_cents(cash_amount) - sum(cents.values())
    if residual:
        logger.debug(f"Reconciling {residual} cents of {direction.value} rounding residual")
    if direction is Direction.DEPOSIT:
        absorb_residual(cents, residual, entries, rank=lambda e: cents[e.id])
    else:
        absorb_residual(cents, residual, entries, rank=lambda e: e.amount)
    return cents


def _to_amounts(cents: Mapping[EntryId, int]) -> dict[EntryId, Decimal]:
    return {entry_id: from_cents(value) for entry_id, value in cents.items()}


def calculate_allocation_by_major_category(
    entries: Iterable[FundEntry | Mapping[str, Any]],
    total_amount: Any,
    incremental_amount: Any,
    major_order: Sequence[str] | None = None,
) -> dict[EntryId, Decimal]:
    """Distribute incoming cash toward underweight categories.

    Only categories below target after the deposit receive anything. When no
    category is underweight the cash is left unallocated and every entry maps
    to zero; the same happens when ``incremental_amount`` or ``total_amount``
    is not positive. Otherwise the results sum to ``incremental_amount`` to the
    cent.

    Args:
        entries: FundEntry objects or mappings accepted by FundEntry.from_dict
        total_amount: Current portfolio value
        incremental_amount: Cash being added (must not be negative)
        major_order: Category display order (does not affect the amounts)

    Returns:
        dict: entry id -> amount to buy, two decimals

    Raises:
        ValueError: On duplicate ids, non-finite numbers or a negative incremental amount
    """
    normalized = coerce_entries(entries)
    total = to_decimal(total_amount, "total_amount")
    incremental = require_non_negative(incremental_amount, "incremental_amount")
    if total <= 0:
        return {entry.id: from_cents(0) for entry in normalized}
    cents = distribute_cash_flow(normalized, total, incremental, major_order, Direction.DEPOSIT)
    return _to_amounts(cents)


def calculate_redemption_by_major_category(
    entries: Iterable[FundEntry | Mapping[str, Any]],
    total_amount: Any,
    redemption_amount: Any,
    major_order: Sequence[str] | None = None,
) -> dict[EntryId, Decimal]:
    """Distribute a withdrawal, drawing first on overweight categories.

    When the withdrawal meets or exceeds ``total_amount`` every holding is
    redeemed in full and the results sum to ``total_amount``. When no category
    is overweight the withdrawal is spread pro-rata by current amount.
    Otherwise the results sum to ``redemption_amount`` to the cent.

    Args:
        entries: FundEntry objects or mappings accepted by FundEntry.from_dict
        total_amount: Current portfolio value
        redemption_amount: Cash being withdrawn (must not be negative)
        major_order: Category display order (does not affect the amounts)

    Returns:
        dict: entry id -> amount to sell, two decimals

    Raises:
        ValueError: On duplicate ids, non-finite numbers or a negative redemption amount
    """
    normalized = coerce_entries(entries)
    total = to_decimal(total_amount, "total_amount")
    redemption = require_non_negative(redemption_amount, "redemption_amount")
    cents = distribute_cash_flow(normalized, total, redemption, major_order, Direction.WITHDRAWAL)
    return _to_amounts(cents)
