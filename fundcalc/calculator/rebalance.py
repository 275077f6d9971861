"""Per-entry rebalance deltas, in cents."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from fundcalc.calculator.models import CashFlowRequest, EntryId, FundEntry, coerce_entries
from fundcalc.utils.money import to_cents, to_decimal


def rebalance_base(total_amount: Decimal, cash_flow: CashFlowRequest) -> Decimal:
    """Portfolio value the targets are measured against.

    With no cash flow this is the current total, so rebalancing is a pure
    internal reshuffle whose deltas sum to zero. Otherwise it is the total
    after the deposit and withdrawal.
    """
    if cash_flow.is_empty:
        return total_amount
    return cash_flow.new_total(total_amount)


def calculate_rebalance_cents(
    entries: Iterable[FundEntry | Mapping[str, Any]],
    total_amount: Any,
    incremental_amount: Any = 0,
    redemption_amount: Any = 0,
) -> dict[EntryId, int]:
    """Cents to buy (+) or sell (-) per entry to land exactly on target.

    Each entry gets ``round(base * target_ratio * 100) - round(amount * 100)``.
    Subtotals should be built by summing these values, never by recomputing
    from aggregated ratios, so every level agrees to the cent.
    """
    normalized = coerce_entries(entries)
    cash_flow = CashFlowRequest(incremental_amount, redemption_amount)
    base = rebalance_base(to_decimal(total_amount, "total_amount"), cash_flow)
    return {entry.id: to_cents(base * entry.target_ratio) - to_cents(entry.amount) for entry in normalized}
