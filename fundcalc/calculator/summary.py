"""Portfolio table aggregation: per-entry figures, subtotals and totals.

Money subtotals are always sums of per-entry cents, so an entry row, its minor
subtotal, its major subtotal and the grand total can never disagree by a cent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from typing import Any, Optional

from fundcalc.calculator.engine import calculate_allocation_by_major_category, calculate_redemption_by_major_category
from fundcalc.calculator.grouping import group_by_major_category, group_by_minor_category
from fundcalc.calculator.models import (
    CashFlowRequest,
    CategorySubtotal,
    EntryCalculation,
    EntryId,
    FundEntry,
    PortfolioCalculation,
    PortfolioTotals,
    coerce_entries,
)
from fundcalc.calculator.rebalance import calculate_rebalance_cents
from fundcalc.config.categories import NO_MINOR_CATEGORY
from fundcalc.utils.money import HUNDRED, ZERO, from_cents, to_cents, to_decimal

logger = logging.getLogger(__name__)

DEFAULT_RATIO_TOLERANCE_PCT = Decimal("0.01")


def _ratio(part: Decimal, whole: Decimal) -> Decimal:
    return part / whole if whole > 0 else ZERO


def _subtotal(
    members: Sequence[FundEntry],
    total_amount: Decimal,
    rebalance_cents: Mapping[EntryId, int],
    allocation_cents: Mapping[EntryId, int],
    redemption_cents: Mapping[EntryId, int],
) -> CategorySubtotal:
    target_ratio = sum((e.target_ratio for e in members), ZERO)
    amount = sum((e.amount for e in members), ZERO)
    actual_ratio = _ratio(amount, total_amount)
    return CategorySubtotal(
        target_ratio=target_ratio,
        amount=amount,
        actual_ratio=actual_ratio,
        deviation=target_ratio - actual_ratio,
        rebalance=from_cents(sum(rebalance_cents[e.id] for e in members)),
        allocation=from_cents(sum(allocation_cents[e.id] for e in members)),
        redemption=from_cents(sum(redemption_cents[e.id] for e in members)),
    )


def calculate_portfolio(
    entries: Iterable[FundEntry | Mapping[str, Any]],
    cash_flow: CashFlowRequest | None = None,
    major_order: Sequence[str] | None = None,
    *,
    sort_by: str = "default",
    ascending: bool = False,
) -> PortfolioCalculation:
    """Compute every figure the portfolio table shows.

    The current total is the sum of entry amounts. Allocation and redemption
    are computed independently against the current holdings, so both may be
    requested at once.

    Minor subtotals are produced only for named minor categories holding more
    than one entry; a single-entry minor category would just repeat its row.

    Args:
        entries: FundEntry objects or mappings accepted by FundEntry.from_dict
        cash_flow: Incremental and redemption amounts (none by default)
        major_order: Major category display order
        sort_by: Entry order inside minor categories (see sort_entries)
        ascending: Sort direction for sort_by

    Returns:
        PortfolioCalculation with entries, minor_subtotals, subtotals, total and layout
    """
    normalized = coerce_entries(entries)
    cash_flow = cash_flow or CashFlowRequest()
    total_amount = sum((e.amount for e in normalized), ZERO)

    allocations = calculate_allocation_by_major_category(
        normalized, total_amount, cash_flow.incremental_amount, major_order
    )
    redemptions = calculate_redemption_by_major_category(
        normalized, total_amount, cash_flow.redemption_amount, major_order
    )
    allocation_cents = {k: to_cents(v) for k, v in allocations.items()}
    redemption_cents = {k: to_cents(v) for k, v in redemptions.items()}
    rebalance_cents = calculate_rebalance_cents(
        normalized, total_amount, cash_flow.incremental_amount, cash_flow.redemption_amount
    )

    entry_results: dict[EntryId, EntryCalculation] = {}
    for entry in normalized:
        actual_ratio = _ratio(entry.amount, total_amount)
        entry_results[entry.id] = EntryCalculation(
            actual_ratio=actual_ratio,
            deviation=entry.target_ratio - actual_ratio,
            deviation_total=_ratio(entry.target_ratio * total_amount - entry.amount, total_amount),
            rebalance=from_cents(rebalance_cents[entry.id]),
            allocation=allocations[entry.id],
            redemption=redemptions[entry.id],
        )

    minor_subtotals: dict[str, CategorySubtotal] = {}
    subtotals: dict[str, CategorySubtotal] = {}
    layout: dict[str, dict[str, list[EntryId]]] = {}
    for major_cat, major_entries in group_by_major_category(normalized, major_order).items():
        minor_groups = group_by_minor_category(major_entries, sort_by, ascending)
        layout[major_cat] = {minor: [e.id for e in members] for minor, members in minor_groups.items()}
        for minor_cat, minor_entries in minor_groups.items():
            if minor_cat == NO_MINOR_CATEGORY or len(minor_entries) <= 1:
                continue
            minor_subtotals[f"{major_cat}|{minor_cat}"] = _subtotal(
                minor_entries, total_amount, rebalance_cents, allocation_cents, redemption_cents
            )
        subtotals[major_cat] = _subtotal(
            major_entries, total_amount, rebalance_cents, allocation_cents, redemption_cents
        )

    total = PortfolioTotals(
        amount=total_amount,
        allocation=from_cents(sum(allocation_cents.values())),
        redemption=from_cents(sum(redemption_cents.values())),
        rebalance=from_cents(sum(rebalance_cents.values())),
        deviation_percent=sum((abs(s.deviation) for s in subtotals.values()), ZERO),
    )
    logger.debug(
        f"Calculated {len(entry_results)} entries in {len(subtotals)} categories "
        f"(allocation={total.allocation}, redemption={total.redemption})"
    )
    return PortfolioCalculation(
        entries=entry_results,
        minor_subtotals=minor_subtotals,
        subtotals=subtotals,
        total=total,
        layout=layout,
    )


def check_major_ratio_sum(
    calculation: PortfolioCalculation,
    tolerance_pct: Any = DEFAULT_RATIO_TOLERANCE_PCT,
) -> Optional[str]:
    """Check that major category targets add up to 100%.

    Saving a portfolio requires this; the calculator itself copes with any sum.

    Returns:
        Error message when the sum is off by more than ``tolerance_pct``
        percentage points, else None
    """
    tolerance = to_decimal(tolerance_pct, "tolerance_pct")
    sum_pct = sum((s.target_ratio for s in calculation.subtotals.values()), ZERO) * HUNDRED
    if abs(sum_pct - HUNDRED) > tolerance:
        return f"Major category target ratios sum to {sum_pct:.2f}%, must be 100.00% to save"
    return None
