"""
fundcalc - Cent-exact fund portfolio allocation calculator.

Usage:
    from fundcalc import FundEntry, calculate_allocation_by_major_category

    entries = [
        FundEntry(id=1, major_category="股票", target_ratio="0.6", amount="600"),
        FundEntry(id=2, major_category="债券", target_ratio="0.4", amount="400"),
    ]
    allocation = calculate_allocation_by_major_category(entries, 1000, "123.45")
    # {1: Decimal("74.07"), 2: Decimal("49.38")}
"""

from fundcalc.calculator import (
    CashFlowRequest,
    FundEntry,
    PortfolioCalculation,
    calculate_allocation_by_major_category,
    calculate_portfolio,
    calculate_rebalance_cents,
    calculate_redemption_by_major_category,
    check_major_ratio_sum,
    distribute_cents_proportional_by_weight,
    group_by_major_category,
    group_by_minor_category,
    sort_entries,
)
from fundcalc.settings import Settings

__all__ = [
    "Settings",
    "CashFlowRequest",
    "FundEntry",
    "PortfolioCalculation",
    "calculate_allocation_by_major_category",
    "calculate_portfolio",
    "calculate_rebalance_cents",
    "calculate_redemption_by_major_category",
    "check_major_ratio_sum",
    "distribute_cents_proportional_by_weight",
    "group_by_major_category",
    "group_by_minor_category",
    "sort_entries",
]
