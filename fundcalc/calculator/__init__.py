"""Calculator package for cent-exact portfolio cash-flow distribution.

This package provides components for:
- Splitting integer cents by weight with an exact sum
- Grouping entries by major and minor category
- Allocating deposits and redemptions toward target ratios
- Rebalance deltas and portfolio table subtotals
"""

from fundcalc.calculator.distributor import distribute_cents_proportional_by_weight
from fundcalc.calculator.engine import (
    Direction,
    calculate_allocation_by_major_category,
    calculate_redemption_by_major_category,
)
from fundcalc.calculator.grouping import group_by_major_category, group_by_minor_category, sort_entries
from fundcalc.calculator.models import CashFlowRequest, FundEntry, PortfolioCalculation
from fundcalc.calculator.rebalance import calculate_rebalance_cents
from fundcalc.calculator.summary import calculate_portfolio, check_major_ratio_sum

__all__ = [
    "CashFlowRequest",
    "Direction",
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
