"""
fundcalc Utilities Package

Shared helpers for money parsing and process-wide singletons.
"""

from fundcalc.utils.decorators import singleton
from fundcalc.utils.money import (
    from_cents,
    parse_money,
    parse_ratio,
    require_non_negative,
    round_half_up,
    to_cents,
    to_decimal,
)

__all__ = [
    "singleton",
    "from_cents",
    "parse_money",
    "parse_ratio",
    "require_non_negative",
    "round_half_up",
    "to_cents",
    "to_decimal",
]
