"""
fundcalc Configuration Package

Contains configuration constants and defaults.
"""

from fundcalc.config.categories import (
    DEFAULT_MAJOR_ORDER,
    ENTRY_SORT_KEYS,
    MAJOR_CATEGORY_LABELS,
    NO_MINOR_CATEGORY,
)

__all__ = [
    "DEFAULT_MAJOR_ORDER",
    "ENTRY_SORT_KEYS",
    "MAJOR_CATEGORY_LABELS",
    "NO_MINOR_CATEGORY",
]
