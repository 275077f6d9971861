"""
Categories Configuration - Single source of truth for major category defaults.

The default order is the one the portfolio table uses. Categories found in a
portfolio but missing here are shown after these, in first-seen order.
"""

# Default major category order
DEFAULT_MAJOR_ORDER = [
    "股票",
    "债券",
    "大宗商品",
    "现金",
]

# Major category display labels (for frontend select options)
MAJOR_CATEGORY_LABELS = {
    "股票": "Equity",
    "债券": "Bond",
    "大宗商品": "Commodity",
    "现金": "Cash",
}

# Grouping key for entries without a minor category
NO_MINOR_CATEGORY = "__none__"

# Accepted entry sort keys
ENTRY_SORT_KEYS = ("default", "target_ratio", "amount", "fund_name")


def get_major_category_options(major_order: list[str] | None = None) -> list[dict]:
    """
    Get major category options formatted for frontend select components.

    Args:
        major_order: Category order to render (defaults to DEFAULT_MAJOR_ORDER)

    Returns:
        List of dicts with 'value' and 'label' keys
    """
    order = DEFAULT_MAJOR_ORDER if major_order is None else major_order
    return [{"value": cat, "label": MAJOR_CATEGORY_LABELS.get(cat, cat)} for cat in order]
