"""Ordered grouping of fund entries by major and minor category."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from fundcalc.calculator.models import FundEntry
from fundcalc.config.categories import ENTRY_SORT_KEYS, NO_MINOR_CATEGORY


def group_by_major_category(
    entries: Iterable[FundEntry],
    major_order: Sequence[str] | None = None,
) -> dict[str, list[FundEntry]]:
    """Bucket entries by major category.

    Buckets follow ``major_order`` first, then any other categories in the order
    they were first seen. Entries keep their relative input order inside a bucket.
    Configured categories with no entries are left out.
    """
    groups: dict[str, list[FundEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.major_category, []).append(entry)

    ordered: dict[str, list[FundEntry]] = {}
    for cat in major_order or []:
        if cat in groups and cat not in ordered:
            ordered[cat] = groups[cat]
    for cat, members in groups.items():
        if cat not in ordered:
            ordered[cat] = members
    return ordered


def sort_entries(
    entries: Sequence[FundEntry],
    sort_by: str = "default",
    ascending: bool = False,
) -> list[FundEntry]:
    """Order entries for display.

    ``default`` is the stored order, ascending ``sort_index`` whatever
    ``ascending`` says. ``target_ratio`` and ``amount`` sort numerically,
    ``fund_name`` alphabetically; all descending unless ``ascending``.
    Ties keep their input order.

    Raises:
        ValueError: If sort_by is not a known key
    """
    if sort_by not in ENTRY_SORT_KEYS:
        raise ValueError(f"Unknown sort key {sort_by!r}, expected one of {ENTRY_SORT_KEYS}")
    if sort_by == "default":
        return sorted(entries, key=lambda e: e.sort_index)
    if sort_by == "fund_name":
        key = lambda e: e.fund_name or ""  # noqa: E731
    else:
        key = lambda e: getattr(e, sort_by)  # noqa: E731
    return sorted(entries, key=key, reverse=not ascending)


def group_by_minor_category(
    entries: Iterable[FundEntry],
    sort_by: str = "default",
    ascending: bool = False,
) -> dict[str, list[FundEntry]]:
    """Bucket one major category's entries by minor category.

    Entries without a minor category share the ``"__none__"`` bucket. Buckets
    appear in first-seen order; entries inside each bucket are sorted with
    :func:`sort_entries`. Used for display subtotals only.
    """
    groups: dict[str, list[FundEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.minor_category or NO_MINOR_CATEGORY, []).append(entry)
    return {cat: sort_entries(members, sort_by, ascending) for cat, members in groups.items()}
