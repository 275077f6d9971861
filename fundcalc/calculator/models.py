"""Data models for the calculator package."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional, Union

from fundcalc.utils.money import ZERO, parse_money, parse_ratio, require_non_negative

EntryId = Union[int, str]


@dataclass(frozen=True)
class FundEntry:
    """One holding line in a portfolio."""

    id: EntryId
    major_category: str
    target_ratio: Decimal  # Fraction of the whole portfolio (0.35 = 35%)
    amount: Decimal  # Current holding value
    minor_category: Optional[str] = None  # Display subtotals only
    fund_name: str = ""
    sort_index: int = 0  # Stored position; orders entries under the "default" sort

    def __post_init__(self):
        object.__setattr__(self, "target_ratio", parse_ratio(self.target_ratio))
        object.__setattr__(self, "amount", parse_money(self.amount, "amount"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FundEntry":
        """Build an entry from a plain mapping (JSON payload, database row).

        Only ``id`` is required. A missing major category groups the entry
        under the empty name.
        """
        if data.get("id") is None:
            raise ValueError(f"Entry id is required: {dict(data)!r}")
        return cls(
            id=data["id"],
            major_category=data.get("major_category") or "",
            target_ratio=data.get("target_ratio", 0),
            amount=data.get("amount", 0),
            minor_category=data.get("minor_category") or None,
            fund_name=data.get("fund_name") or "",
            sort_index=int(data.get("sort_index") or 0),
        )


def coerce_entries(entries: Iterable[FundEntry | Mapping[str, Any]]) -> list[FundEntry]:
    """Normalize entries to FundEntry objects and reject duplicate ids.

    Raises:
        ValueError: If two entries share an id or a field fails to parse
    """
    result = []
    seen: set = set()
    for entry in entries:
        if not isinstance(entry, FundEntry):
            entry = FundEntry.from_dict(entry)
        if entry.id in seen:
            raise ValueError(f"Duplicate entry id: {entry.id!r}")
        seen.add(entry.id)
        result.append(entry)
    return result


@dataclass(frozen=True)
class CashFlowRequest:
    """Cash moving in (incremental) and out (redemption) of the portfolio.

    Both sides are independent and may be non-zero in the same calculation.
    """

    incremental_amount: Decimal = ZERO
    redemption_amount: Decimal = ZERO

    def __post_init__(self):
        object.__setattr__(
            self, "incremental_amount", require_non_negative(self.incremental_amount, "incremental_amount")
        )
        object.__setattr__(self, "redemption_amount", require_non_negative(self.redemption_amount, "redemption_amount"))

    @property
    def is_empty(self) -> bool:
        return self.incremental_amount == 0 and self.redemption_amount == 0

    def new_total(self, total_amount: Decimal) -> Decimal:
        """Portfolio value after both cash flows are applied."""
        return total_amount + self.incremental_amount - self.redemption_amount


@dataclass
class EntryCalculation:
    """Per-entry figures shown in the portfolio table."""

    actual_ratio: Decimal
    deviation: Decimal  # Target - actual (positive = underweight)
    deviation_total: Decimal  # Gap to target measured against the current total
    rebalance: Decimal  # Buy (+) or sell (-) to reach target
    allocation: Decimal
    redemption: Decimal

    def to_dict(self) -> dict[str, float]:
        return {
            "actual_ratio": float(self.actual_ratio),
            "deviation": float(self.deviation),
            "deviation_total": float(self.deviation_total),
            "rebalance": float(self.rebalance),
            "allocation": float(self.allocation),
            "redemption": float(self.redemption),
        }


@dataclass
class CategorySubtotal:
    """Subtotal row for a major or minor category."""

    target_ratio: Decimal
    amount: Decimal
    actual_ratio: Decimal
    deviation: Decimal
    rebalance: Decimal
    allocation: Decimal
    redemption: Decimal

    def to_dict(self) -> dict[str, float]:
        return {
            "target_ratio": float(self.target_ratio),
            "amount": float(self.amount),
            "actual_ratio": float(self.actual_ratio),
            "deviation": float(self.deviation),
            "rebalance": float(self.rebalance),
            "allocation": float(self.allocation),
            "redemption": float(self.redemption),
        }


@dataclass
class PortfolioTotals:
    """Grand total row."""

    amount: Decimal
    allocation: Decimal
    redemption: Decimal
    rebalance: Decimal
    deviation_percent: Decimal  # Sum of absolute major-category deviations

    def to_dict(self) -> dict[str, float]:
        return {
            "amount": float(self.amount),
            "allocation": float(self.allocation),
            "redemption": float(self.redemption),
            "rebalance": float(self.rebalance),
            "deviation_percent": float(self.deviation_percent),
        }


@dataclass
class PortfolioCalculation:
    """Everything the portfolio table needs for one set of inputs."""

    entries: dict[EntryId, EntryCalculation]
    minor_subtotals: dict[str, CategorySubtotal]  # Keyed "<major>|<minor>"
    subtotals: dict[str, CategorySubtotal]  # Keyed by major category, display order
    total: PortfolioTotals
    # Display order: major category -> minor category -> entry ids
    layout: dict[str, dict[str, list[EntryId]]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": {str(k): v.to_dict() for k, v in self.entries.items()},
            "minor_subtotals": {k: v.to_dict() for k, v in self.minor_subtotals.items()},
            "subtotals": {k: v.to_dict() for k, v in self.subtotals.items()},
            "total": self.total.to_dict(),
            "layout": {major: {minor: list(ids) for minor, ids in minors.items()} for major, minors in self.layout.items()},
        }
