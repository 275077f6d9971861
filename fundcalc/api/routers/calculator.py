"""Calculator API routes for allocation, redemption and rebalance figures."""

import logging
from decimal import Decimal
from typing import Any, Literal, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing_extensions import Annotated

from fundcalc.api.dependencies import CommonDependencies, get_common_deps
from fundcalc.calculator import (
    CashFlowRequest,
    FundEntry,
    calculate_allocation_by_major_category,
    calculate_portfolio,
    calculate_rebalance_cents,
    calculate_redemption_by_major_category,
    check_major_ratio_sum,
)
from fundcalc.utils.money import from_cents

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calculator", tags=["calculator"])


class EntryPayload(BaseModel):
    """One fund entry as sent by the portfolio page."""

    id: Union[int, str]
    major_category: str = Field(..., min_length=1)
    minor_category: Optional[str] = None
    fund_name: str = ""
    target_ratio: Decimal = Field(..., ge=0, le=1)
    amount: Decimal = Field(..., ge=0)
    sort_index: int = 0

    def to_entry(self) -> FundEntry:
        return FundEntry(
            id=self.id,
            major_category=self.major_category,
            target_ratio=self.target_ratio,
            amount=self.amount,
            minor_category=self.minor_category or None,
            fund_name=self.fund_name,
            sort_index=self.sort_index,
        )


class CalculationRequest(BaseModel):
    """Entries plus the cash flow to apply."""

    entries: list[EntryPayload]
    total_amount: Optional[Decimal] = Field(None, description="Defaults to the sum of entry amounts")
    incremental_amount: Decimal = Field(Decimal(0), ge=0)
    redemption_amount: Decimal = Field(Decimal(0), ge=0)
    major_order: Optional[list[str]] = None


class SummaryRequest(CalculationRequest):
    """Calculation request with display ordering."""

    sort_by: Optional[Literal["default", "target_ratio", "amount", "fund_name"]] = None
    ascending: Optional[bool] = None


async def _major_order(request: CalculationRequest, deps: CommonDependencies) -> list[str]:
    if request.major_order is not None:
        return request.major_order
    return await deps.settings.get("major_order")


def _entries(request: CalculationRequest) -> tuple[list[FundEntry], Decimal]:
    entries = [payload.to_entry() for payload in request.entries]
    total = request.total_amount
    if total is None:
        total = sum((e.amount for e in entries), Decimal(0))
    return entries, total


def _render(results: dict) -> dict[str, Any]:
    return {
        "results": {str(k): float(v) for k, v in results.items()},
        "total": float(sum(results.values(), Decimal(0))),
    }


def _bad_request(e: ValueError) -> HTTPException:
    logger.warning(f"Rejected calculation request: {e}")
    return HTTPException(status_code=400, detail=str(e))


@router.post("/allocation")
async def allocate(
    request: CalculationRequest,
    deps: Annotated[CommonDependencies, Depends(get_common_deps)],
) -> dict[str, Any]:
    """Distribute the incremental amount toward underweight categories."""
    try:
        entries, total = _entries(request)
        results = calculate_allocation_by_major_category(
            entries, total, request.incremental_amount, await _major_order(request, deps)
        )
    except ValueError as e:
        raise _bad_request(e) from e
    return _render(results)


@router.post("/redemption")
async def redeem(
    request: CalculationRequest,
    deps: Annotated[CommonDependencies, Depends(get_common_deps)],
) -> dict[str, Any]:
    """Distribute the redemption amount, overweight categories first."""
    try:
        entries, total = _entries(request)
        results = calculate_redemption_by_major_category(
            entries, total, request.redemption_amount, await _major_order(request, deps)
        )
    except ValueError as e:
        raise _bad_request(e) from e
    return _render(results)


@router.post("/rebalance")
async def rebalance(request: CalculationRequest) -> dict[str, Any]:
    """Buy (+) / sell (-) amounts that put every entry exactly on target."""
    try:
        entries, total = _entries(request)
        cents = calculate_rebalance_cents(entries, total, request.incremental_amount, request.redemption_amount)
    except ValueError as e:
        raise _bad_request(e) from e
    return _render({k: from_cents(v) for k, v in cents.items()})


@router.post("/summary")
async def summary(
    request: SummaryRequest,
    deps: Annotated[CommonDependencies, Depends(get_common_deps)],
) -> dict[str, Any]:
    """Full portfolio table: entry figures, subtotals, totals and the target ratio check."""
    sort_by = request.sort_by or await deps.settings.get("entry_sort_by")
    ascending = request.ascending if request.ascending is not None else await deps.settings.get("entry_sort_asc")
    tolerance = await deps.settings.get("ratio_sum_tolerance_pct")
    try:
        entries, _ = _entries(request)
        calculation = calculate_portfolio(
            entries,
            CashFlowRequest(request.incremental_amount, request.redemption_amount),
            await _major_order(request, deps),
            sort_by=sort_by,
            ascending=bool(ascending),
        )
        ratio_error = check_major_ratio_sum(calculation, tolerance)
    except ValueError as e:
        raise _bad_request(e) from e

    return {**calculation.to_dict(), "ratio_error": ratio_error}
