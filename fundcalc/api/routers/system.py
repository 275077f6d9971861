"""System, settings and category API routes."""

from typing import Any

from fastapi import APIRouter, Depends
from typing_extensions import Annotated

from fundcalc.api.dependencies import CommonDependencies, get_common_deps
from fundcalc.config.categories import get_major_category_options
from fundcalc.version import VERSION

router = APIRouter(prefix="/system", tags=["system"])
settings_router = APIRouter(prefix="/settings", tags=["settings"])
categories_router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/version")
async def version() -> dict[str, str]:
    """Return the application version."""
    return {"version": VERSION}


@settings_router.get("")
async def get_settings(
    deps: Annotated[CommonDependencies, Depends(get_common_deps)],
) -> dict[str, Any]:
    """Get all settings."""
    return await deps.settings.all()


@categories_router.get("")
async def get_categories(
    deps: Annotated[CommonDependencies, Depends(get_common_deps)],
) -> dict[str, Any]:
    """Get the configured major category order with display labels."""
    major_order = await deps.settings.get("major_order")
    return {
        "major_order": major_order,
        "options": get_major_category_options(major_order),
    }
