"""
Settings - Single source of truth for application configuration.

Usage:
    settings = Settings()
    order = await settings.get('major_order')
    await settings.set('ratio_sum_tolerance_pct', 0.05)
    all_settings = await settings.all()

Values start from DEFAULTS and can be overridden per process with
FUNDCALC_<KEY> environment variables, read and validated by EnvSettings.
"""

import logging
from copy import deepcopy
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fundcalc.config.categories import DEFAULT_MAJOR_ORDER
from fundcalc.utils.decorators import singleton

logger = logging.getLogger(__name__)

ENV_PREFIX = "FUNDCALC_"

# Default settings - applied on first run, then adjustable at runtime
DEFAULTS = {
    # Major category display order
    "major_order": list(DEFAULT_MAJOR_ORDER),
    # Allowed gap between the major target ratio sum and 100% (percentage points)
    "ratio_sum_tolerance_pct": 0.01,
    # Entry ordering inside minor categories: default, target_ratio, amount, fund_name
    "entry_sort_by": "default",
    "entry_sort_asc": False,
}


class EnvSettings(BaseSettings):
    """Overrides loaded from FUNDCALC_<KEY> environment variables.

    Unset variables stay None and leave the corresponding default alone.
    ``major_order`` is given as a JSON list.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)

    major_order: Optional[list[str]] = None
    ratio_sum_tolerance_pct: Optional[float] = Field(None, ge=0)
    entry_sort_by: Optional[Literal["default", "target_ratio", "amount", "fund_name"]] = None
    entry_sort_asc: Optional[bool] = None


def load_env_overrides() -> dict[str, Any]:
    """Collect the FUNDCALC_<KEY> overrides that are set.

    Raises:
        pydantic.ValidationError: If a variable does not parse to its setting's type
    """
    return EnvSettings().model_dump(exclude_none=True)


@singleton
class Settings:
    """Single source of truth for application settings."""

    _values: dict[str, Any]

    def __init__(self):
        self._values = {}

    async def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        value = self._values.get(key)
        if value is None:
            return default if default is not None else deepcopy(DEFAULTS.get(key))
        return deepcopy(value)

    async def set(self, key: str, value: Any) -> None:
        """Set a setting value."""
        self._values[key] = value

    async def all(self) -> dict:
        """Get all settings with defaults applied."""
        result = deepcopy(DEFAULTS)
        result.update(deepcopy(self._values))
        return result

    async def init_defaults(self) -> None:
        """Initialize default settings if not already set, then apply environment overrides."""
        for key, value in DEFAULTS.items():
            if self._values.get(key) is None:
                self._values[key] = deepcopy(value)
        overrides = load_env_overrides()
        if overrides:
            logger.info(f"Applying environment overrides for: {sorted(overrides)}")
            self._values.update(overrides)
