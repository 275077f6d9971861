"""API routers for fundcalc.

Each router handles a specific domain of the API.
"""

from fundcalc.api.routers.calculator import router as calculator_router
from fundcalc.api.routers.system import categories_router
from fundcalc.api.routers.system import router as system_router
from fundcalc.api.routers.system import settings_router

__all__ = [
    "calculator_router",
    "categories_router",
    "settings_router",
    "system_router",
]
