"""FastAPI dependencies for API routers.

Provides common dependencies that can be injected into route handlers.
"""

from dataclasses import dataclass

from fundcalc.settings import Settings


@dataclass
class CommonDependencies:
    """Common dependencies used across API routes.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(deps: Annotated[CommonDependencies, Depends(get_common_deps)]):
            settings = deps.settings
            # ...
    """

    settings: Settings


async def get_common_deps() -> CommonDependencies:
    """Factory for common dependencies.

    Returns the singleton Settings instance.
    """
    return CommonDependencies(settings=Settings())
