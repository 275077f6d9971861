"""
fundcalc Web API - FastAPI entry point.

Usage:
    uvicorn fundcalc.app:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fundcalc.api.routers import (
    calculator_router,
    categories_router,
    settings_router,
    system_router,
)
from fundcalc.settings import Settings
from fundcalc.version import VERSION

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize settings on startup."""
    settings = Settings()
    await settings.init_defaults()
    logger.info("Settings initialized")

    yield


app = FastAPI(
    title="fundcalc",
    description="Cent-exact fund portfolio allocation and rebalancing calculator",
    version=VERSION,
    lifespan=lifespan,
)

# CORS for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(calculator_router, prefix="/api")
app.include_router(categories_router, prefix="/api")
app.include_router(settings_router, prefix="/api")
app.include_router(system_router, prefix="/api")
