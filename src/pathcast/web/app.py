"""FastAPI application factory for Pathcast API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pathcast.config import Settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: log startup and shutdown."""
    settings = app.state.settings
    logger.info(
        "Starting Pathcast API (default paths=%d, horizons=%s)",
        settings.simulation_num_paths, settings.allowed_horizons,
    )
    yield
    logger.info("Pathcast API shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Pathcast API",
        description="Monte Carlo GBM price path simulation - percentile bands, outlier paths, summary stats",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Accept"],
    )

    _register_routers(app)

    return app


def _register_routers(app: FastAPI):
    """Register all API routers."""
    from pathcast.web.routers.simulation import router as simulation_router
    from pathcast.web.routers.system import router as system_router

    app.include_router(simulation_router, prefix="/api/v1")
    app.include_router(system_router, prefix="/api/v1")
