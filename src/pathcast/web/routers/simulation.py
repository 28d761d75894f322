"""Simulation API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from pathcast.analysis.simulation import run_monte_carlo
from pathcast.config import Settings
from pathcast.web.dependencies import get_settings
from pathcast.web.schemas import ApiResponse, SimulationRequest, SimulationResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/simulation", tags=["simulation"])


@router.post("", response_model=ApiResponse[SimulationResult])
async def create_simulation(
    req: SimulationRequest,
    settings: Settings = Depends(get_settings),
):
    """Run a Monte Carlo simulation on the supplied closing prices."""
    days = req.days if req.days is not None else settings.simulation_default_days
    if settings.allowed_horizons and days not in settings.allowed_horizons:
        raise HTTPException(
            status_code=422,
            detail=f"days must be one of {settings.allowed_horizons}, got {days}",
        )

    num_simulations = (
        req.num_simulations if req.num_simulations is not None
        else settings.simulation_num_paths
    )
    num_simulations = min(num_simulations, settings.simulation_max_paths)

    try:
        result = await run_in_threadpool(
            run_monte_carlo,
            req.prices,
            horizon_days=days,
            num_simulations=num_simulations,
            seed=req.seed if req.seed is not None else settings.simulation_seed,
            sample_paths=settings.simulation_sample_paths,
            max_workers=settings.simulation_max_workers,
        )
    except ValueError as e:
        logger.warning("Simulation rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e))

    if result is None:
        raise HTTPException(status_code=404, detail="No price data to simulate")

    return ApiResponse(data=SimulationResult(**result))
