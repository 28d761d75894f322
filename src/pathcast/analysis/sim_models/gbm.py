"""Geometric Brownian Motion (constant volatility) path generation.

Model: S(t+1) = S(t) * exp(drift + volatility * Z), Z ~ N(0, 1)
with drift = mean(log returns) - variance / 2 estimated per day.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import numpy as np

from . import DegenerateStatisticsError, InvalidPriceSeriesError, ReturnStats
from .sampler import GaussianSampler

logger = logging.getLogger(__name__)

MIN_RETURNS = 2


def estimate_return_stats(prices: Sequence[float]) -> ReturnStats:
    """Estimate daily log-return mean, unbiased variance, volatility and drift.

    Args:
        prices: Closing prices in chronological order (oldest first).

    Raises:
        InvalidPriceSeriesError: A price is non-finite or not positive.
        DegenerateStatisticsError: Fewer than two log returns.
    """
    arr = np.asarray(prices, dtype=float)
    if arr.ndim != 1:
        raise InvalidPriceSeriesError("Price series must be one-dimensional")
    if not np.all(np.isfinite(arr)) or np.any(arr <= 0):
        raise InvalidPriceSeriesError("Prices must be finite and strictly positive")

    log_returns = np.diff(np.log(arr))
    n = len(log_returns)
    if n < MIN_RETURNS:
        raise DegenerateStatisticsError(
            f"Need at least {MIN_RETURNS} log returns ({MIN_RETURNS + 1} prices) "
            f"for sample variance, got {n}"
        )

    mean = float(np.mean(log_returns))
    variance = float(np.var(log_returns, ddof=1))
    volatility = float(np.sqrt(variance))
    drift = mean - variance / 2.0

    if volatility == 0.0:
        logger.debug("GBM: zero volatility, paths will stay flat when drift is zero")

    return ReturnStats(
        mean=mean,
        variance=variance,
        volatility=volatility,
        drift=drift,
        num_returns=n,
    )


def simulate_path(
    base_price: float,
    drift: float,
    volatility: float,
    horizon_days: int,
    sampler: GaussianSampler,
) -> np.ndarray:
    """Generate one path of length horizon_days + 1, starting at base_price."""
    path = np.empty(horizon_days + 1, dtype=float)
    path[0] = base_price
    price = base_price
    for t in range(1, horizon_days + 1):
        z = sampler.draw()
        price = price * float(np.exp(drift + volatility * z))
        path[t] = price
    return path


def _simulate_block(
    base_price: float,
    drift: float,
    volatility: float,
    horizon_days: int,
    num_paths: int,
    sampler: GaussianSampler,
) -> np.ndarray:
    z = sampler.draw_many((num_paths, horizon_days))
    shocks = np.exp(drift + volatility * z)

    paths = np.empty((num_paths, horizon_days + 1), dtype=float)
    paths[:, 0] = base_price
    paths[:, 1:] = base_price * np.cumprod(shocks, axis=1)
    return paths


def simulate_paths(
    base_price: float,
    drift: float,
    volatility: float,
    horizon_days: int,
    num_paths: int,
    sampler: GaussianSampler,
    max_workers: int = 1,
) -> np.ndarray:
    """Generate the full path ensemble.

    Vectorised equivalent of calling ``simulate_path`` num_paths times: one
    Gaussian draw per simulated day per path.

    Args:
        base_price: Last known historical price (day 0 of every path).
        drift: Ito-corrected daily drift.
        volatility: Daily volatility.
        horizon_days: Number of simulated days.
        num_paths: Ensemble size.
        sampler: Source of N(0, 1) shocks.
        max_workers: When > 1, paths are generated in chunks on a thread pool,
            each chunk drawing from its own spawned child sampler.

    Returns:
        Array of shape (num_paths, horizon_days + 1).
    """
    workers = max(1, min(max_workers, num_paths))
    if workers == 1:
        return _simulate_block(
            base_price, drift, volatility, horizon_days, num_paths, sampler,
        )

    chunk_sizes = [len(c) for c in np.array_split(np.arange(num_paths), workers)]
    children = sampler.spawn(workers)

    logger.debug(
        "GBM: generating %d paths in %d chunks", num_paths, workers,
    )

    with ThreadPoolExecutor(max_workers=workers) as executor:
        blocks = list(executor.map(
            lambda args: _simulate_block(
                base_price, drift, volatility, horizon_days, args[0], args[1],
            ),
            zip(chunk_sizes, children),
        ))

    return np.vstack(blocks)
