"""Monte Carlo simulation orchestrator.

Estimates GBM parameters from a price series, generates the path ensemble
and reduces it into per-day percentile bands, outlier envelopes, sampled
representative paths and terminal summary statistics.
"""

import logging
import math
from typing import Sequence

import numpy as np

from pathcast.analysis.sim_models import (
    DayAggregate,
    InvalidConfigurationError,
    SimulationResult,
    SimulationSummary,
)
from pathcast.analysis.sim_models.gbm import estimate_return_stats, simulate_paths
from pathcast.analysis.sim_models.sampler import GaussianSampler

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_HORIZON_DAYS = 20
DEFAULT_HORIZONS = (20, 50, 100)
DEFAULT_NUM_SIMULATIONS = 500
DEFAULT_SAMPLE_PATHS = 30

PERCENTILES = {
    "p5": 0.05,
    "p25": 0.25,
    "median": 0.50,
    "p75": 0.75,
    "p95": 0.95,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def run_monte_carlo(
    prices: Sequence[float] | None,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    num_simulations: int = DEFAULT_NUM_SIMULATIONS,
    sampler: GaussianSampler | None = None,
    seed: int | None = None,
    sample_paths: int = DEFAULT_SAMPLE_PATHS,
    max_workers: int = 1,
) -> SimulationResult | None:
    """Run a GBM Monte Carlo simulation on a price series.

    Args:
        prices: Closing prices in chronological order (oldest first).
        horizon_days: Number of days to simulate forward.
        num_simulations: Number of simulated paths.
        sampler: Source of N(0, 1) shocks. Built from ``seed`` when omitted.
        seed: Seed for the default sampler (ignored when ``sampler`` is given).
        sample_paths: Number of representative paths kept for display.
        max_workers: Thread count for path generation.

    Returns:
        SimulationResult, or None when there is no price data.

    Raises:
        InvalidConfigurationError: Non-positive horizon or path count,
            or a negative sample count.
        InvalidPriceSeriesError: Non-finite or non-positive prices.
        DegenerateStatisticsError: Fewer than three prices.
    """
    if prices is None or len(prices) == 0:
        logger.debug("No price data, nothing to simulate")
        return None

    _validate_config(horizon_days, num_simulations, sample_paths)

    stats = estimate_return_stats(prices)
    base_price = float(prices[-1])

    if sampler is None:
        sampler = GaussianSampler.from_seed(seed)

    paths = simulate_paths(
        base_price,
        stats["drift"],
        stats["volatility"],
        horizon_days,
        num_simulations,
        sampler,
        max_workers=max_workers,
    )

    sample_indices = sampler.choice(num_simulations, sample_paths)
    data = aggregate_paths(paths, sample_indices)

    final = data[horizon_days]
    summary = SimulationSummary(
        current=base_price,
        projected_median=final["median"],
        projected_low=final["p5"],
        projected_high=final["p95"],
        volatility=format_volatility(stats["volatility"]),
    )

    logger.debug(
        "Simulated %d paths x %d days (drift=%.6f, vol=%.6f)",
        num_simulations, horizon_days, stats["drift"], stats["volatility"],
    )

    return SimulationResult(
        data=data,
        stats=summary,
        horizon_days=horizon_days,
        num_simulations=num_simulations,
        input_days_used=len(prices),
        drift=stats["drift"],
        daily_volatility=stats["volatility"],
    )


simulate = run_monte_carlo


def _validate_config(horizon_days: int, num_simulations: int, sample_paths: int) -> None:
    if horizon_days <= 0:
        raise InvalidConfigurationError(
            f"horizon_days must be positive, got {horizon_days}"
        )
    if num_simulations <= 0:
        raise InvalidConfigurationError(
            f"num_simulations must be positive, got {num_simulations}"
        )
    if sample_paths < 0:
        raise InvalidConfigurationError(
            f"sample_paths must be non-negative, got {sample_paths}"
        )


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def nearest_rank_index(n: int, q: float) -> int:
    """Index of the q-quantile in a sorted sample of size n.

    floor(n * q), clamped to [0, n - 1].
    """
    return min(max(int(math.floor(n * q)), 0), n - 1)


def aggregate_paths(
    paths: np.ndarray,
    sample_indices: Sequence[int] | np.ndarray = (),
) -> list[DayAggregate]:
    """Reduce a (num_paths, horizon + 1) ensemble to per-day aggregates.

    Percentiles use nearest-rank indexing on each sorted cross-section.
    The outlier envelopes follow the single paths with the lowest and
    highest terminal value across their full length.
    """
    num_paths, num_days = paths.shape

    terminal = paths[:, -1]
    min_path = paths[int(np.argmin(terminal))]
    max_path = paths[int(np.argmax(terminal))]

    sorted_cs = np.sort(paths, axis=0)
    rank = {name: nearest_rank_index(num_paths, q) for name, q in PERCENTILES.items()}
    samples = paths[np.asarray(sample_indices, dtype=int)]

    data: list[DayAggregate] = []
    for t in range(num_days):
        column = sorted_cs[:, t]
        p5 = float(column[rank["p5"]])
        p25 = float(column[rank["p25"]])
        p75 = float(column[rank["p75"]])
        p95 = float(column[rank["p95"]])
        data.append(DayAggregate(
            day=t,
            median=float(column[rank["median"]]),
            p5=p5,
            p25=p25,
            p75=p75,
            p95=p95,
            range=(p5, p95),
            inner_range=(p25, p75),
            outlier_min=float(min_path[t]),
            outlier_max=float(max_path[t]),
            samples=[float(v) for v in samples[:, t]],
        ))
    return data


def format_volatility(volatility: float) -> str:
    """Daily volatility as a percentage string with 2 decimals."""
    return f"{volatility * 100:.2f}"
