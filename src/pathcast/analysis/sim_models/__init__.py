"""Monte Carlo simulation models package.

Provides the building blocks for GBM price path simulation:
- sampler: injectable standard-normal draws (Box-Muller)
- gbm: return statistics and path generation
"""

from typing import TypedDict


class InvalidConfigurationError(ValueError):
    """Non-positive horizon, path count or sample count."""


class InvalidPriceSeriesError(ValueError):
    """Price series contains non-finite or non-positive values."""


class DegenerateStatisticsError(ValueError):
    """Too few log returns to compute an unbiased sample variance."""


class ReturnStats(TypedDict):
    mean: float
    variance: float
    volatility: float
    drift: float
    num_returns: int


class DayAggregate(TypedDict):
    day: int
    median: float
    p5: float
    p25: float
    p75: float
    p95: float
    range: tuple[float, float]        # (p5, p95)
    inner_range: tuple[float, float]  # (p25, p75)
    outlier_min: float
    outlier_max: float
    samples: list[float]


class SimulationSummary(TypedDict):
    current: float
    projected_median: float
    projected_low: float
    projected_high: float
    volatility: str  # percent, 2 decimals


class SimulationResult(TypedDict):
    """Standard return type of run_monte_carlo."""
    data: list[DayAggregate]
    stats: SimulationSummary
    horizon_days: int
    num_simulations: int
    input_days_used: int
    drift: float
    daily_volatility: float


__all__ = [
    "InvalidConfigurationError",
    "InvalidPriceSeriesError",
    "DegenerateStatisticsError",
    "ReturnStats",
    "DayAggregate",
    "SimulationSummary",
    "SimulationResult",
]
