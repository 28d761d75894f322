"""Pydantic request/response schemas for Pathcast API."""

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# --- Base schemas ---


class Meta(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ApiResponse(BaseModel, Generic[T]):
    data: T
    meta: Meta = Field(default_factory=Meta)


class ErrorResponse(BaseModel):
    error: dict[str, Any] = Field(
        description="Error details with code, message, and optional detail"
    )


# --- Simulation schemas ---


class SimulationRequest(BaseModel):
    prices: list[float] = Field(description="Daily closing prices, oldest first")
    days: int | None = Field(None, description="Forward horizon in days")
    num_simulations: int | None = Field(None, description="Number of simulated paths")
    seed: int | None = Field(None, description="Seed for reproducible paths")


class DayAggregate(BaseModel):
    day: int
    median: float
    p5: float
    p25: float
    p75: float
    p95: float
    range: tuple[float, float] = Field(description="(p5, p95) outer band")
    inner_range: tuple[float, float] = Field(description="(p25, p75) inner band")
    outlier_min: float = Field(description="Path with the lowest terminal price")
    outlier_max: float = Field(description="Path with the highest terminal price")
    samples: list[float] = Field(default_factory=list,
                                 description="Representative path values at this day")


class SimulationSummary(BaseModel):
    current: float
    projected_median: float
    projected_low: float = Field(description="P5 at the final day")
    projected_high: float = Field(description="P95 at the final day")
    volatility: str = Field(description="Daily volatility in percent, 2 decimals")


class SimulationResult(BaseModel):
    data: list[DayAggregate]
    stats: SimulationSummary
    horizon_days: int
    num_simulations: int
    input_days_used: int
    drift: float
    daily_volatility: float


# --- System schemas ---


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    service: str = "pathcast-api"
