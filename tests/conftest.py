"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from pathcast.analysis.sim_models.sampler import GaussianSampler


@pytest.fixture
def realistic_prices():
    """Generate 365 days of realistic crypto closing prices."""
    rng = np.random.default_rng(42)
    daily_returns = rng.normal(0.0005, 0.03, 364)
    prices = [30000.0]
    for r in daily_returns:
        prices.append(prices[-1] * np.exp(r))
    return prices


@pytest.fixture
def example_prices():
    return [100.0, 102.0, 101.0, 105.0, 104.0]


@pytest.fixture
def constant_prices():
    return [250.0] * 30


@pytest.fixture
def sampler():
    return GaussianSampler.from_seed(12345)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep Settings away from the developer's .env and logs/ directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PC_LOG_DIR", str(tmp_path / "logs"))
