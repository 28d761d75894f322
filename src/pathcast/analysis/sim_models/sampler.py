"""Standard-normal sampler based on the Box-Muller transform."""

import math

import numpy as np


class GaussianSampler:
    """Injectable source of standard-normal shocks.

    Wraps a NumPy ``Generator`` so simulations can be seeded and reproduced
    instead of drawing from a process-wide random state.
    """

    def __init__(self, rng: np.random.Generator | None = None):
        self._rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def from_seed(cls, seed: int | None) -> "GaussianSampler":
        return cls(np.random.default_rng(seed))

    def _uniform_open(self) -> float:
        u = 0.0
        while u == 0.0:
            u = float(self._rng.random())
        return u

    def draw(self) -> float:
        """Return a single N(0, 1) draw."""
        u = self._uniform_open()
        v = self._uniform_open()
        return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)

    def _uniform_open_many(self, shape) -> np.ndarray:
        u = self._rng.random(shape)
        zeros = u == 0.0
        while np.any(zeros):
            u[zeros] = self._rng.random(int(np.count_nonzero(zeros)))
            zeros = u == 0.0
        return u

    def draw_many(self, shape) -> np.ndarray:
        """Vectorised ``draw``: one independent N(0, 1) value per element."""
        u = self._uniform_open_many(shape)
        v = self._uniform_open_many(shape)
        return np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)

    def choice(self, n: int, size: int) -> np.ndarray:
        """Uniform indices in [0, n), drawn with replacement."""
        return self._rng.integers(0, n, size=size)

    def spawn(self, n: int) -> list["GaussianSampler"]:
        """Independent child samplers for parallel path generation."""
        return [GaussianSampler(child) for child in self._rng.spawn(n)]
