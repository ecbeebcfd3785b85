"""Gaussian white-noise increments (the ``H = 1/2`` driving noise)."""

from __future__ import annotations

import numpy as np

from ..sampling import Sampling

__all__ = ["GN"]


class GN(Sampling):
    """Brownian increments ``dW ~ N(0, dt)`` with ``dt = t / n``."""

    @property
    def dt(self) -> float:
        return self.t / self.n

    def sample(self, rng: np.random.Generator | None = None) -> np.ndarray:
        rng = self._resolve_rng(rng)
        return rng.normal(0.0, np.sqrt(self.dt), size=self.n)

    def __repr__(self) -> str:
        return f"GN(n={self.n}, t={self.t}, m={self.m})"
