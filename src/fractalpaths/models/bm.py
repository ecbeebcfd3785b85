"""Brownian and fractional Brownian motions (single and correlated pairs).

Every path starts at zero and has ``n`` points on ``[0, T]``; the levels
are cumulative sums of ``n - 1`` driving increments.
"""

from __future__ import annotations

import numpy as np

from ..noise import CFGNS, CGNS, FGN, GN
from ..noise.fgn import Method
from ..sampling import Sampling, Sampling2D
from .base import _check_steps

__all__ = ["BM", "FBM", "CBMS", "CFBMS"]


def _levels(increments: np.ndarray) -> np.ndarray:
    return np.concatenate([[0.0], np.cumsum(increments)])


class BM(Sampling):
    """Standard Brownian motion."""

    def __init__(self, n: int, t: float | None = None, m: int | None = None, **kwargs):
        super().__init__(_check_steps(n), t, m, **kwargs)
        self.noise = GN(self.n - 1, self.t)

    def sample(self, rng: np.random.Generator | None = None) -> np.ndarray:
        return _levels(self.noise.sample(rng=self._resolve_rng(rng)))


class FBM(Sampling):
    """Fractional Brownian motion as cumulated fGN."""

    def __init__(
        self,
        hurst: float,
        n: int,
        t: float | None = None,
        m: int | None = None,
        *,
        method: Method = "fft",
        **kwargs,
    ):
        super().__init__(_check_steps(n), t, m, **kwargs)
        self.hurst = float(hurst)
        self.noise = FGN(hurst, self.n - 1, self.t, method=method)

    def sample(self, rng: np.random.Generator | None = None) -> np.ndarray:
        return _levels(self.noise.sample(rng=self._resolve_rng(rng)))


class CBMS(Sampling2D):
    """Pair of Brownian motions with instantaneous correlation ``rho``."""

    def __init__(
        self,
        rho: float,
        n: int,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        super().__init__(_check_steps(n), t, m, **kwargs)
        self.noise = self._make_noise(rho)
        self.rho = self.noise.rho

    def _make_noise(self, rho: float):
        return CGNS(rho, self.n - 1, self.t)

    def sample(
        self, rng: np.random.Generator | None = None
    ) -> tuple[np.ndarray, np.ndarray]:
        dw1, dw2 = self.noise.sample(rng=self._resolve_rng(rng))
        return _levels(dw1), _levels(dw2)


class CFBMS(CBMS):
    """Pair of fractional Brownian motions driven by correlated fGN."""

    def __init__(
        self,
        hurst: float,
        rho: float,
        n: int,
        t: float | None = None,
        m: int | None = None,
        *,
        method: Method = "fft",
        **kwargs,
    ):
        self.hurst = hurst
        self.method = method
        super().__init__(rho, n, t, m, **kwargs)

    def _make_noise(self, rho: float):
        return CFGNS(self.hurst, rho, self.n - 1, self.t, method=self.method)
