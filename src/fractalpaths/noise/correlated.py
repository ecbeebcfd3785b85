"""
Correlated driving noises
=========================
Given independent standard sequences ``Z1, Z2`` the correlated pair is

.. math:: (Z_1,\\; ρ Z_1 + \\sqrt{1-ρ^2}\\, Z_2),   ρ ∈ [-1, 1].

For three components a factor ``L`` with ``L Lᵀ = C`` of the correlation
matrix ``C`` mixes three independent sequences.  The independent inputs may
be plain Gaussian increments (:class:`~fractalpaths.noise.gn.GN`) or fGN
(:class:`~fractalpaths.noise.fgn.FGN`); in the latter case the two draws
come from one shared engine.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from scipy import linalg

from ..errors import InvalidParameterError, NotPositiveDefiniteError
from ..sampling import Sampling2D, Sampling3D
from .fgn import FGN, Method
from .gn import GN

__all__ = [
    "check_rho",
    "correlate",
    "correlation_factor",
    "CGNS",
    "CFGNS",
    "CorrelatedNoise3D",
]

logger = logging.getLogger(__name__)


def check_rho(rho: float) -> float:
    rho = float(rho)
    if not (-1.0 <= rho <= 1.0):
        raise InvalidParameterError(f"correlation coefficient must lie in [-1, 1], got {rho}")
    return rho


def correlate(
    z1: np.ndarray, z2: np.ndarray, rho: float
) -> tuple[np.ndarray, np.ndarray]:
    """Mix two independent sequences into a pair with correlation ``rho``."""
    rho = check_rho(rho)
    z1 = np.asarray(z1, dtype=float)
    z2 = np.asarray(z2, dtype=float)
    if z1.shape != z2.shape:
        raise InvalidParameterError("z1 and z2 must have the same shape")
    return z1, rho * z1 + np.sqrt(1.0 - rho**2) * z2


def _as_matrix(corr) -> np.ndarray:
    arr = np.asarray(corr, dtype=float)
    if arr.ndim == 1 and arr.size == 3:
        r12, r13, r23 = arr
        arr = np.array(
            [[1.0, r12, r13], [r12, 1.0, r23], [r13, r23, 1.0]], dtype=float
        )
    return arr


def correlation_factor(corr, tol: float = 1e-10) -> np.ndarray:
    """Return ``L`` with ``L @ L.T == corr`` for a valid correlation matrix.

    ``corr`` is a ``k × k`` matrix, or the triple ``(ρ12, ρ13, ρ23)`` for
    ``k = 3``.  Singular but positive semi-definite matrices (e.g. perfect
    correlation) fall back to a symmetric eigen-factor.
    """
    c = _as_matrix(corr)
    if c.ndim != 2 or c.shape[0] != c.shape[1]:
        raise InvalidParameterError("correlation matrix must be square")
    if not np.all(np.isfinite(c)):
        raise InvalidParameterError("correlation matrix must be finite")
    if not np.allclose(c, c.T):
        raise InvalidParameterError("correlation matrix must be symmetric")
    if not np.allclose(np.diag(c), 1.0):
        raise InvalidParameterError("correlation matrix must have a unit diagonal")
    if np.any(np.abs(c) > 1.0):
        raise InvalidParameterError("correlations must lie in [-1, 1]")

    try:
        return linalg.cholesky(c, lower=True)
    except linalg.LinAlgError:
        w, v = linalg.eigh(c)
        if w.min() < -tol:
            raise NotPositiveDefiniteError(
                f"correlation matrix is not positive semi-definite (min eigenvalue {w.min():.3e})"
            ) from None
        logger.debug("singular correlation matrix, using eigen-factor")
        return v * np.sqrt(np.clip(w, 0.0, None))


# ------------------------------------------------------------------ #
class CGNS(Sampling2D):
    """Correlated pair of Gaussian increment sequences."""

    def __init__(
        self,
        rho: float,
        n: int,
        t: float | None = None,
        m: int | None = None,
        *,
        seed: int | None = None,
        n_workers: int | None = None,
    ):
        super().__init__(n, t, m, seed=seed, n_workers=n_workers)
        self.rho = check_rho(rho)
        self.noise = self._make_noise()

    def _make_noise(self):
        return GN(self.n, self.t)

    def sample(
        self, rng: np.random.Generator | None = None
    ) -> tuple[np.ndarray, np.ndarray]:
        rng = self._resolve_rng(rng)
        z1 = self.noise.sample(rng=rng)
        z2 = self.noise.sample(rng=rng)
        return correlate(z1, z2, self.rho)


class CFGNS(CGNS):
    """Correlated pair of fGN sequences sharing one :class:`FGN` engine."""

    def __init__(
        self,
        hurst: float,
        rho: float,
        n: int,
        t: float | None = None,
        m: int | None = None,
        *,
        method: Method = "fft",
        seed: int | None = None,
        n_workers: int | None = None,
    ):
        self.hurst = hurst
        self.method = method
        super().__init__(rho, n, t, m, seed=seed, n_workers=n_workers)

    def _make_noise(self):
        return FGN(self.hurst, self.n, self.t, method=self.method)


# ------------------------------------------------------------------ #
class CorrelatedNoise3D(Sampling3D):
    """Three increment sequences with correlation matrix ``corr``.

    Driven by Gaussian increments when ``hurst`` is ``None`` and by fGN
    otherwise.
    """

    def __init__(
        self,
        corr: Sequence[float] | np.ndarray,
        n: int,
        t: float | None = None,
        hurst: float | None = None,
        m: int | None = None,
        *,
        method: Method = "fft",
        seed: int | None = None,
        n_workers: int | None = None,
    ):
        super().__init__(n, t, m, seed=seed, n_workers=n_workers)
        self.corr = _as_matrix(corr)
        if self.corr.shape != (3, 3):
            raise InvalidParameterError("corr must be a 3x3 matrix or a (r12, r13, r23) triple")
        self.factor = correlation_factor(self.corr)
        self.hurst = hurst
        if hurst is None:
            self.noise = GN(self.n, self.t)
        else:
            self.noise = FGN(hurst, self.n, self.t, method=method)

    def sample(
        self, rng: np.random.Generator | None = None
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        rng = self._resolve_rng(rng)
        z = np.vstack([self.noise.sample(rng=rng) for _ in range(3)])
        mixed = self.factor @ z
        return mixed[0], mixed[1], mixed[2]
