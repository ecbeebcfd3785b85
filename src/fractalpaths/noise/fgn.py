"""
Fractional Gaussian Noise (FGN) engine
======================================
Primary method  : circulant embedding / Davies–Harte (O(n log n) per draw)
Alternative     : Cholesky factor of the Toeplitz covariance (O(n²) memory)

Both strategies are precomputed once at construction and only *read* by
:meth:`FGN.sample`, so one engine can be shared across threads.  Output of
``sample()`` always has the requested length ``n``; the FFT strategy works
on the next power of two internally and trims the excess.

References
----------
Davies & Harte (1987); Dieker (2004); Wood & Chan (1994)
"""

from __future__ import annotations

import logging
from typing import Literal

import numpy as np
from scipy import linalg

from ..errors import EmbeddingError, InvalidParameterError, NotPositiveDefiniteError
from ..sampling import Sampling
from .covariance import (
    _check_hurst,
    circulant_row,
    next_power_of_two,
    toeplitz_covariance,
)

__all__ = ["CirculantEmbedding", "CholeskyFactorization", "FGN", "fgn"]

logger = logging.getLogger(__name__)

Method = Literal["fft", "cholesky"]

# relative size of a negative eigenvalue still treated as round-off
EIGENVALUE_TOL = 1e-10


# ------------------------------------------------------------------ #
class CirculantEmbedding:
    """Square-rooted eigenvalues of the ``2·n_pad`` circulant embedding."""

    def __init__(self, hurst: float, n: int):
        self.hurst = _check_hurst(hurst)
        self.n = int(n)
        self.n_pad = next_power_of_two(self.n)
        self.offset = self.n_pad - self.n

        row = circulant_row(self.hurst, self.n_pad)
        eig = np.fft.fft(row.astype(complex)).real
        if not np.all(np.isfinite(eig)):
            logger.error("non-finite eigenvalues for H=%s, n_pad=%d", self.hurst, self.n_pad)
            raise EmbeddingError("circulant embedding produced non-finite eigenvalues")

        floor = EIGENVALUE_TOL * max(float(np.abs(eig).max()), 1.0)
        lowest = float(eig.min())
        if lowest < -floor:
            logger.error(
                "invalid embedding for H=%s, n_pad=%d: min eigenvalue %.3e",
                self.hurst,
                self.n_pad,
                lowest,
            )
            raise EmbeddingError(
                f"circulant embedding is not non-negative definite "
                f"(min eigenvalue {lowest:.3e})"
            )
        if lowest < 0.0:
            logger.debug("clamping %d round-off negative eigenvalues", int((eig < 0).sum()))

        sqrt_eig = np.sqrt(np.maximum(eig, 0.0) / (2 * self.n_pad)).astype(complex)
        sqrt_eig.setflags(write=False)
        self.sqrt_eigenvalues = sqrt_eig

    def draw(self, rng: np.random.Generator) -> np.ndarray:
        size = 2 * self.n_pad
        w = rng.standard_normal(size) + 1j * rng.standard_normal(size)
        # unnormalised inverse transform: no 1/size factor
        z = np.fft.ifft(self.sqrt_eigenvalues * w, norm="forward")
        return z[1 : self.n_pad - self.offset + 1].real


# ------------------------------------------------------------------ #
class CholeskyFactorization:
    """Lower Cholesky factor of the ``n × n`` Toeplitz covariance."""

    def __init__(self, hurst: float, n: int):
        self.hurst = _check_hurst(hurst)
        self.n = int(n)
        cov = toeplitz_covariance(self.hurst, self.n)
        try:
            factor = linalg.cholesky(cov, lower=True, check_finite=True)
        except (linalg.LinAlgError, ValueError) as exc:
            logger.error("Cholesky failed for H=%s, n=%d: %s", self.hurst, self.n, exc)
            raise NotPositiveDefiniteError(
                f"fGN covariance is not positive definite for H={self.hurst}, n={self.n}"
            ) from exc
        factor.setflags(write=False)
        self.factor = factor

    def draw(self, rng: np.random.Generator) -> np.ndarray:
        return self.factor @ rng.standard_normal(self.n)


_STRATEGIES = {
    "fft": CirculantEmbedding,
    "cholesky": CholeskyFactorization,
}


# ------------------------------------------------------------------ #
class FGN(Sampling):
    """Fractional Gaussian noise sampler.

    Parameters
    ----------
    hurst : float
        Hurst exponent, strictly inside ``(0, 1)``.
    n : int
        Number of increments returned by :meth:`sample`.
    t : float, optional
        Time horizon ``T`` (default 1).  Increments live on the grid
        ``T / n`` and are scaled by ``n^{-H} T^{H}`` for both strategies;
        the FFT padding never shows in the output.
    m : int, optional
        Default number of paths for :meth:`sample_par`.
    method : {"fft", "cholesky"}
        Sampling strategy, fixed at construction.
    seed : int, optional
        Seed of the engine-owned random generator.
    """

    def __init__(
        self,
        hurst: float,
        n: int,
        t: float | None = None,
        m: int | None = None,
        *,
        method: Method = "fft",
        seed: int | None = None,
        n_workers: int | None = None,
    ):
        hurst = _check_hurst(hurst)
        super().__init__(n, t, m, seed=seed, n_workers=n_workers)
        try:
            strategy = _STRATEGIES[method]
        except KeyError:
            raise InvalidParameterError(
                f"method must be one of {sorted(_STRATEGIES)}, got {method!r}"
            ) from None

        self.hurst = hurst
        self.method = method
        self._strategy = strategy(hurst, self.n)
        self.scale = float(self.n) ** (-hurst) * self.t**hurst
        logger.debug(
            "FGN(H=%s, n=%d, method=%s) ready, n_pad=%d",
            hurst,
            self.n,
            method,
            self.n_pad,
        )

    # ------------------------------------------------------------------ #
    @property
    def n_pad(self) -> int:
        return getattr(self._strategy, "n_pad", self.n)

    @property
    def offset(self) -> int:
        return self.n_pad - self.n

    @property
    def dt(self) -> float:
        """Step of the time grid the increments live on."""
        return self.t / self.n

    @property
    def sqrt_eigenvalues(self) -> np.ndarray | None:
        return getattr(self._strategy, "sqrt_eigenvalues", None)

    def sample(self, rng: np.random.Generator | None = None) -> np.ndarray:
        """One fGN path of length ``n``."""
        rng = self._resolve_rng(rng)
        return self._strategy.draw(rng) * self.scale

    def __repr__(self) -> str:
        return (
            f"FGN(hurst={self.hurst}, n={self.n}, t={self.t}, m={self.m}, "
            f"method={self.method!r})"
        )


# ------------------------------------------------------------------ #
def fgn(
    hurst: float,
    n: int,
    t: float | None = None,
    *,
    method: Method = "fft",
    seed: int | None = None,
) -> np.ndarray:
    """Single fGN draw from a freshly built engine."""
    return FGN(hurst, n, t, method=method, seed=seed).sample()
