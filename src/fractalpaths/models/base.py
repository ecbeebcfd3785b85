"""
Drift/diffusion processes integrated by Euler–Maruyama
======================================================
A process only has to say *what* its coefficients are; the base classes
own the driving noise and the recursion

.. math:: x_{i+1} = \\Pi\\big(x_i + b(x_i, t_i)\\,Δt + σ(x_i, t_i)\\,ΔW_i + J_i\\big),

on the grid ``t_i = i·T/(n-1)``, ``i = 0..n-1``.  ``ΔW`` comes from
:class:`~fractalpaths.noise.GN` (Brownian, scaled by ``√Δt``) or, when a
``hurst`` is given, from :class:`~fractalpaths.noise.FGN` (already Hurst
scaled).  ``J`` are optional jump increments and ``Π`` a projection hook
(identity by default, truncation/reflection for positive processes).

The 2‑D and 3‑D variants integrate coupled recursions whose driving
noises are correlated through ``rho`` (2‑D) or a correlation matrix (3‑D).
"""

from __future__ import annotations

import abc
from typing import Callable, Sequence

import numpy as np

from ..errors import InvalidParameterError
from ..noise import CFGNS, CGNS, FGN, GN, CorrelatedNoise3D
from ..noise.correlated import _as_matrix, check_rho
from ..noise.fgn import Method
from ..sampling import Sampling, Sampling2D, Sampling3D

__all__ = [
    "Process",
    "Process2D",
    "Process3D",
    "CustomProcess",
    "CustomProcess2D",
    "CustomProcess3D",
]


def _check_steps(n: int) -> int:
    n = int(n)
    if n < 2:
        raise InvalidParameterError(f"a path needs n >= 2 points, got {n}")
    return n


def _attach_noise(noise, hurst: float | None, n: int):
    """Check that an engine drives an ``n``-point grid; reject a second ``hurst``."""
    if hurst is not None and getattr(noise, "hurst", None) != hurst:
        raise InvalidParameterError(
            f"hurst={hurst} conflicts with the injected noise (hurst="
            f"{getattr(noise, 'hurst', None)})"
        )
    if noise.n != n - 1:
        raise InvalidParameterError(
            f"noise must provide n - 1 = {n - 1} increments, got {noise.n}"
        )
    return noise


class _GridMixin:
    n: int
    t: float

    @property
    def dt(self) -> float:
        return self.t / (self.n - 1)

    @property
    def times(self) -> np.ndarray:
        return np.linspace(0.0, self.t, self.n)

    def _jumps(self, rng: np.random.Generator) -> np.ndarray | None:
        """Jump increments per step; ``None`` for pure diffusions."""
        return None


# ---------------------------------------------------------------------------
class Process(_GridMixin, Sampling):
    """Scalar SDE ``dX = b(X, t) dt + σ(X, t) dW`` (or ``dB^H``)."""

    def __init__(
        self,
        n: int,
        x0: float = 0.0,
        t: float | None = None,
        m: int | None = None,
        *,
        hurst: float | None = None,
        noise: Sampling | None = None,
        method: Method = "fft",
        seed: int | None = None,
        n_workers: int | None = None,
    ):
        super().__init__(_check_steps(n), t, m, seed=seed, n_workers=n_workers)
        self.x0 = float(x0)
        if noise is None:
            if hurst is None:
                noise = GN(self.n - 1, self.t)
            else:
                noise = FGN(hurst, self.n - 1, self.t, method=method)
        self.noise = _attach_noise(noise, hurst, self.n)
        self.hurst = getattr(self.noise, "hurst", None)

    # ------------------------------------------------------------------ #
    @abc.abstractmethod
    def drift(self, x: float, t: float) -> float:
        ...

    @abc.abstractmethod
    def diffusion(self, x: float, t: float) -> float:
        ...

    def _project(self, x: float) -> float:
        return x

    # ------------------------------------------------------------------ #
    def _euler_maruyama(
        self, dw: np.ndarray, jumps: np.ndarray | None = None
    ) -> np.ndarray:
        dt = self.dt
        times = self.times
        x = np.empty(self.n, dtype=float)
        x[0] = self.x0
        for i in range(self.n - 1):
            xi, ti = x[i], times[i]
            step = xi + self.drift(xi, ti) * dt + self.diffusion(xi, ti) * dw[i]
            if jumps is not None:
                step += jumps[i]
            x[i + 1] = self._project(step)
        return x

    def sample(self, rng: np.random.Generator | None = None) -> np.ndarray:
        rng = self._resolve_rng(rng)
        dw = self.noise.sample(rng=rng)
        return self._euler_maruyama(dw, self._jumps(rng))


# ---------------------------------------------------------------------------
class _VectorProcess(_GridMixin, abc.ABC):
    """Shared recursion for coupled systems of ``dim`` equations."""

    dim: int
    n: int
    x0: np.ndarray
    noise: Sampling2D | Sampling3D

    def _init_state(self, x0: Sequence[float] | None) -> np.ndarray:
        if x0 is None:
            return np.zeros(self.dim)
        arr = np.asarray(x0, dtype=float).ravel()
        if arr.size != self.dim:
            raise InvalidParameterError(f"x0 must have {self.dim} components, got {arr.size}")
        return arr

    @abc.abstractmethod
    def drift(self, x: np.ndarray, t: float) -> np.ndarray:
        ...

    @abc.abstractmethod
    def diffusion(self, x: np.ndarray, t: float) -> np.ndarray:
        ...

    def _project(self, x: np.ndarray) -> np.ndarray:
        return x

    def _euler_maruyama(
        self, dw: np.ndarray, jumps: np.ndarray | None = None
    ) -> np.ndarray:
        dt = self.dt
        times = self.times
        x = np.empty((self.dim, self.n), dtype=float)
        x[:, 0] = self.x0
        for i in range(self.n - 1):
            xi, ti = x[:, i], times[i]
            step = (
                xi
                + np.asarray(self.drift(xi, ti), dtype=float) * dt
                + np.asarray(self.diffusion(xi, ti), dtype=float) * dw[:, i]
            )
            if jumps is not None:
                step = step + jumps[:, i]
            x[:, i + 1] = self._project(step)
        return x

    def sample(self, rng: np.random.Generator | None = None):
        rng = self._resolve_rng(rng)
        dw = np.vstack(self.noise.sample(rng=rng))
        x = self._euler_maruyama(dw, self._jumps(rng))
        return tuple(x[k] for k in range(self.dim))


class Process2D(_VectorProcess, Sampling2D):
    """Two coupled SDEs driven by noises with correlation ``rho``."""

    dim = 2

    def __init__(
        self,
        rho: float,
        n: int,
        x0: Sequence[float] | None = None,
        t: float | None = None,
        m: int | None = None,
        *,
        hurst: float | None = None,
        noise: Sampling2D | None = None,
        method: Method = "fft",
        seed: int | None = None,
        n_workers: int | None = None,
    ):
        super().__init__(_check_steps(n), t, m, seed=seed, n_workers=n_workers)
        self.x0 = self._init_state(x0)
        rho = check_rho(rho)
        if noise is None:
            if hurst is None:
                noise = CGNS(rho, self.n - 1, self.t)
            else:
                noise = CFGNS(hurst, rho, self.n - 1, self.t, method=method)
        self.noise = _attach_noise(noise, hurst, self.n)
        self.rho = getattr(self.noise, "rho", rho)
        self.hurst = getattr(self.noise, "hurst", None)


class Process3D(_VectorProcess, Sampling3D):
    """Three coupled SDEs driven by noises with correlation matrix ``corr``."""

    dim = 3

    def __init__(
        self,
        corr: Sequence[float] | np.ndarray,
        n: int,
        x0: Sequence[float] | None = None,
        t: float | None = None,
        m: int | None = None,
        *,
        hurst: float | None = None,
        noise: Sampling3D | None = None,
        method: Method = "fft",
        seed: int | None = None,
        n_workers: int | None = None,
    ):
        super().__init__(_check_steps(n), t, m, seed=seed, n_workers=n_workers)
        self.x0 = self._init_state(x0)
        if noise is None:
            noise = CorrelatedNoise3D(corr, self.n - 1, self.t, hurst, method=method)
        self.noise = _attach_noise(noise, hurst, self.n)
        self.corr = getattr(self.noise, "corr", None)
        if self.corr is None:
            self.corr = _as_matrix(corr)
        self.hurst = getattr(self.noise, "hurst", None)


# ---------------------------------------------------------------------------
class CustomProcess(Process):
    """Scalar process from user supplied ``drift(x, t)`` / ``diffusion(x, t)``."""

    def __init__(
        self,
        drift: Callable[[float, float], float],
        diffusion: Callable[[float, float], float],
        n: int,
        x0: float = 0.0,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        self._drift = drift
        self._diffusion = diffusion
        super().__init__(n, x0, t, m, **kwargs)

    def drift(self, x, t):
        return self._drift(x, t)

    def diffusion(self, x, t):
        return self._diffusion(x, t)


class CustomProcess2D(Process2D):
    def __init__(
        self,
        drift: Callable[[np.ndarray, float], Sequence[float]],
        diffusion: Callable[[np.ndarray, float], Sequence[float]],
        rho: float,
        n: int,
        x0: Sequence[float] | None = None,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        self._drift = drift
        self._diffusion = diffusion
        super().__init__(rho, n, x0, t, m, **kwargs)

    def drift(self, x, t):
        return self._drift(x, t)

    def diffusion(self, x, t):
        return self._diffusion(x, t)


class CustomProcess3D(Process3D):
    def __init__(
        self,
        drift: Callable[[np.ndarray, float], Sequence[float]],
        diffusion: Callable[[np.ndarray, float], Sequence[float]],
        corr: Sequence[float] | np.ndarray,
        n: int,
        x0: Sequence[float] | None = None,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        self._drift = drift
        self._diffusion = diffusion
        super().__init__(corr, n, x0, t, m, **kwargs)

    def drift(self, x, t):
        return self._drift(x, t)

    def diffusion(self, x, t):
        return self._diffusion(x, t)
