"""Stochastic-volatility models (coupled price/variance recursions)."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..errors import InvalidParameterError
from .base import Process2D

__all__ = ["Heston", "SABR"]


class Heston(Process2D):
    """Heston model and its 3/2 variant.

    .. math::
        dS = μ S dt + S \\sqrt{v} dW_1, \\qquad
        dv = κ(θ - v) dt + σ v^{p} dW_2, \\qquad d⟨W_1, W_2⟩ = ρ dt

    ``pow=0.5`` is the classic Heston model, ``pow=1.5`` the 3/2 model.  The
    variance is kept non-negative by truncation, or by reflection when
    ``use_sym`` is set.  ``sample()`` returns ``(S, v)``.
    """

    def __init__(
        self,
        mu: float,
        kappa: float,
        theta: float,
        sigma: float,
        rho: float,
        n: int,
        s0: float = 100.0,
        v0: float = 0.04,
        t: float | None = None,
        m: int | None = None,
        *,
        pow: float = 0.5,
        use_sym: bool = False,
        **kwargs,
    ):
        if pow not in (0.5, 1.5):
            raise InvalidParameterError("pow must be 0.5 (Heston) or 1.5 (3/2 model)")
        if v0 < 0.0:
            raise InvalidParameterError("v0 must be non-negative")
        self.mu = float(mu)
        self.kappa = float(kappa)
        self.theta = float(theta)
        self.sigma = float(sigma)
        self.pow = float(pow)
        self.use_sym = bool(use_sym)
        super().__init__(rho, n, (s0, v0), t, m, **kwargs)

    def drift(self, x, t):
        s, v = x
        return (self.mu * s, self.kappa * (self.theta - v))

    def diffusion(self, x, t):
        s, v = x
        v = max(v, 0.0)
        return (s * np.sqrt(v), self.sigma * v**self.pow)

    def _project(self, x):
        v = abs(x[1]) if self.use_sym else max(x[1], 0.0)
        return np.array([x[0], v])


class SABR(Process2D):
    """SABR forward/volatility pair.

    .. math:: dF = α_t F^{β} dW_1, \\qquad dα = ν α dW_2

    Here ``alpha`` is the vol-of-vol ``ν`` and ``v0`` the initial
    volatility, matching ``sample() -> (F, vol)``.
    """

    def __init__(
        self,
        alpha: float,
        beta: float,
        rho: float,
        n: int,
        f0: float = 1.0,
        v0: float = 0.2,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        if not 0.0 <= beta <= 1.0:
            raise InvalidParameterError("beta must lie in [0, 1]")
        self.alpha = float(alpha)
        self.beta = float(beta)
        super().__init__(rho, n, (f0, v0), t, m, **kwargs)

    def drift(self, x, t):
        return (0.0, 0.0)

    def diffusion(self, x, t):
        f, v = x
        return (v * max(f, 0.0) ** self.beta, self.alpha * v)

    def _project(self, x: Sequence[float]):
        # absorb the forward at zero
        return np.array([max(x[0], 0.0), x[1]])
