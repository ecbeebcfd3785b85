"""Jump diffusions: Merton (1976), Bates (1996) and a jump-driven fractional OU.

Merton and Bates are integrated in log-price so that jumps enter
additively; the drift carries the compensator ``λ k`` with
``k = E[e^Y] - 1`` so the discounted price stays a martingale under
``mu = r``.  :class:`JumpFOU` adds jumps to the level itself.
"""

from __future__ import annotations

import numpy as np

from ..errors import InvalidParameterError
from .base import Process, Process2D
from .diffusion import FOU
from .poisson import CompoundPoisson

__all__ = ["Merton", "Bates", "JumpFOU"]


class Merton(Process):
    """Merton jump diffusion for the log-price ``X = log S``.

    .. math:: dX = (μ - σ^2/2 - λk) dt + σ dW + dJ
    """

    def __init__(
        self,
        mu: float,
        sigma: float,
        lambda_: float,
        jump_distribution,
        n: int,
        x0: float = 0.0,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        if sigma < 0.0:
            raise InvalidParameterError("sigma must be non-negative")
        self.mu = float(mu)
        self.sigma = float(sigma)
        self.cpoisson = CompoundPoisson(lambda_, jump_distribution, n=1)
        self.lambda_ = self.cpoisson.lambda_
        self.k = self.cpoisson.jump_compensator()
        super().__init__(n, x0, t, m, **kwargs)

    def drift(self, x, t):
        return self.mu - 0.5 * self.sigma**2 - self.lambda_ * self.k

    def diffusion(self, x, t):
        return self.sigma

    def _jumps(self, rng):
        return self.cpoisson.step_jumps(self.n - 1, self.dt, rng)


class Bates(Process2D):
    """Heston variance with compound-Poisson jumps in the log-price.

    ``sample()`` returns ``(S, v)``; the recursion itself runs on
    ``(log S, v)``.
    """

    def __init__(
        self,
        mu: float,
        kappa: float,
        theta: float,
        sigma: float,
        rho: float,
        lambda_: float,
        jump_distribution,
        n: int,
        s0: float = 100.0,
        v0: float = 0.04,
        t: float | None = None,
        m: int | None = None,
        *,
        use_sym: bool = False,
        **kwargs,
    ):
        if s0 <= 0.0:
            raise InvalidParameterError("s0 must be positive")
        if v0 < 0.0:
            raise InvalidParameterError("v0 must be non-negative")
        self.mu = float(mu)
        self.kappa = float(kappa)
        self.theta = float(theta)
        self.sigma = float(sigma)
        self.use_sym = bool(use_sym)
        self.cpoisson = CompoundPoisson(lambda_, jump_distribution, n=1)
        self.lambda_ = self.cpoisson.lambda_
        self.k = self.cpoisson.jump_compensator()
        super().__init__(rho, n, (np.log(s0), v0), t, m, **kwargs)

    def drift(self, x, t):
        v = max(x[1], 0.0)
        return (
            self.mu - self.lambda_ * self.k - 0.5 * v,
            self.kappa * (self.theta - x[1]),
        )

    def diffusion(self, x, t):
        sv = np.sqrt(max(x[1], 0.0))
        return (sv, self.sigma * sv)

    def _project(self, x):
        v = abs(x[1]) if self.use_sym else max(x[1], 0.0)
        return np.array([x[0], v])

    def _jumps(self, rng):
        j = self.cpoisson.step_jumps(self.n - 1, self.dt, rng)
        return np.vstack([j, np.zeros_like(j)])

    def sample(self, rng: np.random.Generator | None = None):
        log_s, v = super().sample(rng)
        return np.exp(log_s), v


class JumpFOU(FOU):
    """Fractional OU level process with compound-Poisson jumps.

    .. math:: dX = θ(μ - X) dt + σ dB^H + dJ

    Jumps enter the level directly; no compensator is applied.
    """

    def __init__(
        self,
        hurst: float,
        theta: float,
        mu: float,
        sigma: float,
        lambda_: float,
        jump_distribution,
        n: int,
        x0: float = 0.0,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        if sigma < 0.0:
            raise InvalidParameterError("sigma must be non-negative")
        self.cpoisson = CompoundPoisson(lambda_, jump_distribution, n=1)
        self.lambda_ = self.cpoisson.lambda_
        super().__init__(hurst, theta, mu, sigma, n, x0, t, m, **kwargs)

    def _jumps(self, rng):
        return self.cpoisson.step_jumps(self.n - 1, self.dt, rng)
