"""
One-factor diffusions
=====================
* :class:`OU`     – Ornstein–Uhlenbeck   ``dX = θ(μ - X) dt + σ dW``
* :class:`CIR`    – Cox–Ingersoll–Ross   ``dX = θ(μ - X) dt + σ √X dW``
* :class:`GBM`    – geometric BM          ``dX = μ X dt + σ X dW``
* :class:`CEV`    – constant elasticity   ``dX = μ X dt + σ X^γ dW``
* :class:`Jacobi` – Jacobi diffusion      ``dX = (α - βX) dt + σ √(X(1-X)) dW``
* :class:`Vasicek` – short-rate OU with unit default mean reversion

Passing ``hurst=`` drives any of them with fGN instead of Brownian
increments; the ``F*`` classes are the fractional variants with ``hurst``
as a required first argument.
"""

from __future__ import annotations

import logging

import numpy as np

from ..errors import InvalidParameterError
from .base import Process

__all__ = [
    "OU",
    "FOU",
    "CIR",
    "FCIR",
    "GBM",
    "FGBM",
    "CEV",
    "FCEV",
    "Jacobi",
    "FJacobi",
    "Vasicek",
    "FVasicek",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
class OU(Process):
    def __init__(
        self,
        theta: float,
        mu: float,
        sigma: float,
        n: int,
        x0: float = 0.0,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        self.theta = float(theta)
        self.mu = float(mu)
        self.sigma = float(sigma)
        super().__init__(n, x0, t, m, **kwargs)

    def drift(self, x, t):
        return self.theta * (self.mu - x)

    def diffusion(self, x, t):
        return self.sigma


class FOU(OU):
    def __init__(self, hurst: float, theta, mu, sigma, n, x0=0.0, t=None, m=None, **kwargs):
        super().__init__(theta, mu, sigma, n, x0, t, m, hurst=hurst, **kwargs)


# ---------------------------------------------------------------------------
class CIR(Process):
    """CIR process kept non-negative by truncation or reflection.

    With ``use_sym=True`` negative Euler steps are reflected (``|x|``),
    otherwise truncated at zero.
    """

    def __init__(
        self,
        theta: float,
        mu: float,
        sigma: float,
        n: int,
        x0: float = 0.0,
        t: float | None = None,
        m: int | None = None,
        *,
        use_sym: bool = False,
        **kwargs,
    ):
        self.theta = float(theta)
        self.mu = float(mu)
        self.sigma = float(sigma)
        self.use_sym = bool(use_sym)
        if self.sigma < 0.0:
            raise InvalidParameterError("sigma must be non-negative")
        if x0 < 0.0:
            raise InvalidParameterError("x0 must be non-negative for a CIR process")
        super().__init__(n, x0, t, m, **kwargs)
        if self.hurst is None and 2.0 * self.theta * self.mu < self.sigma**2:
            logger.warning(
                "Feller condition 2*theta*mu >= sigma^2 violated (%.4g < %.4g); "
                "the path will hit zero",
                2.0 * self.theta * self.mu,
                self.sigma**2,
            )

    def drift(self, x, t):
        return self.theta * (self.mu - x)

    def diffusion(self, x, t):
        return self.sigma * np.sqrt(abs(x))

    def _project(self, x):
        return abs(x) if self.use_sym else max(x, 0.0)


class FCIR(CIR):
    def __init__(self, hurst: float, theta, mu, sigma, n, x0=0.0, t=None, m=None, **kwargs):
        super().__init__(theta, mu, sigma, n, x0, t, m, hurst=hurst, **kwargs)


# ---------------------------------------------------------------------------
class GBM(Process):
    def __init__(
        self,
        mu: float,
        sigma: float,
        n: int,
        x0: float = 1.0,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        self.mu = float(mu)
        self.sigma = float(sigma)
        super().__init__(n, x0, t, m, **kwargs)

    def drift(self, x, t):
        return self.mu * x

    def diffusion(self, x, t):
        return self.sigma * x

    def mean(self, t: float | None = None) -> float:
        """``E[X_t] = x0 · exp(μ t)`` for the Brownian-driven model."""
        t = self.t if t is None else float(t)
        return self.x0 * np.exp(self.mu * t)

    def variance(self, t: float | None = None) -> float:
        t = self.t if t is None else float(t)
        return self.x0**2 * np.exp(2.0 * self.mu * t) * (np.exp(self.sigma**2 * t) - 1.0)


class FGBM(GBM):
    def __init__(self, hurst: float, mu, sigma, n, x0=1.0, t=None, m=None, **kwargs):
        super().__init__(mu, sigma, n, x0, t, m, hurst=hurst, **kwargs)


# ---------------------------------------------------------------------------
class CEV(Process):
    """Constant elasticity of variance, absorbed at zero.

    ``gamma = 1`` is GBM; ``gamma = 1/2`` gives a CIR-type diffusion term.
    """

    def __init__(
        self,
        mu: float,
        sigma: float,
        gamma: float,
        n: int,
        x0: float = 1.0,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        if sigma < 0.0:
            raise InvalidParameterError("sigma must be non-negative")
        if gamma < 0.0:
            raise InvalidParameterError("gamma must be non-negative")
        if x0 < 0.0:
            raise InvalidParameterError("x0 must be non-negative")
        self.mu = float(mu)
        self.sigma = float(sigma)
        self.gamma = float(gamma)
        super().__init__(n, x0, t, m, **kwargs)

    def drift(self, x, t):
        return self.mu * x

    def diffusion(self, x, t):
        return self.sigma * max(x, 0.0) ** self.gamma

    def _project(self, x):
        return max(x, 0.0)


class FCEV(CEV):
    def __init__(self, hurst: float, mu, sigma, gamma, n, x0=1.0, t=None, m=None, **kwargs):
        super().__init__(mu, sigma, gamma, n, x0, t, m, hurst=hurst, **kwargs)


# ---------------------------------------------------------------------------
class Jacobi(Process):
    """Jacobi diffusion confined to ``[0, 1]``."""

    def __init__(
        self,
        alpha: float,
        beta: float,
        sigma: float,
        n: int,
        x0: float = 0.5,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        if alpha <= 0.0:
            raise InvalidParameterError("alpha must be positive")
        if beta <= 0.0:
            raise InvalidParameterError("beta must be positive")
        if sigma <= 0.0:
            raise InvalidParameterError("sigma must be positive")
        if alpha >= beta:
            raise InvalidParameterError("alpha must be less than beta")
        if not 0.0 <= x0 <= 1.0:
            raise InvalidParameterError("x0 must lie in [0, 1]")
        self.alpha = float(alpha)
        self.beta = float(beta)
        self.sigma = float(sigma)
        super().__init__(n, x0, t, m, **kwargs)

    def drift(self, x, t):
        return self.alpha - self.beta * x

    def diffusion(self, x, t):
        x = min(max(x, 0.0), 1.0)
        return self.sigma * np.sqrt(x * (1.0 - x))

    def _project(self, x):
        return min(max(x, 0.0), 1.0)


class FJacobi(Jacobi):
    def __init__(self, hurst: float, alpha, beta, sigma, n, x0=0.5, t=None, m=None, **kwargs):
        super().__init__(alpha, beta, sigma, n, x0, t, m, hurst=hurst, **kwargs)


# ---------------------------------------------------------------------------
class Vasicek(OU):
    """Vasicek short rate, an OU process with ``theta`` defaulting to 1."""

    def __init__(
        self,
        mu: float,
        sigma: float,
        n: int,
        x0: float = 0.0,
        t: float | None = None,
        m: int | None = None,
        *,
        theta: float = 1.0,
        **kwargs,
    ):
        super().__init__(theta, mu, sigma, n, x0, t, m, **kwargs)


class FVasicek(Vasicek):
    def __init__(self, hurst: float, mu, sigma, n, x0=0.0, t=None, m=None, **kwargs):
        super().__init__(mu, sigma, n, x0, t, m, hurst=hurst, **kwargs)
