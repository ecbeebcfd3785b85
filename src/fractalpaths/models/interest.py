"""
Short-rate models with a time-dependent drift
=============================================
* :class:`HullWhite` – ``dr = (θ(t) - α r) dt + σ dW``
* :class:`HoLee`     – ``dr = θ(t) dt + σ dW``

``θ`` may be a constant or a callable of time; both models are driven by
fGN when ``hurst`` is given.
"""

from __future__ import annotations

from typing import Callable, Union

from ..errors import InvalidParameterError
from .base import Process

__all__ = ["HullWhite", "HoLee"]

Curve = Union[float, Callable[[float], float]]


def _as_curve(theta: Curve) -> Callable[[float], float]:
    if callable(theta):
        return theta
    value = float(theta)
    return lambda t: value


class HullWhite(Process):
    """Hull–White (extended Vasicek) short rate."""

    def __init__(
        self,
        theta: Curve,
        alpha: float,
        sigma: float,
        n: int,
        x0: float = 0.0,
        t: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        if sigma < 0.0:
            raise InvalidParameterError("sigma must be non-negative")
        self.theta = _as_curve(theta)
        self.alpha = float(alpha)
        self.sigma = float(sigma)
        super().__init__(n, x0, t, m, **kwargs)

    def drift(self, x, t):
        return self.theta(t) - self.alpha * x

    def diffusion(self, x, t):
        return self.sigma


class HoLee(Process):
    """Ho–Lee short rate.

    Give either a constant drift ``theta`` or ``f_T``, the slope
    ``∂f(0, t)/∂t`` of the initial instantaneous forward curve; in the
    latter case the drift is ``f_T(t) + σ² t`` so the model fits that curve.
    """

    def __init__(
        self,
        sigma: float,
        n: int,
        x0: float = 0.0,
        t: float | None = None,
        m: int | None = None,
        *,
        theta: float | None = None,
        f_T: Callable[[float], float] | None = None,
        **kwargs,
    ):
        if (theta is None) == (f_T is None):
            raise InvalidParameterError("exactly one of theta or f_T must be given")
        if sigma < 0.0:
            raise InvalidParameterError("sigma must be non-negative")
        self.sigma = float(sigma)
        self.theta = None if theta is None else float(theta)
        self.f_T = f_T
        super().__init__(n, x0, t, m, **kwargs)

    def drift(self, x, t):
        if self.f_T is None:
            return self.theta
        return self.f_T(t) + self.sigma**2 * t

    def diffusion(self, x, t):
        return self.sigma
