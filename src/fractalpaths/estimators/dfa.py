"""Detrended‑Fluctuation Analysis (DFA‑1).

Checks that simulated paths carry the Hurst exponent they were generated
with.  The profile ``Y = cumsum(x - mean(x))`` of the increments ``x`` is
cut into windows of size ``s``; the RMS residual of a linear fit per window
gives ``F(s) ∝ s^H``.  Level paths (``FBM`` output, ``from_levels=True``)
are differenced first, fGN increments are used as they are.
"""

from __future__ import annotations

import numpy as np

from ..errors import InvalidParameterError, NumericalError
from ._base import BaseEstimator


def _fluctuation(profile: np.ndarray, s: int) -> float:
    blocks = len(profile) // s
    if blocks < 2:
        return np.nan
    seg = profile[: blocks * s].reshape(blocks, s)
    u = np.arange(s, dtype=float)
    u -= u.mean()
    # closed-form least squares per row
    slope = seg @ u / (u @ u)
    resid = seg - seg.mean(axis=1, keepdims=True) - np.outer(slope, u)
    return float(np.sqrt(np.mean(resid**2)))


class DFA(BaseEstimator):
    def __init__(
        self,
        series,
        *,
        min_scale: int = 8,
        max_scale: int | None = None,
        n_scales: int = 20,
        from_levels: bool = True,
        **options,
    ):
        super().__init__(series, **options)
        self.min_scale = int(min_scale)
        self.max_scale = max_scale
        self.n_scales = int(n_scales)
        self.from_levels = bool(from_levels)

    def scales(self, length: int) -> np.ndarray:
        """Log‑spaced window sizes between ``min_scale`` and ``max_scale``."""
        top = int(self.max_scale or length // 4)
        if top < self.min_scale:
            raise InvalidParameterError(
                f"max_scale ({top}) must be >= min_scale ({self.min_scale})"
            )
        grid = np.geomspace(self.min_scale, top, num=self.n_scales)
        return np.unique(grid.astype(int))

    def fit(self):
        x = np.diff(self.series) if self.from_levels else self.series
        if x.size < 2 * self.min_scale:
            raise InvalidParameterError(
                f"DFA needs at least {2 * self.min_scale} increments, got {x.size}"
            )

        profile = np.cumsum(x - x.mean())
        s = self.scales(x.size)
        F = np.array([_fluctuation(profile, k) for k in s])
        ok = np.isfinite(F) & (F > 0)
        if ok.sum() < 2:
            raise NumericalError("DFA: fewer than two usable scales")

        log_s, log_F = np.log(s[ok]), np.log(F[ok])
        win = self._scaling_window(log_s, log_F)
        slope, intercept = np.polyfit(log_s[win], log_F[win], 1)
        self.result_ = {
            "H": float(slope),
            "intercept": float(intercept),
            "scales": s[ok],
            "fluctuation": F[ok],
            "fit_scales": s[ok][win],
        }
        return self
