"""Empirical checks for simulated paths.

Helpers accept a pandas Series or a NumPy array for single series and a
``(m, n)`` matrix for batches (one path per row, as returned by
``sample_par``).
"""

from __future__ import annotations

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike

from ..errors import InvalidParameterError
from ..noise.covariance import _acf, _check_hurst

__all__ = [
    "autocovariance",
    "autocorrelation",
    "mean_autocorrelation",
    "theoretical_autocorrelation",
    "empirical_correlation",
    "path_summary",
]


def _as_series(x: pd.Series | ArrayLike) -> np.ndarray:
    if isinstance(x, pd.Series):
        arr = x.astype(float).to_numpy()
    else:
        arr = np.asarray(x, dtype=float)
    if arr.ndim != 1:
        raise InvalidParameterError("Input series must be one‑dimensional")
    return arr


def autocovariance(x: pd.Series | ArrayLike, max_lag: int) -> np.ndarray:
    """Biased sample autocovariance for lags ``0..max_lag``."""
    arr = _as_series(x)
    n = arr.size
    if not 0 <= max_lag < n:
        raise InvalidParameterError("max_lag must lie in [0, len(x))")
    d = arr - arr.mean()
    return np.array([d[: n - k] @ d[k:] / n for k in range(max_lag + 1)])


def autocorrelation(x: pd.Series | ArrayLike, max_lag: int) -> np.ndarray:
    acov = autocovariance(x, max_lag)
    if acov[0] == 0.0:
        return np.zeros_like(acov)
    return acov / acov[0]


def mean_autocorrelation(paths: ArrayLike, lag: int = 1) -> float:
    """Lag-``lag`` sample autocorrelation averaged over the rows of ``paths``."""
    paths = np.atleast_2d(np.asarray(paths, dtype=float))
    return float(np.mean([autocorrelation(row, lag)[lag] for row in paths]))


def theoretical_autocorrelation(hurst: float, lag: int | ArrayLike) -> np.ndarray | float:
    """fGN autocorrelation ``r(k)``."""
    k = np.abs(np.atleast_1d(np.asarray(lag, dtype=float)))
    r = _acf(_check_hurst(hurst), k)
    return float(r[0]) if np.ndim(lag) == 0 else r


def empirical_correlation(a: ArrayLike, b: ArrayLike) -> float:
    """Pearson correlation of two equally shaped samples (flattened)."""
    a = np.asarray(a, dtype=float).ravel()
    b = np.asarray(b, dtype=float).ravel()
    if a.shape != b.shape:
        raise InvalidParameterError("a and b must have the same size")
    return float(np.corrcoef(a, b)[0, 1])


def path_summary(
    paths: ArrayLike,
    t: float = 1.0,
    quantiles: tuple[float, ...] = (0.05, 0.5, 0.95),
) -> pd.DataFrame:
    """Cross-sectional mean, std and quantiles at every grid time."""
    paths = np.atleast_2d(np.asarray(paths, dtype=float))
    times = np.linspace(0.0, float(t), paths.shape[1])
    frame = pd.DataFrame(
        {
            "mean": paths.mean(axis=0),
            "std": paths.std(axis=0, ddof=1) if paths.shape[0] > 1 else 0.0,
        },
        index=pd.Index(times, name="t"),
    )
    for q in quantiles:
        frame[f"q{q:g}"] = np.quantile(paths, q, axis=0)
    return frame
