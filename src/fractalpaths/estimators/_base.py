"""
Shared machinery for Hurst estimators
=====================================
Estimators wrap a single 1‑D series (NumPy array or pandas Series) and
store their output in ``result_`` after :meth:`fit`.  Batches produced by
``sample_par`` are handled by :meth:`BaseEstimator.fit_paths`, which fits
every row and summarises the spread of the estimates.
"""

from __future__ import annotations

import abc
from typing import Any

import numpy as np
import pandas as pd
from scipy import stats

from ..errors import InvalidParameterError


class BaseEstimator(abc.ABC):
    """Parent of the concrete estimators.

    ``auto_range=True`` restricts the log–log regression to the window
    returned by :meth:`_scaling_window`; ``min_points`` and ``r2_thresh``
    tune that search.
    """

    def __init__(self, series: pd.Series | np.ndarray | list[float], **options):
        arr = series.astype(float).to_numpy() if isinstance(series, pd.Series) else series
        self.series = np.asarray(arr, dtype=float)
        if self.series.ndim != 1:
            raise InvalidParameterError("estimators take a single 1‑D path")

        self.auto_range = bool(options.pop("auto_range", False))
        self.min_points = int(options.pop("min_points", 5))
        self.r2_thresh = float(options.pop("r2_thresh", 0.98))
        if options:
            raise InvalidParameterError(f"unknown estimator options: {sorted(options)}")
        self.result_: dict[str, Any] | None = None

    @abc.abstractmethod
    def fit(self) -> "BaseEstimator":
        ...

    # ------------------------------------------------------------------
    @classmethod
    def fit_paths(cls, paths, **options) -> pd.DataFrame:
        """Fit each row of an ``(m, n)`` path matrix.

        Returns one row per path with the estimate ``H`` and the regression
        ``intercept``; ``frame["H"].describe()`` summarises the batch.
        """
        paths = np.atleast_2d(np.asarray(paths, dtype=float))
        rows = []
        for path in paths:
            res = cls(path, **dict(options)).fit().result_
            rows.append({"H": res["H"], "intercept": res["intercept"]})
        return pd.DataFrame(rows, index=pd.RangeIndex(len(rows), name="path"))

    # ------------------------------------------------------------------
    def _scaling_window(self, x: np.ndarray, y: np.ndarray) -> slice:
        """Widest contiguous window of ``(x, y)`` that is linear enough.

        Windows of at least ``min_points`` scales are ranked by whether
        their :math:`R^2` reaches ``r2_thresh``, then by length, then by
        :math:`R^2`.  Without ``auto_range`` the full range is used.
        """
        size = x.size
        if not self.auto_range or size <= self.min_points:
            return slice(0, size)

        best, best_key = slice(0, size), None
        for lo in range(size - self.min_points + 1):
            for hi in range(lo + self.min_points, size + 1):
                r2 = stats.linregress(x[lo:hi], y[lo:hi]).rvalue ** 2
                key = (r2 >= self.r2_thresh, hi - lo, r2)
                if best_key is None or key > best_key:
                    best, best_key = slice(lo, hi), key
        return best
