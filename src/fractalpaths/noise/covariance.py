"""Autocovariance of fractional Gaussian noise and its embeddings.

For unit-spaced fGN increments with Hurst exponent :math:`H` the
autocovariance at lag :math:`k` is

.. math:: r(k) = \\tfrac12\\left(|k+1|^{2H} - 2|k|^{2H} + |k-1|^{2H}\\right),

with :math:`r(0) = 1`.  The circulant row used by the Davies–Harte sampler
is :math:`[r_0, r_1, …, r_N, r_{N-1}, …, r_1]` (length :math:`2N`), whose
DFT gives the eigenvalues of the embedding matrix.
"""

from __future__ import annotations

import numpy as np
from scipy import linalg

from ..errors import InvalidParameterError

__all__ = [
    "next_power_of_two",
    "fgn_autocovariance",
    "circulant_row",
    "toeplitz_covariance",
]


def next_power_of_two(n: int) -> int:
    """Smallest power of two ``>= n``."""
    n = int(n)
    if n < 1:
        raise InvalidParameterError(f"n must be >= 1, got {n}")
    return 1 << (n - 1).bit_length()


def _check_hurst(hurst: float) -> float:
    hurst = float(hurst)
    if not (0.0 < hurst < 1.0):
        raise InvalidParameterError(f"Hurst exponent must lie in (0, 1), got {hurst}")
    return hurst


def _acf(hurst: float, k: np.ndarray) -> np.ndarray:
    h2 = 2.0 * hurst
    r = 0.5 * (np.abs(k + 1.0) ** h2 - 2.0 * np.abs(k) ** h2 + np.abs(k - 1.0) ** h2)
    r[k == 0] = 1.0
    return r


def fgn_autocovariance(hurst: float, n: int) -> np.ndarray:
    """Autocovariance ``r(0), …, r(n-1)`` of unit-step fGN."""
    hurst = _check_hurst(hurst)
    if int(n) < 1:
        raise InvalidParameterError(f"n must be >= 1, got {n}")
    return _acf(hurst, np.arange(int(n), dtype=float))


def circulant_row(hurst: float, n_pad: int) -> np.ndarray:
    """First row of the ``2·n_pad`` circulant embedding."""
    hurst = _check_hurst(hurst)
    r = _acf(hurst, np.arange(int(n_pad) + 1, dtype=float))
    # mirror without the first and last samples
    return np.concatenate([r, r[::-1][1:-1]])


def toeplitz_covariance(hurst: float, n: int) -> np.ndarray:
    """Dense ``n × n`` covariance matrix of unit-step fGN."""
    return linalg.toeplitz(fgn_autocovariance(hurst, n))
