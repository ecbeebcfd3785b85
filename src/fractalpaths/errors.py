"""Exception hierarchy shared by the noise engines and the process layer.

Two families are distinguished:

* :class:`InvalidParameterError` – bad user input (Hurst exponent outside
  ``(0, 1)``, correlation outside ``[-1, 1]``, missing ``m`` for batch
  sampling …).  Also a :class:`ValueError` so generic handlers keep working.
* :class:`NumericalError` – the input was well formed but the numerics
  broke down (invalid circulant embedding, non positive-definite covariance).
"""

from __future__ import annotations

__all__ = [
    "FractalPathsError",
    "InvalidParameterError",
    "NumericalError",
    "EmbeddingError",
    "NotPositiveDefiniteError",
]


class FractalPathsError(Exception):
    """Root of every error raised by :mod:`fractalpaths`."""


class InvalidParameterError(FractalPathsError, ValueError):
    pass


class NumericalError(FractalPathsError, ArithmeticError):
    pass


class EmbeddingError(NumericalError):
    """Circulant embedding yielded negative or non-finite eigenvalues."""


class NotPositiveDefiniteError(NumericalError):
    """A covariance or correlation matrix could not be factorised."""
