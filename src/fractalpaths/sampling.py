"""
Sampling capabilities
=====================
Every noise engine and process in the package implements one of

* :class:`Sampling`   – ``sample()`` returns one path (1‑D array)
* :class:`Sampling2D` – ``sample()`` returns a pair of paths
* :class:`Sampling3D` – ``sample()`` returns a triple of paths

and inherits :meth:`~_SamplingBase.sample_par`, which replicates
``sample()`` over a thread pool.  Each row receives its own
``numpy.random.Generator`` spawned from the instance ``SeedSequence`` so a
fixed ``seed`` gives a reproducible batch whatever the thread scheduling.
Rows never share mutable state; an exception in any row aborts the batch.
"""

from __future__ import annotations

import abc
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import numpy as np

from .errors import InvalidParameterError

__all__ = ["Sampling", "Sampling2D", "Sampling3D"]

logger = logging.getLogger(__name__)


class _SamplingBase(abc.ABC):
    """State shared by all capability sets."""

    #: number of arrays returned by ``sample()``; ``None`` for a bare array
    _arity: int | None = None

    def __init__(
        self,
        n: int,
        t: float | None = None,
        m: int | None = None,
        *,
        seed: int | None = None,
        n_workers: int | None = None,
    ):
        n = int(n)
        if n < 1:
            raise InvalidParameterError(f"n must be >= 1, got {n}")
        t = 1.0 if t is None else float(t)
        if not np.isfinite(t) or t <= 0.0:
            raise InvalidParameterError(f"time horizon t must be positive, got {t}")
        if m is not None and int(m) < 1:
            raise InvalidParameterError(f"m must be >= 1, got {m}")

        self.n = n
        self.t = t
        self.m = None if m is None else int(m)
        self.n_workers = n_workers
        self.seed = seed
        self._seed_seq = np.random.SeedSequence(seed)
        self.rng = np.random.default_rng(self._seed_seq.spawn(1)[0])

    # ------------------------------------------------------------------ #
    def _resolve_rng(self, rng: np.random.Generator | None) -> np.random.Generator:
        return self.rng if rng is None else rng

    def _spawn_rngs(self, m: int) -> list[np.random.Generator]:
        return [np.random.default_rng(s) for s in self._seed_seq.spawn(m)]

    @abc.abstractmethod
    def sample(self, rng: np.random.Generator | None = None):
        """Draw one independent realisation."""
        ...

    # ------------------------------------------------------------------ #
    def sample_par(self, m: int | None = None):
        """Draw ``m`` independent realisations on a worker pool.

        Parameters
        ----------
        m : int, optional
            Number of paths.  Falls back to the ``m`` given at construction;
            if neither is set an :class:`InvalidParameterError` is raised.

        Returns
        -------
        ndarray of shape ``(m, len)`` for 1‑D samplers, otherwise a tuple of
        such matrices (one per component).
        """
        m = self.m if m is None else m
        if m is None:
            raise InvalidParameterError("m must be specified for parallel sampling")
        m = int(m)
        if m < 1:
            raise InvalidParameterError(f"m must be >= 1, got {m}")

        rngs = self._spawn_rngs(m)
        workers = self.n_workers or os.cpu_count() or 1
        logger.debug(
            "%s: sampling %d paths on %d workers", type(self).__name__, m, workers
        )
        with ThreadPoolExecutor(max_workers=int(workers)) as ex:
            rows = list(ex.map(lambda g: self.sample(rng=g), rngs))

        if self._arity is None:
            return np.vstack(rows)
        return tuple(
            np.vstack([row[k] for row in rows]) for k in range(self._arity)
        )


class Sampling(_SamplingBase):
    """One-dimensional sampler: ``sample() -> ndarray``."""

    @abc.abstractmethod
    def sample(self, rng: np.random.Generator | None = None) -> np.ndarray:
        ...


class Sampling2D(_SamplingBase):
    """Two coupled paths: ``sample() -> (x1, x2)``."""

    _arity = 2

    @abc.abstractmethod
    def sample(
        self, rng: np.random.Generator | None = None
    ) -> tuple[np.ndarray, np.ndarray]:
        ...


class Sampling3D(_SamplingBase):
    """Three coupled paths: ``sample() -> (x1, x2, x3)``."""

    _arity = 3

    @abc.abstractmethod
    def sample(
        self, rng: np.random.Generator | None = None
    ) -> Sequence[np.ndarray]:
        ...
