"""Poisson and compound Poisson processes.

Both support two modes: a fixed number of events ``n`` or every event on
``[0, t_max]`` (variable length, so batch sampling needs ``n``).  Jump
sizes come from any frozen ``scipy.stats`` distribution.
"""

from __future__ import annotations

import numpy as np

from ..errors import InvalidParameterError
from ..sampling import Sampling, Sampling3D

__all__ = ["Poisson", "CompoundPoisson"]


def _check_mode(n: int | None, t_max: float | None) -> None:
    if n is None and t_max is None:
        raise InvalidParameterError("n or t_max must be provided")
    if t_max is not None and t_max <= 0.0:
        raise InvalidParameterError("t_max must be positive")


class Poisson(Sampling):
    """Arrival times of a homogeneous Poisson process (first entry 0)."""

    def __init__(
        self,
        lambda_: float,
        n: int | None = None,
        t_max: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        _check_mode(n, t_max)
        if lambda_ <= 0.0:
            raise InvalidParameterError("lambda_ must be positive")
        super().__init__(1 if n is None else n, t_max, m, **kwargs)
        self.lambda_ = float(lambda_)
        self.n_events = None if n is None else int(n)
        self.t_max = t_max

    def sample(self, rng: np.random.Generator | None = None) -> np.ndarray:
        rng = self._resolve_rng(rng)
        scale = 1.0 / self.lambda_
        if self.n_events is not None:
            gaps = rng.exponential(scale, size=self.n_events - 1)
            return np.concatenate([[0.0], np.cumsum(gaps)])

        times = [0.0]
        t = 0.0
        while True:
            t += rng.exponential(scale)
            if t >= self.t_max:
                break
            times.append(t)
        return np.asarray(times)

    def sample_par(self, m: int | None = None):
        if self.n_events is None:
            raise InvalidParameterError("sample_par needs a fixed number of events n")
        return super().sample_par(m)


class CompoundPoisson(Sampling3D):
    """Compound Poisson process: ``(times, cumulative_jumps, jumps)``.

    ``jump_distribution`` is a frozen ``scipy.stats`` distribution, e.g.
    ``scipy.stats.norm(0.0, 0.1)``.
    """

    def __init__(
        self,
        lambda_: float,
        jump_distribution,
        n: int | None = None,
        t_max: float | None = None,
        m: int | None = None,
        **kwargs,
    ):
        self.poisson = Poisson(lambda_, n, t_max)
        super().__init__(self.poisson.n, self.poisson.t, m, **kwargs)
        self.lambda_ = self.poisson.lambda_
        self.jump_distribution = jump_distribution

    def _draw_sizes(self, size: int, rng: np.random.Generator) -> np.ndarray:
        return np.asarray(
            self.jump_distribution.rvs(size=size, random_state=rng), dtype=float
        ).reshape(size)

    def sample(
        self, rng: np.random.Generator | None = None
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        rng = self._resolve_rng(rng)
        times = self.poisson.sample(rng=rng)
        jumps = np.zeros(times.size)
        jumps[1:] = self._draw_sizes(times.size - 1, rng)
        return times, np.cumsum(jumps), jumps

    def sample_par(self, m: int | None = None):
        if self.poisson.n_events is None:
            raise InvalidParameterError("sample_par needs a fixed number of events n")
        return super().sample_par(m)

    def step_jumps(
        self, n_steps: int, dt: float, rng: np.random.Generator | None = None
    ) -> np.ndarray:
        """Total jump size falling in each of ``n_steps`` intervals of length ``dt``."""
        rng = self._resolve_rng(rng)
        counts = rng.poisson(self.lambda_ * dt, size=int(n_steps))
        total = int(counts.sum())
        if total == 0:
            return np.zeros(int(n_steps))
        sizes = self._draw_sizes(total, rng)
        owner = np.repeat(np.arange(int(n_steps)), counts)
        return np.bincount(owner, weights=sizes, minlength=int(n_steps))

    def jump_compensator(self) -> float:
        """``E[e^Y] - 1`` for log-jumps ``Y``, used to keep prices martingales."""
        return float(self.jump_distribution.expect(np.exp)) - 1.0
