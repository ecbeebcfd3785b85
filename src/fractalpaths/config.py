"""
Simulation configuration
========================
Structured OmegaConf configs describing a driving noise and, optionally, a
process driven by it::

    cfg = load_config("sim.yaml", overrides=["noise.hurst=0.3", "noise.m=50"])
    paths = build_process(cfg).sample_par()

A YAML file only needs the keys it changes; everything else falls back to
the dataclass defaults below.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from .errors import InvalidParameterError
from .models import (
    BM,
    CEV,
    CIR,
    FBM,
    FCEV,
    FCIR,
    FGBM,
    FJacobi,
    FOU,
    FVasicek,
    GBM,
    HoLee,
    HullWhite,
    OU,
    SABR,
    Heston,
    Jacobi,
    Vasicek,
)
from .noise import FGN, GN
from .sampling import _SamplingBase

__all__ = [
    "NoiseConfig",
    "ProcessConfig",
    "SimulationConfig",
    "PROCESS_REGISTRY",
    "load_config",
    "build_noise",
    "build_process",
    "configure_logging",
]

logger = logging.getLogger(__name__)

NOISE_KINDS = ("fgn", "gn")


@dataclass
class NoiseConfig:
    kind: str = "fgn"
    hurst: Optional[float] = 0.7
    n: int = 1024
    t: Optional[float] = None
    m: Optional[int] = None
    method: str = "fft"
    seed: Optional[int] = None


@dataclass
class ProcessConfig:
    name: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SimulationConfig:
    noise: NoiseConfig = field(default_factory=NoiseConfig)
    process: ProcessConfig = field(default_factory=ProcessConfig)
    n_workers: Optional[int] = None
    log_level: str = "INFO"


# name -> (Brownian-driven class, fractional class)
PROCESS_REGISTRY: dict[str, tuple[type, type]] = {
    "bm": (BM, FBM),
    "ou": (OU, FOU),
    "cir": (CIR, FCIR),
    "gbm": (GBM, FGBM),
    "cev": (CEV, FCEV),
    "jacobi": (Jacobi, FJacobi),
    "vasicek": (Vasicek, FVasicek),
    "hull_white": (HullWhite, HullWhite),
    "ho_lee": (HoLee, HoLee),
    "heston": (Heston, Heston),
    "sabr": (SABR, SABR),
}


# ---------------------------------------------------------------------- #
def load_config(
    path: str | Path | None = None,
    overrides: List[str] | None = None,
) -> DictConfig:
    """Defaults, then the YAML file at *path*, then dot-list *overrides*."""
    parts = [OmegaConf.structured(SimulationConfig)]
    if path is not None:
        parts.append(OmegaConf.load(Path(path)))
    if overrides:
        parts.append(OmegaConf.from_dotlist(list(overrides)))
    try:
        cfg = OmegaConf.merge(*parts)
    except OmegaConfBaseException as exc:
        raise InvalidParameterError(f"invalid simulation config: {exc}") from exc

    if cfg.noise.kind not in NOISE_KINDS:
        raise InvalidParameterError(
            f"noise.kind must be one of {NOISE_KINDS}, got {cfg.noise.kind!r}"
        )
    if cfg.noise.kind == "fgn" and cfg.noise.hurst is None:
        raise InvalidParameterError("noise.hurst is required for fgn noise")
    name = cfg.process.name
    if name is not None and name not in PROCESS_REGISTRY:
        raise InvalidParameterError(
            f"unknown process {name!r}; expected one of {sorted(PROCESS_REGISTRY)}"
        )
    logger.debug("loaded config:\n%s", OmegaConf.to_yaml(cfg))
    return cfg


def _as_dictconfig(cfg) -> DictConfig:
    if isinstance(cfg, (NoiseConfig, SimulationConfig)):
        return OmegaConf.structured(cfg)
    return cfg


def build_noise(cfg, n_workers: int | None = None) -> _SamplingBase:
    """FGN or GN engine described by ``cfg.noise`` (or a bare noise section)."""
    cfg = _as_dictconfig(cfg)
    noise = cfg.noise if "noise" in cfg else cfg
    if n_workers is None and "n_workers" in cfg:
        n_workers = cfg.n_workers
    if noise.kind == "fgn":
        return FGN(
            noise.hurst,
            noise.n,
            noise.t,
            noise.m,
            method=noise.method,
            seed=noise.seed,
            n_workers=n_workers,
        )
    if noise.kind == "gn":
        return GN(noise.n, noise.t, noise.m, seed=noise.seed, n_workers=n_workers)
    raise InvalidParameterError(f"unknown noise kind {noise.kind!r}")


def build_process(cfg) -> _SamplingBase:
    """Registered process ``cfg.process.name`` driven by ``cfg.noise``.

    ``noise.n`` is the number of grid points of the process.  With
    ``kind="fgn"`` the fractional member of the family is built with
    ``noise.hurst`` and ``noise.method``.
    """
    cfg = _as_dictconfig(cfg)
    name = cfg.process.name
    if name is None:
        raise InvalidParameterError("process.name is not set")
    try:
        plain, fractional = PROCESS_REGISTRY[name]
    except KeyError:
        raise InvalidParameterError(f"unknown process {name!r}") from None

    noise = cfg.noise
    kwargs: dict[str, Any] = dict(OmegaConf.to_container(cfg.process.params, resolve=True))
    kwargs.update(
        n=noise.n, t=noise.t, m=noise.m, seed=noise.seed, n_workers=cfg.n_workers
    )
    if noise.kind == "fgn":
        kwargs.update(hurst=noise.hurst, method=noise.method)
        cls = fractional
    else:
        cls = plain
    try:
        return cls(**kwargs)
    except TypeError as exc:
        raise InvalidParameterError(f"bad parameters for process {name!r}: {exc}") from exc


# ---------------------------------------------------------------------- #
def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a timestamped stream handler to the ``fractalpaths`` logger."""
    root = logging.getLogger("fractalpaths")
    if isinstance(level, str):
        name, level = level, logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise InvalidParameterError(f"unknown log level {name!r}")
    root.setLevel(level)
    if not any(getattr(h, "_fractalpaths", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handler._fractalpaths = True
        root.addHandler(handler)
    return root
