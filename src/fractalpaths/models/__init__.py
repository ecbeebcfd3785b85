"""
Public API re‑exports for ``fractalpaths.models``.
"""

from __future__ import annotations

# ── generic drift/diffusion composition ───────────────────────────────
from .base import (
    CustomProcess,
    CustomProcess2D,
    CustomProcess3D,
    Process,
    Process2D,
    Process3D,
)

# ── (fractional) Brownian motions ─────────────────────────────────────
from .bm import BM, CBMS, CFBMS, FBM

# ── one-factor diffusions ─────────────────────────────────────────────
from .diffusion import (
    CEV,
    CIR,
    FCEV,
    FCIR,
    FGBM,
    FJacobi,
    FOU,
    FVasicek,
    GBM,
    OU,
    Jacobi,
    Vasicek,
)

# ── short rates, jumps and stochastic volatility ──────────────────────
from .interest import HoLee, HullWhite
from .jump import Bates, JumpFOU, Merton
from .poisson import CompoundPoisson, Poisson
from .volatility import SABR, Heston

__all__ = [
    # composition
    "Process",
    "Process2D",
    "Process3D",
    "CustomProcess",
    "CustomProcess2D",
    "CustomProcess3D",
    # Brownian motions
    "BM",
    "FBM",
    "CBMS",
    "CFBMS",
    # diffusions
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
    # short rates with a time-dependent drift
    "HullWhite",
    "HoLee",
    # jumps
    "Poisson",
    "CompoundPoisson",
    "Merton",
    "Bates",
    "JumpFOU",
    # stochastic volatility
    "Heston",
    "SABR",
]
