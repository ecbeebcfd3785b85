"""Driving noises: Gaussian, fractional Gaussian and correlated variants."""

from .correlated import (
    CFGNS,
    CGNS,
    CorrelatedNoise3D,
    check_rho,
    correlate,
    correlation_factor,
)
from .covariance import (
    circulant_row,
    fgn_autocovariance,
    next_power_of_two,
    toeplitz_covariance,
)
from .fgn import FGN, CholeskyFactorization, CirculantEmbedding, fgn
from .gn import GN

__all__ = [
    "FGN",
    "fgn",
    "GN",
    "CirculantEmbedding",
    "CholeskyFactorization",
    "CGNS",
    "CFGNS",
    "CorrelatedNoise3D",
    "check_rho",
    "correlate",
    "correlation_factor",
    "circulant_row",
    "fgn_autocovariance",
    "next_power_of_two",
    "toeplitz_covariance",
]
