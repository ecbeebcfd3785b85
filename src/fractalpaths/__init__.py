import logging
from importlib.metadata import version

try:
    __version__ = version("fractalpaths")
except Exception:
    __version__ = "0.0.0"

from .errors import (  # noqa
    EmbeddingError,
    FractalPathsError,
    InvalidParameterError,
    NotPositiveDefiniteError,
    NumericalError,
)
from .noise import CFGNS, CGNS, FGN, GN, CorrelatedNoise3D, fgn  # noqa
from .sampling import Sampling, Sampling2D, Sampling3D  # noqa

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "FGN",
    "fgn",
    "GN",
    "CGNS",
    "CFGNS",
    "CorrelatedNoise3D",
    "Sampling",
    "Sampling2D",
    "Sampling3D",
    "FractalPathsError",
    "InvalidParameterError",
    "NumericalError",
    "EmbeddingError",
    "NotPositiveDefiniteError",
]
