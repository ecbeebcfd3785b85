from ._base import BaseEstimator
from .dfa import DFA

__all__ = ["BaseEstimator", "DFA"]
