from .diagnostics import (
    autocorrelation,
    autocovariance,
    empirical_correlation,
    mean_autocorrelation,
    path_summary,
    theoretical_autocorrelation,
)

__all__ = [
    "autocovariance",
    "autocorrelation",
    "mean_autocorrelation",
    "theoretical_autocorrelation",
    "empirical_correlation",
    "path_summary",
]
