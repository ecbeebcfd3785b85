import numpy as np
import pandas as pd
import pytest

from fractalpaths.analysis import (
    autocorrelation,
    autocovariance,
    empirical_correlation,
    mean_autocorrelation,
    path_summary,
    theoretical_autocorrelation,
)
from fractalpaths.errors import InvalidParameterError
from fractalpaths.models import BM
from fractalpaths.noise import FGN


def test_autocovariance_small_series():
    x = pd.Series([1.0, -1.0, 1.0, -1.0])
    acov = autocovariance(x, 2)
    assert acov[0] == pytest.approx(1.0)
    assert acov[1] == pytest.approx(-0.75)
    assert acov[2] == pytest.approx(0.5)
    assert autocorrelation(x, 1)[1] == pytest.approx(-0.75)


def test_autocorrelation_of_constant():
    assert np.all(autocorrelation(np.ones(5), 2) == 0.0)


def test_autocovariance_bad_lag():
    with pytest.raises(InvalidParameterError):
        autocovariance(np.zeros(5), 5)
    with pytest.raises(InvalidParameterError):
        autocovariance(np.zeros((2, 2)), 1)


def test_theoretical_autocorrelation():
    assert theoretical_autocorrelation(0.5, 1) == pytest.approx(0.0)
    assert theoretical_autocorrelation(0.7, 0) == 1.0
    r = theoretical_autocorrelation(0.7, [1, 2, 3])
    assert r.shape == (3,)
    assert np.all(np.diff(r) < 0)


def test_mean_autocorrelation_matches_theory():
    paths = FGN(0.3, 1024, seed=0).sample_par(m=200)
    est = mean_autocorrelation(paths, lag=1)
    assert est == pytest.approx(theoretical_autocorrelation(0.3, 1), abs=0.02)


def test_empirical_correlation():
    a = np.arange(10.0)
    assert empirical_correlation(a, 2 * a + 1) == pytest.approx(1.0)
    with pytest.raises(InvalidParameterError):
        empirical_correlation(a, a[:5])


def test_path_summary():
    paths = BM(21, t=2.0, seed=1).sample_par(m=100)
    frame = path_summary(paths, t=2.0)
    assert list(frame.columns) == ["mean", "std", "q0.05", "q0.5", "q0.95"]
    assert frame.index.name == "t"
    assert frame.index[-1] == pytest.approx(2.0)
    assert frame.loc[0.0, "std"] == 0.0
