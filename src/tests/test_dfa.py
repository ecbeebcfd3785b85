import numpy as np
import pandas as pd
import pytest

from fractalpaths.errors import InvalidParameterError
from fractalpaths.estimators import DFA
from fractalpaths.models import FBM
from fractalpaths.noise import FGN


@pytest.mark.parametrize("H_true", [0.5, 0.7])
def test_dfa_recovers_fbm_hurst(H_true):
    path = FBM(H_true, 8193, seed=123).sample()
    est = DFA(pd.Series(path), from_levels=True).fit()
    assert abs(est.result_["H"] - H_true) < 0.05


def test_dfa_on_increments():
    x = FGN(0.75, 4096, seed=42).sample()
    est = DFA(x, from_levels=False).fit()
    assert abs(est.result_["H"] - 0.75) < 0.06


def test_dfa_auto_range():
    path = FBM(0.6, 4097, seed=7).sample()
    est = DFA(path, auto_range=True).fit()
    assert est.result_["fit_scales"].size >= est.min_points
    assert abs(est.result_["H"] - 0.6) < 0.08


def test_dfa_rejects_short_series():
    with pytest.raises(InvalidParameterError):
        DFA(np.arange(10.0)).fit()


def test_dfa_rejects_unknown_option():
    with pytest.raises(InvalidParameterError):
        DFA(np.zeros(100), bogus=1)


def test_fit_paths_summarises_a_batch():
    paths = FBM(0.7, 2049, seed=9).sample_par(m=6)
    frame = DFA.fit_paths(paths, min_scale=16)
    assert list(frame.columns) == ["H", "intercept"]
    assert len(frame) == 6
    assert abs(frame["H"].mean() - 0.7) < 0.08
