import importlib

import numpy as np
import pytest

from fractalpaths.analysis import mean_autocorrelation
from fractalpaths.errors import (
    EmbeddingError,
    InvalidParameterError,
    NotPositiveDefiniteError,
)
from fractalpaths.noise import FGN, fgn, fgn_autocovariance

fgn_module = importlib.import_module("fractalpaths.noise.fgn")


@pytest.mark.parametrize("H", [0.1, 0.3, 0.5, 0.7, 0.95])
@pytest.mark.parametrize("n", [1, 2, 3, 100, 1000, 1025])
def test_sample_has_requested_length(H, n):
    x = FGN(H, n, seed=0).sample()
    assert x.shape == (n,)
    assert np.all(np.isfinite(x))


@pytest.mark.parametrize("H", [0.0, 1.0, -0.1, 1.5])
def test_invalid_hurst_rejected(H):
    with pytest.raises(InvalidParameterError):
        FGN(H, 100)


def test_invalid_n_and_t_rejected():
    with pytest.raises(InvalidParameterError):
        FGN(0.5, 0)
    with pytest.raises(InvalidParameterError):
        FGN(0.5, 10, t=0.0)
    with pytest.raises(InvalidParameterError):
        FGN(0.5, 10, t=-1.0)


def test_unknown_method_rejected():
    with pytest.raises(InvalidParameterError):
        FGN(0.5, 10, method="hosking")


def test_sample_par_without_m_fails():
    with pytest.raises(InvalidParameterError):
        FGN(0.7, 100).sample_par()


def test_padding_and_offset():
    eng = FGN(0.7, 100)
    assert eng.n_pad == 128
    assert eng.offset == 28
    assert eng.sqrt_eigenvalues.size == 256
    chol = FGN(0.7, 100, method="cholesky")
    assert chol.n_pad == 100
    assert chol.offset == 0
    assert chol.sqrt_eigenvalues is None


def test_eigenvalues_are_read_only():
    eng = FGN(0.3, 64)
    with pytest.raises(ValueError):
        eng.sqrt_eigenvalues[0] = 0.0


def test_padding_is_invisible_in_scale():
    eng = FGN(0.7, 100, t=2.0)
    assert eng.scale == pytest.approx(100 ** (-0.7) * 2.0**0.7)
    assert eng.dt == pytest.approx(2.0 / 100)


@pytest.mark.parametrize("H", [0.3, 0.9])
def test_fft_and_cholesky_agree_without_power_of_two(H):
    n, T = 513, 2.0
    v_fft = np.var(FGN(H, n, T, method="fft", seed=21).sample_par(m=2000))
    v_chol = np.var(FGN(H, n, T, method="cholesky", seed=22).sample_par(m=2000))
    expected = n ** (-2 * H) * T ** (2 * H)
    assert v_fft == pytest.approx(expected, rel=0.05)
    assert v_chol == pytest.approx(expected, rel=0.05)


def test_lag_one_autocorrelation():
    H, n = 0.7, 2048
    paths = FGN(H, n, seed=11).sample_par(m=2000)
    r1 = fgn_autocovariance(H, 2)[1]
    assert abs(mean_autocorrelation(paths, lag=1) - r1) < 0.05 * r1


def test_white_noise_limit():
    eng = FGN(0.5, 512, seed=3)
    n_pad = eng.n_pad
    assert np.allclose(eng.sqrt_eigenvalues.real, np.sqrt(1.0 / (2 * n_pad)))
    paths = eng.sample_par(m=500)
    corr = np.mean(paths[:, :-1] * paths[:, 1:]) / np.mean(paths**2)
    assert abs(corr) < 0.02
    assert np.var(paths) == pytest.approx(eng.scale**2, rel=0.05)


def test_fft_and_cholesky_variance_agree():
    H, n = 0.6, 256
    v_fft = np.var(FGN(H, n, method="fft", seed=1).sample_par(m=5000))
    v_chol = np.var(FGN(H, n, method="cholesky", seed=2).sample_par(m=5000))
    assert abs(v_fft - v_chol) < 0.05 * v_chol


def test_sample_par_rows_are_distinct():
    out = FGN(0.4, 100, m=10, seed=5).sample_par()
    assert out.shape == (10, 100)
    assert len({row.tobytes() for row in out}) == 10


def test_seed_reproducibility():
    a = FGN(0.7, 300, seed=42)
    b = FGN(0.7, 300, seed=42)
    assert np.array_equal(a.sample(), b.sample())
    assert np.array_equal(a.sample_par(m=4), b.sample_par(m=4))
    c = FGN(0.7, 300, seed=43)
    assert not np.array_equal(FGN(0.7, 300, seed=42).sample(), c.sample())


def test_explicit_generator_overrides_engine_rng():
    eng = FGN(0.2, 50, seed=0)
    x = eng.sample(rng=np.random.default_rng(9))
    y = eng.sample(rng=np.random.default_rng(9))
    assert np.array_equal(x, y)


def test_fgn_helper():
    x = fgn(0.8, 77, t=3.0, method="cholesky", seed=1)
    assert x.shape == (77,)


def test_negative_embedding_rejected(monkeypatch):
    # eigenvalues 1 + 2 cos(w) reach -1
    def bad_row(hurst, n_pad):
        row = np.zeros(2 * n_pad)
        row[0], row[1], row[-1] = 1.0, 1.0, 1.0
        return row

    monkeypatch.setattr(fgn_module, "circulant_row", bad_row)
    with pytest.raises(EmbeddingError):
        FGN(0.7, 16)


def test_non_finite_embedding_rejected(monkeypatch):
    monkeypatch.setattr(
        fgn_module, "circulant_row", lambda hurst, n_pad: np.full(2 * n_pad, np.nan)
    )
    with pytest.raises(EmbeddingError):
        FGN(0.7, 16)


def test_cholesky_failure_is_reported(monkeypatch):
    monkeypatch.setattr(fgn_module, "toeplitz_covariance", lambda hurst, n: -np.eye(n))
    with pytest.raises(NotPositiveDefiniteError):
        FGN(0.7, 16, method="cholesky")
