import logging

import pytest
from omegaconf import OmegaConf

from fractalpaths.config import (
    NoiseConfig,
    SimulationConfig,
    build_noise,
    build_process,
    configure_logging,
    load_config,
)
from fractalpaths.errors import InvalidParameterError
from fractalpaths.models import FCEV, FOU, OU, Heston, HoLee
from fractalpaths.noise import FGN, GN


def test_defaults():
    cfg = load_config()
    assert cfg.noise.kind == "fgn"
    assert cfg.noise.method == "fft"
    assert cfg.process.name is None


def test_yaml_and_overrides(tmp_path):
    path = tmp_path / "sim.yaml"
    path.write_text(
        "noise:\n  hurst: 0.3\n  n: 64\n  seed: 5\n"
        "process:\n  name: ou\n  params:\n    theta: 1.0\n    mu: 0.0\n    sigma: 0.2\n"
    )
    cfg = load_config(path, overrides=["noise.m=4", "noise.method=cholesky"])
    assert cfg.noise.hurst == 0.3
    assert cfg.noise.m == 4
    assert cfg.noise.method == "cholesky"
    assert cfg.process.params.sigma == 0.2


def test_bad_values_rejected():
    with pytest.raises(InvalidParameterError):
        load_config(overrides=["noise.n=many"])
    with pytest.raises(InvalidParameterError):
        load_config(overrides=["noise.kind=levy"])
    with pytest.raises(InvalidParameterError):
        load_config(overrides=["process.name=unknown"])
    with pytest.raises(InvalidParameterError):
        load_config(overrides=["noise.hurst=null"])


def test_build_noise():
    cfg = load_config(overrides=["noise.hurst=0.4", "noise.n=100", "noise.m=3", "noise.seed=1"])
    eng = build_noise(cfg)
    assert isinstance(eng, FGN)
    assert eng.hurst == 0.4
    assert eng.sample_par().shape == (3, 100)

    gn = build_noise(NoiseConfig(kind="gn", n=10))
    assert isinstance(gn, GN)


def test_build_noise_n_workers():
    cfg = load_config(overrides=["n_workers=2"])
    assert build_noise(cfg).n_workers == 2
    assert build_noise(SimulationConfig(n_workers=3)).n_workers == 3


def test_build_process_picks_family_member():
    params = ["process.name=ou", "process.params.theta=1.0",
              "process.params.mu=0.0", "process.params.sigma=0.1", "noise.n=32"]
    frac = build_process(load_config(overrides=params))
    assert isinstance(frac, FOU)
    assert frac.noise.hurst == 0.7

    plain = build_process(load_config(overrides=params + ["noise.kind=gn"]))
    assert type(plain) is OU
    assert plain.sample().shape == (32,)


def test_build_process_two_factor():
    cfg = OmegaConf.merge(
        OmegaConf.structured(SimulationConfig),
        {
            "noise": {"kind": "gn", "n": 20, "m": 2},
            "process": {
                "name": "heston",
                "params": {"mu": 0.0, "kappa": 1.0, "theta": 0.04, "sigma": 0.2, "rho": -0.5},
            },
        },
    )
    model = build_process(cfg)
    assert isinstance(model, Heston)
    s, v = model.sample_par()
    assert s.shape == (2, 20)


def test_build_process_new_families():
    cev = build_process(
        load_config(overrides=["process.name=cev", "process.params.mu=0.05",
                               "process.params.sigma=0.2", "process.params.gamma=0.5",
                               "noise.n=32"])
    )
    assert isinstance(cev, FCEV)
    assert cev.sample().shape == (32,)

    ho_lee = build_process(
        load_config(overrides=["process.name=ho_lee", "process.params.sigma=0.01",
                               "process.params.theta=0.02", "noise.kind=gn", "noise.n=16"])
    )
    assert isinstance(ho_lee, HoLee)
    assert ho_lee.hurst is None


def test_build_process_errors():
    with pytest.raises(InvalidParameterError):
        build_process(load_config())
    with pytest.raises(InvalidParameterError):
        build_process(load_config(overrides=["process.name=ou", "noise.kind=gn"]))


def test_configure_logging():
    log = configure_logging("debug")
    assert log.level == logging.DEBUG
    n_handlers = len(log.handlers)
    configure_logging(logging.WARNING)
    assert len(log.handlers) == n_handlers
    assert log.level == logging.WARNING
    with pytest.raises(InvalidParameterError):
        configure_logging("chatty")
