import numpy as np
import pandas as pd
import pytest

from binomial_pricing.binomial_tree import european_binomial_price
from binomial_pricing.black_scholes import black_scholes_price
from binomial_pricing.convergence import (
    convergence_series,
    convergence_table,
    doubling_steps,
)

PARAMS = dict(S=100.0, K=100.0, T=1.0, r=0.05, sigma=0.2)


# -----------------------------
# 1) Series shape and ordering
# -----------------------------

def test_series_length_and_order():
    df = convergence_series(max_steps=37, option_type="call", **PARAMS)
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["steps", "price"]
    assert len(df) == 37
    assert df["steps"].tolist() == list(range(1, 38))


def test_series_rows_match_engine():
    df = convergence_series(max_steps=12, option_type="put", **PARAMS)
    for n, price in zip(df["steps"], df["price"]):
        expected = european_binomial_price(int(n), "put", PARAMS["sigma"], PARAMS["r"],
                                           PARAMS["T"], PARAMS["S"], PARAMS["K"])
        assert price == expected
    # n=10 row matches the pinned put baseline
    assert np.isclose(df["price"].iloc[9], 5.376351494943, atol=1e-9)


def test_single_step_series():
    df = convergence_series(max_steps=1, option_type="call", **PARAMS)
    assert len(df) == 1
    assert np.isclose(df["price"].iloc[0], 12.162284964624, atol=1e-9)


@pytest.mark.parametrize("backend", ["thread", "process"])
def test_parallel_matches_serial(backend):
    serial = convergence_series(max_steps=40, option_type="call", **PARAMS)
    parallel = convergence_series(max_steps=40, option_type="call",
                                  n_workers=3, parallel_backend=backend, **PARAMS)
    pd.testing.assert_frame_equal(serial, parallel)


def test_verbose_prints_progress(capsys):
    convergence_series(max_steps=20, option_type="call", verbose=True, print_every=10, **PARAMS)
    out = capsys.readouterr().out
    assert "[convergence] steps=10" in out
    assert "[convergence] steps=20" in out


def test_invalid_max_steps():
    with pytest.raises(ValueError):
        convergence_series(max_steps=0, **PARAMS)


# -----------------------------
# 2) Doubling grid vs Black-Scholes
# -----------------------------

def test_doubling_steps():
    assert doubling_steps(1) == [1]
    assert doubling_steps(10) == [1, 2, 4, 8]
    assert doubling_steps(1024)[-1] == 1024
    with pytest.raises(ValueError):
        doubling_steps(0)


def test_successive_differences_shrink():
    df = convergence_table(max_steps=1024, option_type="call", **PARAMS)
    assert df["steps"].tolist() == doubling_steps(1024)
    assert np.isnan(df["diff"].iloc[0])

    abs_diff = df["diff"].iloc[1:].abs().to_numpy()
    assert np.all(np.diff(abs_diff) < 0)


def test_converges_to_black_scholes():
    df = convergence_table(max_steps=1024, option_type="call", **PARAMS)
    bs = black_scholes_price(option_type="call", **PARAMS)
    assert np.allclose(df["bs_price"], bs)

    err = df.set_index("steps")["abs_error"]
    # CRR error at the money decays like 1/n
    assert err[512] < 1e-2
    assert err[1024] < 5e-3
    assert err[1024] < err[512] < err[256]


def test_put_table_converges():
    df = convergence_table(max_steps=512, option_type="put", **PARAMS)
    assert df["abs_error"].iloc[-1] < 1e-2


def test_invalid_print_every():
    with pytest.raises(ValueError, match="print_every"):
        convergence_series(max_steps=5, verbose=True, print_every=0, **PARAMS)
