from __future__ import annotations

from pathlib import Path
import sys

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))


def make_returns(values: np.ndarray, start: str = "2010-01-31", ticker: str = "TEST") -> pd.Series:
    """Wrap raw values in a month-end indexed return series."""
    index = pd.date_range(start, periods=len(values), freq="ME")
    series = pd.Series(np.asarray(values, dtype=float), index=index, name="log_return")
    series.attrs["ticker"] = ticker
    return series


def make_daily_prices(n_days: int = 800, seed: int = 3, ticker: str = "TEST") -> pd.Series:
    """Geometric random walk on business days."""
    rng = np.random.default_rng(seed)
    steps = rng.normal(0.0004, 0.01, size=n_days)
    index = pd.bdate_range("2015-01-02", periods=n_days)
    return pd.Series(100.0 * np.exp(np.cumsum(steps)), index=index, name=ticker)


@pytest.fixture(autouse=True)
def close_figures():
    """Close every figure a test opened."""
    yield
    plt.close("all")


@pytest.fixture
def normal_returns() -> pd.Series:
    """Ten years of i.i.d. normal monthly returns."""
    rng = np.random.default_rng(7)
    return make_returns(rng.normal(0.01, 0.05, size=120))


@pytest.fixture
def fat_tailed_returns() -> pd.Series:
    """Fifty years of Student-t(3) monthly returns."""
    rng = np.random.default_rng(11)
    return make_returns(0.03 * rng.standard_t(3, size=600), start="1970-01-31")


@pytest.fixture
def ar1_returns() -> pd.Series:
    """Strongly autocorrelated AR(1) series, phi = 0.8."""
    rng = np.random.default_rng(5)
    eps = rng.normal(0.0, 0.04, size=300)
    x = np.zeros_like(eps)
    for t in range(1, len(eps)):
        x[t] = 0.8 * x[t - 1] + eps[t]
    return make_returns(x, start="1990-01-31")


@pytest.fixture
def daily_prices() -> pd.Series:
    return make_daily_prices()
