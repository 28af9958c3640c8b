"""
Numeric diagnostics for a monthly log-return series.

Implements:
- Summary statistics (moments, annualised mean/volatility)
- Sample autocorrelation function with the usual +/- z/sqrt(T) band
- Normality test: Jarque–Bera (default) or Shapiro–Wilk
- Ljung–Box portmanteau test for joint autocorrelation up to a lag
- Year x month table and per-month means used by the seasonal charts

Every function takes the return series as read-only input and returns new
objects; nothing here mutates the series.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd
from scipy import stats

from .config import DEFAULT_ALPHA, DEFAULT_MAX_ACF_LAGS, LJUNG_BOX_LAGS, PERIODS_PER_YEAR
from .stock_data import validate_return_series

MONTH_LABELS = [calendar.month_abbr[m] for m in range(1, 13)]
NORMALITY_METHODS = ("jarque_bera", "shapiro")


def _as_array(returns: pd.Series) -> np.ndarray:
    validate_return_series(returns)
    return returns.to_numpy(dtype=float, copy=True)


def summary_statistics(returns: pd.Series) -> pd.Series:
    """
    Descriptive statistics of the return series.

    Returns
    -------
    Series
        Indexed by statistic name: n_obs, mean, std, min, max, skewness,
        excess_kurtosis, ann_mean (x12), ann_vol (x sqrt(12)).
        Std uses ddof=1; kurtosis is excess (normal = 0).
    """
    x = _as_array(returns)
    mean = float(np.mean(x))
    std = float(np.std(x, ddof=1))
    out = pd.Series(
        {
            "n_obs": float(len(x)),
            "mean": mean,
            "std": std,
            "min": float(np.min(x)),
            "max": float(np.max(x)),
            "skewness": float(stats.skew(x)),
            "excess_kurtosis": float(stats.kurtosis(x, fisher=True)),
            "ann_mean": mean * PERIODS_PER_YEAR,
            "ann_vol": std * np.sqrt(PERIODS_PER_YEAR),
        },
        name=returns.attrs.get("ticker", returns.name),
    )
    return out


@dataclass
class AcfResult:
    """Sample autocorrelations for lags 1..nlags and the white-noise band."""

    lags: np.ndarray
    acf: np.ndarray
    conf_bound: float  # +/- bound; |acf| above it is significant at alpha
    n_obs: int
    alpha: float = DEFAULT_ALPHA

    @property
    def significant_lags(self) -> list[int]:
        return [int(k) for k, r in zip(self.lags, self.acf) if abs(r) > self.conf_bound]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {"acf": self.acf, "significant": np.abs(self.acf) > self.conf_bound},
            index=pd.Index(self.lags, name="lag"),
        )


def sample_acf(
    returns: pd.Series,
    nlags: Optional[int] = None,
    alpha: float = DEFAULT_ALPHA,
) -> AcfResult:
    """
    Sample autocorrelation function r_1..r_nlags.

    The band +/- z_{1-alpha/2} / sqrt(T) is the large-sample bound under the
    white-noise null (each r_k approx N(0, 1/T)), which is what the ACF chart
    draws.

    Parameters
    ----------
    nlags : int, optional
        Defaults to min(DEFAULT_MAX_ACF_LAGS, T - 1). Values >= T are clipped.
    """
    from statsmodels.tsa.stattools import acf

    x = _as_array(returns)
    T = len(x)
    if nlags is None:
        nlags = min(DEFAULT_MAX_ACF_LAGS, T - 1)
    if nlags < 1:
        raise ValueError(f"nlags must be >= 1, got {nlags}")
    nlags = min(int(nlags), T - 1)

    values = np.asarray(acf(x, nlags=nlags, fft=False), dtype=float)
    z = stats.norm.ppf(1.0 - alpha / 2.0)
    return AcfResult(
        lags=np.arange(1, nlags + 1),
        acf=values[1:],
        conf_bound=float(z / np.sqrt(T)),
        n_obs=T,
        alpha=alpha,
    )


@dataclass
class NormalityTestResult:
    """Result of a normality test for H0: returns are normally distributed."""

    test: str
    statistic: float
    pvalue: float
    alpha: float
    reject_normality: bool
    skewness: float
    excess_kurtosis: float
    n_obs: int


def normality_test(
    returns: pd.Series,
    method: str = "jarque_bera",
    alpha: float = DEFAULT_ALPHA,
) -> NormalityTestResult:
    """
    Test H0: the monthly log returns are drawn from a normal distribution.

    Methods
    -------
    - 'jarque_bera' : JB = T/6 * (S^2 + K^2/4) with S skewness and K excess
      kurtosis; asymptotically chi-squared(2). Directly tied to the two
      moments the histogram and QQ-plot show.
    - 'shapiro' : Shapiro–Wilk W test (needs T >= 3), better power in small
      samples.
    """
    if method not in NORMALITY_METHODS:
        raise ValueError(f"method must be one of {NORMALITY_METHODS}, got {method!r}")
    x = _as_array(returns)

    if method == "jarque_bera":
        res = stats.jarque_bera(x)
    else:
        if len(x) < 3:
            raise ValueError("Shapiro–Wilk test needs at least 3 observations")
        res = stats.shapiro(x)
    statistic = float(res.statistic)
    pvalue = float(res.pvalue)

    return NormalityTestResult(
        test=method,
        statistic=statistic,
        pvalue=pvalue,
        alpha=alpha,
        reject_normality=bool(pvalue < alpha),
        skewness=float(stats.skew(x)),
        excess_kurtosis=float(stats.kurtosis(x, fisher=True)),
        n_obs=len(x),
    )


@dataclass
class LjungBoxResult:
    """Result of the Ljung–Box test for H0: no autocorrelation up to `lags`."""

    lags: int
    statistic: float
    pvalue: float
    alpha: float
    reject_white_noise: bool


def ljung_box_test(
    returns: pd.Series,
    lags: int = LJUNG_BOX_LAGS,
    alpha: float = DEFAULT_ALPHA,
) -> LjungBoxResult:
    """
    Ljung–Box Q = T(T+2) * sum_k r_k^2 / (T-k), k = 1..lags, ~ chi-squared(lags).

    `lags` is clipped to T - 1 for short series.
    """
    from statsmodels.stats.diagnostic import acorr_ljungbox

    x = _as_array(returns)
    lags = max(1, min(int(lags), len(x) - 1))
    table = acorr_ljungbox(x, lags=[lags], return_df=True)
    statistic = float(table["lb_stat"].iloc[-1])
    pvalue = float(table["lb_pvalue"].iloc[-1])
    return LjungBoxResult(
        lags=lags,
        statistic=statistic,
        pvalue=pvalue,
        alpha=alpha,
        reject_white_noise=bool(pvalue < alpha),
    )


def seasonal_table(returns: pd.Series) -> pd.DataFrame:
    """
    Reshape the series into a year x month table.

    Returns
    -------
    DataFrame
        Index: calendar year. Columns: 'Jan'..'Dec'. Months outside the
        sample are NaN.
    """
    validate_return_series(returns)
    frame = pd.DataFrame(
        {
            "year": returns.index.year,
            "month": returns.index.month,
            "value": returns.to_numpy(dtype=float),
        }
    )
    table = frame.pivot(index="year", columns="month", values="value")
    table = table.reindex(columns=range(1, 13))
    table.columns = MONTH_LABELS
    table.index.name = "year"
    return table


def monthly_means(returns: pd.Series) -> pd.Series:
    """Average log return per calendar month ('Jan'..'Dec'), NaN if unobserved."""
    validate_return_series(returns)
    means = returns.groupby(returns.index.month).mean().reindex(range(1, 13))
    means.index = pd.Index(MONTH_LABELS, name="month")
    means.name = "mean_return"
    return means
