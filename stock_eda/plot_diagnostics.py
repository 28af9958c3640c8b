"""
Plotting helpers for the return diagnostics walkthrough.

Each function accepts the monthly log-return series (or a diagnostics result)
and returns a matplotlib Figure so the report script and notebooks can stay
concise and declarative. Nothing here calls plt.show(); saving or showing is
left to the caller.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from scipy import stats

from .config import DEFAULT_LAG_PLOTS
from .diagnostics import MONTH_LABELS, AcfResult, seasonal_table
from .plot_styles import (
    FIGSIZE_GRID,
    FIGSIZE_SQUARE,
    FIGSIZE_WIDE,
    GRID_KWARGS,
    ZERO_STYLE,
    style,
    year_colors,
)
from .stock_data import validate_return_series


def _title(base: str, returns: Optional[pd.Series] = None, ticker: Optional[str] = None) -> str:
    """Prefix chart titles with the ticker when known."""
    if ticker is None and returns is not None:
        ticker = returns.attrs.get("ticker")
    return f"{ticker}: {base}" if ticker else base


def plot_time_series(returns: pd.Series, ticker: Optional[str] = None):
    """Time plot of monthly log returns with a zero reference line."""
    validate_return_series(returns)
    fig, ax = plt.subplots(figsize=FIGSIZE_WIDE)
    ax.plot(returns.index, returns.to_numpy(dtype=float), **style("line"))
    ax.axhline(0.0, **ZERO_STYLE)
    ax.set_xlabel("Month")
    ax.set_ylabel("Log return")
    ax.set_title(_title("Monthly log returns", returns, ticker))
    ax.grid(True, **GRID_KWARGS)
    fig.tight_layout()
    return fig


def plot_seasonal(returns: pd.Series, ticker: Optional[str] = None):
    """
    Seasonal plot: one line per calendar year across Jan..Dec.

    A persistent seasonal pattern shows up as lines that rise and fall
    together; noise shows up as a tangle with no shared shape.
    """
    table = seasonal_table(returns)
    colors = year_colors(len(table))
    x = np.arange(1, 13)

    fig, ax = plt.subplots(figsize=FIGSIZE_WIDE)
    for (year, row), color in zip(table.iterrows(), colors):
        values = row.to_numpy(dtype=float)
        ax.plot(x, values, color=color, marker="o", markersize=3, linewidth=1.0)
        observed = np.flatnonzero(~np.isnan(values))
        if observed.size:
            last = observed[-1]
            ax.annotate(
                str(year),
                (x[last], values[last]),
                xytext=(3, 0),
                textcoords="offset points",
                fontsize=7,
                color=color,
            )
    ax.axhline(0.0, **ZERO_STYLE)
    ax.set_xticks(x)
    ax.set_xticklabels(MONTH_LABELS)
    ax.set_xlim(0.5, 12.9)
    ax.set_ylabel("Log return")
    ax.set_title(_title("Seasonal plot", returns, ticker))
    ax.grid(True, **GRID_KWARGS)
    fig.tight_layout()
    return fig


def plot_subseries(returns: pd.Series, ticker: Optional[str] = None):
    """
    Seasonal subseries plot: one mini panel per calendar month.

    Each panel shows that month's returns in chronological order and a
    horizontal line at their mean, so month-to-month differences in the level
    (seasonality) and drift within a month across years are both visible.
    """
    validate_return_series(returns)
    fig, axes = plt.subplots(1, 12, sharey=True, figsize=(12, 4))
    for month, (ax, label) in enumerate(zip(axes, MONTH_LABELS), start=1):
        values = returns[returns.index.month == month].to_numpy(dtype=float)
        if values.size:
            ax.plot(np.arange(values.size), values, **style("line"))
            ax.axhline(float(np.mean(values)), **style("reference", "mean"))
        ax.axhline(0.0, **ZERO_STYLE)
        ax.set_title(label, fontsize=9)
        ax.set_xticks([])
        ax.grid(True, axis="y", **GRID_KWARGS)
    axes[0].set_ylabel("Log return")
    fig.suptitle(_title("Seasonal subseries plot", returns, ticker))
    fig.tight_layout()
    return fig


def plot_histogram_normal(
    returns: pd.Series,
    bins: Optional[int | str] = None,
    ticker: Optional[str] = None,
):
    """
    Density histogram of returns with the normal pdf fitted by sample mean/std.

    Fat tails appear as bars above the curve far from the centre; skewness as
    an asymmetric bar profile around the curve's peak.
    """
    validate_return_series(returns)
    x = returns.to_numpy(dtype=float)
    mu = float(np.mean(x))
    sigma = float(np.std(x, ddof=1))

    fig, ax = plt.subplots(figsize=FIGSIZE_WIDE)
    ax.hist(x, bins="auto" if bins is None else bins, density=True, **style("hist"))
    if sigma > 0:
        grid = np.linspace(x.min() - sigma, x.max() + sigma, 400)
        ax.plot(grid, stats.norm.pdf(grid, loc=mu, scale=sigma), **style("reference", "normal"))
    ax.set_xlabel("Log return")
    ax.set_ylabel("Density")
    ax.set_title(_title("Histogram with normal overlay", returns, ticker))
    ax.legend(loc="upper left")
    ax.grid(True, **GRID_KWARGS)
    fig.tight_layout()
    return fig


def plot_qq(returns: pd.Series, ticker: Optional[str] = None):
    """
    Normal QQ-plot: ordered returns against standard normal quantiles.

    Points on the fitted line mean the normal is a good description; an
    S-shape with ends bending away from the line indicates fat tails.
    """
    validate_return_series(returns)
    (osm, osr), (slope, intercept, r) = stats.probplot(returns.to_numpy(dtype=float), dist="norm")

    fig, ax = plt.subplots(figsize=FIGSIZE_SQUARE)
    ax.scatter(osm, osr, **style("scatter", label="Sample quantiles"))
    ax.plot(osm, slope * osm + intercept, **style("reference", "normal", label="Normal reference line"))
    ax.text(
        0.03,
        0.95,
        f"$R^2$ = {r ** 2:.3f}",
        transform=ax.transAxes,
        va="top",
        fontsize=9,
    )
    ax.set_xlabel("Theoretical quantiles (standard normal)")
    ax.set_ylabel("Sample quantiles (log return)")
    ax.set_title(_title("Normal QQ-plot", returns, ticker))
    ax.legend(loc="lower right")
    ax.grid(True, **GRID_KWARGS)
    fig.tight_layout()
    return fig


def plot_acf(acf_result: AcfResult, ticker: Optional[str] = None):
    """ACF bars for lags 1..nlags with the +/- white-noise confidence band."""
    fig, ax = plt.subplots(figsize=FIGSIZE_WIDE)
    ax.bar(acf_result.lags, acf_result.acf, **style("bar", "acf"))
    band_label = f"{1 - acf_result.alpha:.0%} white-noise band"
    ax.axhline(acf_result.conf_bound, **style("band", "band", label=band_label))
    ax.axhline(-acf_result.conf_bound, **style("band", "band"))
    ax.axhline(0.0, **ZERO_STYLE)
    ax.set_xlim(0.5, float(acf_result.lags.max()) + 0.5)
    ax.set_xlabel("Lag (months)")
    ax.set_ylabel("Autocorrelation")
    ax.set_title(_title(f"Autocorrelation function (T = {acf_result.n_obs})", ticker=ticker))
    ax.legend(loc="upper right")
    ax.grid(True, **GRID_KWARGS)
    fig.tight_layout()
    return fig


def plot_lag(
    returns: pd.Series,
    lags: int = DEFAULT_LAG_PLOTS,
    ticker: Optional[str] = None,
):
    """
    Lag plots: scatter of r_t against r_{t-k} for k = 1..lags.

    A shapeless cloud at every lag is what an uncorrelated series looks like;
    a tilt along the diagonal at lag k mirrors a large ACF value at lag k.
    `lags` is clipped to T - 1.
    """
    validate_return_series(returns)
    values = returns.to_numpy(dtype=float)
    lags = max(1, min(int(lags), values.size - 1))
    ncols = min(3, lags)
    nrows = math.ceil(lags / ncols)
    lo, hi = float(values.min()), float(values.max())

    fig, axes = plt.subplots(nrows, ncols, figsize=FIGSIZE_GRID, squeeze=False)
    for k, ax in enumerate(axes.flat, start=1):
        if k > lags:
            ax.set_visible(False)
            continue
        ax.scatter(values[:-k], values[k:], **style("scatter"))
        ax.plot([lo, hi], [lo, hi], **style("reference", "diagonal"))
        ax.set_title(f"lag {k}", fontsize=9)
        ax.grid(True, **GRID_KWARGS)
    for ax in axes[-1]:
        ax.set_xlabel("$r_{t-k}$")
    for ax in axes[:, 0]:
        ax.set_ylabel("$r_t$")
    fig.suptitle(_title("Lag plots", returns, ticker))
    fig.tight_layout()
    return fig


def save_figures(
    figures: dict,
    out_dir: Path,
    dpi: int = 150,
    close: bool = True,
) -> list[Path]:
    """
    Save each Figure in `figures` (name -> Figure) as `<out_dir>/<name>.png`.

    Figures are closed after saving so a full walkthrough run does not keep
    every chart alive; pass close=False to keep them open for plt.show().
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for name, fig in figures.items():
        path = out_dir / f"{name}.png"
        fig.savefig(path, dpi=dpi, bbox_inches="tight")
        if close:
            plt.close(fig)
        print(f"  Saved: {path}")
        paths.append(path)
    return paths
