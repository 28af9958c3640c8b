"""
Workflow entry point for the return diagnostics walkthrough.

Design goal: keep the report script (and any notebook) to one descriptive
function call, with data loading, diagnostics, plotting and commentary
delegated to reusable module code.
"""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd

from .commentary import (
    format_exercises,
    interpret_acf,
    interpret_normality,
    interpret_seasonality,
    interpret_summary,
)
from .config import DEFAULT_ALPHA, DEFAULT_LAG_PLOTS, LJUNG_BOX_LAGS, PERIODS_PER_YEAR
from .diagnostics import (
    ljung_box_test,
    monthly_means,
    normality_test,
    sample_acf,
    seasonal_table,
    summary_statistics,
)
from .plot_diagnostics import (
    plot_acf,
    plot_histogram_normal,
    plot_lag,
    plot_qq,
    plot_seasonal,
    plot_subseries,
    plot_time_series,
)
from .stock_data import load_monthly_log_returns, validate_return_series

# Walkthrough order: each name is a report section and a saved figure
FIGURE_ORDER = (
    "time_plot",
    "seasonal_plot",
    "subseries_plot",
    "histogram",
    "qq_plot",
    "acf_plot",
    "lag_plot",
)


def run_return_diagnostics(
    ticker: str,
    start: str,
    end: Optional[str] = None,
    returns: Optional[pd.Series] = None,
    nlags: Optional[int] = None,
    lags: int = DEFAULT_LAG_PLOTS,
    normality_method: str = "jarque_bera",
    alpha: float = DEFAULT_ALPHA,
    use_cache: bool = True,
    make_figures: bool = True,
) -> dict[str, Any]:
    """
    Full walkthrough for one stock: returns, diagnostics, charts, commentary.

    If `returns` is given it is used as-is (offline use and tests) and no
    download happens; otherwise monthly log returns are fetched for `ticker`.

    Returns a dict with:
    - inputs: ticker, sample start/end, n_obs and the settings used
    - returns: the monthly log-return series (shared, never mutated)
    - summary_tables: summary statistics, seasonal table, per-month means, ACF table
    - tests: normality test and Ljung–Box results
    - acf: AcfResult used by the ACF chart
    - figures: name -> matplotlib Figure, in FIGURE_ORDER (empty if make_figures=False)
    - commentary: section name -> prose paragraph
    - exercises: numbered student exercises
    """
    if returns is None:
        returns = load_monthly_log_returns(ticker, start=start, end=end, use_cache=use_cache)
    validate_return_series(returns)
    ticker = returns.attrs.get("ticker") or ticker

    summary = summary_statistics(returns)
    acf_result = sample_acf(returns, nlags=nlags, alpha=alpha)
    normality = normality_test(returns, method=normality_method, alpha=alpha)
    lb = ljung_box_test(returns, lags=LJUNG_BOX_LAGS, alpha=alpha)
    season = seasonal_table(returns)
    month_means = monthly_means(returns)

    figures = {}
    if make_figures:
        figures = {
            "time_plot": plot_time_series(returns, ticker=ticker),
            "seasonal_plot": plot_seasonal(returns, ticker=ticker),
            "subseries_plot": plot_subseries(returns, ticker=ticker),
            "histogram": plot_histogram_normal(returns, ticker=ticker),
            "qq_plot": plot_qq(returns, ticker=ticker),
            "acf_plot": plot_acf(acf_result, ticker=ticker),
            "lag_plot": plot_lag(returns, lags=lags, ticker=ticker),
        }

    n_years = len(returns) / PERIODS_PER_YEAR
    commentary = {
        "summary": interpret_summary(summary),
        "seasonality": interpret_seasonality(month_means, float(summary["std"]), n_years),
        "normality": interpret_normality(normality),
        "autocorrelation": interpret_acf(acf_result, lb),
    }

    return {
        "inputs": {
            "ticker": ticker,
            "start": returns.index.min().strftime("%Y-%m"),
            "end": returns.index.max().strftime("%Y-%m"),
            "n_obs": int(len(returns)),
            "normality_method": normality_method,
            "alpha": alpha,
        },
        "returns": returns,
        "summary_tables": {
            "summary": summary,
            "seasonal": season,
            "monthly_means": month_means,
            "acf": acf_result.to_frame(),
        },
        "tests": {"normality": normality, "ljung_box": lb},
        "acf": acf_result,
        "figures": figures,
        "commentary": commentary,
        "exercises": format_exercises(),
    }


def _section(title: str) -> str:
    return f"\n{title}\n{'=' * len(title)}\n"


def _format_summary(summary: pd.Series) -> str:
    """One statistic per line; counts as integers, everything else to 4 decimals."""
    width = max(len(str(name)) for name in summary.index)
    lines = []
    for name, value in summary.items():
        shown = f"{int(value)}" if name == "n_obs" else f"{value:.4f}"
        lines.append(f"{name:<{width}}  {shown}")
    return "\n".join(lines)


def format_report(result: dict[str, Any]) -> str:
    """
    Render the narrated text report in walkthrough order.

    Sections: data, time plot, seasonality, distribution (histogram, QQ-plot,
    normality test), autocorrelation (ACF, lag plots, Ljung–Box), exercises.
    """
    inputs = result["inputs"]
    tables = result["summary_tables"]
    text = result["commentary"]

    parts = [
        f"Monthly return diagnostics for {inputs['ticker']}",
        f"Sample: {inputs['start']} to {inputs['end']} ({inputs['n_obs']} monthly log returns)",
        _section("1. Data"),
        "Adjusted closing prices are sampled at each month end and converted to log "
        "returns r_t = ln(P_t / P_{t-1}). Every chart and test below uses this one series.",
        "",
        _format_summary(tables["summary"]),
        _section("2. Time plot"),
        "The time plot shows the returns in order. Look for changes in level, periods "
        "of calm and turbulence (volatility clustering), and isolated extreme months.",
        "",
        text["summary"],
        _section("3. Seasonal and subseries plots"),
        text["seasonality"],
        "",
        tables["monthly_means"].to_string(float_format=lambda v: f"{v:.4f}"),
        _section("4. Distribution: histogram, QQ-plot and normality test"),
        text["normality"],
        _section("5. Autocorrelation: ACF and lag plots"),
        text["autocorrelation"],
        "",
        tables["acf"].to_string(float_format=lambda v: f"{v:.4f}"),
        _section("6. Exercises"),
        result["exercises"],
    ]
    return "\n".join(parts)
