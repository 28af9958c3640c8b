from __future__ import annotations

"""Tests for the diagnostic chart builders."""

import numpy as np
import pandas as pd
import pytest
from matplotlib.figure import Figure

from stock_eda.diagnostics import MONTH_LABELS, sample_acf
from stock_eda.plot_diagnostics import (
    plot_acf,
    plot_histogram_normal,
    plot_lag,
    plot_qq,
    plot_seasonal,
    plot_subseries,
    plot_time_series,
    save_figures,
)
from stock_eda.plot_styles import style

from conftest import make_returns


def test_time_series_plot_draws_every_month(normal_returns: pd.Series) -> None:
    fig = plot_time_series(normal_returns)
    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert len(ax.lines[0].get_xdata()) == len(normal_returns)
    assert ax.get_title() == "TEST: Monthly log returns"


def test_explicit_ticker_overrides_attrs(normal_returns: pd.Series) -> None:
    fig = plot_time_series(normal_returns, ticker="XYZ")
    assert fig.axes[0].get_title().startswith("XYZ:")


def test_seasonal_plot_has_one_line_per_year(normal_returns: pd.Series) -> None:
    fig = plot_seasonal(normal_returns)
    ax = fig.axes[0]
    # 10 years + zero line
    assert len(ax.lines) == 11
    assert [t.get_text() for t in ax.get_xticklabels()] == MONTH_LABELS


def test_subseries_plot_has_twelve_panels(normal_returns: pd.Series) -> None:
    fig = plot_subseries(normal_returns)
    assert len(fig.axes) == 12
    assert [ax.get_title() for ax in fig.axes] == MONTH_LABELS
    jan = fig.axes[0]
    # values line, mean line, zero line
    assert len(jan.lines) == 3
    jan_values = normal_returns[normal_returns.index.month == 1]
    assert jan.lines[1].get_ydata()[0] == pytest.approx(jan_values.mean())


def test_subseries_plot_tolerates_unobserved_months() -> None:
    returns = make_returns(np.array([0.01, -0.02, 0.03]), start="2020-01-31")
    fig = plot_subseries(returns)
    # December has only the zero line
    assert len(fig.axes[11].lines) == 1


def test_histogram_overlays_fitted_normal(normal_returns: pd.Series) -> None:
    fig = plot_histogram_normal(normal_returns, bins=20)
    ax = fig.axes[0]
    assert len(ax.patches) == 20
    curve = ax.lines[0]
    x = np.asarray(curve.get_xdata())
    y = np.asarray(curve.get_ydata())
    sigma = normal_returns.std(ddof=1)
    assert x[np.argmax(y)] == pytest.approx(normal_returns.mean(), abs=sigma / 50)
    assert y.max() == pytest.approx(1.0 / (sigma * np.sqrt(2 * np.pi)), rel=1e-3)


def test_qq_plot_points_and_reference_line(normal_returns: pd.Series) -> None:
    fig = plot_qq(normal_returns)
    ax = fig.axes[0]
    offsets = ax.collections[0].get_offsets()
    assert len(offsets) == len(normal_returns)
    np.testing.assert_allclose(np.sort(offsets[:, 1]), np.sort(normal_returns.to_numpy()))
    assert len(ax.lines) == 1


def test_acf_plot_bars_and_band(ar1_returns: pd.Series) -> None:
    acf_result = sample_acf(ar1_returns, nlags=12)
    fig = plot_acf(acf_result, ticker="AR")
    ax = fig.axes[0]
    heights = [p.get_height() for p in ax.patches]
    np.testing.assert_allclose(heights, acf_result.acf)
    band = sorted(line.get_ydata()[0] for line in ax.lines)
    assert band[0] == pytest.approx(-acf_result.conf_bound)
    assert band[-1] == pytest.approx(acf_result.conf_bound)
    assert ax.get_title().startswith("AR:")


@pytest.mark.parametrize(("lags", "visible"), [(9, 9), (4, 4), (1, 1)])
def test_lag_plot_grid(normal_returns: pd.Series, lags: int, visible: int) -> None:
    fig = plot_lag(normal_returns, lags=lags)
    shown = [ax for ax in fig.axes if ax.get_visible()]
    assert len(shown) == visible
    first = shown[0].collections[0].get_offsets()
    values = normal_returns.to_numpy()
    np.testing.assert_allclose(first[:, 0], values[:-1])
    np.testing.assert_allclose(first[:, 1], values[1:])


def test_lag_plot_clips_to_series_length() -> None:
    returns = make_returns(np.array([0.01, -0.02, 0.03]))
    fig = plot_lag(returns, lags=9)
    assert len([ax for ax in fig.axes if ax.get_visible()]) == 2


def test_save_figures_writes_pngs(normal_returns: pd.Series, tmp_path) -> None:
    figures = {"time_plot": plot_time_series(normal_returns), "qq_plot": plot_qq(normal_returns)}
    paths = save_figures(figures, tmp_path / "charts")
    assert [p.name for p in paths] == ["time_plot.png", "qq_plot.png"]
    assert all(p.exists() and p.stat().st_size > 0 for p in paths)


def test_style_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="role"):
        style("pie")
    with pytest.raises(ValueError, match="series"):
        style("line", "bogus")
    assert style("line", label="x")["label"] == "x"


def test_acf_band_legend_follows_alpha(ar1_returns: pd.Series) -> None:
    acf_result = sample_acf(ar1_returns, nlags=12, alpha=0.10)
    fig = plot_acf(acf_result)
    labels = [t.get_text() for t in fig.axes[0].get_legend().get_texts()]
    assert "90% white-noise band" in labels
    assert not any("95%" in label for label in labels)
    assert style("band", "band")["label"] == "_nolegend_"


def test_save_figures_can_keep_figures_open(normal_returns: pd.Series, tmp_path) -> None:
    import matplotlib.pyplot as plt

    fig = plot_time_series(normal_returns)
    save_figures({"time_plot": fig}, tmp_path, close=False)
    assert fig.number in plt.get_fignums()
    save_figures({"time_plot": fig}, tmp_path)
    assert fig.number not in plt.get_fignums()
