from __future__ import annotations

"""Tests for the rule-based report wording."""

import numpy as np
import pandas as pd

from stock_eda.commentary import (
    EXERCISES,
    format_exercises,
    interpret_acf,
    interpret_normality,
    interpret_seasonality,
    interpret_summary,
)
from stock_eda.diagnostics import (
    AcfResult,
    LjungBoxResult,
    NormalityTestResult,
    MONTH_LABELS,
    summary_statistics,
)


def _normality(pvalue: float, skew: float = 0.0, kurt: float = 0.0) -> NormalityTestResult:
    return NormalityTestResult(
        test="jarque_bera",
        statistic=12.5,
        pvalue=pvalue,
        alpha=0.05,
        reject_normality=pvalue < 0.05,
        skewness=skew,
        excess_kurtosis=kurt,
        n_obs=240,
    )


def test_interpret_summary_mentions_fat_tails(fat_tailed_returns: pd.Series) -> None:
    text = interpret_summary(summary_statistics(fat_tailed_returns))
    assert "Over 600 months" in text
    assert "fatter tails" in text


def test_interpret_summary_symmetric_case() -> None:
    summary = pd.Series(
        {
            "n_obs": 120.0, "mean": 0.01, "std": 0.05, "min": -0.1, "max": 0.12,
            "skewness": 0.1, "excess_kurtosis": 0.2, "ann_mean": 0.12, "ann_vol": 0.17,
        }
    )
    text = interpret_summary(summary)
    assert "roughly symmetric" in text
    assert "close to the normal value" in text


def test_interpret_normality_rejection_names_cause() -> None:
    text = interpret_normality(_normality(0.001, skew=-0.2, kurt=3.0))
    assert "Jarque–Bera" in text
    assert "we reject" in text
    assert "fat tails" in text


def test_interpret_normality_non_rejection_warns_about_power() -> None:
    text = interpret_normality(_normality(0.4))
    assert "cannot reject" in text
    assert "limited power" in text


def test_interpret_acf_without_crossings() -> None:
    result = AcfResult(lags=np.arange(1, 13), acf=np.full(12, 0.01), conf_bound=0.13, n_obs=240)
    lb = LjungBoxResult(lags=12, statistic=5.0, pvalue=0.95, alpha=0.05, reject_white_noise=False)
    text = interpret_acf(result, lb)
    assert "None of the first 12" in text
    assert "does not reject" in text


def test_interpret_acf_many_crossings() -> None:
    acf = np.array([0.8, 0.6, 0.5, 0.4, 0.3, 0.05])
    result = AcfResult(lags=np.arange(1, 7), acf=acf, conf_bound=0.1, n_obs=300)
    text = interpret_acf(result)
    assert "lag(s) 1, 2, 3, 4, 5" in text
    assert "more crossings than chance" in text


def test_interpret_acf_single_crossing_is_weak_evidence() -> None:
    acf = np.r_[0.2, np.zeros(23)]
    result = AcfResult(lags=np.arange(1, 25), acf=acf, conf_bound=0.15, n_obs=180)
    assert "weak evidence" in interpret_acf(result)


def test_interpret_seasonality_flags_large_spread() -> None:
    means = pd.Series(np.r_[0.10, np.zeros(11)], index=MONTH_LABELS)
    text = interpret_seasonality(means, std=0.05, n_years=20)
    assert "Jan" in text
    assert "genuine calendar pattern" in text


def test_interpret_seasonality_noise() -> None:
    means = pd.Series(np.linspace(0.0, 0.01, 12), index=MONTH_LABELS)
    text = interpret_seasonality(means, std=0.05, n_years=20)
    assert "sampling noise" in text


def test_interpret_seasonality_without_data() -> None:
    means = pd.Series(np.nan, index=MONTH_LABELS)
    assert interpret_seasonality(means, std=0.05, n_years=1) == "Not enough data to judge seasonality."


def test_format_exercises_numbers_every_prompt() -> None:
    lines = format_exercises().splitlines()
    assert len(lines) == len(EXERCISES)
    assert lines[0].startswith("1. ")
    assert lines[-1].startswith(f"{len(EXERCISES)}. ")
