"""
Rule-based prose interpretation for the return diagnostics report.

Each function turns one diagnostic result into a short paragraph a student
can read next to the matching chart. The rules are deliberately simple
thresholds on the numbers; they describe what the chart shows, they do not
replace reading it.

EXPLAIN: Keeping the wording in one module means the printed report, a
notebook and the tests all see the same text for the same numbers.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from .diagnostics import AcfResult, LjungBoxResult, NormalityTestResult

# Thresholds for the qualitative wording
SKEW_NOTABLE = 0.5
KURTOSIS_NOTABLE = 1.0
SEASONAL_SPREAD_NOTABLE = 1.0  # range of 12 month means over 4 standard errors

EXERCISES = [
    "Repeat the walkthrough for a different ticker (e.g. a utility or a bank). "
    "Which diagnostics change, and which look the same?",
    "Re-run the analysis with daily instead of monthly returns. How do the "
    "histogram, QQ-plot and Jarque–Bera statistic change, and why does "
    "aggregation over time move returns closer to normality?",
    "Compute simple returns P_t / P_{t-1} - 1 instead of log returns. For "
    "monthly data, how large is the difference between the two series?",
    "Split the sample in two halves and run the normality test on each. Is the "
    "conclusion stable across sub-periods?",
    "Plot the ACF of squared (or absolute) returns. What does significant "
    "autocorrelation there say about volatility clustering, even when the ACF "
    "of returns themselves is flat?",
    "Using the seasonal and subseries plots, argue for or against a "
    "'January effect' in this stock. What sample size would you need to detect "
    "a 1% monthly difference with reasonable power?",
    "Replace the Jarque–Bera test with the Shapiro–Wilk test. Do the two tests "
    "agree? Which one would you trust in a sample of 30 months?",
]


def interpret_summary(summary: pd.Series) -> str:
    """Describe level, volatility and shape of the return distribution."""
    lines = [
        f"Over {int(summary['n_obs'])} months the average monthly log return is "
        f"{summary['mean']:.2%} (about {summary['ann_mean']:.1%} per year) with a "
        f"monthly standard deviation of {summary['std']:.2%} "
        f"(about {summary['ann_vol']:.1%} annualised).",
        f"The worst month returned {summary['min']:.2%} and the best {summary['max']:.2%}.",
    ]
    skew = float(summary["skewness"])
    kurt = float(summary["excess_kurtosis"])
    if skew <= -SKEW_NOTABLE:
        lines.append(
            f"Skewness of {skew:.2f} means large losses are more common than equally large gains."
        )
    elif skew >= SKEW_NOTABLE:
        lines.append(
            f"Skewness of {skew:.2f} means large gains are more common than equally large losses."
        )
    else:
        lines.append(f"Skewness of {skew:.2f} is small: the distribution is roughly symmetric.")
    if kurt >= KURTOSIS_NOTABLE:
        lines.append(
            f"Excess kurtosis of {kurt:.2f} indicates fatter tails than the normal distribution."
        )
    else:
        lines.append(
            f"Excess kurtosis of {kurt:.2f} is close to the normal value of zero."
        )
    return " ".join(lines)


def interpret_normality(result: NormalityTestResult) -> str:
    """State the test decision and connect it to the histogram and QQ-plot."""
    name = {"jarque_bera": "Jarque–Bera", "shapiro": "Shapiro–Wilk"}.get(result.test, result.test)
    head = (
        f"{name} test (T = {result.n_obs}): statistic = {result.statistic:.3f}, "
        f"p-value = {result.pvalue:.4f}."
    )
    if result.reject_normality:
        body = (
            f"At the {result.alpha:.0%} level we reject the null hypothesis that monthly log "
            "returns are normally distributed. Look for the departure in the charts: "
            "histogram bars above the normal curve in the tails and QQ-plot points "
            "bending away from the line at both ends."
        )
        if abs(result.skewness) >= SKEW_NOTABLE and result.excess_kurtosis >= KURTOSIS_NOTABLE:
            body += " Both skewness and excess kurtosis contribute."
        elif result.excess_kurtosis >= KURTOSIS_NOTABLE:
            body += " The rejection is driven mainly by fat tails (excess kurtosis)."
        elif abs(result.skewness) >= SKEW_NOTABLE:
            body += " The rejection is driven mainly by asymmetry (skewness)."
    else:
        body = (
            f"At the {result.alpha:.0%} level we cannot reject normality. This does not prove "
            "the returns are normal: with a short monthly sample the test has limited power."
        )
    return f"{head} {body}"


def interpret_acf(acf_result: AcfResult, ljung_box: LjungBoxResult | None = None) -> str:
    """Summarise which lags cross the confidence band and the Ljung–Box decision."""
    sig = acf_result.significant_lags
    n_lags = len(acf_result.lags)
    expected_false = acf_result.alpha * n_lags
    parts = [
        f"The {1 - acf_result.alpha:.0%} white-noise band is ±{acf_result.conf_bound:.3f}."
    ]
    if not sig:
        parts.append(
            f"None of the first {n_lags} autocorrelations lies outside the band, which is "
            "what an uncorrelated (white-noise) series looks like; the lag plots should "
            "show shapeless clouds."
        )
    else:
        lag_list = ", ".join(str(k) for k in sig)
        parts.append(f"Autocorrelations outside the band at lag(s) {lag_list}.")
        if len(sig) <= max(1, int(np.ceil(expected_false))):
            parts.append(
                f"With {n_lags} lags about {expected_false:.1f} crossings are expected by "
                "chance alone, so this is weak evidence of predictability."
            )
        else:
            parts.append(
                "That is more crossings than chance alone would produce; past returns carry "
                "some information about future returns at these horizons."
            )
    if ljung_box is not None:
        verdict = (
            "rejects" if ljung_box.reject_white_noise else "does not reject"
        )
        parts.append(
            f"The Ljung–Box test up to lag {ljung_box.lags} (Q = {ljung_box.statistic:.2f}, "
            f"p-value = {ljung_box.pvalue:.4f}) {verdict} the null of no autocorrelation."
        )
    return " ".join(parts)


def interpret_seasonality(month_means: pd.Series, std: float, n_years: float) -> str:
    """
    Compare the spread of calendar-month means to their sampling error.

    The standard error of one month mean is roughly std / sqrt(n_years); a
    range of month means within a few standard errors is consistent with no
    seasonality.
    """
    observed = month_means.dropna()
    if observed.empty or n_years <= 0 or std <= 0:
        return "Not enough data to judge seasonality."
    best = observed.idxmax()
    worst = observed.idxmin()
    spread = float(observed.max() - observed.min())
    se = std / np.sqrt(n_years)
    ratio = spread / (4.0 * se)
    text = (
        f"Average returns by month range from {observed.min():.2%} ({worst}) to "
        f"{observed.max():.2%} ({best}). Each month mean rests on about "
        f"{n_years:.0f} observations, so its standard error is roughly {se:.2%}."
    )
    if ratio >= SEASONAL_SPREAD_NOTABLE:
        text += (
            " The spread is large relative to that sampling error: the seasonal and "
            "subseries plots may show a genuine calendar pattern worth testing formally."
        )
    else:
        text += (
            " The spread is within what sampling noise produces, so the seasonal plot's "
            "lines should look like an unpatterned tangle and the subseries means close "
            "to each other."
        )
    return text


def format_exercises() -> str:
    """Numbered list of the student exercises."""
    return "\n".join(f"{i}. {text}" for i, text in enumerate(EXERCISES, start=1))
