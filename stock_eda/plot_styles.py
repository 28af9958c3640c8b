"""
Central styling for the return diagnostic charts.

Use style(role) for all plot/scatter/hist calls. Colours come from one
SERIES palette keyed by what is drawn (returns, reference distribution,
confidence band, ...); ROLE_BASES adds line widths, markers and alphas for the
chart role. No hardcoded color= in the chart functions.
"""

from __future__ import annotations

FIGSIZE_WIDE = (10, 4)
FIGSIZE_SQUARE = (6, 6)
FIGSIZE_GRID = (10, 8)

# --- Base styles (kwargs for ax.plot / ax.scatter / ax.hist) ---
LINE_STYLE = {
    "linewidth": 1.2,
    "zorder": 2,
}

SCATTER_STYLE = {
    "s": 12,
    "alpha": 0.7,
    "zorder": 3,
}

HIST_STYLE = {
    "alpha": 0.6,
    "edgecolor": "white",
    "zorder": 2,
}

REFERENCE_STYLE = {
    "linewidth": 1.5,
    "linestyle": "--",
    "zorder": 4,
}

BAND_STYLE = {
    "linewidth": 1.0,
    "linestyle": "--",
    "zorder": 1,
}

BAR_STYLE = {
    "width": 0.3,
    "zorder": 3,
}

ZERO_STYLE = {
    "color": "gray",
    "linewidth": 0.8,
    "zorder": 1,
}

GRID_KWARGS = {"linestyle": "--", "alpha": 0.4}

# --- Single series palette ---
SERIES = {
    "returns": {"color": "C0", "label": "Monthly log return"},
    "normal": {"color": "C3", "label": "Normal (fitted)"},
    "band": {"color": "C1", "label": "_nolegend_"},
    "mean": {"color": "C3", "label": "Month mean"},
    "acf": {"color": "C0", "label": "Sample ACF"},
    "diagonal": {"color": "gray", "label": "_nolegend_"},
}

ROLE_BASES = {
    "line": LINE_STYLE,
    "scatter": SCATTER_STYLE,
    "hist": HIST_STYLE,
    "reference": REFERENCE_STYLE,
    "band": BAND_STYLE,
    "bar": BAR_STYLE,
}


def style(role: str, series: str = "returns", *, label: str | None = None) -> dict:
    """
    Return a single style dict for ax.plot(...), ax.scatter(...) or ax.hist(...).

    - role: "line" | "scatter" | "hist" | "reference" | "band" | "bar"
    - series: key into SERIES (e.g. "returns", "normal", "band")
    - label: optional legend override

    Example: ax.plot(x, y, **style("line"))
             ax.plot(x, pdf, **style("reference", "normal"))
    """
    base = ROLE_BASES.get(role)
    if base is None:
        raise ValueError(f"Unknown role: {role}")
    series_d = SERIES.get(series)
    if series_d is None:
        raise ValueError(f"Unknown series: {series!r}")
    out = {**base, **series_d}
    if label is not None:
        out["label"] = label
    return out


def year_colors(n: int) -> list:
    """Sequential colours for the seasonal plot: early years light, recent years dark."""
    import matplotlib.pyplot as plt

    cmap = plt.get_cmap("viridis")
    if n <= 1:
        return [cmap(0.5)] * n
    return [cmap(i / (n - 1)) for i in range(n)]
