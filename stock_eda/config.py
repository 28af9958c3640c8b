"""
Configuration for the stock return diagnostics walkthrough.

Centralises paths so that all downloaded prices and rendered charts live under
a single `stock_eda_data/` directory at the project root, plus the defaults
used when the walkthrough is run without arguments.
"""

from pathlib import Path

# Project root = parent of this `stock_eda` package
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Root directory for all walkthrough data
DATA_ROOT = PROJECT_ROOT / "stock_eda_data"
PROCESSED_DIR = DATA_ROOT / "processed"  # Cached adjusted close prices (CSV)
FIGURES_DIR = DATA_ROOT / "figures"      # Rendered PNG charts

# Walkthrough defaults
DEFAULT_TICKER = "AAPL"
DEFAULT_START = "2000-01-01"
DEFAULT_ALPHA = 0.05      # Significance level for all hypothesis tests
DEFAULT_MAX_ACF_LAGS = 24  # Two years of monthly lags
DEFAULT_LAG_PLOTS = 9      # 3x3 grid of lag scatter plots
LJUNG_BOX_LAGS = 12
PERIODS_PER_YEAR = 12

# EXPLAIN: Actual directory creation is done by the download/saving code,
# not at import time, to keep module side effects minimal.
