"""
Monthly stock return diagnostics walkthrough.

This package contains small, reusable utilities for:
- Downloading one stock's adjusted closing prices and turning them into a
  monthly log-return series
- Computing the standard exploratory diagnostics (summary statistics, ACF,
  normality and Ljung-Box tests, seasonal tables)
- Rendering the diagnostic charts and a narrated text report

All code is written in pure Python (NumPy/Pandas/SciPy ecosystem),
with a focus on modularity and clear documentation.

EXPLAIN: Keeping the walkthrough in a small package lets the narrated report,
the tests and any notebook share the same functions instead of copy-pasted
cells.
"""
