"""
Narrated monthly return diagnostics for one stock.

Usage (from the project root):

    python -m stock_eda.walkthrough --ticker AAPL --start 2000-01-01

This will:
1. Download adjusted close prices (or read them from the local cache).
2. Build the monthly log-return series.
3. Render the time, seasonal, subseries, histogram, QQ, ACF and lag plots into
   `stock_eda_data/figures/<TICKER>/` (or --out-dir).
4. Print summary statistics, the normality test, interpretation and exercises.

EXPLAIN: Keeping this as a small orchestrator script lets you re-run the whole
walkthrough for any ticker without touching the analysis code.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .config import DEFAULT_START, DEFAULT_TICKER, FIGURES_DIR
from .diagnostics import NORMALITY_METHODS
from .plot_diagnostics import save_figures
from .workflows import FIGURE_ORDER, format_report, run_return_diagnostics


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m stock_eda.walkthrough",
        description="Diagnostic plots and a normality test for one stock's monthly log returns.",
    )
    parser.add_argument("--ticker", default=DEFAULT_TICKER, help="Yahoo Finance ticker")
    parser.add_argument("--start", default=DEFAULT_START, help="First price date (YYYY-MM-DD)")
    parser.add_argument("--end", default=None, help="Last price date (default: latest)")
    parser.add_argument("--out-dir", type=Path, default=None, help="Directory for PNG charts")
    parser.add_argument("--no-cache", action="store_true", help="Always download fresh prices")
    parser.add_argument(
        "--normality",
        choices=NORMALITY_METHODS,
        default="jarque_bera",
        help="Normality test to run",
    )
    parser.add_argument("--show", action="store_true", help="Also open the charts in a window")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the full walkthrough for one ticker."""
    args = build_parser().parse_args(argv)
    ticker = args.ticker.upper()
    out_dir = args.out_dir or FIGURES_DIR / ticker

    result = run_return_diagnostics(
        ticker,
        start=args.start,
        end=args.end,
        normality_method=args.normality,
        use_cache=not args.no_cache,
    )

    print(format_report(result))

    figures = result["figures"]
    print(f"\nSaving {len(figures)} charts to {out_dir} ...")
    save_figures({name: figures[name] for name in FIGURE_ORDER}, out_dir, close=not args.show)
    if args.show:
        import matplotlib.pyplot as plt

        plt.show()
    print("\n✓ Walkthrough complete.")


if __name__ == "__main__":
    main()
