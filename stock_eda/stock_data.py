"""
Load one stock's adjusted close prices and build its monthly log-return series.

The return series is the single shared input of the walkthrough: every
diagnostic and every chart consumes it without modifying it.

Dependencies
-----------
- yfinance : pip install yfinance
  Used to fetch adjusted close prices; we then compute monthly log returns.

Design choices
--------------
- Log returns r_t = ln(P_t / P_{t-1}) on month-end adjusted closes, so that
  multi-month returns are simple sums and the normal reference distribution
  used by the histogram/QQ-plot is the natural benchmark.
- Optional cache: save/load the raw daily adjusted closes from PROCESSED_DIR
  to avoid repeated API calls and to make a rerun of the report reproducible.
  Cache key is the ticker. The cached history is sliced to the requested
  range when it covers it; a request reaching past either end refetches
  and rewrites the cache.
- No retry logic: a failed or empty download raises and stops the run.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from .config import PROCESSED_DIR

RETURN_NAME = "log_return"
MIN_OBSERVATIONS = 2
CACHE_TOLERANCE = pd.Timedelta(days=7)


def _cache_path(ticker: str):
    safe = ticker.upper().replace("^", "").replace("/", "_")
    return PROCESSED_DIR / f"{safe}_adj_close.csv"


def _cache_covers(cached: pd.Series, start: str, end: Optional[str]) -> bool:
    """True when the cached history reaches both ends of the requested range."""
    if cached.empty:
        return False
    end_ts = pd.Timestamp(end) if end is not None else pd.Timestamp.today().normalize()
    # Weekends and holidays: the first/last trading day can sit a few days inside the range
    return (
        cached.index.min() <= pd.Timestamp(start) + CACHE_TOLERANCE
        and cached.index.max() >= end_ts - CACHE_TOLERANCE
    )


def download_adjusted_close(
    ticker: str,
    start: str,
    end: Optional[str] = None,
    use_cache: bool = True,
) -> pd.Series:
    """
    Download daily adjusted close prices for one ticker.

    Parameters
    ----------
    ticker : str
        Yahoo Finance ticker symbol (e.g. 'AAPL').
    start, end : str
        Date range in 'YYYY-MM-DD' (or 'YYYY-MM'). `end=None` means "up to the
        latest available date". The cache is only used when its history covers
        the requested range; otherwise prices are downloaded again and the
        cache is rewritten.
    use_cache : bool, default True
        If True, read from or write to a CSV in PROCESSED_DIR.

    Returns
    -------
    Series
        Index: trading dates (DatetimeIndex, sorted, tz-naive).
        Values: adjusted close prices. Name is the ticker.

    Raises
    ------
    ValueError
        If no prices are available for the ticker and range.
    """
    try:
        import yfinance as yf
    except ImportError:
        raise ImportError(
            "yfinance is required for stock data. Install with: pip install yfinance"
        )

    cache_path = _cache_path(ticker)

    if use_cache and cache_path.exists():
        print(f"Loading cached prices for {ticker} from {cache_path} ...")
        cached = pd.read_csv(cache_path, index_col=0, parse_dates=True).iloc[:, 0]
        cached = cached.sort_index()
        if _cache_covers(cached, start, end):
            close = cached.loc[start:end].copy()
            close.name = ticker
            return close
        print(
            f"  Cache covers {cached.index.min().date()} -> {cached.index.max().date()}, "
            f"refreshing for {start} -> {end or 'latest'}"
        )

    print(f"Downloading adjusted close prices for {ticker} from {start} ...")
    hist = yf.download(
        ticker,
        start=start,
        end=end,
        progress=False,
        auto_adjust=True,
    )
    if hist is None or hist.empty:
        raise ValueError(f"No price data returned for ticker {ticker!r} starting {start}.")

    # yfinance can return MultiIndex columns for single ticker in some versions
    if isinstance(hist.columns, pd.MultiIndex):
        close = hist["Close"].iloc[:, 0]
    else:
        close = hist["Close"] if "Close" in hist.columns else hist["Adj Close"]

    close = close.dropna().astype(float).sort_index()
    if close.index.tz is not None:
        close.index = close.index.tz_localize(None)
    close = close[~close.index.duplicated(keep="last")]
    close.name = ticker
    if close.empty:
        raise ValueError(f"No price data returned for ticker {ticker!r} starting {start}.")
    print(f"  Got {len(close)} daily prices: {close.index.min().date()} -> {close.index.max().date()}")

    if use_cache:
        PROCESSED_DIR.mkdir(parents=True, exist_ok=True)
        close.to_frame("adj_close").to_csv(cache_path)

    return close


def validate_return_series(returns: pd.Series) -> pd.Series:
    """
    Check the invariants every consumer of the return series relies on.

    - DatetimeIndex in strictly increasing order (no duplicate timestamps)
    - finite values only
    - at least two observations

    Returns the series unchanged so the call can be chained.
    """
    if not isinstance(returns, pd.Series):
        raise ValueError(f"Return series must be a pandas Series, got {type(returns).__name__}")
    if len(returns) < MIN_OBSERVATIONS:
        raise ValueError(
            f"Return series needs at least {MIN_OBSERVATIONS} observations, got {len(returns)}"
        )
    if not isinstance(returns.index, pd.DatetimeIndex):
        raise ValueError("Return series must be indexed by dates (DatetimeIndex)")
    if not returns.index.is_unique:
        raise ValueError("Return series has duplicate timestamps")
    if not returns.index.is_monotonic_increasing:
        raise ValueError("Return series is not in chronological order")
    values = returns.to_numpy(dtype=float)
    if not np.all(np.isfinite(values)):
        raise ValueError("Return series contains NaN or infinite values")
    return returns


def monthly_log_returns(prices: pd.Series) -> pd.Series:
    """
    Convert daily (or any higher-frequency) prices into monthly log returns.

    Uses the last available price in each calendar month:
        r_t = ln(P_t) - ln(P_{t-1})
    The first month is dropped because it has no predecessor.
    """
    if prices.empty:
        raise ValueError("Price series is empty")
    prices = prices.sort_index()
    if (prices <= 0).any():
        raise ValueError("Prices must be strictly positive to take logs")

    monthly = prices.resample("ME").last().dropna()
    returns = np.log(monthly).diff().dropna()
    returns.name = RETURN_NAME
    if prices.name is not None:
        returns.attrs["ticker"] = str(prices.name)
    return validate_return_series(returns)


def load_monthly_log_returns(
    ticker: str,
    start: str,
    end: Optional[str] = None,
    use_cache: bool = True,
) -> pd.Series:
    """
    Fetch prices for `ticker` and return its monthly log-return series.

    Returns
    -------
    Series
        Index: month-end dates. Values: log returns. `attrs["ticker"]` holds
        the ticker so charts and the report can label themselves.
    """
    prices = download_adjusted_close(ticker, start=start, end=end, use_cache=use_cache)
    returns = monthly_log_returns(prices)
    returns.attrs["ticker"] = ticker
    return returns
