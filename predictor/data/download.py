"""Download daily bars for tickers from Yahoo Finance."""

import logging
import warnings
from pathlib import Path
from typing import Optional, Tuple

import pandas as pd
import yfinance as yf

from ..shared.defaults import TICKERS_DIR, DEFAULT_START_DATE

# Suppress yfinance's pandas deprecation warnings (will be fixed in future yfinance version)
warnings.filterwarnings('ignore', message='.*Timestamp.utcnow.*')

logger = logging.getLogger(__name__)


class DownloadError(Exception):
    """Raised when Yahoo Finance returns no usable data for a ticker."""
    pass


def _fetch(ticker: str, start: str) -> pd.DataFrame:
    df = yf.download(ticker, start=start, progress=False, auto_adjust=False)
    # Flatten multi-level columns if present (yfinance sometimes returns these)
    if isinstance(df.columns, pd.MultiIndex):
        df.columns = df.columns.get_level_values(0)
    return df


def download_ticker(
    ticker: str,
    force_refresh: bool = False,
    start_date: str = DEFAULT_START_DATE,
    tickers_dir: Optional[Path] = None,
) -> Tuple[pd.DataFrame, bool]:
    """
    Download daily bars for one ticker with smart caching.

    Features:
    - Incremental updates: Only downloads missing data since last cache
    - Smart validation: Checks if cached data covers requested range
    - Automatic refresh: Updates stale data (older than 1 day)

    Args:
        ticker: Yahoo Finance ticker symbol
        force_refresh: If True, re-download all data from scratch
        start_date: Start date for historical data
        tickers_dir: Override for the cache directory (default: data/tickers)

    Returns:
        Tuple of (DataFrame with OHLCV data, used_cache)

    Raises:
        DownloadError: If a full download returns no data
    """
    tickers_dir = Path(tickers_dir) if tickers_dir is not None else TICKERS_DIR
    tickers_dir.mkdir(parents=True, exist_ok=True)
    csv_file = tickers_dir / f"{ticker}.csv"

    # Current time for freshness checks
    now = pd.Timestamp.now()
    yesterday = now - pd.Timedelta(days=1)
    requested_start = pd.Timestamp(start_date)

    if csv_file.exists() and not force_refresh:
        df_cached = pd.read_csv(csv_file, index_col=0, parse_dates=True)
        if df_cached.empty:
            logger.info(f"Cached file for {ticker} is empty, re-downloading")
        else:
            cached_start = df_cached.index.min()
            cached_end = df_cached.index.max()
            covers_start = cached_start <= requested_start
            is_fresh = cached_end >= yesterday

            if covers_start and is_fresh:
                logger.info(
                    f"Loading {ticker} from cache: {len(df_cached)} rows "
                    f"({cached_start.date()} to {cached_end.date()})"
                )
                return df_cached, True

            if covers_start:
                # Incremental update: download only missing days
                logger.info(f"Updating {ticker} cache (last: {cached_end.date()})")
                update_start = cached_end + pd.Timedelta(days=1)
                df_new = _fetch(ticker, update_start.strftime('%Y-%m-%d'))
                if df_new.empty:
                    # No new data available (weekend/holiday), use cache
                    logger.info(f"No new data for {ticker} (market closed)")
                    return df_cached, True
                df = pd.concat([df_cached, df_new]).sort_index()
                df = df[~df.index.duplicated(keep='last')]  # Remove duplicates, keep latest
                df.to_csv(csv_file)
                logger.info(f"Updated {ticker}: +{len(df_new)} rows, total {len(df)}")
                return df, False

            logger.info(
                f"Cache start for {ticker} ({cached_start.date()}) is after requested "
                f"{requested_start.date()}, re-downloading"
            )

    # Full download (no cache, force_refresh or cache does not cover start)
    logger.info(f"Downloading {ticker} from {start_date}")
    df = _fetch(ticker, start_date)
    if df.empty:
        raise DownloadError(f"No data returned for {ticker}")

    df.to_csv(csv_file)
    logger.info(
        f"Saved {len(df)} rows to {csv_file} ({df.index.min().date()} to {df.index.max().date()})"
    )
    return df, False
