"""
Data loading and preparation module.

Provides the bar source for the strategy runner: Yahoo Finance download with
CSV caching, CSV loading with date filtering, and normalization of raw column
arrays into a bars frame.
"""
from .loader import DataLoader, list_available_tickers
from .download import download_ticker, DownloadError
from .preparation import clean_price, frame_from_ohlc_arrays, prepare_bars

__all__ = [
    'DataLoader',
    'list_available_tickers',
    'download_ticker',
    'DownloadError',
    'clean_price',
    'frame_from_ohlc_arrays',
    'prepare_bars',
]
