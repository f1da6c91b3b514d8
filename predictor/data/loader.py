"""
Data loader for daily bars stored as CSV.

Loads data from downloaded ticker CSV files with support for:
- Date range filtering
- Column normalization into a bars frame (Open/High/Low/Close[/Volume])
- Ticker lookup under data/tickers/
"""
import pandas as pd
from pathlib import Path
from typing import List, Optional, Union
from datetime import datetime

from ..shared.defaults import TICKERS_DIR
from .preparation import prepare_bars


DateLike = Union[str, datetime, pd.Timestamp]


def list_available_tickers(tickers_dir: Optional[Path] = None) -> List[str]:
    """Return sorted list of ticker symbols from data/tickers/ (CSV stems). Empty if dir missing."""
    tickers_dir = Path(tickers_dir) if tickers_dir is not None else TICKERS_DIR
    if not tickers_dir.exists():
        return []
    return sorted(p.stem for p in tickers_dir.glob("*.csv"))


class DataLoader:
    """
    Loads bars from a CSV file.

    The loader is the data-source collaborator of the strategy runner:
    construct it once and pass the loaded frame along.
    """

    def __init__(self, data_path: Union[str, Path]):
        """
        Initialize the data loader.

        Args:
            data_path: Path to the CSV file containing the data
        """
        self.data_path = Path(data_path)
        if not self.data_path.exists():
            raise FileNotFoundError(f"Data file not found: {self.data_path}")

    def load(
        self,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
        require_volume: bool = False,
    ) -> pd.DataFrame:
        """
        Load bars from the CSV file with optional filtering.

        Args:
            start_date: Start date for filtering (inclusive). If None, no start filter.
            end_date: End date for filtering (inclusive). If None, no end filter.
            require_volume: Raise if the file has no Volume column

        Returns:
            Bars frame with datetime index, oldest first
        """
        # Read CSV with Date as index
        df = pd.read_csv(
            self.data_path,
            index_col=0,
            parse_dates=True,
        )

        # Ensure index is datetime
        if not isinstance(df.index, pd.DatetimeIndex):
            df.index = pd.to_datetime(df.index)

        df = prepare_bars(df, require_volume=require_volume)

        # Apply date range filtering
        if start_date is not None:
            df = df[df.index >= pd.to_datetime(start_date)]

        if end_date is not None:
            df = df[df.index <= pd.to_datetime(end_date)]

        return df

    @classmethod
    def from_ticker(
        cls,
        ticker: str,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
        require_volume: bool = False,
        tickers_dir: Optional[Path] = None,
    ) -> pd.DataFrame:
        """
        Load bars for a downloaded ticker from data/tickers/{ticker}.csv.

        Args:
            ticker: Yahoo Finance ticker symbol (e.g. AAPL, HINDALCO.NS).
            start_date: Start date for filtering (inclusive).
            end_date: End date for filtering (inclusive).
            require_volume: Raise if the file has no Volume column
            tickers_dir: Override for the tickers directory

        Returns:
            Bars frame
        """
        tickers_dir = Path(tickers_dir) if tickers_dir is not None else TICKERS_DIR
        path = tickers_dir / f"{ticker}.csv"
        if not path.exists():
            raise FileNotFoundError(
                f"Data file not found for ticker '{ticker}': {path}. "
                f"Run `python -m cli.download {ticker}` first."
            )
        return cls(path).load(start_date=start_date, end_date=end_date, require_volume=require_volume)
