"""
Bar preparation and validation.

Turns raw inputs (column arrays as exported from a spreadsheet, or a loaded
CSV frame) into a clean bars frame: canonical column names, numeric values,
no missing OHLC rows, chronological order. Fail-fast approach: raises
DataPreparationError on malformed input.
"""
import logging
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..shared.errors import DataPreparationError
from ..shared.types import OHLC_COLUMNS

logger = logging.getLogger(__name__)

PriceLike = Union[str, int, float]


def clean_price(value: PriceLike) -> float:
    """
    Parse a price that may carry thousands separators (e.g. "1,234.50").

    Raises:
        DataPreparationError: If the value is not numeric after cleaning
    """
    if isinstance(value, (int, float, np.number)):
        return float(value)
    cleaned = str(value).replace(",", "").strip()
    try:
        return float(cleaned)
    except ValueError:
        raise DataPreparationError(f"Not a price: {value!r}") from None


def frame_from_ohlc_arrays(
    open: Sequence[PriceLike],
    high: Sequence[PriceLike],
    low: Sequence[PriceLike],
    close: Sequence[PriceLike],
    volume: Optional[Sequence[PriceLike]] = None,
    index: Optional[pd.Index] = None,
) -> pd.DataFrame:
    """
    Combine separate OHLC(V) column arrays into one bars frame.

    Args:
        open, high, low, close: Chronological price columns (strings allowed)
        volume: Optional volume column
        index: Optional index (e.g. dates)

    Returns:
        DataFrame with Open/High/Low/Close[/Volume] columns

    Raises:
        DataPreparationError: If the arrays differ in length or hold non-numeric values
    """
    columns = {"Open": open, "High": high, "Low": low, "Close": close}
    if volume is not None:
        columns["Volume"] = volume
    lengths = {name: len(values) for name, values in columns.items()}
    if len(set(lengths.values())) != 1:
        raise DataPreparationError(f"OHLC arrays are not of equal length: {lengths}")
    data = {name: [clean_price(v) for v in values] for name, values in columns.items()}
    return pd.DataFrame(data, index=index, columns=list(columns), dtype=float)


def prepare_bars(df: pd.DataFrame, require_volume: bool = False) -> pd.DataFrame:
    """
    Normalize a loaded frame into a bars frame.

    - Column names matched case-insensitively to Open/High/Low/Close/Volume
      ('Adj Close' and other columns are dropped)
    - Values coerced to float; rows with missing OHLC dropped (logged)
    - Sorted by index when the index is a DatetimeIndex

    Raises:
        DataPreparationError: Missing required columns or non-numeric values
    """
    rename = {}
    for column in df.columns:
        key = str(column).strip().lower()
        for canonical in OHLC_COLUMNS + ["Volume"]:
            if key == canonical.lower():
                rename[column] = canonical
    frame = df.rename(columns=rename)

    missing = [c for c in OHLC_COLUMNS if c not in frame.columns]
    if require_volume and "Volume" not in frame.columns:
        missing.append("Volume")
    if missing:
        raise DataPreparationError(f"Missing columns {missing}. Available: {list(df.columns)}")

    keep = OHLC_COLUMNS + (["Volume"] if "Volume" in frame.columns else [])
    frame = frame[keep].copy()
    for column in keep:
        if not pd.api.types.is_numeric_dtype(frame[column]):
            frame[column] = frame[column].map(lambda v: np.nan if pd.isna(v) else clean_price(v))
        frame[column] = pd.to_numeric(frame[column], errors="raise").astype(float)

    before = len(frame)
    frame = frame.dropna(subset=OHLC_COLUMNS)
    dropped = before - len(frame)
    if dropped:
        logger.warning(f"Dropped {dropped} rows with missing OHLC values")
    if "Volume" in frame.columns:
        frame["Volume"] = frame["Volume"].fillna(0.0)

    if isinstance(frame.index, pd.DatetimeIndex):
        frame = frame.sort_index()
    return frame
