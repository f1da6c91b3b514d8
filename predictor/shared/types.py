"""
Shared types for the predictor modules.

This module consolidates the bar record, the decision signal enum and the
prediction result so that data loading, feature building and the strategy
runner agree on one representation.
"""
import pandas as pd
from typing import Optional, Sequence
from dataclasses import dataclass
from enum import Enum


OHLC_COLUMNS = ["Open", "High", "Low", "Close"]
OHLCV_COLUMNS = OHLC_COLUMNS + ["Volume"]


class SignalType(Enum):
    """Direction implied by a predicted close relative to the open."""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


@dataclass(frozen=True)
class Bar:
    """One day's OHLC(V) snapshot."""
    open: float
    high: float
    low: float
    close: float
    volume: Optional[float] = None

    @property
    def pivot(self) -> float:
        """Pivot point (H + L + C) / 3."""
        return (self.high + self.low + self.close) / 3


def bars_to_frame(bars: Sequence[Bar], index: Optional[pd.Index] = None) -> pd.DataFrame:
    """
    Convert a chronological sequence of Bar records into a bars frame.

    The Volume column is only present when every bar carries a volume.

    Args:
        bars: Bars ordered oldest -> newest
        index: Optional index (e.g. dates); defaults to a RangeIndex

    Returns:
        DataFrame with Open/High/Low/Close[/Volume] columns
    """
    data = {
        "Open": [b.open for b in bars],
        "High": [b.high for b in bars],
        "Low": [b.low for b in bars],
        "Close": [b.close for b in bars],
    }
    if bars and all(b.volume is not None for b in bars):
        data["Volume"] = [b.volume for b in bars]
    columns = OHLCV_COLUMNS if "Volume" in data else OHLC_COLUMNS
    return pd.DataFrame(data, index=index, columns=columns, dtype=float)


@dataclass(frozen=True)
class PredictionResult:
    """
    Outcome of one strategy run.

    actual_close is the evaluation day's recorded close; for a live what-if
    query it is whatever the data source reports for that day.
    """
    predicted_close: float
    actual_close: float
    deviation: float  # predicted - actual
    deviation_pct: float  # deviation / actual * 100
    open_price: float  # open used for the prediction row
    feature_set: str
    training_samples: int
    training_mse: Optional[float] = None  # on scaled training data
    signal: SignalType = SignalType.HOLD
    evaluation_date: Optional[pd.Timestamp] = None
