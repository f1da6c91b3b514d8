"""
Lagged feature construction.

For each predictable bar i ("today") the builder emits one feature row made of
today's open and values taken from bar i - 1 ("yesterday") or from indicator
windows that end before today, plus today's close as the label.

Indicator positions per row:
- ATR at i (its window [i - p, i) already ends at yesterday)
- RSI at i - 1 (one day behind ATR; kept as in the established model)
- SMA / EMA at i (windows end at yesterday)
- close/VWAP ratio at i - 1
"""
import logging
from typing import Callable, Dict, List, Optional, Tuple

import pandas as pd

from ..indicators.technical import (
    average_true_range,
    relative_strength_index,
    simple_moving_average,
    exponential_moving_average,
    close_to_vwap_ratio,
)
from .feature_set import (
    FeatureConfig,
    OPEN, PREV_CLOSE, PREV_HIGH, PREV_LOW, PREV_PIVOT, PREV_VOLUME,
    ATR, RSI, SMA, EMA, PREV_CLOSE_VWAP_RATIO,
)

logger = logging.getLogger(__name__)

FeatureRow = List[float]
LabelRow = List[float]

_ColumnFn = Callable[[pd.DataFrame, int, FeatureConfig], float]


def _prev(bars: pd.DataFrame, index: int, column: str) -> float:
    return float(bars[column].iat[index - 1])


_COLUMN_FUNCTIONS: Dict[str, _ColumnFn] = {
    OPEN: lambda bars, i, cfg: float(bars["Open"].iat[i]),
    PREV_CLOSE: lambda bars, i, cfg: _prev(bars, i, "Close"),
    PREV_HIGH: lambda bars, i, cfg: _prev(bars, i, "High"),
    PREV_LOW: lambda bars, i, cfg: _prev(bars, i, "Low"),
    PREV_PIVOT: lambda bars, i, cfg: (
        _prev(bars, i, "High") + _prev(bars, i, "Low") + _prev(bars, i, "Close")
    ) / 3,
    PREV_VOLUME: lambda bars, i, cfg: _prev(bars, i, "Volume"),
    ATR: lambda bars, i, cfg: average_true_range(bars, i, cfg.lookback_period),
    RSI: lambda bars, i, cfg: relative_strength_index(bars, i - 1, cfg.lookback_period),
    SMA: lambda bars, i, cfg: simple_moving_average(bars, i, cfg.short_period),
    EMA: lambda bars, i, cfg: exponential_moving_average(bars, i, cfg.short_period),
    PREV_CLOSE_VWAP_RATIO: lambda bars, i, cfg: close_to_vwap_ratio(bars, i - 1),
}


def _require_columns(bars: pd.DataFrame, config: FeatureConfig) -> None:
    required = ["Open", "High", "Low", "Close"]
    if config.feature_set.requires_volume:
        required.append("Volume")
    missing = [c for c in required if c not in bars.columns]
    if missing:
        raise ValueError(
            f"Feature set '{config.feature_set.value}' needs columns {missing}. "
            f"Available: {list(bars.columns)}"
        )


def build_row(
    bars: pd.DataFrame,
    index: int,
    config: FeatureConfig,
    open_price: Optional[float] = None,
) -> FeatureRow:
    """
    Build the feature row for the bar at position `index`.

    Args:
        bars: Bars frame, oldest first
        index: Position of "today" (must have a predecessor)
        config: Feature composition and windows
        open_price: Replaces today's recorded open when given

    Returns:
        List of floats in config.columns order
    """
    if index < 1 or index >= len(bars):
        raise IndexError(f"feature row index {index} needs 1 <= index < {len(bars)}")
    _require_columns(bars, config)
    row = [_COLUMN_FUNCTIONS[column](bars, index, config) for column in config.columns]
    if open_price is not None:
        row[config.columns.index(OPEN)] = float(open_price)
    return row


def build(bars: pd.DataFrame, config: FeatureConfig) -> Tuple[List[FeatureRow], List[LabelRow]]:
    """
    Build training features and labels for every predictable bar.

    Rows are produced for i = lookback_period .. len(bars) - 1, so the result
    has max(0, len(bars) - lookback_period) rows.

    Returns:
        Tuple of (X, Y); both empty when len(bars) <= lookback_period
    """
    _require_columns(bars, config)
    if len(bars) <= config.lookback_period:
        logger.warning(
            f"Need at least {config.lookback_period + 1} bars to build features, got {len(bars)}"
        )
        return [], []

    closes = bars["Close"]
    X: List[FeatureRow] = []
    Y: List[LabelRow] = []
    for i in range(config.lookback_period, len(bars)):
        X.append(build_row(bars, i, config))
        Y.append([float(closes.iat[i])])
    logger.debug(f"Built {len(X)} feature rows ({config.width} features, {config.feature_set.value})")
    return X, Y


def feature_frame(bars: pd.DataFrame, config: FeatureConfig) -> pd.DataFrame:
    """
    Features and label as a DataFrame indexed like the predictable bars.

    Columns are config.columns plus 'label'.
    """
    X, Y = build(bars, config)
    index = bars.index[config.lookback_period:] if X else bars.index[:0]
    df = pd.DataFrame(X, index=index, columns=list(config.columns), dtype=float)
    df["label"] = [y[0] for y in Y]
    return df
