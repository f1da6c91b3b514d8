"""
Technical indicators evaluated at a single bar position.

Every function takes the full bars frame plus an explicit integer position
and period, and reads a fixed window relative to that position. Nothing is
cached between calls, so a caller can evaluate any position in any order.

Windows (index = i, period = p):
- ATR, SMA, EMA: the p bars strictly before i, i.e. [i - p, i)
- RSI: the p close-to-close changes ending at i (inclusive)
- VWAP: all bars [0, i] inclusive
"""
import numpy as np
import pandas as pd

from ..shared.defaults import LOOKBACK_PERIOD, SHORT_PERIOD, RSI_NEUTRAL


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")


def _check_index(bars: pd.DataFrame, index: int, allow_end: bool = False) -> None:
    """Validate a bar position. allow_end permits index == len(bars) for [i - p, i) windows."""
    upper = len(bars) if allow_end else len(bars) - 1
    if index < 0 or index > upper:
        raise IndexError(f"bar index {index} out of range for {len(bars)} bars")


def _closes(bars: pd.DataFrame) -> np.ndarray:
    return bars["Close"].to_numpy(dtype=float)


def true_range(high: float, low: float, prev_close: float) -> float:
    """
    True Range of one bar.

    TR = max(high - low, |high - prev_close|, |low - prev_close|)
    """
    return max(high - low, abs(high - prev_close), abs(low - prev_close))


def true_range_series(bars: pd.DataFrame) -> pd.Series:
    """
    True Range for every bar.

    The first bar has no predecessor and uses its own close as prev_close.
    """
    high, low, close = bars["High"], bars["Low"], bars["Close"]
    prev_close = close.shift(1)
    prev_close.iloc[:1] = close.iloc[:1]
    tr1 = high - low
    tr2 = (high - prev_close).abs()
    tr3 = (low - prev_close).abs()
    return pd.concat([tr1, tr2, tr3], axis=1).max(axis=1)


def average_true_range(bars: pd.DataFrame, index: int, period: int = LOOKBACK_PERIOD) -> float:
    """
    Average True Range as a simple mean of TR over [index - period, index).

    Returns 0.0 when fewer than `period` bars precede `index`. This is an
    insufficient-history sentinel, not a statistically meaningful ATR.
    """
    _check_period(period)
    _check_index(bars, index, allow_end=True)
    if index < period:
        return 0.0
    tr = true_range_series(bars).to_numpy(dtype=float)
    return float(tr[index - period:index].mean())


def simple_moving_average(bars: pd.DataFrame, index: int, period: int = SHORT_PERIOD) -> float:
    """
    Mean close over [index - period, index).

    With insufficient history returns the close at `index`, or 0.0 when no
    bar exists at that position.
    """
    _check_period(period)
    closes = _closes(bars)
    if index < period:
        if 0 <= index < len(closes):
            return float(closes[index])
        return 0.0
    _check_index(bars, index, allow_end=True)
    return float(closes[index - period:index].mean())


def exponential_moving_average(bars: pd.DataFrame, index: int, period: int = SHORT_PERIOD) -> float:
    """
    EMA seeded with the SMA at position `period`.

    ema = (close[i] - ema) * 2 / (period + 1) + ema, for i in [period, index).
    Falls back to the SMA when index < period. Recomputed from the seed on
    every call (O(index) per call).
    """
    _check_period(period)
    if index < period:
        return simple_moving_average(bars, index, period)
    _check_index(bars, index, allow_end=True)
    closes = _closes(bars)
    multiplier = 2.0 / (period + 1)
    ema = simple_moving_average(bars, period, period)
    for i in range(period, index):
        ema = (closes[i] - ema) * multiplier + ema
    return float(ema)


def relative_strength_index(bars: pd.DataFrame, index: int, period: int = LOOKBACK_PERIOD) -> float:
    """
    Calculate Relative Strength Index (RSI) ending at `index` (inclusive).

    RSI = 100 - (100 / (1 + RS))
    RS = Average Gain / Average Loss

    Gains and losses are simple averages over the last `period` close-to-close
    changes (no Wilder smoothing). Returns 50.0 with insufficient history and
    100.0 when the average loss is zero.
    """
    _check_period(period)
    if index < period:
        return RSI_NEUTRAL
    _check_index(bars, index)
    closes = _closes(bars)
    delta = np.diff(closes[index - period:index + 1])
    avg_gain = delta[delta > 0].sum() / period
    avg_loss = -delta[delta < 0].sum() / period
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return float(100 - (100 / (1 + rs)))


def volume_weighted_average_price(bars: pd.DataFrame, index: int) -> float:
    """
    Cumulative VWAP over [0, index] inclusive.

    Typical price = (high + low + close) / 3. Returns the close at `index`
    when index is 0 or the cumulative volume is 0.
    """
    if "Volume" not in bars.columns:
        raise ValueError("VWAP requires a 'Volume' column")
    _check_index(bars, index)
    closes = _closes(bars)
    if index == 0:
        return float(closes[0])
    window = bars.iloc[:index + 1]
    typical = (window["High"] + window["Low"] + window["Close"]) / 3
    volume = window["Volume"].to_numpy(dtype=float)
    cumulative_volume = volume.sum()
    if cumulative_volume == 0:
        return float(closes[index])
    return float((typical.to_numpy(dtype=float) * volume).sum() / cumulative_volume)


def close_to_vwap_ratio(bars: pd.DataFrame, index: int) -> float:
    """Close at `index` divided by VWAP at `index`; 1.0 if VWAP is zero."""
    vwap = volume_weighted_average_price(bars, index)
    if vwap == 0:
        return 1.0
    return float(_closes(bars)[index] / vwap)
