"""
Feature set presets and feature configuration.

Each preset is a fixed, ordered tuple of feature column names. The column
order is the column order of every FeatureRow built for that preset, so a
preset must never change within a run.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from ..shared.defaults import LOOKBACK_PERIOD, SHORT_PERIOD


# Column names
OPEN = "open"  # today's open (the only same-day input)
PREV_CLOSE = "prev_close"
PREV_HIGH = "prev_high"
PREV_LOW = "prev_low"
PREV_PIVOT = "prev_pivot"
PREV_VOLUME = "prev_volume"
ATR = "atr"
RSI = "rsi"
SMA = "sma"
EMA = "ema"
PREV_CLOSE_VWAP_RATIO = "prev_close_vwap_ratio"

VOLUME_COLUMNS = frozenset({PREV_VOLUME, PREV_CLOSE_VWAP_RATIO})

_PIVOT_COLUMNS = (OPEN, PREV_CLOSE, PREV_HIGH, PREV_LOW, PREV_PIVOT)


class FeatureSet(Enum):
    """Recognized feature compositions."""
    PIVOT = "pivot"
    INDICATORS = "indicators"
    VOLUME_INDICATORS = "volume_indicators"
    VOLUME_INDICATORS_SMA = "volume_indicators_sma"
    EXTENDED = "extended"
    VWAP_RATIO = "vwap_ratio"

    @property
    def columns(self) -> Tuple[str, ...]:
        return FEATURE_SET_COLUMNS[self]

    @property
    def width(self) -> int:
        return len(self.columns)

    @property
    def requires_volume(self) -> bool:
        return any(c in VOLUME_COLUMNS for c in self.columns)

    @classmethod
    def from_name(cls, name: Union[str, "FeatureSet"]) -> "FeatureSet":
        """Resolve a preset by value (e.g. 'volume_indicators'), case-insensitive."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            available = [fs.value for fs in cls]
            raise ValueError(f"Unknown feature set '{name}'. Available: {available}") from None


FEATURE_SET_COLUMNS = {
    FeatureSet.PIVOT: _PIVOT_COLUMNS,
    FeatureSet.INDICATORS: _PIVOT_COLUMNS + (ATR, RSI),
    FeatureSet.VOLUME_INDICATORS: _PIVOT_COLUMNS + (PREV_VOLUME, ATR, RSI),
    FeatureSet.VOLUME_INDICATORS_SMA: _PIVOT_COLUMNS + (PREV_VOLUME, ATR, RSI, SMA),
    FeatureSet.EXTENDED: _PIVOT_COLUMNS + (PREV_VOLUME, ATR, RSI, SMA, EMA),
    FeatureSet.VWAP_RATIO: _PIVOT_COLUMNS + (PREV_VOLUME, ATR, RSI, PREV_CLOSE_VWAP_RATIO),
}


@dataclass(frozen=True)
class FeatureConfig:
    """
    Feature composition and indicator windows for one run.

    Validation runs at construction time (fail fast with clear errors).
    """
    feature_set: FeatureSet = FeatureSet.VOLUME_INDICATORS
    lookback_period: int = LOOKBACK_PERIOD  # ATR/RSI window and first feature row
    short_period: int = SHORT_PERIOD  # SMA/EMA window

    def __post_init__(self):
        # Accept preset names as well as enum members
        object.__setattr__(self, "feature_set", FeatureSet.from_name(self.feature_set))
        if self.lookback_period < 1:
            raise ValueError(f"lookback_period must be >= 1, got {self.lookback_period}")
        if self.short_period < 1:
            raise ValueError(f"short_period must be >= 1, got {self.short_period}")

    @property
    def columns(self) -> Tuple[str, ...]:
        return self.feature_set.columns

    @property
    def width(self) -> int:
        return self.feature_set.width

    @property
    def min_bars(self) -> int:
        """Bars needed for one training row plus an evaluation day."""
        return self.lookback_period + 2
