"""
Shared types, errors and defaults for the predictor.

This module provides:
- Bar record, SignalType enum and PredictionResult dataclass
- The predictor error taxonomy
- Centralized default values for all feature and strategy parameters
"""
from .types import (
    Bar,
    SignalType,
    PredictionResult,
    OHLC_COLUMNS,
    OHLCV_COLUMNS,
    bars_to_frame,
)
from .errors import (
    PredictorError,
    InsufficientDataError,
    DimensionMismatchError,
    DataPreparationError,
)
from .defaults import (
    LOOKBACK_PERIOD, SHORT_PERIOD,
    DEFAULT_FEATURE_SET, DECISION_THRESHOLD,
    RSI_NEUTRAL, TICKERS_DIR, DEFAULT_START_DATE,
)

__all__ = [
    'Bar',
    'SignalType',
    'PredictionResult',
    'OHLC_COLUMNS',
    'OHLCV_COLUMNS',
    'bars_to_frame',
    'PredictorError',
    'InsufficientDataError',
    'DimensionMismatchError',
    'DataPreparationError',
    'LOOKBACK_PERIOD', 'SHORT_PERIOD',
    'DEFAULT_FEATURE_SET', 'DECISION_THRESHOLD',
    'RSI_NEUTRAL', 'TICKERS_DIR', 'DEFAULT_START_DATE',
]
