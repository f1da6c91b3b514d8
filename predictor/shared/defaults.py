"""
Centralized default values for feature and strategy parameters.

This is the SINGLE SOURCE OF TRUTH for predictor defaults.
All modules should import from here to ensure consistency.
"""
from pathlib import Path

# Indicator windows
LOOKBACK_PERIOD = 14  # ATR / RSI window, also the first predictable bar index
SHORT_PERIOD = 5  # SMA / EMA window, suited to short daily histories

# Feature composition (see predictor.features.feature_set.FeatureSet)
DEFAULT_FEATURE_SET = "volume_indicators"

# Decision signal: predicted close must clear the open by this fraction
DECISION_THRESHOLD = 0.001  # 0.1%

# RSI value reported when the window is not yet filled
RSI_NEUTRAL = 50.0

# Data locations
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
TICKERS_DIR = DATA_DIR / "tickers"
DEFAULT_START_DATE = "2015-01-01"
