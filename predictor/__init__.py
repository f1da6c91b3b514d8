"""
Same-day close predictor.

Provides unified interfaces for:
- Data loading (Yahoo Finance download, CSV, raw column arrays)
- Indicator calculations (ATR, SMA, EMA, RSI, VWAP)
- Lagged feature construction from feature set presets
- Min-max scaling and linear regression
- The strategy runner that predicts the evaluation day's close
"""
