"""
Indicator calculation module.

Provides the point-in-time indicators used as model features:
- True Range and Average True Range
- Simple and Exponential Moving Averages
- Relative Strength Index
- Volume-Weighted Average Price (and close/VWAP ratio)

All indicators are pure functions of (bars, index, period).
"""
from .technical import (
    true_range,
    true_range_series,
    average_true_range,
    simple_moving_average,
    exponential_moving_average,
    relative_strength_index,
    volume_weighted_average_price,
    close_to_vwap_ratio,
)

__all__ = [
    'true_range',
    'true_range_series',
    'average_true_range',
    'simple_moving_average',
    'exponential_moving_average',
    'relative_strength_index',
    'volume_weighted_average_price',
    'close_to_vwap_ratio',
]
