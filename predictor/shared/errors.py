"""
Error taxonomy for the predictor pipeline.
"""


class PredictorError(Exception):
    """Base class for predictor errors."""
    pass


class InsufficientDataError(PredictorError):
    """Raised when there are too few bars for the configured lookback."""
    pass


class DimensionMismatchError(PredictorError, ValueError):
    """Raised when a row width disagrees with the width a scaler was fitted on."""
    pass


class DataPreparationError(PredictorError):
    """Raised when input bars cannot be turned into a valid OHLCV frame."""
    pass
