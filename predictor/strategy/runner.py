"""
Strategy runner: train on history, predict the evaluation day's close.

Single pass, no retries:
1. Validate bar count
2. Split off the evaluation day (last bar); train on everything before it
3. Build features, fit feature and label scalers
4. Fit the linear model on scaled data
5. Build the evaluation day's row (open optionally overridden), scale it with
   the training scaler, predict, inverse-scale with the label scaler
6. Report predicted vs. actual close
"""
import logging
import math
from typing import Callable, Optional, Sequence, Union

import pandas as pd

from ..features.builder import build, build_row
from ..model.regression import fit_linear_model
from ..model.scaler import MinMaxScaler
from ..shared.errors import InsufficientDataError
from ..shared.types import Bar, PredictionResult, SignalType, bars_to_frame
from .config import PredictorConfig, BASELINE_CONFIG

logger = logging.getLogger(__name__)

ModelFactory = Callable[[Sequence[Sequence[float]], Sequence[Sequence[float]]], object]


def decide_signal(predicted_close: float, open_price: float, threshold: float) -> SignalType:
    """BUY/SELL when the prediction clears the open by more than `threshold`, else HOLD."""
    if predicted_close > open_price * (1 + threshold):
        return SignalType.BUY
    if predicted_close < open_price * (1 - threshold):
        return SignalType.SELL
    return SignalType.HOLD


class StrategyRunner:
    """
    Runs the scale -> fit -> predict -> inverse-scale workflow once per call.

    Each call builds fresh scalers and a fresh model; nothing is shared
    between runs.
    """

    def __init__(
        self,
        config: PredictorConfig = BASELINE_CONFIG,
        model_factory: ModelFactory = fit_linear_model,
    ):
        """
        Args:
            config: Feature set, windows and decision threshold
            model_factory: fit(X, Y) returning an object with predict(rows)
        """
        self.config = config
        self.model_factory = model_factory

    def run(self, bars: pd.DataFrame, open_price: Optional[float] = None) -> PredictionResult:
        """
        Predict the close of the last bar from all bars before it.

        Args:
            bars: Bars frame, oldest first; the last row is the evaluation day
            open_price: Live open for the evaluation day. If None, the day's
                recorded open is used (backtest against the known close).

        Returns:
            PredictionResult

        Raises:
            InsufficientDataError: Fewer than lookback_period + 2 bars, or no
                training rows could be built
        """
        feature_config = self.config.feature_config
        required = feature_config.min_bars
        if len(bars) < required:
            raise InsufficientDataError(
                f"Need at least {required} bars ({feature_config.lookback_period} for indicators, "
                f"1 for training, 1 for prediction), got {len(bars)}"
            )

        last = len(bars) - 1
        training_set = bars.iloc[:last]

        X_raw, Y_raw = build(training_set, feature_config)
        if not X_raw:
            raise InsufficientDataError("Not enough data to create features and labels after lookback period")

        feature_scaler = MinMaxScaler().fit(X_raw)
        label_scaler = MinMaxScaler().fit([[row[0]] for row in Y_raw])

        X_scaled = feature_scaler.scale_all(X_raw)
        Y_scaled = label_scaler.scale_all(Y_raw)

        logger.info(
            f"Training on {len(X_scaled)} scaled samples "
            f"({feature_config.width} features, {feature_config.feature_set.value})"
        )
        model = self.model_factory(X_scaled, Y_scaled)

        recorded_open = float(bars["Open"].iat[last])
        open_for_prediction = recorded_open if open_price is None else float(open_price)
        prediction_row = build_row(bars, last, feature_config, open_price=open_for_prediction)
        logger.debug(f"Prediction row: {dict(zip(feature_config.columns, prediction_row))}")

        prediction_scaled = feature_scaler.scale(prediction_row)
        predicted_close_scaled = model.predict([prediction_scaled])[0][0]
        predicted_close = label_scaler.inverse_scale([predicted_close_scaled])[0]

        actual_close = float(bars["Close"].iat[last])
        deviation = predicted_close - actual_close
        deviation_pct = deviation / actual_close * 100 if actual_close != 0 else math.nan

        training_mse = None
        if hasattr(model, "training_mse"):
            training_mse = model.training_mse(X_scaled, Y_scaled)

        evaluation_date = bars.index[last] if isinstance(bars.index, pd.DatetimeIndex) else None

        result = PredictionResult(
            predicted_close=predicted_close,
            actual_close=actual_close,
            deviation=deviation,
            deviation_pct=deviation_pct,
            open_price=open_for_prediction,
            feature_set=feature_config.feature_set.value,
            training_samples=len(X_scaled),
            training_mse=training_mse,
            signal=decide_signal(predicted_close, open_for_prediction, self.config.decision_threshold),
            evaluation_date=evaluation_date,
        )
        logger.info(
            f"Open {open_for_prediction:.2f} -> predicted close {predicted_close:.2f} "
            f"(actual {actual_close:.2f}, deviation {deviation:+.2f} / {deviation_pct:+.2f}%)"
        )
        return result


def run_strategy(
    bars: Union[pd.DataFrame, Sequence[Bar]],
    open_price: Optional[float] = None,
    config: Optional[PredictorConfig] = None,
    model_factory: ModelFactory = fit_linear_model,
) -> Optional[PredictionResult]:
    """
    Run one prediction, reporting insufficient data instead of raising.

    Args:
        bars: Bars frame, or a chronological sequence of Bar records

    Returns:
        PredictionResult, or None if the bars were too short (logged as error).
        Contract violations (e.g. DimensionMismatchError) propagate.
    """
    if not isinstance(bars, pd.DataFrame):
        bars = bars_to_frame(bars)
    runner = StrategyRunner(config or BASELINE_CONFIG, model_factory=model_factory)
    try:
        return runner.run(bars, open_price=open_price)
    except InsufficientDataError as e:
        logger.error(f"Strategy aborted: {e}")
        return None
