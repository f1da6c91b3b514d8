#!/usr/bin/env python3
"""
Close prediction CLI.

Trains the linear model on all bars before the last one and predicts the
last bar's close, either from its recorded open (backtest) or from a live
open supplied on the command line.
"""
import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Optional

from predictor.data.loader import DataLoader
from predictor.features.builder import feature_frame
from predictor.features.feature_set import FeatureSet
from predictor.shared.errors import PredictorError
from predictor.shared.types import PredictionResult
from predictor.strategy.config import PredictorConfig, BASELINE_CONFIG, PRESET_CONFIGS
from predictor.strategy.config_loader import load_config_from_yaml, save_config_to_yaml
from predictor.strategy.runner import run_strategy


def setup_logging(verbose: bool = False):
    """
    Setup logging to stdout.

    Args:
        verbose: If True, use DEBUG level, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def prompt_open_price() -> Optional[float]:
    """Ask for today's open on stdin. Returns None on invalid input or closed stdin."""
    try:
        answer = input("Please enter today's Open Price (e.g., 900.90): ")
        value = float(answer.replace(",", "").strip())
    except (EOFError, ValueError):
        return None
    if math.isnan(value):
        return None
    return value


def resolve_config(args: argparse.Namespace) -> PredictorConfig:
    """Config file or preset first, then individual overrides."""
    if args.config:
        config = load_config_from_yaml(args.config)
    elif args.feature_set:
        config = PRESET_CONFIGS[FeatureSet.from_name(args.feature_set).value]
    else:
        config = BASELINE_CONFIG

    return PredictorConfig(
        name=config.name,
        description=config.description,
        feature_set=args.feature_set or config.feature_set,
        lookback_period=args.lookback if args.lookback is not None else config.lookback_period,
        short_period=args.short_period if args.short_period is not None else config.short_period,
        decision_threshold=args.threshold if args.threshold is not None else config.decision_threshold,
    )


def print_report(result: PredictionResult, config: PredictorConfig, live_open: bool):
    """Print the prediction report."""
    print()
    print("=" * 60)
    print("CLOSE PREDICTION")
    print("=" * 60)
    print(f"Config:            {config.summary()}")
    if result.evaluation_date is not None:
        print(f"Evaluation day:    {result.evaluation_date.date()}")
    print(f"Training samples:  {result.training_samples}")
    if result.training_mse is not None:
        print(f"Training MSE:      {result.training_mse:.6f} (scaled)")
    print("-" * 60)
    source = "live input" if live_open else "recorded"
    print(f"Open ({source}):".ljust(19) + f"{result.open_price:.2f}")
    print(f"Predicted close:   {result.predicted_close:.2f}")
    print(f"Actual close:      {result.actual_close:.2f}")
    print(f"Deviation:         {result.deviation:+.2f} ({result.deviation_pct:+.2f}%)")
    print(f"Signal:            {result.signal.value.upper()}")
    print("=" * 60)


def main():
    parser = argparse.ArgumentParser(
        description="Predict a day's close from prior daily bars",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Backtest the last day in a downloaded ticker file
    python -m cli.predict --ticker AAPL

    # Live what-if: today's open is known, close is not
    python -m cli.predict --ticker AAPL --open-price 231.40

    # Use a CSV and a different feature set
    python -m cli.predict --csv data/bars.csv --feature-set extended
        """
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--csv", type=str, help="CSV file with Date index and OHLC(V) columns")
    source.add_argument("--ticker", "-t", type=str, help="Ticker downloaded to data/tickers/")

    parser.add_argument("--config", "-c", type=str, help="YAML config file (e.g. configs/baseline.yaml)")
    parser.add_argument(
        "--feature-set", "-f",
        choices=[fs.value for fs in FeatureSet],
        help="Feature set preset (overrides config)",
    )
    parser.add_argument("--lookback", type=int, help="ATR/RSI lookback period (overrides config)")
    parser.add_argument("--short-period", type=int, help="SMA/EMA period (overrides config)")
    parser.add_argument("--threshold", type=float, help="Decision threshold as a fraction (overrides config)")
    parser.add_argument("--start-date", type=str, help="First bar date (inclusive)")
    parser.add_argument("--end-date", type=str, help="Evaluation day (inclusive); the last bar up to it is predicted")

    open_group = parser.add_mutually_exclusive_group()
    open_group.add_argument("--open-price", type=float, help="Live open price for the evaluation day")
    open_group.add_argument("--prompt-open", action="store_true", help="Ask for the open price interactively")

    parser.add_argument("--show-features", action="store_true", help="Print the last training feature rows")
    parser.add_argument("--save-config", type=str, help="Write the effective config to this YAML path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging (DEBUG level)")

    args = parser.parse_args()
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = resolve_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.save_config:
        save_config_to_yaml(config, args.save_config)
        logger.info(f"Saved config to {args.save_config}")

    require_volume = config.feature_set.requires_volume
    try:
        if args.csv:
            bars = DataLoader(Path(args.csv)).load(
                start_date=args.start_date, end_date=args.end_date, require_volume=require_volume
            )
        else:
            bars = DataLoader.from_ticker(
                args.ticker, start_date=args.start_date, end_date=args.end_date,
                require_volume=require_volume,
            )
    except (FileNotFoundError, PredictorError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    open_price = args.open_price
    if args.prompt_open:
        open_price = prompt_open_price()
        if open_price is None:
            print("Invalid input. Exiting.", file=sys.stderr)
            return 1

    logger.info(f"Loaded {len(bars)} bars; {config.summary()}")

    if args.show_features:
        frame = feature_frame(bars.iloc[:-1], config.feature_config)
        print(frame.tail(10).to_string(float_format=lambda v: f"{v:.2f}"))

    result = run_strategy(bars, open_price=open_price, config=config)
    if result is None:
        return 1

    print_report(result, config, live_open=open_price is not None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
