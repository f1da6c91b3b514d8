"""
YAML configuration loader for predictor runs.

Loads predictor configurations from YAML files, allowing feature sets and
windows to be changed without code changes.

Example:
    name: baseline
    description: Lagged OHLC, volume, ATR and RSI
    features:
      set: volume_indicators
      lookback_period: 14
      short_period: 5
    decision:
      threshold: 0.001
"""
import yaml
from pathlib import Path
from typing import Union

from .config import PredictorConfig
from ..shared.defaults import (
    LOOKBACK_PERIOD, SHORT_PERIOD,
    DEFAULT_FEATURE_SET, DECISION_THRESHOLD,
)


def load_config_from_yaml(yaml_path: Union[str, Path]) -> PredictorConfig:
    """
    Load predictor configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        PredictorConfig object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty or holds invalid values
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file must contain a mapping: {yaml_path}")

    features = config_dict.get('features', {}) or {}
    decision = config_dict.get('decision', {}) or {}

    return PredictorConfig(
        name=config_dict.get('name', yaml_path.stem),
        description=config_dict.get('description', ''),
        feature_set=features.get('set', DEFAULT_FEATURE_SET),
        lookback_period=int(features.get('lookback_period', LOOKBACK_PERIOD)),
        short_period=int(features.get('short_period', SHORT_PERIOD)),
        decision_threshold=float(decision.get('threshold', DECISION_THRESHOLD)),
    )


def save_config_to_yaml(config: PredictorConfig, yaml_path: Union[str, Path]) -> None:
    """Write a config in the layout load_config_from_yaml reads."""
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)
    config_dict = {
        'name': config.name,
        'description': config.description,
        'features': {
            'set': config.feature_set.value,
            'lookback_period': config.lookback_period,
            'short_period': config.short_period,
        },
        'decision': {
            'threshold': config.decision_threshold,
        },
    }
    with open(yaml_path, 'w') as f:
        yaml.safe_dump(config_dict, f, sort_keys=False)
