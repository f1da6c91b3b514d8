"""
Strategy module.

Provides the predictor configuration (dataclass + YAML loader) and the runner
that trains on history and predicts the evaluation day's close.
"""
from .config import PredictorConfig, BASELINE_CONFIG, PRESET_CONFIGS
from .config_loader import load_config_from_yaml, save_config_to_yaml
from .runner import StrategyRunner, run_strategy, decide_signal

__all__ = [
    'PredictorConfig',
    'BASELINE_CONFIG',
    'PRESET_CONFIGS',
    'load_config_from_yaml',
    'save_config_to_yaml',
    'StrategyRunner',
    'run_strategy',
    'decide_signal',
]
