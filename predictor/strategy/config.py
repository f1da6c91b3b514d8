"""
Predictor configuration.

Config validation runs at construction time (fail fast with clear errors).
"""
from dataclasses import dataclass
from typing import Dict, Union

from ..features.feature_set import FeatureConfig, FeatureSet
from ..shared.defaults import (
    LOOKBACK_PERIOD, SHORT_PERIOD,
    DEFAULT_FEATURE_SET, DECISION_THRESHOLD,
)


@dataclass
class PredictorConfig:
    """Complete configuration for one strategy run."""
    name: str = "baseline"
    description: str = ""
    feature_set: Union[str, FeatureSet] = DEFAULT_FEATURE_SET
    lookback_period: int = LOOKBACK_PERIOD
    short_period: int = SHORT_PERIOD
    decision_threshold: float = DECISION_THRESHOLD

    def __post_init__(self):
        self.feature_set = FeatureSet.from_name(self.feature_set)
        if self.decision_threshold < 0:
            raise ValueError(f"decision_threshold must be >= 0, got {self.decision_threshold}")
        # Validates the windows
        self.feature_config

    @property
    def feature_config(self) -> FeatureConfig:
        return FeatureConfig(
            feature_set=self.feature_set,
            lookback_period=self.lookback_period,
            short_period=self.short_period,
        )

    def summary(self) -> str:
        """One-line description used in logs and CLI output."""
        return (
            f"{self.name}: {self.feature_set.value} ({self.feature_set.width} features), "
            f"lookback={self.lookback_period}, short={self.short_period}, "
            f"threshold={self.decision_threshold:.4f}"
        )


BASELINE_CONFIG = PredictorConfig(name="baseline")

PRESET_CONFIGS: Dict[str, PredictorConfig] = {
    fs.value: PredictorConfig(name=fs.value, feature_set=fs)
    for fs in FeatureSet
}
# The pivot-only model never reads an indicator window
PRESET_CONFIGS[FeatureSet.PIVOT.value] = PredictorConfig(
    name=FeatureSet.PIVOT.value, feature_set=FeatureSet.PIVOT, lookback_period=1
)
