"""
Tests for predictor configuration and the YAML loader.
"""
from pathlib import Path

import pytest

from predictor.features.feature_set import FeatureSet
from predictor.shared.defaults import LOOKBACK_PERIOD, DECISION_THRESHOLD, DEFAULT_FEATURE_SET
from predictor.strategy.config import PredictorConfig, BASELINE_CONFIG, PRESET_CONFIGS
from predictor.strategy.config_loader import load_config_from_yaml, save_config_to_yaml

CONFIGS_DIR = Path(__file__).resolve().parents[2] / "configs"


class TestPredictorConfig:
    """Test PredictorConfig dataclass."""

    def test_baseline_uses_defaults(self):
        """Baseline config should use centralized defaults."""
        assert BASELINE_CONFIG.feature_set.value == DEFAULT_FEATURE_SET
        assert BASELINE_CONFIG.lookback_period == LOOKBACK_PERIOD
        assert BASELINE_CONFIG.decision_threshold == DECISION_THRESHOLD

    def test_preset_per_feature_set(self):
        assert set(PRESET_CONFIGS) == {fs.value for fs in FeatureSet}
        assert PRESET_CONFIGS["pivot"].lookback_period == 1

    def test_feature_config(self):
        config = PredictorConfig(feature_set="extended", lookback_period=10, short_period=3)
        feature_config = config.feature_config
        assert feature_config.feature_set is FeatureSet.EXTENDED
        assert feature_config.lookback_period == 10
        assert feature_config.short_period == 3

    def test_summary(self):
        assert "volume_indicators (8 features)" in BASELINE_CONFIG.summary()


class TestConfigValidation:
    """Config validation fails fast with clear errors."""

    def test_unknown_feature_set(self):
        with pytest.raises(ValueError, match="Unknown feature set"):
            PredictorConfig(feature_set="nope")

    def test_lookback_must_be_positive(self):
        with pytest.raises(ValueError, match="lookback_period must be >= 1"):
            PredictorConfig(lookback_period=0)

    def test_threshold_must_be_non_negative(self):
        with pytest.raises(ValueError, match="decision_threshold must be >= 0"):
            PredictorConfig(decision_threshold=-0.01)


class TestYamlLoader:
    """YAML round trip and error handling."""

    def test_load_baseline_file(self):
        config = load_config_from_yaml(CONFIGS_DIR / "baseline.yaml")
        assert config.name == "baseline"
        assert config.feature_set is FeatureSet.VOLUME_INDICATORS
        assert config.lookback_period == 14

    def test_load_nested_values(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text(
            "features:\n"
            "  set: vwap_ratio\n"
            "  lookback_period: 10\n"
            "decision:\n"
            "  threshold: 0.005\n"
        )
        config = load_config_from_yaml(path)
        assert config.name == "custom"
        assert config.feature_set is FeatureSet.VWAP_RATIO
        assert config.lookback_period == 10
        assert config.short_period == 5
        assert config.decision_threshold == 0.005

    def test_round_trip(self, tmp_path):
        original = PredictorConfig(name="rt", feature_set="pivot", lookback_period=1, decision_threshold=0.002)
        path = tmp_path / "nested" / "rt.yaml"
        save_config_to_yaml(original, path)
        assert load_config_from_yaml(path) == original

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config_from_yaml(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ValueError, match="Empty config file"):
            load_config_from_yaml(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("features:\n  short_period: 0\n")
        with pytest.raises(ValueError, match="short_period must be >= 1"):
            load_config_from_yaml(path)
