"""
Feature engineering module.

Turns a bars frame into fixed-width lagged feature rows and close labels,
with the composition chosen from a FeatureSet preset.
"""
from .feature_set import FeatureSet, FeatureConfig, FEATURE_SET_COLUMNS
from .builder import build, build_row, feature_frame

__all__ = [
    'FeatureSet',
    'FeatureConfig',
    'FEATURE_SET_COLUMNS',
    'build',
    'build_row',
    'feature_frame',
]
