"""
Model module: min-max scaling and the linear regression capability.
"""
from .scaler import MinMaxScaler
from .regression import LinearModel, fit_linear_model

__all__ = [
    'MinMaxScaler',
    'LinearModel',
    'fit_linear_model',
]
