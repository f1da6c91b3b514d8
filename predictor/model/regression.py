"""
Linear regression capability: fit(X, Y) -> model, model.predict(X) -> Y.

Backed by scikit-learn ordinary least squares. The strategy runner only relies
on `predict`, so any callable returning an object with that method can be
injected in its place.
"""
import logging
from typing import List, Sequence

import numpy as np
from sklearn.linear_model import LinearRegression
from sklearn.metrics import mean_squared_error

logger = logging.getLogger(__name__)


class LinearModel:
    """Trained multivariate linear model. Immutable after fit."""

    def __init__(self, estimator: LinearRegression, n_features: int):
        self._estimator = estimator
        self.n_features = n_features

    @property
    def coefficients(self) -> List[List[float]]:
        return np.atleast_2d(self._estimator.coef_).tolist()

    @property
    def intercept(self) -> List[float]:
        return np.atleast_1d(self._estimator.intercept_).tolist()

    def predict(self, rows: Sequence[Sequence[float]]) -> List[List[float]]:
        """Predict one label row per input row."""
        X = np.asarray(rows, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.n_features:
            raise ValueError(
                f"Expected rows of {self.n_features} features, got shape {X.shape}"
            )
        return np.atleast_2d(self._estimator.predict(X)).reshape(len(X), -1).tolist()

    def training_mse(self, X: Sequence[Sequence[float]], Y: Sequence[Sequence[float]]) -> float:
        """Mean squared error of the model on the given (typically training) data."""
        return float(mean_squared_error(np.asarray(Y, dtype=float), self.predict(X)))


def fit_linear_model(X: Sequence[Sequence[float]], Y: Sequence[Sequence[float]]) -> LinearModel:
    """
    Fit ordinary least squares with intercept.

    Args:
        X: Feature rows (n_samples x n_features)
        Y: Label rows (n_samples x 1)

    Returns:
        Trained LinearModel
    """
    X_arr = np.asarray(X, dtype=float)
    Y_arr = np.asarray(Y, dtype=float)
    if len(X_arr) == 0:
        raise ValueError("Cannot fit a linear model on zero samples")
    if len(X_arr) != len(Y_arr):
        raise ValueError(f"X has {len(X_arr)} rows but Y has {len(Y_arr)}")
    estimator = LinearRegression()
    estimator.fit(X_arr, Y_arr)
    logger.debug(f"Fitted linear model on {X_arr.shape[0]} samples x {X_arr.shape[1]} features")
    return LinearModel(estimator, n_features=X_arr.shape[1])
