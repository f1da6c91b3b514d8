"""
Per-column min-max scaling for feature and label matrices.

Columns with zero range in the fitting matrix scale to the midpoint 0.5 and
inverse-scale to the column minimum. That round trip is lossy for values that
differ from the fitted constant; it is the defined behaviour, not an error.
"""
from typing import List, Optional, Sequence

import numpy as np

from ..shared.errors import DimensionMismatchError


class MinMaxScaler:
    """
    Scales each column to [0, 1] using the min/max observed at fit time.

    Fitted once per run and never refit; rows scaled later (e.g. the
    prediction row) may fall outside [0, 1].
    """

    def __init__(self):
        self.min_: Optional[np.ndarray] = None
        self.max_: Optional[np.ndarray] = None

    @property
    def is_fitted(self) -> bool:
        return self.min_ is not None

    @property
    def n_features(self) -> int:
        return 0 if self.min_ is None else len(self.min_)

    def fit(self, matrix: Sequence[Sequence[float]]) -> "MinMaxScaler":
        """
        Record per-column min and max.

        An empty matrix yields an empty scaler whose scale calls return their
        input unchanged; callers are expected to guard against that case.
        """
        if len(matrix) == 0:
            self.min_ = np.empty(0)
            self.max_ = np.empty(0)
            return self
        widths = {len(row) for row in matrix}
        if len(widths) != 1:
            raise DimensionMismatchError(f"Rows have differing widths: {sorted(widths)}")
        data = np.asarray(matrix, dtype=float)
        self.min_ = data.min(axis=0)
        self.max_ = data.max(axis=0)
        return self

    def _check_row(self, row: Sequence[float]) -> np.ndarray:
        if not self.is_fitted:
            raise RuntimeError("MinMaxScaler must be fitted before use")
        values = np.asarray(row, dtype=float)
        if self.n_features and values.shape != (self.n_features,):
            raise DimensionMismatchError(
                f"Row has {values.size} values, scaler was fitted on {self.n_features} columns"
            )
        return values

    def scale(self, row: Sequence[float]) -> List[float]:
        """(v - min) / (max - min) per column, 0.5 where max == min."""
        values = self._check_row(row)
        if not self.n_features:
            return values.tolist()
        value_range = self.max_ - self.min_
        degenerate = value_range == 0
        safe_range = np.where(degenerate, 1.0, value_range)
        scaled = np.where(degenerate, 0.5, (values - self.min_) / safe_range)
        return scaled.tolist()

    def scale_all(self, matrix: Sequence[Sequence[float]]) -> List[List[float]]:
        """Scale every row, preserving order."""
        return [self.scale(row) for row in matrix]

    def inverse_scale(self, scaled_row: Sequence[float]) -> List[float]:
        """v * (max - min) + min per column (zero-range columns return min)."""
        values = self._check_row(scaled_row)
        if not self.n_features:
            return values.tolist()
        return (values * (self.max_ - self.min_) + self.min_).tolist()

    def __repr__(self) -> str:
        if not self.is_fitted:
            return "MinMaxScaler(unfitted)"
        return f"MinMaxScaler(n_features={self.n_features})"
