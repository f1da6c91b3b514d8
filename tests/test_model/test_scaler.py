"""
Tests for MinMaxScaler.
"""
import pytest
import numpy as np

from predictor.model.scaler import MinMaxScaler
from predictor.shared.errors import DimensionMismatchError


@pytest.fixture
def matrix():
    rng = np.random.RandomState(7)
    return (rng.rand(12, 4) * [10, 100, 1000, 1]).tolist()


class TestScale:
    """Forward scaling."""

    def test_fitted_rows_in_unit_range(self, matrix):
        scaled = np.asarray(MinMaxScaler().fit(matrix).scale_all(matrix))
        assert scaled.min() == pytest.approx(0.0)
        assert scaled.max() == pytest.approx(1.0)
        assert np.allclose(scaled.min(axis=0), 0.0)
        assert np.allclose(scaled.max(axis=0), 1.0)

    def test_formula(self):
        scaler = MinMaxScaler().fit([[0, 10], [4, 30]])
        assert scaler.scale([1, 20]) == pytest.approx([0.25, 0.5])

    def test_out_of_range_values_extrapolate(self):
        """Rows not seen at fit time are not clipped."""
        scaler = MinMaxScaler().fit([[0], [10]])
        assert scaler.scale([15]) == pytest.approx([1.5])
        assert scaler.scale([-5]) == pytest.approx([-0.5])

    def test_scale_all_preserves_order(self, matrix):
        scaler = MinMaxScaler().fit(matrix)
        assert scaler.scale_all(matrix) == [scaler.scale(row) for row in matrix]


class TestRoundTrip:
    """inverse_scale(scale(row)) == row except at zero-range columns."""

    def test_round_trip(self, matrix):
        scaler = MinMaxScaler().fit(matrix)
        for row in matrix:
            assert scaler.inverse_scale(scaler.scale(row)) == pytest.approx(row)

    def test_zero_range_column_scales_to_midpoint(self):
        scaler = MinMaxScaler().fit([[1.0, 5.0], [2.0, 5.0], [3.0, 5.0]])
        assert scaler.scale([2.0, 5.0]) == pytest.approx([0.5, 0.5])
        # Any value in a zero-range column maps to the midpoint
        assert scaler.scale([2.0, 9.0])[1] == 0.5

    def test_zero_range_column_inverts_to_min(self):
        scaler = MinMaxScaler().fit([[1.0, 5.0], [3.0, 5.0]])
        restored = scaler.inverse_scale(scaler.scale([2.0, 9.0]))
        assert restored == pytest.approx([2.0, 5.0])

    def test_single_label_column(self):
        labels = [[100.0], [110.0], [105.0]]
        scaler = MinMaxScaler().fit(labels)
        assert scaler.inverse_scale([0.5]) == pytest.approx([105.0])


class TestContract:
    """Width checks and edge cases."""

    def test_width_mismatch_raises(self):
        """A 9-wide row on a 10-column scaler is rejected, not truncated."""
        scaler = MinMaxScaler().fit(np.random.RandomState(0).rand(5, 10).tolist())
        with pytest.raises(DimensionMismatchError, match="9 values.*10 columns"):
            scaler.scale([0.0] * 9)
        with pytest.raises(DimensionMismatchError):
            scaler.inverse_scale([0.0] * 11)

    def test_mismatch_is_value_error(self):
        scaler = MinMaxScaler().fit([[1, 2]])
        with pytest.raises(ValueError):
            scaler.scale([1])

    def test_ragged_matrix_raises(self):
        with pytest.raises(DimensionMismatchError, match="differing widths"):
            MinMaxScaler().fit([[1, 2], [3]])

    def test_empty_fit_is_noop(self):
        scaler = MinMaxScaler().fit([])
        assert scaler.is_fitted
        assert scaler.n_features == 0
        assert scaler.scale([3.0, 4.0]) == [3.0, 4.0]
        assert scaler.inverse_scale([0.5]) == [0.5]

    def test_unfitted_raises(self):
        with pytest.raises(RuntimeError, match="must be fitted"):
            MinMaxScaler().scale([1.0])
