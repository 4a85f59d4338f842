"""
Tests for the per-step mean and percentile aggregator.
"""

import math

import numpy as np
import pandas as pd
import pytest
from derivrisk.statistics import StatsAggregator, StatsPoint, aggregate, percentile_index


class TestPercentileIndex:
    """Test suite for percentile_index."""

    @pytest.mark.parametrize(
        "fraction,count,expected",
        [
            (0.05, 20, 1),
            (0.95, 20, 19),
            (0.95, 19, 18),
            (0.05, 100, 5),
            (0.95, 100, 95),
            (0.05, 1, 0),
            (0.95, 1, 0),
        ],
    )
    def test_floor_index(self, fraction, count, expected):
        assert percentile_index(fraction, count) == expected

    def test_clamped_to_last_index(self):
        """An index landing on count is clamped to count - 1."""
        assert percentile_index(1.0, 20) == 19

    def test_empty_sample(self):
        with pytest.raises(ValueError, match="count must be positive"):
            percentile_index(0.5, 0)


class TestStatsAggregator:
    """Test suite for StatsAggregator."""

    @pytest.fixture
    def shuffled_ensemble(self):
        """20 paths x 3 steps; column j holds a shuffle of (1..20) * (j + 1)."""
        rng = np.random.default_rng(0)
        columns = [rng.permutation(np.arange(1, 21, dtype=float)) * (j + 1) for j in range(3)]
        return np.column_stack(columns)

    def test_known_values(self, shuffled_ensemble):
        """Mean and order statistics of a known column."""
        series = aggregate(shuffled_ensemble, np.array([0.0, 0.5, 1.0]))
        assert len(series) == 3
        first = series[0]
        assert first == StatsPoint(time=0.0, mean=10.5, p5=2.0, p95=20.0)
        assert series[2].mean == pytest.approx(31.5)
        assert series[2].p5 == 6.0
        assert series[2].p95 == 60.0

    def test_times_follow_grid(self, shuffled_ensemble):
        grid = np.array([0.0, 0.25, 0.5])
        series = aggregate(shuffled_ensemble, grid)
        np.testing.assert_array_equal(series.times, grid)

    def test_percentiles_drawn_from_values(self):
        """p5 <= p95 and both are actual values at that index."""
        rng = np.random.default_rng(9)
        ensemble = rng.normal(size=(37, 6))
        series = aggregate(ensemble, np.linspace(0.0, 1.0, 6))
        for t, point in enumerate(series):
            column = ensemble[:, t]
            assert point.p5 <= point.p95
            assert point.p5 in column
            assert point.p95 in column
            assert point.mean == pytest.approx(column.mean())

    @pytest.mark.parametrize("path_count", [1, 2, 19, 20, 21])
    def test_small_ensembles_do_not_fault(self, path_count):
        ensemble = np.arange(path_count * 5, dtype=float).reshape(path_count, 5)
        series = aggregate(ensemble, np.arange(5, dtype=float))
        assert len(series) == 5
        assert all(point.p5 <= point.p95 for point in series)

    def test_single_path(self):
        """With one path every statistic equals the path value."""
        series = aggregate(np.array([[3.0, 4.0]]), np.array([0.0, 1.0]))
        assert series[1] == StatsPoint(time=1.0, mean=4.0, p5=4.0, p95=4.0)

    def test_nan_and_inf_do_not_fault(self):
        """Degenerate values flow through as data."""
        ensemble = np.array([
            [1.0, np.nan, np.inf],
            [2.0, 1.0, -np.inf],
            [3.0, 2.0, 1.0],
        ])
        series = aggregate(ensemble, np.array([0.0, 0.5, 1.0]))
        assert series[0].mean == 2.0
        assert math.isnan(series[1].mean)
        assert math.isnan(series[2].mean)
        assert series[2].p5 == -np.inf

    def test_grid_length_mismatch(self):
        with pytest.raises(ValueError, match="Time grid has 2 points"):
            aggregate(np.zeros((3, 4)), np.zeros(2))

    def test_empty_ensemble(self):
        with pytest.raises(ValueError, match="non-empty"):
            aggregate(np.zeros((0, 4)), np.zeros(4))

    def test_custom_fractions(self):
        """Other order statistics can be requested."""
        ensemble = np.arange(10, dtype=float).reshape(10, 1)
        series = StatsAggregator(low=0.1, high=0.9).aggregate(ensemble, np.array([0.0]))
        assert series[0].p5 == 1.0
        assert series[0].p95 == 9.0

    def test_invalid_fractions(self):
        with pytest.raises(ValueError, match="Percentile fractions"):
            StatsAggregator(low=0.9, high=0.1)

    def test_deterministic(self, shuffled_ensemble):
        grid = np.array([0.0, 0.5, 1.0])
        assert aggregate(shuffled_ensemble, grid) == aggregate(shuffled_ensemble, grid)


class TestStatsSeries:
    """Test suite for StatsSeries views."""

    @pytest.fixture
    def series(self):
        ensemble = np.array([[1.0, 2.0, 3.0], [3.0, 4.0, 5.0]])
        return aggregate(ensemble, np.array([0.0, 0.5, 1.0]))

    def test_arrays(self, series):
        np.testing.assert_array_equal(series.means, [2.0, 3.0, 4.0])
        np.testing.assert_array_equal(series.p5s, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(series.p95s, [3.0, 4.0, 5.0])

    def test_to_list(self, series):
        assert series.to_list()[1] == {"time": 0.5, "mean": 3.0, "p5": 2.0, "p95": 4.0}

    def test_to_frame(self, series):
        frame = series.to_frame()
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ["mean", "p5", "p95"]
        assert frame.index.name == "time"
        assert frame.loc[1.0, "p95"] == 5.0
