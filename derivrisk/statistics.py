"""Cross-path summary statistics for path ensembles."""

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np
import pandas as pd

P5_FRACTION = 0.05
P95_FRACTION = 0.95


@dataclass(frozen=True)
class StatsPoint:
    """Mean and percentile band of an ensemble at one grid point."""

    time: float
    mean: float
    p5: float
    p95: float

    def to_dict(self) -> Dict[str, float]:
        return {"time": self.time, "mean": self.mean, "p5": self.p5, "p95": self.p95}


class StatsSeries(tuple):
    """Ordered StatsPoints, one per time-grid index."""

    @property
    def times(self) -> np.ndarray:
        return np.array([point.time for point in self], dtype=float)

    @property
    def means(self) -> np.ndarray:
        return np.array([point.mean for point in self], dtype=float)

    @property
    def p5s(self) -> np.ndarray:
        return np.array([point.p5 for point in self], dtype=float)

    @property
    def p95s(self) -> np.ndarray:
        return np.array([point.p95 for point in self], dtype=float)

    def to_list(self) -> List[Dict[str, float]]:
        return [point.to_dict() for point in self]

    def to_frame(self) -> pd.DataFrame:
        """Return the series as a DataFrame indexed by time.

        Returns
        -------
        pd.DataFrame
            Columns 'mean', 'p5' and 'p95'
        """
        frame = pd.DataFrame(self.to_list(), columns=["time", "mean", "p5", "p95"])
        return frame.set_index("time")


def percentile_index(fraction: float, count: int) -> int:
    """Order-statistic index for a percentile, clamped to the sample.

    Parameters
    ----------
    fraction : float
        Percentile as a fraction (0.05 for the 5th percentile)
    count : int
        Number of values in the sample

    Returns
    -------
    int
        ``floor(fraction * count)`` clamped to ``[0, count - 1]``
    """
    if count <= 0:
        raise ValueError(f"count must be positive, got {count}")
    index = int(math.floor(fraction * count))
    return min(max(index, 0), count - 1)


class StatsAggregator:
    """Reduces an ensemble to per-step mean, 5th and 95th percentile.

    Percentiles are plain order statistics of the sorted values, not
    interpolated estimates. NaN values sort last and propagate into the
    mean without raising.
    """

    def __init__(self, low: float = P5_FRACTION, high: float = P95_FRACTION):
        if not 0.0 <= low <= high <= 1.0:
            raise ValueError(f"Percentile fractions must satisfy 0 <= low <= high <= 1, got {low}, {high}")
        self.low = low
        self.high = high

    def aggregate(self, ensemble: np.ndarray, time_grid: np.ndarray) -> StatsSeries:
        """Compute one StatsPoint per time index.

        Parameters
        ----------
        ensemble : np.ndarray
            Paths of shape (path_count, step_count + 1)
        time_grid : np.ndarray
            Grid with ``step_count + 1`` points

        Returns
        -------
        StatsSeries
        """
        ensemble = np.asarray(ensemble, dtype=float)
        if ensemble.ndim != 2 or ensemble.shape[0] == 0:
            raise ValueError("Ensemble must be a non-empty 2-D array of paths")
        if len(time_grid) != ensemble.shape[1]:
            raise ValueError(
                f"Time grid has {len(time_grid)} points but paths have {ensemble.shape[1]}"
            )

        path_count = ensemble.shape[0]
        low_idx = percentile_index(self.low, path_count)
        high_idx = percentile_index(self.high, path_count)

        with np.errstate(invalid="ignore", over="ignore"):
            means = ensemble.mean(axis=0)
            ordered = np.sort(ensemble, axis=0)

        return StatsSeries(
            StatsPoint(
                time=float(time_grid[t]),
                mean=float(means[t]),
                p5=float(ordered[low_idx, t]),
                p95=float(ordered[high_idx, t]),
            )
            for t in range(ensemble.shape[1])
        )


def aggregate(ensemble: np.ndarray, time_grid: np.ndarray) -> StatsSeries:
    """Reduce an ensemble with the default 5th/95th percentile aggregator."""
    return StatsAggregator().aggregate(ensemble, time_grid)
