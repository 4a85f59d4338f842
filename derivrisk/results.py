"""Result records returned by the simulation operations."""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np

from derivrisk.params import FxSimulationParameters, SimulationParameters
from derivrisk.statistics import StatsSeries


def _finite_or_none(value: float) -> Optional[float]:
    value = float(value)
    return value if math.isfinite(value) else None


def _array_to_list(values: np.ndarray) -> list:
    """Convert an array to nested lists, mapping NaN/inf to None."""
    array = np.asarray(values, dtype=float)
    if array.ndim == 1:
        return [_finite_or_none(v) for v in array]
    return [_array_to_list(row) for row in array]


def _stats_to_list(stats: StatsSeries) -> List[Dict[str, Optional[float]]]:
    return [
        {key: _finite_or_none(value) for key, value in point.items()}
        for point in stats.to_list()
    ]


@dataclass
class SimulationResult:
    """Paths and time grid of a GBM or OU run.

    Attributes
    ----------
    paths : np.ndarray
        Shape (path_count, step_count + 1); row i is path i
    time_grid : np.ndarray
        Shape (step_count + 1,)
    parameters : SimulationParameters
        Parameters the run was produced from
    """

    paths: np.ndarray
    time_grid: np.ndarray
    parameters: SimulationParameters

    def to_dict(self) -> Dict[str, Any]:
        return {
            "paths": _array_to_list(self.paths),
            "timePoints": _array_to_list(self.time_grid),
        }


@dataclass
class FxForwardResult:
    """Spot and present-value ensembles of an FX forward run."""

    underlying_paths: np.ndarray
    pv_paths: np.ndarray
    time_grid: np.ndarray
    forward_at_inception: float
    underlying_stats: StatsSeries
    pv_stats: StatsSeries
    parameters: FxSimulationParameters
    initial_present_value: float = 0.0

    def to_dict(self, include_paths: bool = False) -> Dict[str, Any]:
        """Serialize into plain Python types.

        Parameters
        ----------
        include_paths : bool, default=False
            Also include the raw spot and PV ensembles

        Returns
        -------
        dict
            JSON-ready payload; non-finite floats become None
        """
        payload = {
            "underlyingStats": _stats_to_list(self.underlying_stats),
            "pvStats": _stats_to_list(self.pv_stats),
            "timePoints": _array_to_list(self.time_grid),
            "forwardPriceAtT0": _finite_or_none(self.forward_at_inception),
            "initialPV": self.initial_present_value,
        }
        if include_paths:
            payload["underlyingPaths"] = _array_to_list(self.underlying_paths)
            payload["pvPaths"] = _array_to_list(self.pv_paths)
        return payload
