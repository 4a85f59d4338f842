"""Monte Carlo path generator for GBM and Ornstein-Uhlenbeck processes."""

import logging
from typing import Optional, Tuple

import numpy as np

from derivrisk.params import InvalidParameterError, SimulationParameters
from derivrisk.simulation.sampler import GaussianSampler
from derivrisk.simulation.steppers import build_stepper

logger = logging.getLogger(__name__)


def build_time_grid(horizon: float, step_count: int) -> np.ndarray:
    """Build the time grid shared by every path of a run.

    Parameters
    ----------
    horizon : float
        Simulated period in years
    step_count : int
        Number of steps

    Returns
    -------
    np.ndarray
        ``step_count + 1`` points, ``grid[i] = i * horizon / step_count``
    """
    if step_count <= 0:
        raise InvalidParameterError(f"step_count must be positive, got {step_count}")
    if horizon <= 0:
        raise InvalidParameterError(f"horizon must be positive, got {horizon}")
    dt = horizon / step_count
    return np.arange(step_count + 1, dtype=float) * dt


class PathSimulator:
    """Generates an ensemble of independent paths.

    Every path starts from ``initial_value`` and advances one step per grid
    interval, consuming exactly one normal draw per step.

    Parameters
    ----------
    sampler : GaussianSampler, optional
        Source of normal draws. Owned by this simulator; do not share it
        between threads. If None, a fresh sampler is created for every
        call to :meth:`simulate`.
    """

    def __init__(self, sampler: Optional[GaussianSampler] = None):
        self.sampler = sampler

    def simulate(self, params: SimulationParameters) -> Tuple[np.ndarray, np.ndarray]:
        """Simulate all paths for one run.

        Parameters
        ----------
        params : SimulationParameters
            Validated run parameters

        Returns
        -------
        tuple
            (paths of shape (path_count, step_count + 1), time grid)
        """
        sampler = self.sampler if self.sampler is not None else GaussianSampler()
        time_grid = build_time_grid(params.horizon, params.step_count)
        stepper = build_stepper(params.model, params.dt)

        logger.debug(
            "Simulating %d %s paths x %d steps (dt=%.6f)",
            params.path_count,
            params.model.kind,
            params.step_count,
            params.dt,
        )

        paths = np.empty((params.path_count, params.step_count + 1))
        with np.errstate(over="ignore", invalid="ignore"):
            for i in range(params.path_count):
                paths[i] = self._generate_single_path(params, stepper, sampler)

        if not np.all(np.isfinite(paths)):
            logger.warning("Ensemble contains non-finite values; check volatility and step size")

        return paths, time_grid

    @staticmethod
    def _generate_single_path(params, stepper, sampler) -> np.ndarray:
        path = np.empty(params.step_count + 1)
        path[0] = params.initial_value

        current = params.initial_value
        for k in range(1, params.step_count + 1):
            current = stepper.step(current, sampler.sample())
            path[k] = current

        return path
