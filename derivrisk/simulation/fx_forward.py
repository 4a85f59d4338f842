"""FX forward valuation along simulated spot paths."""

import logging
from dataclasses import replace
from typing import Optional

import numpy as np

from derivrisk.params import FxSimulationParameters
from derivrisk.results import FxForwardResult
from derivrisk.simulation.path_generator import PathSimulator
from derivrisk.simulation.sampler import GaussianSampler
from derivrisk.statistics import StatsAggregator

logger = logging.getLogger(__name__)


class FxForwardEngine:
    """Simulates FX spot paths and the PV of a forward struck at inception.

    At step k the remaining maturity is ``T - k*dt`` and

        F_k  = S_k * exp((r_dom - r_for) * (T - k*dt))
        PV_k = exp(-r_dom * (T - k*dt)) * (F_k - F_0)

    with ``F_0 = S_0 * exp((r_dom - r_for) * T)``. PV is exactly zero at
    inception on every path.

    Parameters
    ----------
    sampler : GaussianSampler, optional
        Source of normal draws; a fresh one is created per run if None
    aggregator : StatsAggregator, optional
        Reducer for the spot and PV ensembles
    """

    def __init__(
        self,
        sampler: Optional[GaussianSampler] = None,
        aggregator: Optional[StatsAggregator] = None,
    ):
        self.sampler = sampler
        self.aggregator = aggregator or StatsAggregator()

    def simulate_forward(self, params: FxSimulationParameters) -> FxForwardResult:
        """Run the FX forward simulation.

        Parameters
        ----------
        params : FxSimulationParameters
            Validated run parameters

        Returns
        -------
        FxForwardResult
            Spot and PV ensembles, their stats, the grid and F_0
        """
        spot_params = replace(params, model=params.spot_dynamics())
        underlying_paths, time_grid = PathSimulator(self.sampler).simulate(spot_params)

        forward_at_inception = params.forward_at_inception
        logger.debug(
            "FX forward: spot=%.6f F0=%.6f r_dom=%.4f r_for=%.4f",
            params.spot,
            forward_at_inception,
            params.domestic_rate,
            params.foreign_rate,
        )

        pv_paths = self.present_values(underlying_paths, params)

        return FxForwardResult(
            underlying_paths=underlying_paths,
            pv_paths=pv_paths,
            time_grid=time_grid,
            forward_at_inception=forward_at_inception,
            underlying_stats=self.aggregator.aggregate(underlying_paths, time_grid),
            pv_stats=self.aggregator.aggregate(pv_paths, time_grid),
            parameters=params,
        )

    @staticmethod
    def present_values(spot_paths: np.ndarray, params: FxSimulationParameters) -> np.ndarray:
        """PV of the inception forward along each spot path.

        Parameters
        ----------
        spot_paths : np.ndarray
            Spot ensemble of shape (path_count, step_count + 1)
        params : FxSimulationParameters
            Rates, horizon and spot used for the run

        Returns
        -------
        np.ndarray
            PV ensemble of the same shape; column 0 is all zeros
        """
        steps = np.arange(1, params.step_count + 1, dtype=float)
        time_left = params.horizon - steps * params.dt

        with np.errstate(over="ignore", invalid="ignore"):
            carry = np.exp(params.rate_differential * time_left)
            discount = np.exp(-params.domestic_rate * time_left)
            forward_now = spot_paths[:, 1:] * carry
            pv = discount * (forward_now - params.forward_at_inception)

        pv_paths = np.empty_like(spot_paths, dtype=float)
        pv_paths[:, 0] = 0.0
        pv_paths[:, 1:] = pv
        return pv_paths
