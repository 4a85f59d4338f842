"""Stochastic path simulator for derivatives risk analysis.

Simulates geometric Brownian motion, Ornstein-Uhlenbeck and FX forward
paths and reduces the ensembles to per-step mean and percentile bands.
"""

from derivrisk.params import (
    FxSimulationParameters,
    GbmParams,
    InvalidParameterError,
    OuParams,
    SimulationParameters,
)
from derivrisk.results import FxForwardResult, SimulationResult
from derivrisk.simulation import FxForwardEngine, GaussianSampler, PathSimulator
from derivrisk.statistics import StatsAggregator, StatsPoint, StatsSeries
from derivrisk.service import simulate_fx_forward, simulate_gbm, simulate_ou

__version__ = "1.0.0"
__all__ = [
    "FxSimulationParameters",
    "GbmParams",
    "InvalidParameterError",
    "OuParams",
    "SimulationParameters",
    "FxForwardResult",
    "SimulationResult",
    "FxForwardEngine",
    "GaussianSampler",
    "PathSimulator",
    "StatsAggregator",
    "StatsPoint",
    "StatsSeries",
    "simulate_fx_forward",
    "simulate_gbm",
    "simulate_ou",
]
