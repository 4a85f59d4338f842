"""Simulation engine for sampling and stepping Monte Carlo paths."""

from derivrisk.simulation.sampler import GaussianSampler
from derivrisk.simulation.steppers import GbmStepper, OuStepper, build_stepper
from derivrisk.simulation.path_generator import PathSimulator, build_time_grid
from derivrisk.simulation.fx_forward import FxForwardEngine

__all__ = [
    "GaussianSampler",
    "GbmStepper",
    "OuStepper",
    "build_stepper",
    "PathSimulator",
    "build_time_grid",
    "FxForwardEngine",
]
