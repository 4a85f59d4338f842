"""Immutable parameter records for path simulations."""

import math
import numbers
from dataclasses import dataclass
from typing import Union

import numpy as np


class InvalidParameterError(ValueError):
    """Raised when simulation parameters are rejected before a run starts."""


MODEL_GBM = "gbm"
MODEL_OU = "ou"


@dataclass(frozen=True)
class GbmParams:
    """Geometric Brownian motion parameters.

    Parameters
    ----------
    drift : float
        Annualized drift (mu)
    volatility : float
        Annualized volatility (sigma)
    """

    drift: float
    volatility: float

    @property
    def kind(self) -> str:
        return MODEL_GBM


@dataclass(frozen=True)
class OuParams:
    """Ornstein-Uhlenbeck parameters.

    Parameters
    ----------
    mean_reversion_speed : float
        Speed of mean reversion (kappa)
    long_term_mean : float
        Long-run level the process reverts to (theta)
    volatility : float
        Annualized volatility (sigma)
    """

    mean_reversion_speed: float
    long_term_mean: float
    volatility: float

    @property
    def kind(self) -> str:
        return MODEL_OU


ModelParams = Union[GbmParams, OuParams]


def _check_count(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class SimulationParameters:
    """Full description of one simulation run, randomness aside.

    Parameters
    ----------
    path_count : int
        Number of independent paths in the ensemble (>= 1)
    step_count : int
        Number of time steps per path (>= 1)
    initial_value : float
        Value every path starts from
    horizon : float
        Length of the simulated period in years (> 0)
    model : GbmParams or OuParams
        Process dynamics

    Raises
    ------
    InvalidParameterError
        If a count is not a positive integer or the horizon is not positive
    """

    path_count: int
    step_count: int
    initial_value: float
    horizon: float
    model: ModelParams

    def __post_init__(self) -> None:
        _check_count("path_count", self.path_count)
        _check_count("step_count", self.step_count)
        if not math.isfinite(self.horizon) or self.horizon <= 0:
            raise InvalidParameterError(
                f"horizon must be positive and finite, got {self.horizon}"
            )
        if not isinstance(self.model, (GbmParams, OuParams)):
            raise InvalidParameterError(
                f"Unsupported model parameters: {type(self.model).__name__}"
            )

    @property
    def dt(self) -> float:
        return self.horizon / self.step_count


@dataclass(frozen=True)
class FxSimulationParameters(SimulationParameters):
    """Parameters for an FX forward run.

    ``initial_value`` is the FX spot. With ``GbmParams`` the spot drifts at
    ``domestic_rate - foreign_rate`` and the ``drift`` field is ignored; with
    ``OuParams`` the spot follows its own mean reversion.
    """

    domestic_rate: float = 0.0
    foreign_rate: float = 0.0

    @property
    def spot(self) -> float:
        return self.initial_value

    @property
    def rate_differential(self) -> float:
        return self.domestic_rate - self.foreign_rate

    @property
    def forward_at_inception(self) -> float:
        with np.errstate(over="ignore"):
            return float(self.initial_value * np.exp(self.rate_differential * self.horizon))

    def spot_dynamics(self) -> ModelParams:
        """Model used to step the spot, with GBM drift set risk-neutral."""
        if isinstance(self.model, GbmParams):
            return GbmParams(drift=self.rate_differential, volatility=self.model.volatility)
        return self.model


def normalize_model(model: str) -> str:
    """Validate a model selector and return it lower-cased.

    Raises
    ------
    InvalidParameterError
        If the selector is neither "gbm" nor "ou"
    """
    key = str(model).strip().lower()
    if key not in (MODEL_GBM, MODEL_OU):
        raise InvalidParameterError(
            f"Unknown model '{model}'. Expected '{MODEL_GBM}' or '{MODEL_OU}'."
        )
    return key
