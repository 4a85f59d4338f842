"""Single-step transition rules for the supported processes."""

import math

import numpy as np

from derivrisk.params import GbmParams, InvalidParameterError, ModelParams, OuParams


class GbmStepper:
    """Exact lognormal update for geometric Brownian motion.

    S(t+dt) = S(t) * exp((mu - 0.5*sigma^2)*dt + sigma*sqrt(dt)*Z)

    Parameters
    ----------
    params : GbmParams
        Drift and volatility
    dt : float
        Time increment in years
    """

    def __init__(self, params: GbmParams, dt: float):
        _check_dt(dt)
        self.params = params
        self.dt = dt
        self.drift_term = (params.drift - 0.5 * params.volatility ** 2) * dt
        self.diffusion_scale = params.volatility * math.sqrt(dt)

    def step(self, current: float, z: float) -> float:
        # np.exp overflows to inf instead of raising
        return float(current * np.exp(self.drift_term + self.diffusion_scale * z))


class OuStepper:
    """Euler-Maruyama update for the Ornstein-Uhlenbeck process.

    X(t+dt) = X(t) + kappa*(theta - X(t))*dt + sigma*sqrt(dt)*Z
    """

    def __init__(self, params: OuParams, dt: float):
        _check_dt(dt)
        self.params = params
        self.dt = dt
        self.reversion_scale = params.mean_reversion_speed * dt
        self.diffusion_scale = params.volatility * math.sqrt(dt)

    def step(self, current: float, z: float) -> float:
        theta = self.params.long_term_mean
        return current + self.reversion_scale * (theta - current) + self.diffusion_scale * z


def _check_dt(dt: float) -> None:
    if not math.isfinite(dt) or dt <= 0:
        raise InvalidParameterError(f"Time increment must be positive, got {dt}")


def build_stepper(model: ModelParams, dt: float):
    """Return the stepper matching the model parameter variant.

    Parameters
    ----------
    model : GbmParams or OuParams
        Process parameters
    dt : float
        Time increment in years

    Returns
    -------
    GbmStepper or OuStepper

    Raises
    ------
    TypeError
        If ``model`` is not a supported parameter variant
    InvalidParameterError
        If ``dt`` is not positive
    """
    if isinstance(model, GbmParams):
        return GbmStepper(model, dt)
    if isinstance(model, OuParams):
        return OuStepper(model, dt)
    raise TypeError(f"Unsupported model parameters: {type(model).__name__}")
