"""Flat entry points for the three simulation operations.

These are the functions a request layer calls with already-parsed query
parameters. Each call creates its own sampler, so runs never share random
state.
"""

import logging
from typing import Optional

from derivrisk import config
from derivrisk.params import (
    MODEL_OU,
    FxSimulationParameters,
    GbmParams,
    OuParams,
    SimulationParameters,
    normalize_model,
)
from derivrisk.results import FxForwardResult, SimulationResult
from derivrisk.simulation.fx_forward import FxForwardEngine
from derivrisk.simulation.path_generator import PathSimulator
from derivrisk.simulation.sampler import GaussianSampler

logger = logging.getLogger(__name__)


def simulate_gbm(
    paths: int = config.DEFAULT_PATHS,
    steps: int = config.DEFAULT_STEPS,
    s0: float = config.DEFAULT_S0,
    mu: float = config.DEFAULT_MU,
    sigma: float = config.DEFAULT_SIGMA,
    t: float = config.DEFAULT_HORIZON,
    seed: Optional[int] = None,
) -> SimulationResult:
    """Simulate geometric Brownian motion paths.

    Parameters
    ----------
    paths : int, default=100
        Number of paths
    steps : int, default=200
        Number of time steps
    s0 : float, default=100.0
        Initial value
    mu : float, default=0.08
        Annualized drift
    sigma : float, default=0.20
        Annualized volatility
    t : float, default=1.0
        Horizon in years
    seed : int, optional
        Seed for a reproducible run

    Returns
    -------
    SimulationResult

    Raises
    ------
    InvalidParameterError
        If counts or horizon are not positive
    """
    params = SimulationParameters(
        path_count=paths,
        step_count=steps,
        initial_value=s0,
        horizon=t,
        model=GbmParams(drift=mu, volatility=sigma),
    )
    ensemble, time_grid = PathSimulator(GaussianSampler(seed)).simulate(params)
    return SimulationResult(paths=ensemble, time_grid=time_grid, parameters=params)


def simulate_ou(
    paths: int = config.DEFAULT_PATHS,
    steps: int = config.DEFAULT_STEPS,
    x0: float = config.DEFAULT_X0,
    kappa: float = config.DEFAULT_KAPPA,
    theta: float = config.DEFAULT_THETA,
    sigma: float = config.DEFAULT_OU_SIGMA,
    t: float = config.DEFAULT_HORIZON,
    seed: Optional[int] = None,
) -> SimulationResult:
    """Simulate Ornstein-Uhlenbeck paths.

    ``kappa`` is the mean reversion speed and ``theta`` the long-term mean.
    Other parameters are as in :func:`simulate_gbm`.
    """
    params = SimulationParameters(
        path_count=paths,
        step_count=steps,
        initial_value=x0,
        horizon=t,
        model=OuParams(mean_reversion_speed=kappa, long_term_mean=theta, volatility=sigma),
    )
    ensemble, time_grid = PathSimulator(GaussianSampler(seed)).simulate(params)
    return SimulationResult(paths=ensemble, time_grid=time_grid, parameters=params)


def simulate_fx_forward(
    model: str = config.DEFAULT_FX_MODEL,
    paths: int = config.DEFAULT_PATHS,
    steps: int = config.DEFAULT_STEPS,
    spot: float = config.DEFAULT_SPOT,
    maturity: float = config.DEFAULT_HORIZON,
    r_dom: float = config.DEFAULT_R_DOM,
    r_for: float = config.DEFAULT_R_FOR,
    kappa: float = config.DEFAULT_FX_KAPPA,
    theta: float = config.DEFAULT_FX_THETA,
    sigma_ou: float = config.DEFAULT_FX_SIGMA_OU,
    sigma_gbm: float = config.DEFAULT_FX_SIGMA_GBM,
    seed: Optional[int] = None,
) -> FxForwardResult:
    """Simulate FX spot paths and the PV of the inception forward.

    Parameters
    ----------
    model : str, default='gbm'
        Spot dynamics, 'gbm' (risk-neutral drift) or 'ou'
    paths, steps : int
        Ensemble size and number of steps
    spot : float, default=1.10
        FX spot at inception
    maturity : float, default=1.0
        Forward maturity in years
    r_dom, r_for : float
        Domestic and foreign continuously compounded rates
    kappa, theta, sigma_ou : float
        OU parameters, used when ``model='ou'``
    sigma_gbm : float
        GBM volatility, used when ``model='gbm'``
    seed : int, optional
        Seed for a reproducible run

    Returns
    -------
    FxForwardResult

    Raises
    ------
    InvalidParameterError
        If the model selector is unknown or counts/maturity are not positive
    """
    model_key = normalize_model(model)
    if model_key == MODEL_OU:
        dynamics = OuParams(mean_reversion_speed=kappa, long_term_mean=theta, volatility=sigma_ou)
    else:
        dynamics = GbmParams(drift=r_dom - r_for, volatility=sigma_gbm)

    params = FxSimulationParameters(
        path_count=paths,
        step_count=steps,
        initial_value=spot,
        horizon=maturity,
        model=dynamics,
        domestic_rate=r_dom,
        foreign_rate=r_for,
    )
    logger.debug("FX forward run with %s spot dynamics", model_key)
    return FxForwardEngine(GaussianSampler(seed)).simulate_forward(params)
