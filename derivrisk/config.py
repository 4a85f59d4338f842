"""Runtime defaults and logging setup.

Defaults can be overridden through ``DERIVRISK_*`` environment variables or
a ``.env`` file in the project root or the current directory.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_PATHS = 100
DEFAULT_STEPS = 200
DEFAULT_HORIZON = 1.0  # years

# GBM
DEFAULT_S0 = 100.0
DEFAULT_MU = 0.08  # 8% drift
DEFAULT_SIGMA = 0.20  # 20% vol

# Ornstein-Uhlenbeck
DEFAULT_X0 = 1.0
DEFAULT_KAPPA = 3.0
DEFAULT_THETA = 1.0
DEFAULT_OU_SIGMA = 0.15

# FX forward
DEFAULT_FX_MODEL = "gbm"
DEFAULT_SPOT = 1.10
DEFAULT_R_DOM = 0.03
DEFAULT_R_FOR = 0.01
DEFAULT_FX_KAPPA = 3.0
DEFAULT_FX_THETA = 1.10
DEFAULT_FX_SIGMA_OU = 0.12
DEFAULT_FX_SIGMA_GBM = 0.15

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class SimulationDefaults:
    """Ensemble size, horizon and seed used when the caller omits them."""

    paths: int = DEFAULT_PATHS
    steps: int = DEFAULT_STEPS
    horizon: float = DEFAULT_HORIZON
    seed: Optional[int] = None
    log_level: str = "WARNING"


def _read(env: Mapping[str, str], name: str, cast, default):
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from e


def load_env_file() -> None:
    """Load a .env file from the project root, else from the current directory."""
    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()


def load_defaults(env: Optional[Mapping[str, str]] = None) -> SimulationDefaults:
    """Build simulation defaults from environment variables.

    Parameters
    ----------
    env : mapping, optional
        Variables to read. If None, a .env file is loaded and ``os.environ``
        is used.

    Returns
    -------
    SimulationDefaults

    Raises
    ------
    ValueError
        If a variable is set but cannot be parsed
    """
    if env is None:
        load_env_file()
        env = os.environ

    log_level = _read(env, "DERIVRISK_LOG_LEVEL", str, "WARNING").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Invalid value for DERIVRISK_LOG_LEVEL: {log_level!r}")

    return SimulationDefaults(
        paths=_read(env, "DERIVRISK_PATHS", int, DEFAULT_PATHS),
        steps=_read(env, "DERIVRISK_STEPS", int, DEFAULT_STEPS),
        horizon=_read(env, "DERIVRISK_HORIZON", float, DEFAULT_HORIZON),
        seed=_read(env, "DERIVRISK_SEED", int, None),
        log_level=log_level,
    )


def configure_logging(level: str = "WARNING") -> None:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("derivrisk")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
