"""Shared fixtures and deterministic samplers for the test suite."""

import itertools

import pytest


class SequenceSampler:
    """Replays a fixed sequence of normal draws, cycling when exhausted."""

    def __init__(self, values):
        self.values = list(values)
        self._cycle = itertools.cycle(self.values)
        self.calls = 0

    def sample(self):
        self.calls += 1
        return next(self._cycle)


@pytest.fixture
def zero_sampler():
    return SequenceSampler([0.0])


@pytest.fixture
def shock_sampler():
    return SequenceSampler([0.5, -1.2, 2.0, 0.3, -0.7])


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep DERIVRISK_* variables from the host out of the tests."""
    for name in ("DERIVRISK_PATHS", "DERIVRISK_STEPS", "DERIVRISK_HORIZON",
                 "DERIVRISK_SEED", "DERIVRISK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
