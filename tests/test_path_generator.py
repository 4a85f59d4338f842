"""
Tests for the Monte Carlo path simulator.
"""

import math

import numpy as np
import pytest
from derivrisk.params import GbmParams, InvalidParameterError, OuParams, SimulationParameters
from derivrisk.simulation.path_generator import PathSimulator, build_time_grid
from derivrisk.simulation.sampler import GaussianSampler
from tests.conftest import SequenceSampler


def gbm_params(paths=20, steps=50, s0=100.0, mu=0.08, sigma=0.2, horizon=1.0):
    return SimulationParameters(
        path_count=paths,
        step_count=steps,
        initial_value=s0,
        horizon=horizon,
        model=GbmParams(drift=mu, volatility=sigma),
    )


def ou_params(paths=20, steps=50, x0=1.0, kappa=3.0, theta=1.0, sigma=0.15, horizon=1.0):
    return SimulationParameters(
        path_count=paths,
        step_count=steps,
        initial_value=x0,
        horizon=horizon,
        model=OuParams(mean_reversion_speed=kappa, long_term_mean=theta, volatility=sigma),
    )


class TestTimeGrid:
    """Test suite for build_time_grid."""

    def test_grid_properties(self):
        """Grid starts at 0, ends at horizon, and is strictly increasing."""
        grid = build_time_grid(1.0, 200)
        assert len(grid) == 201
        assert grid[0] == 0.0
        assert grid[-1] == pytest.approx(1.0)
        assert np.all(np.diff(grid) > 0)

    def test_grid_points(self):
        """grid[i] = i * horizon / steps."""
        np.testing.assert_allclose(build_time_grid(2.0, 4), [0.0, 0.5, 1.0, 1.5, 2.0])

    @pytest.mark.parametrize("horizon,steps", [(1.0, 0), (0.0, 10), (-1.0, 10)])
    def test_invalid_grid(self, horizon, steps):
        with pytest.raises(InvalidParameterError):
            build_time_grid(horizon, steps)


class TestPathSimulator:
    """Test suite for PathSimulator."""

    def test_simulate_shape(self):
        """Ensemble has one row per path and steps + 1 columns."""
        paths, grid = PathSimulator(GaussianSampler(seed=42)).simulate(gbm_params(paths=30, steps=12))
        assert paths.shape == (30, 13)
        assert grid.shape == (13,)

    @pytest.mark.parametrize("params", [gbm_params(s0=97.3), ou_params(x0=1.37)])
    def test_starts_at_initial_value(self, params):
        """Every path starts exactly at the initial value."""
        paths, _ = PathSimulator(GaussianSampler(seed=0)).simulate(params)
        assert np.all(paths[:, 0] == params.initial_value)

    def test_single_step_scenario(self):
        """One path, one step, no drift or volatility."""
        params = gbm_params(paths=1, steps=1, s0=100.0, mu=0.0, sigma=0.0, horizon=1.0)
        paths, grid = PathSimulator(GaussianSampler(seed=5)).simulate(params)
        assert paths.tolist() == [[100.0, 100.0]]
        assert grid.tolist() == [0.0, 1.0]

    def test_gbm_zero_volatility_is_deterministic(self, shock_sampler):
        """With sigma = 0 every path equals s0 * exp(mu * t)."""
        params = gbm_params(paths=5, steps=40, s0=50.0, mu=0.07, sigma=0.0, horizon=2.0)
        paths, grid = PathSimulator(shock_sampler).simulate(params)
        expected = 50.0 * np.exp(0.07 * grid)
        for path in paths:
            np.testing.assert_allclose(path, expected, rtol=1e-12)

    def test_gbm_positive(self):
        """GBM paths stay strictly positive."""
        paths, _ = PathSimulator(GaussianSampler(seed=11)).simulate(gbm_params(mu=-0.5, sigma=1.0, steps=100))
        assert np.all(paths > 0)

    def test_ou_zero_speed_is_random_walk(self):
        """With kappa = 0 the OU path is x0 plus scaled cumulative draws."""
        draws = [0.5, -1.2, 2.0, 0.3]
        params = ou_params(paths=1, steps=4, x0=1.0, kappa=0.0, theta=10.0, sigma=0.2, horizon=1.0)
        paths, _ = PathSimulator(SequenceSampler(draws)).simulate(params)
        expected = 1.0 + 0.2 * math.sqrt(0.25) * np.concatenate([[0.0], np.cumsum(draws)])
        np.testing.assert_allclose(paths[0], expected)

    def test_ou_without_noise_reverts(self, zero_sampler):
        """Without noise OU paths move monotonically toward theta."""
        params = ou_params(paths=2, steps=100, x0=2.0, kappa=3.0, theta=1.0, sigma=0.15)
        paths, _ = PathSimulator(zero_sampler).simulate(params)
        assert np.all(np.diff(paths[0]) < 0)
        assert paths[0, -1] > 1.0
        assert abs(paths[0, -1] - 1.0) < 0.1

    def test_one_draw_per_step(self, shock_sampler):
        """The sampler is called exactly paths * steps times."""
        PathSimulator(shock_sampler).simulate(gbm_params(paths=7, steps=9))
        assert shock_sampler.calls == 63

    def test_paths_are_independent(self):
        """Distinct paths receive distinct draws."""
        paths, _ = PathSimulator(GaussianSampler(seed=3)).simulate(gbm_params(paths=10, steps=20))
        assert len({tuple(row) for row in paths}) == 10

    def test_seed_reproducibility(self):
        """Same seed gives identical ensembles."""
        p1, _ = PathSimulator(GaussianSampler(seed=123)).simulate(ou_params())
        p2, _ = PathSimulator(GaussianSampler(seed=123)).simulate(ou_params())
        np.testing.assert_array_equal(p1, p2)

    def test_fresh_sampler_per_call(self):
        """Without an explicit sampler each call uses new randomness."""
        simulator = PathSimulator()
        p1, _ = simulator.simulate(gbm_params())
        p2, _ = simulator.simulate(gbm_params())
        assert not np.allclose(p1, p2)

    def test_degenerate_values_propagate(self):
        """Overflowing GBM paths produce inf instead of raising."""
        params = gbm_params(paths=3, steps=2, s0=1.0, mu=800.0, sigma=0.0, horizon=2.0)
        paths, _ = PathSimulator(GaussianSampler(seed=1)).simulate(params)
        assert np.all(np.isinf(paths[:, -1]))
