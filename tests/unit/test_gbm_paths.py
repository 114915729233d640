"""
Tests for GBM path generation.

Tests correctness of:
- Path shape, first point and timestamps
- Seeded reproducibility
- Draw order (one normal per emitted point)
- Input validation
"""

import numpy as np
import pytest

from market_simulator.config.settings import SETTINGS
from market_simulator.errors import InvalidInputError
from market_simulator.simulation.gbm import GBMParams, generate_path, generate_prices, make_rng


class TestGBMParams:
    """Tests for GBMParams dataclass."""

    def test_valid_params(self):
        """Valid parameters should work."""
        params = GBMParams(drift=0.05, volatility=0.20)
        assert params.drift == 0.05
        assert params.volatility == 0.20

    def test_log_drift(self):
        """[T1] Log drift = μ - σ²/2."""
        params = GBMParams(drift=0.05, volatility=0.20)
        assert params.log_drift == pytest.approx(0.05 - 0.5 * 0.20**2)

    def test_zero_volatility_allowed(self):
        """Volatility of zero is a valid deterministic model."""
        assert GBMParams(drift=0.05, volatility=0.0).volatility == 0.0

    def test_invalid_volatility(self):
        """Volatility must be non-negative."""
        with pytest.raises(InvalidInputError, match="volatility must be >= 0"):
            GBMParams(drift=0.05, volatility=-0.20)

    def test_nan_volatility(self):
        """NaN volatility is rejected."""
        with pytest.raises(InvalidInputError):
            GBMParams(drift=0.05, volatility=float("nan"))


class TestGeneratePath:
    """Tests for generate_path function."""

    @pytest.fixture
    def params(self):
        return GBMParams(drift=0.05, volatility=0.20)

    def test_path_length(self, params):
        """Output has exactly num_points points."""
        path = generate_path(params, 100.0, dt=1.0, num_points=253, seed=42)
        assert len(path) == 253
        assert path.timestamps.shape == (253,)

    def test_first_point_is_initial_value(self, params):
        """First price equals the initial value exactly."""
        path = generate_path(params, 123.45, dt=1.0, num_points=10, seed=1)
        assert path.prices[0] == 123.45

    def test_single_point(self, params):
        """One point is just the initial value at the epoch."""
        path = generate_path(params, 100.0, dt=1.0, num_points=1, seed=1)
        assert path.prices.tolist() == [100.0]
        assert path.timestamps[0] == np.datetime64(SETTINGS.simulation.epoch, "s")

    def test_positive_values(self):
        """GBM paths should always be positive."""
        params = GBMParams(drift=0.05, volatility=0.80)
        path = generate_path(params, 100.0, dt=1.0, num_points=1000, seed=42)
        assert np.all(path.prices > 0)

    def test_reproducibility(self, params):
        """Same seed gives bit-identical paths."""
        path1 = generate_path(params, 100.0, dt=0.5, num_points=50, seed=42)
        path2 = generate_path(params, 100.0, dt=0.5, num_points=50, seed=42)

        np.testing.assert_array_equal(path1.prices, path2.prices)
        np.testing.assert_array_equal(path1.timestamps, path2.timestamps)
        assert path1.equals(path2)

    def test_different_seeds_differ(self, params):
        """Different seeds give different paths."""
        path1 = generate_path(params, 100.0, dt=1.0, num_points=20, seed=1)
        path2 = generate_path(params, 100.0, dt=1.0, num_points=20, seed=2)
        assert not np.array_equal(path1.prices, path2.prices)

    def test_timestamps_daily_step(self, params):
        """Timestamps start at the epoch and advance by dt days."""
        path = generate_path(params, 100.0, dt=1.0, num_points=5, seed=42)

        assert path.iso_timestamps() == [
            "2024-01-01T00:00:00",
            "2024-01-02T00:00:00",
            "2024-01-03T00:00:00",
            "2024-01-04T00:00:00",
            "2024-01-05T00:00:00",
        ]

    def test_timestamps_fractional_step(self, params):
        """Fractional day steps advance by whole seconds."""
        path = generate_path(params, 100.0, dt=0.25, num_points=3, seed=42)
        assert path.step == np.timedelta64(6 * 3600, "s")
        assert np.all(np.diff(path.timestamps) == np.timedelta64(6 * 3600, "s"))

    def test_matches_explicit_recursion(self, params):
        """
        [T1] Each point applies one draw to the previous point.

        S(i+1) = S(i) * exp((μ - σ²/2)Δt + σ√Δt * Z_i), Δt = dt / 252
        """
        dt = 2.0
        n = 8
        path = generate_path(params, 100.0, dt=dt, num_points=n, seed=11)

        z = make_rng(11).standard_normal(n)
        dt_year = dt / 252
        expected = [100.0]
        for i in range(n - 1):
            step = params.log_drift * dt_year + params.volatility * np.sqrt(dt_year) * z[i]
            expected.append(expected[-1] * np.exp(step))

        np.testing.assert_allclose(path.prices, expected, rtol=1e-12)

    def test_prefix_stable_in_num_points(self, params):
        """A longer path starts with the shorter path (same draw order)."""
        short = generate_path(params, 100.0, dt=1.0, num_points=10, seed=5)
        long = generate_path(params, 100.0, dt=1.0, num_points=20, seed=5)
        np.testing.assert_allclose(long.prices[:10], short.prices, rtol=1e-12)

    def test_zero_volatility_is_deterministic(self):
        """σ = 0 gives S0 * exp(μ t) regardless of seed."""
        params = GBMParams(drift=0.10, volatility=0.0)
        path = generate_path(params, 100.0, dt=1.0, num_points=253, seed=None)

        t_years = np.arange(253) / 252
        np.testing.assert_allclose(path.prices, 100.0 * np.exp(0.10 * t_years), rtol=1e-12)

    def test_unseeded_runs(self, params):
        """Unseeded paths still have the right shape."""
        path = generate_path(params, 100.0, dt=1.0, num_points=5)
        assert len(path) == 5
        assert path.prices[0] == 100.0


class TestGeneratePrices:
    """Prices without timestamps."""

    @pytest.fixture
    def params(self):
        return GBMParams(drift=0.05, volatility=0.20)

    def test_matches_generate_path(self, params):
        """Same seed gives the same prices as the timestamped path."""
        prices = generate_prices(params, 100.0, dt=1.0, num_points=30, seed=8)
        path = generate_path(params, 100.0, dt=1.0, num_points=30, seed=8)
        np.testing.assert_array_equal(prices, path.prices)

    def test_sub_second_step_allowed(self, params):
        """Steps below timestamp resolution are fine when no timestamps are built."""
        prices = generate_prices(params, 100.0, dt=1e-9, num_points=5, seed=1)
        assert prices.shape == (5,)
        assert np.all(np.isfinite(prices))

    def test_overflow_rejected(self):
        """A path that leaves float64 range raises instead of returning inf."""
        params = GBMParams(drift=800.0, volatility=0.2)
        with pytest.raises(InvalidInputError, match="overflows float64"):
            generate_prices(params, 100.0, dt=25.2, num_points=11, seed=1)

    def test_overflow_rejected_for_timestamped_path(self):
        params = GBMParams(drift=800.0, volatility=0.2)
        with pytest.raises(InvalidInputError, match="overflows float64"):
            generate_path(params, 100.0, dt=25.2, num_points=11, seed=1)

    def test_validation(self, params):
        with pytest.raises(InvalidInputError, match="dt must be > 0"):
            generate_prices(params, 100.0, dt=0.0, num_points=5)


class TestGeneratePathValidation:
    """Invalid inputs raise before any draws."""

    @pytest.fixture
    def params(self):
        return GBMParams(drift=0.05, volatility=0.20)

    @pytest.mark.parametrize("initial_value", [0.0, -1.0, float("nan")])
    def test_invalid_initial_value(self, params, initial_value):
        with pytest.raises(InvalidInputError, match="initial_value must be > 0"):
            generate_path(params, initial_value, dt=1.0, num_points=5)

    @pytest.mark.parametrize("dt", [0.0, -1.0])
    def test_invalid_dt(self, params, dt):
        with pytest.raises(InvalidInputError, match="dt must be > 0"):
            generate_path(params, 100.0, dt=dt, num_points=5)

    def test_dt_below_one_second(self, params):
        with pytest.raises(InvalidInputError, match="one second"):
            generate_path(params, 100.0, dt=1e-9, num_points=5)

    @pytest.mark.parametrize("num_points", [0, -3])
    def test_invalid_num_points(self, params, num_points):
        with pytest.raises(InvalidInputError, match="num_points must be > 0"):
            generate_path(params, 100.0, dt=1.0, num_points=num_points)

    def test_negative_seed(self, params):
        with pytest.raises(InvalidInputError, match="seed must be >= 0"):
            generate_path(params, 100.0, dt=1.0, num_points=5, seed=-1)

    def test_invalid_input_is_value_error(self, params):
        """InvalidInputError is catchable as ValueError."""
        with pytest.raises(ValueError):
            generate_path(params, -1.0, dt=1.0, num_points=5)
