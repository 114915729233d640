"""
Centralized pytest fixtures for the market-simulator test suite.

Fixture Categories:
1. Market Parameters - Standard market conditions for option pricing
2. Hull Examples - Textbook examples for validation
3. Instrument Fixtures - Sample futures and ETF definitions
4. Random Seeds - Reproducible simulation seeds
"""

from dataclasses import dataclass

import numpy as np
import pytest

from market_simulator.pricing.black_scholes import EuropeanOptionSpec, OptionType
from market_simulator.pricing.monte_carlo import MonteCarloSpec
from market_simulator.simulation.etf import Constituent, EtfSpec
from market_simulator.simulation.futures import FuturesSpec

# =============================================================================
# TOLERANCE TIERS
# =============================================================================

@dataclass(frozen=True)
class ToleranceTiers:
    """
    Tiered tolerance framework for different test types.

    Derived from precision requirements, not ad hoc.
    """

    # Anti-pattern tests: Very tight (fundamental violations)
    anti_pattern: float = 1e-10

    # Known analytical answers quoted to 4 decimals
    analytic_reference: float = 0.01

    # Monte Carlo vs analytical: 20k paths
    mc_20k_paths: float = 0.5


TOLERANCES = ToleranceTiers()


@pytest.fixture(scope="session")
def tolerances() -> ToleranceTiers:
    """Provide tiered tolerance settings for all tests."""
    return TOLERANCES


# =============================================================================
# MARKET PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class MarketParams:
    """Standard market parameters for option pricing tests."""

    spot: float = 100.0
    strike: float = 100.0
    rate: float = 0.05
    volatility: float = 0.20
    time_to_expiry: float = 1.0


@pytest.fixture
def market_params() -> MarketParams:
    """Standard ATM market parameters."""
    return MarketParams()


@pytest.fixture
def atm_call(market_params: MarketParams) -> EuropeanOptionSpec:
    """ATM one-year call (S=K=100, r=5%, σ=20%)."""
    return EuropeanOptionSpec(
        underlying_price=market_params.spot,
        strike_price=market_params.strike,
        time_to_maturity_years=market_params.time_to_expiry,
        risk_free_rate=market_params.rate,
        volatility=market_params.volatility,
        option_type=OptionType.CALL,
    )


@pytest.fixture
def atm_put(market_params: MarketParams) -> EuropeanOptionSpec:
    """ATM one-year put (S=K=100, r=5%, σ=20%)."""
    return EuropeanOptionSpec(
        underlying_price=market_params.spot,
        strike_price=market_params.strike,
        time_to_maturity_years=market_params.time_to_expiry,
        risk_free_rate=market_params.rate,
        volatility=market_params.volatility,
        option_type=OptionType.PUT,
    )


@pytest.fixture
def small_mc_call(market_params: MarketParams) -> MonteCarloSpec:
    """Cheap seeded MC call for mechanics tests."""
    return MonteCarloSpec(
        underlying_price=market_params.spot,
        strike_price=market_params.strike,
        time_to_maturity_years=market_params.time_to_expiry,
        risk_free_rate=market_params.rate,
        volatility=market_params.volatility,
        option_type=OptionType.CALL,
        num_paths=200,
        num_steps_per_path=10,
        seed=42,
    )


# =============================================================================
# HULL TEXTBOOK EXAMPLES
# =============================================================================

@dataclass(frozen=True)
class HullExample:
    """A textbook example from Hull (2021) Options, Futures, and Other Derivatives."""

    name: str
    spot: float
    strike: float
    rate: float
    volatility: float
    time_to_expiry: float
    expected_call: float
    expected_put: float


# Hull (2021) Chapter 15, Example 15.6
HULL_EXAMPLE_15_6 = HullExample(
    name="Hull Example 15.6",
    spot=42.0,
    strike=40.0,
    rate=0.10,
    volatility=0.20,
    time_to_expiry=0.5,
    expected_call=4.76,
    expected_put=0.81,
)


@pytest.fixture
def hull_example_15_6() -> HullExample:
    """Hull Chapter 15 Example 15.6: European options on non-dividend stock."""
    return HULL_EXAMPLE_15_6


# =============================================================================
# INSTRUMENT FIXTURES
# =============================================================================

@pytest.fixture
def futures_spec() -> FuturesSpec:
    """30-day futures on a 100 spot, daily steps."""
    return FuturesSpec(
        initial_spot_price=100.0,
        risk_free_rate=0.05,
        volatility=0.20,
        time_to_maturity_days=30,
        time_step_days=1.0,
        seed=7,
        underlying_symbol="SPOT",
    )


@pytest.fixture
def two_asset_etf() -> EtfSpec:
    """Equal-weight two-constituent ETF over 10 days."""
    return EtfSpec(
        constituents=(
            Constituent("A", initial_price=100.0, drift=0.10, volatility=0.20, weight=0.5),
            Constituent("B", initial_price=50.0, drift=0.05, volatility=0.15, weight=0.5),
        ),
        simulation_days=10,
        time_step_days=1.0,
        seed=42,
    )


# =============================================================================
# RANDOM SEEDS
# =============================================================================

@pytest.fixture
def fixed_seed() -> int:
    """Seed for tests that involve stochastic simulations."""
    return 42


@pytest.fixture
def reproducible_rng() -> np.random.Generator:
    """Reproducible numpy generator for drawing test inputs."""
    return np.random.default_rng(seed=42)
