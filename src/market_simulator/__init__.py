"""
market-simulator: GBM price simulation and European option pricing.

Quick Start
-----------
>>> from market_simulator import EuropeanOptionSpec, OptionType, price_option_analytic
>>> spec = EuropeanOptionSpec(100.0, 100.0, 1.0, 0.05, 0.20, OptionType.CALL)
>>> round(price_option_analytic(spec), 4)
10.4506

Version: 0.1.0
"""

__version__ = "0.1.0"

# =============================================================================
# Entry Points - Primary API
# =============================================================================
from market_simulator.api import (
    price_option_analytic,
    price_option_monte_carlo,
    simulate_asset,
    simulate_etf,
    simulate_futures,
    simulate_stock,
)

# =============================================================================
# Paths
# =============================================================================
from market_simulator.simulation import (
    Constituent,
    EtfSpec,
    FuturesPath,
    FuturesSpec,
    GBMParams,
    TimeSeries,
    generate_path,
    simulate_futures_with_spot,
)

# =============================================================================
# Options Pricing
# =============================================================================
from market_simulator.pricing import (
    EuropeanOptionSpec,
    MCResult,
    MonteCarloSpec,
    OptionType,
    black_scholes_price,
    black_scholes_price_series,
    monte_carlo_price,
    monte_carlo_result,
)

# =============================================================================
# Configuration & Errors
# =============================================================================
from market_simulator.config.settings import SETTINGS
from market_simulator.errors import InvalidInputError

__all__ = [
    # Version
    "__version__",
    # Entry points
    "simulate_stock",
    "price_option_analytic",
    "price_option_monte_carlo",
    "simulate_futures",
    "simulate_etf",
    "simulate_asset",
    # Paths
    "TimeSeries",
    "GBMParams",
    "generate_path",
    "FuturesSpec",
    "FuturesPath",
    "simulate_futures_with_spot",
    "Constituent",
    "EtfSpec",
    # Options
    "OptionType",
    "EuropeanOptionSpec",
    "MonteCarloSpec",
    "MCResult",
    "black_scholes_price",
    "black_scholes_price_series",
    "monte_carlo_price",
    "monte_carlo_result",
    # Config & errors
    "SETTINGS",
    "InvalidInputError",
]
