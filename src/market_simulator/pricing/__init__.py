"""
European option pricing.

Two standalone pricers:
- Black-Scholes: closed form
- Monte Carlo: discounted mean payoff over simulated GBM paths
"""

from market_simulator.pricing.black_scholes import (
    EuropeanOptionSpec,
    OptionType,
    black_scholes_price,
    black_scholes_price_series,
    discount_factor,
    intrinsic_value,
    put_call_parity_check,
)
from market_simulator.pricing.monte_carlo import (
    MCResult,
    MonteCarloSpec,
    monte_carlo_price,
    monte_carlo_result,
)

__all__ = [
    # Black-Scholes
    "OptionType",
    "EuropeanOptionSpec",
    "black_scholes_price",
    "black_scholes_price_series",
    "discount_factor",
    "intrinsic_value",
    "put_call_parity_check",
    # Monte Carlo
    "MonteCarloSpec",
    "MCResult",
    "monte_carlo_price",
    "monte_carlo_result",
]
