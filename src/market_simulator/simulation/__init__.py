"""
Price path simulation.

Provides:
- GBM path generation
- Stock, futures and ETF path composition
- Ordered thread fan-out for independent paths
"""

from market_simulator.simulation.etf import (
    Constituent,
    EtfSpec,
    simulate_constituents,
    simulate_etf,
)
from market_simulator.simulation.futures import (
    FuturesPath,
    FuturesSpec,
    simulate_futures,
    simulate_futures_with_spot,
)
from market_simulator.simulation.gbm import GBMParams, generate_path, generate_prices
from market_simulator.simulation.stock import simulate_stock
from market_simulator.simulation.timeseries import TimeSeries

__all__ = [
    # Paths
    "TimeSeries",
    "GBMParams",
    "generate_path",
    "generate_prices",
    "simulate_stock",
    # Futures
    "FuturesSpec",
    "FuturesPath",
    "simulate_futures",
    "simulate_futures_with_spot",
    # ETF
    "Constituent",
    "EtfSpec",
    "simulate_constituents",
    "simulate_etf",
]
