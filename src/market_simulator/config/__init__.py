"""
Configuration: frozen settings and centralized tolerances.

Asset model lookup lives in ``market_simulator.config.asset_models`` and is
imported from there directly.
"""

from market_simulator.config.settings import SETTINGS, Settings, TRADING_DAYS_PER_YEAR
from market_simulator.config.tolerances import get_tolerance, mc_tolerance

__all__ = [
    "SETTINGS",
    "Settings",
    "TRADING_DAYS_PER_YEAR",
    "get_tolerance",
    "mc_tolerance",
]
