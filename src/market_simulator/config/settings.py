"""
Frozen configuration settings for simulation and pricing.

All configuration is immutable (frozen dataclasses) to ensure reproducibility.
Environment variables are read once, when the settings singleton is built.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from market_simulator.config.tolerances import (
    BS_MC_CONVERGENCE_TOLERANCE,
    PUT_CALL_PARITY_TOLERANCE,
    WEIGHT_SUM_TOLERANCE,
)

#: Day-count basis shared by path generation, MC step sizing and futures carry
TRADING_DAYS_PER_YEAR: int = 252

#: Timestamp of the first point of every generated path
SIMULATION_EPOCH: datetime = datetime(2024, 1, 1, 0, 0, 0)


# =============================================================================
# Environment Overrides
# =============================================================================

def _resolve_default_seed() -> Optional[int]:
    """
    Resolve the default simulation seed.

    Priority:
    1. MARKET_SIM_SEED environment variable (if set)
    2. Default: None (unseeded, non-reproducible)

    Returns
    -------
    int or None
        Seed used when a caller does not supply one
    """
    env_seed = os.environ.get("MARKET_SIM_SEED")
    if env_seed:
        return int(env_seed)
    return None


def _resolve_n_workers() -> int:
    """
    Resolve the worker count for path fan-out.

    Priority:
    1. MARKET_SIM_WORKERS environment variable (if set)
    2. Default: 1 (sequential)
    """
    env_workers = os.environ.get("MARKET_SIM_WORKERS")
    if env_workers:
        return max(1, int(env_workers))
    return 1


# =============================================================================
# Simulation Configuration
# =============================================================================

@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable path simulation configuration.

    Attributes
    ----------
    trading_days_per_year : int
        Day-count basis converting day steps to year fractions
    epoch : datetime
        Timestamp of the first point of every path
    default_seed : int, optional
        Seed applied by entry points when the caller gives none
    simulation_period_days : int
        Default number of points for configured-asset simulations
    time_step_days : float
        Default step size in days (1440 minutes)
    n_workers : int
        Threads used to fan out independent paths (1 = sequential)
    """

    trading_days_per_year: int = TRADING_DAYS_PER_YEAR  # [T1]
    epoch: datetime = SIMULATION_EPOCH
    default_seed: Optional[int] = field(default_factory=_resolve_default_seed)
    simulation_period_days: int = 252
    time_step_days: float = 1.0
    n_workers: int = field(default_factory=_resolve_n_workers)


# =============================================================================
# Option Pricing Configuration
# =============================================================================

@dataclass(frozen=True)
class OptionConfig:
    """
    Immutable option pricing configuration.

    Attributes
    ----------
    mc_paths : int
        Default number of Monte Carlo paths
    mc_steps : int
        Default number of steps per Monte Carlo path
    """

    # Monte Carlo parameters [T3: Assumptions]
    mc_paths: int = 20_000
    mc_steps: int = 100

    bs_mc_tolerance: float = BS_MC_CONVERGENCE_TOLERANCE
    put_call_parity_tolerance: float = PUT_CALL_PARITY_TOLERANCE


# =============================================================================
# ETF Configuration
# =============================================================================

@dataclass(frozen=True)
class EtfConfig:
    """Immutable ETF composition configuration."""

    weight_sum_tolerance: float = WEIGHT_SUM_TOLERANCE


# =============================================================================
# Master Configuration
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """
    Master frozen configuration combining all sub-configs.

    Usage
    -----
    >>> from market_simulator.config.settings import SETTINGS
    >>> SETTINGS.simulation.trading_days_per_year
    252
    """

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    option: OptionConfig = field(default_factory=OptionConfig)
    etf: EtfConfig = field(default_factory=EtfConfig)


# Singleton instance - import this
SETTINGS = Settings()
