"""
Single-stock price simulation.
"""

import logging
from typing import Optional

from market_simulator.errors import InvalidInputError
from market_simulator.simulation.gbm import GBMParams, generate_path
from market_simulator.simulation.timeseries import TimeSeries

logger = logging.getLogger(__name__)


def simulate_stock(
    initial_price: float,
    drift: float,
    volatility: float,
    num_steps: int,
    time_step_days: float,
    seed: Optional[int] = None,
) -> TimeSeries:
    """
    Simulate a stock price path under GBM.

    Parameters
    ----------
    initial_price : float
        Starting price, must be > 0
    drift : float
        Annualized drift (decimal)
    volatility : float
        Annualized volatility (decimal), must be >= 0
    num_steps : int
        Number of points in the path (the first is ``initial_price``)
    time_step_days : float
        Step size in days, must be > 0
    seed : int, optional
        Random seed for reproducibility

    Returns
    -------
    TimeSeries
        Path of ``num_steps`` points
    """
    if not initial_price > 0:
        raise InvalidInputError(f"CRITICAL: initial_price must be > 0, got {initial_price}")
    if not volatility >= 0:
        raise InvalidInputError(f"CRITICAL: volatility must be >= 0, got {volatility}")
    if not time_step_days > 0:
        raise InvalidInputError(f"CRITICAL: time_step_days must be > 0, got {time_step_days}")
    if num_steps <= 0:
        raise InvalidInputError(f"CRITICAL: num_steps must be > 0, got {num_steps}")

    logger.debug(f"Simulating stock: {num_steps} points, dt={time_step_days}d, seed={seed}")

    params = GBMParams(drift=drift, volatility=volatility)
    return generate_path(params, initial_price, time_step_days, num_steps, seed)
