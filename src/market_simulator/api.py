"""
Entry points for the transport layer.

Each function takes validated-shape inputs, runs one computation to
completion and returns a path or a price. Invalid inputs raise
``InvalidInputError`` before any simulation work starts; the error is logged
here and re-raised unchanged.
"""

import logging
from dataclasses import replace
from typing import Callable, Optional, TypeVar

from market_simulator.config.asset_models import get_asset_model
from market_simulator.config.settings import SETTINGS
from market_simulator.errors import InvalidInputError
from market_simulator.pricing.black_scholes import EuropeanOptionSpec, black_scholes_price
from market_simulator.pricing.monte_carlo import MonteCarloSpec, monte_carlo_price
from market_simulator.simulation import etf, futures, stock
from market_simulator.simulation.etf import EtfSpec
from market_simulator.simulation.futures import FuturesSpec
from market_simulator.simulation.timeseries import TimeSeries

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _run(operation: str, func: Callable[[], R]) -> R:
    """Run one request, logging rejected inputs."""
    try:
        return func()
    except InvalidInputError as e:
        logger.warning(f"{operation} rejected: {e}")
        raise


def _seed_or_default(seed: Optional[int]) -> Optional[int]:
    """Caller seed, else the configured default (None means unseeded)."""
    return seed if seed is not None else SETTINGS.simulation.default_seed


def simulate_stock(
    initial_price: float,
    drift: float,
    volatility: float,
    num_steps: int,
    time_step_days: float,
    seed: Optional[int] = None,
) -> TimeSeries:
    """Simulate a stock price path of ``num_steps`` points."""
    seed = _seed_or_default(seed)
    logger.info(f"simulate_stock: S0={initial_price}, steps={num_steps}, dt={time_step_days}d")
    return _run(
        "simulate_stock",
        lambda: stock.simulate_stock(
            initial_price, drift, volatility, num_steps, time_step_days, seed
        ),
    )


def price_option_analytic(spec: EuropeanOptionSpec) -> float:
    """Black-Scholes price of a European option."""
    logger.info(
        f"price_option_analytic: {spec.option_type.value} "
        f"S={spec.underlying_price}, K={spec.strike_price}, T={spec.time_to_maturity_years}"
    )
    return _run("price_option_analytic", lambda: black_scholes_price(spec))


def price_option_monte_carlo(
    spec: MonteCarloSpec,
    n_workers: Optional[int] = None,
) -> float:
    """Monte Carlo price of a European option."""
    logger.info(
        f"price_option_monte_carlo: {spec.option_type.value} "
        f"S={spec.underlying_price}, K={spec.strike_price}, "
        f"paths={spec.num_paths}, steps={spec.num_steps_per_path}"
    )
    spec = replace(spec, seed=_seed_or_default(spec.seed))
    return _run("price_option_monte_carlo", lambda: monte_carlo_price(spec, n_workers))


def simulate_futures(spec: FuturesSpec) -> TimeSeries:
    """Futures price path derived from a simulated spot path."""
    logger.info(
        f"simulate_futures: S0={spec.initial_spot_price}, "
        f"maturity={spec.time_to_maturity_days}d, dt={spec.time_step_days}d"
    )
    spec = replace(spec, seed=_seed_or_default(spec.seed))
    return _run("simulate_futures", lambda: futures.simulate_futures(spec))


def simulate_etf(spec: EtfSpec, n_workers: Optional[int] = None) -> TimeSeries:
    """NAV path of an ETF built from independently simulated constituents."""
    logger.info(
        f"simulate_etf: {len(spec.constituents)} constituents, "
        f"days={spec.simulation_days}, dt={spec.time_step_days}d"
    )
    spec = replace(spec, seed=_seed_or_default(spec.seed))
    return _run("simulate_etf", lambda: etf.simulate_etf(spec, n_workers))


def simulate_asset(
    identifier: str,
    num_steps: Optional[int] = None,
    time_step_days: Optional[float] = None,
    initial_price: float = 100.0,
    seed: Optional[int] = None,
) -> TimeSeries:
    """
    Simulate a configured asset by identifier.

    Parameters
    ----------
    identifier : str
        Key in the asset model registry (e.g. "DEFAULT_STOCK")
    num_steps : int, optional
        Points in the path (default SETTINGS.simulation.simulation_period_days)
    time_step_days : float, optional
        Step size in days (default SETTINGS.simulation.time_step_days)
    initial_price : float, default 100.0
        Starting price
    seed : int, optional
        Random seed (default SETTINGS.simulation.default_seed)

    Returns
    -------
    TimeSeries
        Simulated price path

    Raises
    ------
    KeyError
        If the identifier is not configured
    """
    model = get_asset_model(identifier)
    if num_steps is None:
        num_steps = SETTINGS.simulation.simulation_period_days
    if time_step_days is None:
        time_step_days = SETTINGS.simulation.time_step_days

    logger.info(f"simulate_asset: {identifier} ({model.model.value}), steps={num_steps}")

    params = model.gbm_params()
    return _run(
        "simulate_asset",
        lambda: stock.simulate_stock(
            initial_price,
            params.drift,
            params.volatility,
            num_steps,
            time_step_days,
            _seed_or_default(seed),
        ),
    )
