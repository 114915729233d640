"""
Futures price paths from a simulated spot path.

[T1] Cost-of-carry (no income, no storage): F(t) = S(t) * exp(r * (T - t))

The spot is simulated risk-neutrally (drift = r). Remaining time to maturity
is converted to years with the same trading-day basis the path generator
uses for its steps, so carry and diffusion share one clock. At maturity the
remaining time is zero and the futures price converges to spot.

See: Hull (2021) Ch. 5 "Determination of Forward and Futures Prices"
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from market_simulator.config.settings import SETTINGS
from market_simulator.config.tolerances import MAX_EXP_ARGUMENT
from market_simulator.errors import InvalidInputError
from market_simulator.simulation.gbm import GBMParams, generate_path
from market_simulator.simulation.timeseries import TimeSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FuturesSpec:
    """
    Futures contract simulation inputs.

    Attributes
    ----------
    initial_spot_price : float
        Spot price of the underlying at the first point
    risk_free_rate : float
        Risk-free rate (annualized, decimal); also the spot drift
    volatility : float
        Spot volatility (annualized, decimal)
    time_to_maturity_days : int
        Days until contract maturity
    time_step_days : float
        Step size in days
    seed : int, optional
        Random seed for the spot path
    underlying_symbol : str
        Informational label for the underlying
    """

    initial_spot_price: float
    risk_free_rate: float
    volatility: float
    time_to_maturity_days: int
    time_step_days: float
    seed: Optional[int] = None
    underlying_symbol: str = ""


@dataclass(frozen=True)
class FuturesPath:
    """Futures path together with the spot path it was derived from."""

    spot: TimeSeries
    futures: TimeSeries

    @property
    def basis(self) -> np.ndarray:
        """Futures minus spot at each point (positive in contango)."""
        return self.futures.prices - self.spot.prices


def _validate_futures_spec(spec: FuturesSpec) -> None:
    """Validate futures inputs."""
    if not spec.initial_spot_price > 0:
        raise InvalidInputError(
            f"CRITICAL: initial_spot_price must be > 0, got {spec.initial_spot_price}"
        )
    if not spec.volatility >= 0:
        raise InvalidInputError(f"CRITICAL: volatility must be >= 0, got {spec.volatility}")
    if not spec.time_step_days > 0:
        raise InvalidInputError(
            f"CRITICAL: time_step_days must be > 0, got {spec.time_step_days}"
        )
    if spec.time_to_maturity_days < 0:
        raise InvalidInputError(
            f"CRITICAL: time_to_maturity_days must be >= 0, got {spec.time_to_maturity_days}"
        )
    maturity_years = spec.time_to_maturity_days / SETTINGS.simulation.trading_days_per_year
    carry = spec.risk_free_rate * maturity_years
    if not abs(carry) < MAX_EXP_ARGUMENT:
        raise InvalidInputError(
            f"CRITICAL: risk_free_rate {spec.risk_free_rate} over "
            f"{spec.time_to_maturity_days}d overflows the carry factor"
        )


def simulate_futures_with_spot(spec: FuturesSpec) -> FuturesPath:
    """
    Simulate a spot path and the futures path priced off it.

    Parameters
    ----------
    spec : FuturesSpec
        Contract and simulation inputs

    Returns
    -------
    FuturesPath
        Spot and futures paths sharing the same timestamps

    Notes
    -----
    The spot path has ceil(maturity / step) + 1 points, or a single point
    when maturity is 0. Elapsed time at the last point may overshoot
    maturity when the step does not divide it; remaining time is floored
    at zero there.
    """
    _validate_futures_spec(spec)

    if spec.time_to_maturity_days == 0:
        num_points = 1
    else:
        num_points = math.ceil(spec.time_to_maturity_days / spec.time_step_days) + 1

    logger.debug(
        f"Simulating futures on {spec.underlying_symbol or 'spot'}: "
        f"{num_points} points, maturity={spec.time_to_maturity_days}d"
    )

    spot = generate_path(
        GBMParams(drift=spec.risk_free_rate, volatility=spec.volatility),
        spec.initial_spot_price,
        spec.time_step_days,
        num_points,
        spec.seed,
    )

    days_per_year = SETTINGS.simulation.trading_days_per_year
    elapsed_days = np.arange(num_points) * spec.time_step_days
    remaining_days = np.maximum(spec.time_to_maturity_days - elapsed_days, 0.0)
    remaining_years = remaining_days / days_per_year

    with np.errstate(over="ignore"):
        futures_prices = spot.prices * np.exp(spec.risk_free_rate * remaining_years)
    if not np.all(np.isfinite(futures_prices)):
        raise InvalidInputError(
            f"CRITICAL: futures prices overflow float64 for spot {spec.initial_spot_price} "
            f"at risk_free_rate {spec.risk_free_rate} over {spec.time_to_maturity_days}d"
        )

    futures = TimeSeries(timestamps=spot.timestamps, prices=futures_prices)
    return FuturesPath(spot=spot, futures=futures)


def simulate_futures(spec: FuturesSpec) -> TimeSeries:
    """
    Simulate a futures price path.

    [T1] F_i = S_i * exp(r * remaining_years_i)

    Parameters
    ----------
    spec : FuturesSpec
        Contract and simulation inputs

    Returns
    -------
    TimeSeries
        Futures prices on the spot path's timestamps

    Examples
    --------
    >>> spec = FuturesSpec(100.0, 0.05, 0.2, time_to_maturity_days=0, time_step_days=1.0)
    >>> simulate_futures(spec).prices.tolist()
    [100.0]
    """
    return simulate_futures_with_spot(spec).futures
