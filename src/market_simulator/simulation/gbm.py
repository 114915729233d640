"""
Geometric Brownian Motion (GBM) path generation.

Every simulated price in the package comes from ``generate_path``:
- Exact log-normal discretization per step
- One standard normal draw per emitted point, drawn in point order
- Explicit PCG64 bit generator so seeded paths are reproducible

[T1] GBM SDE: dS = μS dt + σS dW
[T1] Exact step: S(t+Δt) = S(t) * exp((μ - σ²/2)Δt + σ√Δt * Z)

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering"
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from market_simulator.config.settings import SETTINGS
from market_simulator.errors import InvalidInputError
from market_simulator.simulation.timeseries import TimeSeries

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class GBMParams:
    """
    Parameters for GBM simulation.

    Attributes
    ----------
    drift : float
        Drift μ (annualized, decimal). Use the risk-free rate for
        risk-neutral simulation.
    volatility : float
        Volatility σ (annualized, decimal)
    """

    drift: float
    volatility: float

    def __post_init__(self) -> None:
        """Validate parameters."""
        if not np.isfinite(self.drift):
            raise InvalidInputError(f"CRITICAL: drift must be finite, got {self.drift}")
        if not self.volatility >= 0:
            raise InvalidInputError(
                f"CRITICAL: volatility must be >= 0, got {self.volatility}"
            )

    @property
    def log_drift(self) -> float:
        """Drift of log-price: μ - σ²/2."""
        return self.drift - 0.5 * self.volatility**2


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Build the random generator for one path.

    PCG64 is named explicitly rather than relying on ``default_rng`` so the
    stream stays fixed if NumPy changes its default bit generator.
    ``seed=None`` draws fresh OS entropy.
    """
    if seed is not None and seed < 0:
        raise InvalidInputError(f"CRITICAL: seed must be >= 0, got {seed}")
    return np.random.Generator(np.random.PCG64(seed))


def generate_prices(
    params: GBMParams,
    initial_value: float,
    dt: float,
    num_points: int,
    seed: Optional[int] = None,
) -> np.ndarray:
    """
    Generate the prices of one GBM path without timestamps.

    Same draws and arithmetic as ``generate_path``, so the prices of a
    seeded path agree exactly. Steps shorter than one second are allowed.

    Parameters
    ----------
    params : GBMParams
        Drift and volatility
    initial_value : float
        Price at the first point, must be > 0
    dt : float
        Step size in days, must be > 0
    num_points : int
        Number of prices, must be > 0
    seed : int, optional
        Random seed for reproducibility

    Returns
    -------
    np.ndarray
        Prices, shape (num_points,)

    Raises
    ------
    InvalidInputError
        If an input is out of range or a price overflows float64
    """
    if not initial_value > 0:
        raise InvalidInputError(
            f"CRITICAL: initial_value must be > 0, got {initial_value}"
        )
    if not dt > 0:
        raise InvalidInputError(f"CRITICAL: dt must be > 0, got {dt}")
    if num_points <= 0:
        raise InvalidInputError(f"CRITICAL: num_points must be > 0, got {num_points}")

    rng = make_rng(seed)

    # Time discretization
    dt_year = dt / SETTINGS.simulation.trading_days_per_year
    drift_per_step = params.log_drift * dt_year
    vol_per_step = params.volatility * np.sqrt(dt_year)

    z = rng.standard_normal(num_points)
    log_returns = drift_per_step + vol_per_step * z

    prices = np.empty(num_points)
    prices[0] = initial_value
    with np.errstate(over="ignore"):
        prices[1:] = initial_value * np.exp(np.cumsum(log_returns[:-1]))

    if not np.all(np.isfinite(prices)):
        raise InvalidInputError(
            f"CRITICAL: GBM path overflows float64 (drift={params.drift}, "
            f"volatility={params.volatility}, dt={dt}, num_points={num_points})"
        )
    return prices


def generate_path(
    params: GBMParams,
    initial_value: float,
    dt: float,
    num_points: int,
    seed: Optional[int] = None,
) -> TimeSeries:
    """
    Generate one GBM price path.

    The first point is ``initial_value`` at the simulation epoch. After each
    recorded point one normal draw is taken and applied to produce the next
    point, so the final draw is never used.

    Parameters
    ----------
    params : GBMParams
        Drift and volatility
    initial_value : float
        Price at the first point, must be > 0
    dt : float
        Step size in calendar days, must be > 0. Converted to a year
        fraction with the trading-day basis (dt / 252).
    num_points : int
        Number of points in the output, must be > 0
    seed : int, optional
        Random seed for reproducibility

    Returns
    -------
    TimeSeries
        Path of exactly ``num_points`` points

    Examples
    --------
    >>> params = GBMParams(drift=0.05, volatility=0.20)
    >>> path = generate_path(params, 100.0, dt=1.0, num_points=253, seed=42)
    >>> len(path), path.initial_value
    (253, 100.0)
    """
    step_seconds = int(dt * SECONDS_PER_DAY) if dt > 0 else 0
    if num_points > 1 and dt > 0 and step_seconds == 0:
        raise InvalidInputError(
            f"CRITICAL: dt must be at least one second (1/{SECONDS_PER_DAY} days), got {dt}"
        )

    prices = generate_prices(params, initial_value, dt, num_points, seed)

    epoch = np.datetime64(SETTINGS.simulation.epoch, "s")
    timestamps = epoch + np.arange(num_points) * np.timedelta64(step_seconds, "s")

    return TimeSeries(timestamps=timestamps, prices=prices)
