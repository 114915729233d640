"""
Monte Carlo pricing for European options.

Each path is a full GBM path from ``generate_prices`` with its own seed
(base seed + path index). Only the terminal price enters the payoff.

[T1] Price = e^(-rT) * (1/N) Σ payoff(S_T^i)
[T1] MC converges to the analytical price at rate 1/√N

Step sizing uses the same trading-day basis as the path generator: the
maturity is expressed in days (T * 252), split into ``num_steps_per_path``
steps, and the generator converts each step back with /252. Each step is
therefore exactly T / num_steps_per_path years.

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering"
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from market_simulator.config.settings import SETTINGS
from market_simulator.errors import InvalidInputError
from market_simulator.pricing.black_scholes import OptionType, discount_factor
from market_simulator.simulation.gbm import GBMParams, generate_prices
from market_simulator.simulation.parallel import chunk_ranges, ordered_map, resolve_workers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonteCarloSpec:
    """
    Monte Carlo European option inputs.

    Attributes
    ----------
    underlying_price : float
        Initial underlying price S
    strike_price : float
        Strike price K
    time_to_maturity_years : float
        Time to maturity T in years, must be > 0
    risk_free_rate : float
        Risk-free rate r; also the risk-neutral drift
    volatility : float
        Volatility σ (annualized, decimal)
    option_type : OptionType
        Call or put
    num_paths : int
        Number of simulated paths
    num_steps_per_path : int
        Number of GBM steps per path (points = steps + 1)
    seed : int, optional
        Base seed; path i uses seed + i
    """

    underlying_price: float
    strike_price: float
    time_to_maturity_years: float
    risk_free_rate: float
    volatility: float
    option_type: OptionType
    num_paths: int = SETTINGS.option.mc_paths
    num_steps_per_path: int = SETTINGS.option.mc_steps
    seed: Optional[int] = None


@dataclass(frozen=True)
class MCResult:
    """
    Monte Carlo pricing result.

    Attributes
    ----------
    price : float
        Option price (discounted expected payoff)
    standard_error : float
        Standard error of the estimate
    confidence_interval : tuple[float, float]
        95% confidence interval
    n_paths : int
        Number of paths used
    discount_factor : float
        Discount factor used
    """

    price: float
    standard_error: float
    confidence_interval: tuple[float, float]
    n_paths: int
    discount_factor: float

    @property
    def relative_error(self) -> float:
        """Relative standard error (SE / price)."""
        if abs(self.price) < 1e-10:
            return float("inf")
        return self.standard_error / abs(self.price)

    @property
    def ci_width(self) -> float:
        """Width of 95% confidence interval."""
        return self.confidence_interval[1] - self.confidence_interval[0]


def _validate_mc_spec(spec: MonteCarloSpec) -> None:
    """Validate Monte Carlo inputs."""
    if not spec.time_to_maturity_years > 0:
        raise InvalidInputError(
            f"CRITICAL: time_to_maturity_years must be > 0, got {spec.time_to_maturity_years}"
        )
    if spec.num_paths <= 0:
        raise InvalidInputError(f"CRITICAL: num_paths must be > 0, got {spec.num_paths}")
    if spec.num_steps_per_path <= 0:
        raise InvalidInputError(
            f"CRITICAL: num_steps_per_path must be > 0, got {spec.num_steps_per_path}"
        )
    if not spec.underlying_price > 0:
        raise InvalidInputError(
            f"CRITICAL: underlying_price must be > 0, got {spec.underlying_price}"
        )
    if not spec.strike_price > 0:
        raise InvalidInputError(f"CRITICAL: strike_price must be > 0, got {spec.strike_price}")
    if not spec.volatility >= 0:
        raise InvalidInputError(f"CRITICAL: volatility must be >= 0, got {spec.volatility}")


def path_seed(base_seed: Optional[int], index: int) -> Optional[int]:
    """Seed for path ``index``: base + index, or None if unseeded."""
    if base_seed is None:
        return None
    return base_seed + index


def simulate_terminal_prices(
    spec: MonteCarloSpec,
    n_workers: Optional[int] = None,
) -> np.ndarray:
    """
    Simulate the terminal underlying price of every path.

    Parameters
    ----------
    spec : MonteCarloSpec
        Monte Carlo inputs (validated by the caller)
    n_workers : int, optional
        Threads to spread paths over; the result does not depend on it

    Returns
    -------
    np.ndarray
        Terminal prices, shape (num_paths,), indexed by path
    """
    params = GBMParams(drift=spec.risk_free_rate, volatility=spec.volatility)

    total_days = spec.time_to_maturity_years * SETTINGS.simulation.trading_days_per_year
    dt_days = total_days / spec.num_steps_per_path
    num_points = spec.num_steps_per_path + 1

    def simulate_chunk(paths: range) -> np.ndarray:
        terminal = np.empty(len(paths))
        for j, i in enumerate(paths):
            prices = generate_prices(
                params,
                spec.underlying_price,
                dt_days,
                num_points,
                path_seed(spec.seed, i),
            )
            terminal[j] = prices[-1]
        return terminal

    workers = resolve_workers(n_workers)
    chunks = chunk_ranges(spec.num_paths, workers)
    return np.concatenate(ordered_map(simulate_chunk, chunks, workers))


def _payoffs(terminal: np.ndarray, strike: float, option_type: OptionType) -> np.ndarray:
    """European payoff per path."""
    if option_type == OptionType.CALL:
        return np.maximum(terminal - strike, 0.0)
    return np.maximum(strike - terminal, 0.0)


def monte_carlo_result(
    spec: MonteCarloSpec,
    n_workers: Optional[int] = None,
) -> MCResult:
    """
    Price a European option by Monte Carlo, with error statistics.

    Parameters
    ----------
    spec : MonteCarloSpec
        Monte Carlo inputs
    n_workers : int, optional
        Threads to spread paths over (default SETTINGS.simulation.n_workers)

    Returns
    -------
    MCResult
        Price, standard error and 95% confidence interval

    Raises
    ------
    InvalidInputError
        If T <= 0, counts are not positive, S or K <= 0, σ < 0, or the
        discount factor, a simulated price or the estimate is not finite
    """
    _validate_mc_spec(spec)
    df = discount_factor(spec.risk_free_rate, spec.time_to_maturity_years)

    logger.debug(
        f"MC pricing {spec.option_type.value}: {spec.num_paths} paths x "
        f"{spec.num_steps_per_path} steps, seed={spec.seed}"
    )

    terminal = simulate_terminal_prices(spec, n_workers)
    payoffs = _payoffs(terminal, spec.strike_price, spec.option_type)

    # Discounted mean and standard error
    mean_payoff = payoffs.sum() / spec.num_paths
    price = df * mean_payoff
    if not np.isfinite(price):
        raise InvalidInputError(
            f"CRITICAL: MC price is not finite for risk_free_rate={spec.risk_free_rate}, "
            f"T={spec.time_to_maturity_years}"
        )

    if spec.num_paths > 1:
        se_price = df * payoffs.std(ddof=1) / np.sqrt(spec.num_paths)
    else:
        se_price = float("inf")

    # 95% confidence interval (z = 1.96)
    ci_lower = price - 1.96 * se_price
    ci_upper = price + 1.96 * se_price

    return MCResult(
        price=float(price),
        standard_error=float(se_price),
        confidence_interval=(float(ci_lower), float(ci_upper)),
        n_paths=spec.num_paths,
        discount_factor=df,
    )


def monte_carlo_price(spec: MonteCarloSpec, n_workers: Optional[int] = None) -> float:
    """
    Price a European option by Monte Carlo.

    Parameters
    ----------
    spec : MonteCarloSpec
        Monte Carlo inputs
    n_workers : int, optional
        Threads to spread paths over; the price does not depend on it

    Returns
    -------
    float
        e^(-rT) * mean payoff

    Examples
    --------
    >>> spec = MonteCarloSpec(100, 100, 1.0, 0.05, 0.2, OptionType.CALL,
    ...                       num_paths=20_000, num_steps_per_path=100, seed=42)
    >>> abs(monte_carlo_price(spec) - 10.4506) < 0.5
    True
    """
    return monte_carlo_result(spec, n_workers).price
