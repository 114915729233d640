"""
Black-Scholes pricing for European options.

Implements analytical pricing for European options on a non-dividend-paying
underlying, plus pricing along a series of underlying prices.

References
----------
[T1] Black, F., & Scholes, M. (1973). The pricing of options and corporate liabilities.
[T1] Hull, J. C. (2018). Options, Futures, and Other Derivatives (10th ed.).
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence

import numpy as np
from scipy import stats

from market_simulator.config.tolerances import MAX_EXP_ARGUMENT, PUT_CALL_PARITY_TOLERANCE
from market_simulator.errors import InvalidInputError


class OptionType(Enum):
    """Option type enumeration."""

    CALL = "call"
    PUT = "put"


@dataclass(frozen=True)
class EuropeanOptionSpec:
    """
    European option contract and market inputs.

    Attributes
    ----------
    underlying_price : float
        Current underlying price S
    strike_price : float
        Strike price K
    time_to_maturity_years : float
        Time to maturity T in years
    risk_free_rate : float
        Risk-free rate r (annualized, decimal)
    volatility : float
        Volatility σ (annualized, decimal)
    option_type : OptionType
        Call or put
    """

    underlying_price: float
    strike_price: float
    time_to_maturity_years: float
    risk_free_rate: float
    volatility: float
    option_type: OptionType


def intrinsic_value(spot: float, strike: float, option_type: OptionType) -> float:
    """
    Payoff if exercised now.

    [T1] Call: max(S - K, 0), Put: max(K - S, 0)
    """
    if option_type == OptionType.CALL:
        return max(spot - strike, 0.0)
    return max(strike - spot, 0.0)


def discount_factor(rate: float, time_to_maturity: float) -> float:
    """
    Continuously compounded discount factor e^(-rT).

    Raises
    ------
    InvalidInputError
        If e^(-rT) overflows float64
    """
    exponent = -rate * time_to_maturity
    if not exponent < MAX_EXP_ARGUMENT:
        raise InvalidInputError(
            f"CRITICAL: risk_free_rate {rate} with maturity {time_to_maturity} "
            f"overflows the discount factor"
        )
    return float(np.exp(exponent))


def _calculate_d1_d2(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
) -> tuple[float, float]:
    """
    Calculate d1 and d2 parameters.

    [T1] d1 = (ln(S/K) + (r + σ²/2)T) / (σ√T)
    [T1] d2 = d1 - σ√T
    """
    vol_sqrt_t = volatility * np.sqrt(time_to_expiry)

    d1 = (np.log(spot / strike) + (rate + 0.5 * volatility**2) * time_to_expiry) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t

    return d1, d2


def black_scholes_price(spec: EuropeanOptionSpec) -> float:
    """
    Price a European option using Black-Scholes.

    [T1] C = S*N(d1) - K*e^(-rT)*N(d2)
    [T1] P = K*e^(-rT)*N(-d2) - S*N(-d1)

    At or past maturity (T <= 0) the intrinsic value is returned and
    volatility is not checked.

    Parameters
    ----------
    spec : EuropeanOptionSpec
        Option inputs

    Returns
    -------
    float
        Option price

    Raises
    ------
    InvalidInputError
        If S <= 0, K <= 0, σ <= 0 (for T > 0), or e^(-rT) overflows

    Examples
    --------
    >>> spec = EuropeanOptionSpec(100, 100, 1.0, 0.05, 0.20, OptionType.CALL)
    >>> round(black_scholes_price(spec), 4)
    10.4506
    """
    S = spec.underlying_price
    K = spec.strike_price
    T = spec.time_to_maturity_years
    r = spec.risk_free_rate
    sigma = spec.volatility

    if not S > 0:
        raise InvalidInputError(f"CRITICAL: underlying_price must be > 0, got {S}")
    if not K > 0:
        raise InvalidInputError(f"CRITICAL: strike_price must be > 0, got {K}")

    if T <= 0:
        return intrinsic_value(S, K, spec.option_type)

    df = discount_factor(r, T)

    if not sigma > 0:
        raise InvalidInputError(f"CRITICAL: volatility must be > 0, got {sigma}")

    d1, d2 = _calculate_d1_d2(S, K, r, sigma, T)

    if spec.option_type == OptionType.CALL:
        price = S * stats.norm.cdf(d1) - K * df * stats.norm.cdf(d2)
    else:
        price = K * df * stats.norm.cdf(-d2) - S * stats.norm.cdf(-d1)

    return float(price)


def black_scholes_price_series(
    spec: EuropeanOptionSpec,
    underlying_prices: Sequence[float],
) -> np.ndarray:
    """
    Price the same contract at each underlying price in a series.

    Strike, maturity, rate and volatility are held fixed; only the
    underlying price varies (e.g. the prices of a simulated stock path).

    Parameters
    ----------
    spec : EuropeanOptionSpec
        Option inputs; ``underlying_price`` is ignored
    underlying_prices : Sequence[float]
        Underlying prices to price at

    Returns
    -------
    np.ndarray
        Option price for each underlying price

    Raises
    ------
    InvalidInputError
        If any single valuation is invalid
    """
    return np.array(
        [
            black_scholes_price(replace(spec, underlying_price=float(s)))
            for s in underlying_prices
        ],
        dtype=np.float64,
    )


def put_call_parity_check(
    call_price: float,
    put_price: float,
    spot: float,
    strike: float,
    rate: float,
    time_to_expiry: float,
    tolerance: float = PUT_CALL_PARITY_TOLERANCE,
) -> tuple[bool, float]:
    """
    Check a call/put pair against put-call parity.

    [T1] C - P = S - K * df(r, T), with df from ``discount_factor``.
    At T = 0 this reduces to C - P = S - K for intrinsic values.

    Parameters
    ----------
    call_price : float
        Call option price
    put_price : float
        Put option price
    spot : float
        Spot price
    strike : float
        Strike price
    rate : float
        Risk-free rate
    time_to_expiry : float
        Time to expiry
    tolerance : float, default 1e-8
        Acceptable error

    Returns
    -------
    tuple[bool, float]
        (within tolerance, absolute parity error)

    Raises
    ------
    InvalidInputError
        If the discount factor overflows
    """
    forward_value = spot - strike * discount_factor(rate, time_to_expiry)
    error = abs((call_price - put_price) - forward_value)
    return error < tolerance, float(error)
