"""
ETF net asset value (NAV) from independently simulated constituents.

[T1] Buy-and-hold NAV normalized to 1.0 at inception:
    NAV(t) = Σ_j (w_j / P_j(0)) * P_j(t)

Each constituent is simulated with its own GBM parameters and a seed derived
from its position (base seed + index). No correlation between constituents
is modeled.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from market_simulator.config.settings import SETTINGS
from market_simulator.errors import InvalidInputError
from market_simulator.simulation.parallel import ordered_map
from market_simulator.simulation.stock import simulate_stock
from market_simulator.simulation.timeseries import TimeSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Constituent:
    """
    One ETF holding.

    Attributes
    ----------
    symbol : str
        Ticker or label
    initial_price : float
        Price at inception
    drift : float
        Annualized drift (decimal)
    volatility : float
        Annualized volatility (decimal)
    weight : float
        Share of the ETF's initial value
    """

    symbol: str
    initial_price: float
    drift: float
    volatility: float
    weight: float


@dataclass(frozen=True)
class EtfSpec:
    """
    ETF simulation inputs.

    Attributes
    ----------
    constituents : tuple[Constituent, ...]
        Holdings, in seed-derivation order
    simulation_days : int
        Number of points in every path
    time_step_days : float
        Step size in days
    seed : int, optional
        Base seed; constituent i uses seed + i
    """

    constituents: tuple[Constituent, ...]
    simulation_days: int
    time_step_days: float
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Accept any sequence of constituents."""
        object.__setattr__(self, "constituents", tuple(self.constituents))

    @property
    def total_weight(self) -> float:
        """Sum of constituent weights."""
        return float(sum(c.weight for c in self.constituents))


def _validate_etf_spec(spec: EtfSpec) -> None:
    """Validate all ETF inputs before any path is generated."""
    if not spec.constituents:
        raise InvalidInputError("CRITICAL: ETF constituents cannot be empty")

    for c in spec.constituents:
        if not c.initial_price > 0:
            raise InvalidInputError(
                f"CRITICAL: constituent '{c.symbol}' initial_price must be > 0, "
                f"got {c.initial_price}"
            )
        if not c.volatility >= 0:
            raise InvalidInputError(
                f"CRITICAL: constituent '{c.symbol}' volatility must be >= 0, "
                f"got {c.volatility}"
            )
        if not c.weight >= 0:
            raise InvalidInputError(
                f"CRITICAL: constituent '{c.symbol}' weight must be >= 0, got {c.weight}"
            )

    total = spec.total_weight
    if not abs(total - 1.0) <= SETTINGS.etf.weight_sum_tolerance:
        raise InvalidInputError(
            f"CRITICAL: constituent weights must sum to 1.0 "
            f"(±{SETTINGS.etf.weight_sum_tolerance}), got {total}"
        )
    if spec.simulation_days <= 0:
        raise InvalidInputError(
            f"CRITICAL: simulation_days must be > 0, got {spec.simulation_days}"
        )
    if not spec.time_step_days > 0:
        raise InvalidInputError(
            f"CRITICAL: time_step_days must be > 0, got {spec.time_step_days}"
        )


def constituent_seed(base_seed: Optional[int], index: int) -> Optional[int]:
    """Seed for the constituent at ``index``: base + index, or None if unseeded."""
    if base_seed is None:
        return None
    return base_seed + index


def simulate_constituents(spec: EtfSpec, n_workers: Optional[int] = None) -> list[TimeSeries]:
    """
    Simulate every constituent's price path.

    Parameters
    ----------
    spec : EtfSpec
        ETF definition
    n_workers : int, optional
        Threads to spread constituents over

    Returns
    -------
    list[TimeSeries]
        One path per constituent, in constituent order
    """
    _validate_etf_spec(spec)

    def simulate_one(index: int) -> TimeSeries:
        c = spec.constituents[index]
        return simulate_stock(
            c.initial_price,
            c.drift,
            c.volatility,
            spec.simulation_days,
            spec.time_step_days,
            constituent_seed(spec.seed, index),
        )

    return ordered_map(simulate_one, range(len(spec.constituents)), n_workers)


def simulate_etf(spec: EtfSpec, n_workers: Optional[int] = None) -> TimeSeries:
    """
    Simulate an ETF's NAV path.

    Parameters
    ----------
    spec : EtfSpec
        ETF definition
    n_workers : int, optional
        Threads to spread constituents over; the result does not depend
        on it

    Returns
    -------
    TimeSeries
        NAV path of ``simulation_days`` points, starting at 1.0, on the
        first constituent's timestamps
    """
    paths = simulate_constituents(spec, n_workers)

    logger.debug(
        f"Aggregating NAV over {len(paths)} constituents x {spec.simulation_days} points"
    )

    nav = np.zeros(spec.simulation_days)
    for c, path in zip(spec.constituents, paths):
        nav += (c.weight / c.initial_price) * path.prices

    return TimeSeries(timestamps=paths[0].timestamps, prices=nav)
