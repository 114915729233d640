"""
Centralized tolerances for simulation and pricing.

Tolerances are derived from precision requirements, not ad hoc tuning.

Tolerance Tiers:
    Tier 1 (Analytical): Machine-precision achievable, deterministic results
    Tier 2 (Input Validation): Bounds applied to user-supplied definitions
    Tier 3 (Stochastic): CLT-derived, Monte Carlo comparisons

References:
    [T1] Hull (2021) Ch. 15 - Options pricing precision requirements
    [T1] Glasserman (2003) Ch. 3-4 - Monte Carlo error bounds
"""

from typing import Final

import numpy as np

# =============================================================================
# Tier 1: Analytical Tolerances (Deterministic)
# =============================================================================

#: Put-call parity: C - P = S - K*exp(-rT)
#: Tolerance: sqrt(2 * machine_epsilon) * 10^4 safety factor
PUT_CALL_PARITY_TOLERANCE: Final[float] = 1e-8

#: Textbook Black-Scholes values are quoted to 4 decimal places
ANALYTIC_REFERENCE_TOLERANCE: Final[float] = 0.01

#: NAV reconstruction from constituent paths (float64 summation error)
NAV_RECONSTRUCTION_TOLERANCE: Final[float] = 1e-9


# =============================================================================
# Tier 2: Input Validation Tolerances
# =============================================================================

#: ETF constituent weights must sum to 1.0 within this bound
WEIGHT_SUM_TOLERANCE: Final[float] = 1e-6

#: Largest argument np.exp accepts without overflowing float64 (~709.78)
MAX_EXP_ARGUMENT: Final[float] = float(np.log(np.finfo(np.float64).max))


# =============================================================================
# Tier 3: Stochastic Tolerances (CLT-Derived)
# =============================================================================


def mc_tolerance(n_paths: int, payoff_std: float = 14.0, confidence: float = 3.0) -> float:
    """
    Calculate CLT-derived Monte Carlo tolerance in price units.

    [T1] Standard error of the MC estimate is std(payoff)/√N.
    3 standard errors give a 99.7% confidence interval.

    Parameters
    ----------
    n_paths : int
        Number of Monte Carlo paths
    payoff_std : float
        Estimated standard deviation of the discounted payoff. The default
        is the ATM call (S=K=100, σ=0.2, T=1) payoff dispersion.
    confidence : float
        Number of standard errors (default 3 for 99.7% CI)

    Returns
    -------
    float
        Absolute tolerance for MC vs analytical comparison

    Examples
    --------
    >>> round(mc_tolerance(20_000), 3)
    0.297
    """
    return confidence * payoff_std / np.sqrt(n_paths)


#: MC vs Black-Scholes for 20,000 paths x 100 steps (vanilla ATM)
BS_MC_CONVERGENCE_TOLERANCE: Final[float] = 0.5


# =============================================================================
# Tolerance Registry (For Dynamic Access)
# =============================================================================

TOLERANCE_REGISTRY: dict[str, float] = {
    "put_call_parity": PUT_CALL_PARITY_TOLERANCE,
    "analytic_reference": ANALYTIC_REFERENCE_TOLERANCE,
    "nav_reconstruction": NAV_RECONSTRUCTION_TOLERANCE,
    "weight_sum": WEIGHT_SUM_TOLERANCE,
    "bs_mc_convergence": BS_MC_CONVERGENCE_TOLERANCE,
}


def get_tolerance(name: str) -> float:
    """
    Get tolerance by name from registry.

    Parameters
    ----------
    name : str
        Tolerance name (see TOLERANCE_REGISTRY keys)

    Returns
    -------
    float
        Tolerance value

    Raises
    ------
    KeyError
        If tolerance name not found
    """
    if name not in TOLERANCE_REGISTRY:
        available = ", ".join(sorted(TOLERANCE_REGISTRY.keys()))
        raise KeyError(f"Unknown tolerance '{name}'. Available: {available}")
    return TOLERANCE_REGISTRY[name]
