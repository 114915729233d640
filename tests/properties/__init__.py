"""
Property-based testing using Hypothesis.

This package contains property tests that verify invariants hold across
randomly generated inputs.

Modules:
    test_option_properties: Black-Scholes invariants (bounds, parity, monotonicity)
    test_path_properties: GBM, futures and ETF path invariants
    test_mc_properties: Monte Carlo bounds, pathwise parity, worker invariance
"""
