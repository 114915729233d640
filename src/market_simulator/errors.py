"""
Error types for the simulation and pricing engine.

Every failure in this package is a deterministic consequence of its input,
so there is a single category: the input was invalid. Nothing is retryable.
"""


class InvalidInputError(ValueError):
    """Raised when simulation or pricing inputs are invalid."""

    pass
