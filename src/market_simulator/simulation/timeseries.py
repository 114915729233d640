"""
Immutable (timestamp, price) series produced by every simulator.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd

from market_simulator.errors import InvalidInputError


@dataclass(frozen=True, eq=False)
class TimeSeries:
    """
    Immutable price path.

    Attributes
    ----------
    timestamps : np.ndarray
        Observation times, dtype datetime64[s], strictly increasing by a
        fixed step
    prices : np.ndarray
        Prices at each timestamp, dtype float64

    Both arrays are made read-only on construction.
    """

    timestamps: np.ndarray
    prices: np.ndarray

    def __post_init__(self) -> None:
        """Validate and freeze arrays."""
        timestamps = np.asarray(self.timestamps, dtype="datetime64[s]")
        prices = np.asarray(self.prices, dtype=np.float64)

        if timestamps.ndim != 1 or prices.ndim != 1:
            raise InvalidInputError("CRITICAL: timestamps and prices must be 1-D")
        if len(timestamps) != len(prices):
            raise InvalidInputError(
                f"CRITICAL: timestamps and prices must have same length. "
                f"Got timestamps={len(timestamps)}, prices={len(prices)}"
            )
        if len(prices) == 0:
            raise InvalidInputError("CRITICAL: TimeSeries cannot be empty")

        # Own the buffers so freezing never touches the caller's arrays
        if timestamps is self.timestamps:
            timestamps = timestamps.copy()
        if prices is self.prices:
            prices = prices.copy()
        timestamps.flags.writeable = False
        prices.flags.writeable = False

        # Frozen dataclass workaround: use object.__setattr__
        object.__setattr__(self, "timestamps", timestamps)
        object.__setattr__(self, "prices", prices)

    def __len__(self) -> int:
        return len(self.prices)

    @property
    def initial_value(self) -> float:
        """First price of the path."""
        return float(self.prices[0])

    @property
    def final_value(self) -> float:
        """Last price of the path."""
        return float(self.prices[-1])

    @property
    def step(self) -> np.timedelta64:
        """Spacing between consecutive timestamps (zero for a single point)."""
        if len(self.timestamps) < 2:
            return np.timedelta64(0, "s")
        return self.timestamps[1] - self.timestamps[0]

    def iso_timestamps(self) -> list[str]:
        """Timestamps as ISO 8601 strings, e.g. '2024-01-01T00:00:00'."""
        return [str(ts) for ts in self.timestamps]

    def to_series(self, name: str = "price") -> pd.Series:
        """Prices as a pandas Series indexed by timestamp."""
        index = pd.DatetimeIndex(self.timestamps, name="timestamp")
        return pd.Series(np.array(self.prices), index=index, name=name)

    def to_frame(self, name: str = "price") -> pd.DataFrame:
        """Prices as a single-column pandas DataFrame indexed by timestamp."""
        return self.to_series(name).to_frame()

    def equals(self, other: "TimeSeries") -> bool:
        """Bit-identical comparison of timestamps and prices."""
        return bool(
            np.array_equal(self.timestamps, other.timestamps)
            and np.array_equal(self.prices, other.prices)
        )
