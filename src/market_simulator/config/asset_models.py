"""
Per-asset model parameters, looked up by asset identifier.

The defaults mirror the shipped configuration example: a generic stock and
two volatility profiles. Every entry uses Geometric Brownian Motion.
"""

from dataclasses import dataclass
from enum import Enum

from market_simulator.errors import InvalidInputError
from market_simulator.simulation.gbm import GBMParams


class ModelType(Enum):
    """Stochastic model enumeration."""

    GBM = "GeometricBrownianMotion"


@dataclass(frozen=True)
class AssetModel:
    """
    Configured model for one asset identifier.

    Attributes
    ----------
    asset_type : str
        General category (e.g. "stock")
    identifier : str
        Lookup key, a symbol or a category name
    model : ModelType
        Stochastic model used for the asset
    drift : float
        Annualized drift
    volatility : float
        Annualized volatility
    """

    asset_type: str
    identifier: str
    model: ModelType
    drift: float
    volatility: float

    def __post_init__(self) -> None:
        """Validate model parameters."""
        if not self.identifier:
            raise InvalidInputError("CRITICAL: identifier must be non-empty")
        if self.volatility < 0:
            raise InvalidInputError(
                f"CRITICAL: volatility must be >= 0 for {self.identifier}, got {self.volatility}"
            )

    def gbm_params(self) -> GBMParams:
        """GBM dynamics for this asset."""
        return GBMParams(drift=self.drift, volatility=self.volatility)


DEFAULT_ASSET_MODELS: tuple[AssetModel, ...] = (
    AssetModel("stock", "DEFAULT_STOCK", ModelType.GBM, drift=0.05, volatility=0.20),
    AssetModel("stock", "TECH_STOCK_HIGH_VOL", ModelType.GBM, drift=0.08, volatility=0.40),
    AssetModel("stock", "STABLE_STOCK_LOW_VOL", ModelType.GBM, drift=0.03, volatility=0.10),
)

ASSET_MODEL_REGISTRY: dict[str, AssetModel] = {
    model.identifier: model for model in DEFAULT_ASSET_MODELS
}


def get_asset_model(identifier: str) -> AssetModel:
    """
    Get configured asset model by identifier.

    Parameters
    ----------
    identifier : str
        Asset identifier (see ASSET_MODEL_REGISTRY keys)

    Returns
    -------
    AssetModel
        Configured model parameters

    Raises
    ------
    KeyError
        If identifier not found
    """
    if identifier not in ASSET_MODEL_REGISTRY:
        available = ", ".join(sorted(ASSET_MODEL_REGISTRY.keys()))
        raise KeyError(f"Unknown asset '{identifier}'. Available: {available}")
    return ASSET_MODEL_REGISTRY[identifier]
