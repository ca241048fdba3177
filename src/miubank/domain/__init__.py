"""Domain layer - pure business models with no external dependencies."""

from miubank.domain.models import (
    User,
    Account,
    Asset,
    Investment,
    Movement,
    AccountType,
    MovementType,
    AssetType,
    RateType,
)
from miubank.domain.policies import (
    VariationBand,
    PriceWalkPolicy,
    AccrualPolicy,
    FeePolicy,
)

__all__ = [
    "User",
    "Account",
    "Asset",
    "Investment",
    "Movement",
    "AccountType",
    "MovementType",
    "AssetType",
    "RateType",
    "VariationBand",
    "PriceWalkPolicy",
    "AccrualPolicy",
    "FeePolicy",
]
