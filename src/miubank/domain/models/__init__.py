"""Domain models package."""

from miubank.domain.models.enums import AccountType, MovementType, AssetType, RateType
from miubank.domain.models.account import User, Account
from miubank.domain.models.asset import Asset
from miubank.domain.models.investment import Investment, Movement

__all__ = [
    "AccountType",
    "MovementType",
    "AssetType",
    "RateType",
    "User",
    "Account",
    "Asset",
    "Investment",
    "Movement",
]
