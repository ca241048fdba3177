"""Repository layer - data access abstractions and implementations."""

from miubank.repositories.protocols import (
    UserRepository,
    AccountRepository,
    AssetRepository,
    InvestmentRepository,
    MovementRepository,
    LedgerSession,
    LedgerStore,
)

__all__ = [
    "UserRepository",
    "AccountRepository",
    "AssetRepository",
    "InvestmentRepository",
    "MovementRepository",
    "LedgerSession",
    "LedgerStore",
]
