"""Repository protocol definitions (interfaces)."""

from miubank.repositories.protocols.account_repo import UserRepository, AccountRepository
from miubank.repositories.protocols.asset_repo import AssetRepository, InvestmentRepository
from miubank.repositories.protocols.movement_repo import MovementRepository
from miubank.repositories.protocols.ledger_store import LedgerSession, LedgerStore

__all__ = [
    "UserRepository",
    "AccountRepository",
    "AssetRepository",
    "InvestmentRepository",
    "MovementRepository",
    "LedgerSession",
    "LedgerStore",
]
