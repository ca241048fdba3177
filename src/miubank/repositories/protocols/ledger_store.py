"""Ledger store protocol: one atomic unit of work per business operation."""

from typing import ContextManager, Protocol

from miubank.repositories.protocols.account_repo import UserRepository, AccountRepository
from miubank.repositories.protocols.asset_repo import AssetRepository, InvestmentRepository
from miubank.repositories.protocols.movement_repo import MovementRepository


class LedgerSession(Protocol):
    """Repositories bound to one open transaction."""

    users: UserRepository
    accounts: AccountRepository
    assets: AssetRepository
    investments: InvestmentRepository
    movements: MovementRepository


class LedgerStore(Protocol):
    """
    Transactional store for accounts, assets, investments and movements.

    Everything written through the yielded session commits together or not
    at all.
    """

    def transaction(self) -> ContextManager[LedgerSession]:
        """Open a transaction; commit on clean exit, roll back on any error."""
        ...
