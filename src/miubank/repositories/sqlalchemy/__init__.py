"""SQLAlchemy repository implementations."""

from miubank.repositories.sqlalchemy.database import (
    Base,
    create_db_engine,
    create_engine_from_settings,
    create_session_factory,
    init_db,
)
from miubank.repositories.sqlalchemy.account_repo import (
    SqlAlchemyUserRepository,
    SqlAlchemyAccountRepository,
)
from miubank.repositories.sqlalchemy.asset_repo import (
    SqlAlchemyAssetRepository,
    SqlAlchemyInvestmentRepository,
)
from miubank.repositories.sqlalchemy.movement_repo import SqlAlchemyMovementRepository
from miubank.repositories.sqlalchemy.ledger_store import LedgerSession, SqlAlchemyLedgerStore

__all__ = [
    "Base",
    "create_db_engine",
    "create_engine_from_settings",
    "create_session_factory",
    "init_db",
    "SqlAlchemyUserRepository",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyAssetRepository",
    "SqlAlchemyInvestmentRepository",
    "SqlAlchemyMovementRepository",
    "LedgerSession",
    "SqlAlchemyLedgerStore",
]
