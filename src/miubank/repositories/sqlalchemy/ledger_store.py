"""Transactional unit of work over the SQLAlchemy repositories."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from miubank.core.exceptions import StorageError
from miubank.repositories.sqlalchemy.account_repo import (
    SqlAlchemyAccountRepository,
    SqlAlchemyUserRepository,
)
from miubank.repositories.sqlalchemy.asset_repo import (
    SqlAlchemyAssetRepository,
    SqlAlchemyInvestmentRepository,
)
from miubank.repositories.sqlalchemy.movement_repo import SqlAlchemyMovementRepository

logger = logging.getLogger(__name__)


class LedgerSession:
    """Repositories sharing one database session (and therefore one transaction)."""

    def __init__(self, db: Session):
        self.db = db
        self.users = SqlAlchemyUserRepository(db)
        self.accounts = SqlAlchemyAccountRepository(db)
        self.assets = SqlAlchemyAssetRepository(db)
        self.investments = SqlAlchemyInvestmentRepository(db)
        self.movements = SqlAlchemyMovementRepository(db)


class SqlAlchemyLedgerStore:
    """
    SQLAlchemy-backed ledger store.

    Repositories only flush; the commit happens here once the whole
    operation has succeeded. Any exception rolls back every write made in
    the block. Driver and constraint failures surface as StorageError.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def transaction(self) -> Iterator[LedgerSession]:
        """Open a transaction; commit on clean exit, roll back on any error."""
        db = self._session_factory()
        try:
            yield LedgerSession(db)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(f"Storage failure, transaction rolled back: {exc}")
            raise StorageError(f"Storage failure: {exc}") from exc
        except BaseException:
            db.rollback()
            raise
        finally:
            db.close()
