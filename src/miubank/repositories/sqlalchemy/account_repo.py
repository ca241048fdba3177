"""SQLAlchemy implementations of UserRepository and AccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from miubank.core.exceptions import InsufficientFundsError, NotFoundError
from miubank.core.money import to_money
from miubank.core.timezone import to_brt
from miubank.domain.models import Account, AccountType, User
from miubank.repositories.sqlalchemy.orm_models import AccountORM, UserORM


class SqlAlchemyUserRepository:
    """SQLAlchemy-backed user repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, user: User) -> User:
        """Persist a new user."""
        orm_user = UserORM(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            password_hash=user.password_hash,
            cpf=user.cpf,
            birth_date=user.birth_date,
            created_at=user.created_at,
        )
        self._db.add(orm_user)
        self._db.flush()
        return self._to_domain(orm_user)

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieve user by ID."""
        orm_user = self._db.query(UserORM).filter(UserORM.user_id == user_id).first()
        return self._to_domain(orm_user) if orm_user else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve user by email."""
        orm_user = self._db.query(UserORM).filter(UserORM.email == email).first()
        return self._to_domain(orm_user) if orm_user else None

    def get_by_cpf(self, cpf: str) -> Optional[User]:
        """Retrieve user by CPF."""
        orm_user = self._db.query(UserORM).filter(UserORM.cpf == cpf).first()
        return self._to_domain(orm_user) if orm_user else None

    @staticmethod
    def _to_domain(orm: UserORM) -> User:
        """Convert ORM model to domain model."""
        return User(
            user_id=orm.user_id,
            name=orm.name,
            email=orm.email,
            password_hash=orm.password_hash,
            cpf=orm.cpf,
            birth_date=orm.birth_date,
            created_at=to_brt(orm.created_at) if orm.created_at else None,
        )


class SqlAlchemyAccountRepository:
    """
    SQLAlchemy-backed account repository.

    Balance changes go through adjust_balance, which reads the row under a
    lock before writing. Callers that touch more than one account lock them
    up front with lock() so every operation acquires rows in the same order.
    """

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        orm_account = AccountORM(
            account_id=account.account_id,
            user_id=account.user_id,
            account_type=account.account_type,
            balance=account.balance,
            created_at=account.created_at,
        )
        self._db.add(orm_account)
        self._db.flush()
        return self._to_domain(orm_account)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).first()
        return self._to_domain(orm_account) if orm_account else None

    def get_by_user_and_type(
        self,
        user_id: str,
        account_type: AccountType,
        for_update: bool = False,
    ) -> Optional[Account]:
        """Retrieve a user's account of the given type, optionally row-locked."""
        query = self._db.query(AccountORM).filter(
            AccountORM.user_id == user_id,
            AccountORM.account_type == account_type,
        )
        if for_update:
            query = query.with_for_update().populate_existing()
        orm_account = query.first()
        return self._to_domain(orm_account) if orm_account else None

    def list_by_user(self, user_id: str) -> list[Account]:
        """List a user's accounts."""
        orm_accounts = (
            self._db.query(AccountORM)
            .filter(AccountORM.user_id == user_id)
            .order_by(AccountORM.account_type)
            .all()
        )
        return [self._to_domain(a) for a in orm_accounts]

    def lock(self, account_ids: list[str]) -> dict[str, Account]:
        """Row-lock accounts in ascending id order and return them by id."""
        locked = {}
        for account_id in sorted(set(account_ids)):
            orm_account = self._locked_row(account_id)
            locked[account_id] = self._to_domain(orm_account)
        return locked

    def adjust_balance(self, account_id: str, delta: Decimal) -> Account:
        """Add delta to the balance; raises InsufficientFundsError if it would go negative."""
        orm_account = self._locked_row(account_id)
        current = to_money(orm_account.balance)
        new_balance = to_money(current + delta)
        if new_balance < 0:
            raise InsufficientFundsError(str(to_money(-delta)), str(current))
        orm_account.balance = new_balance
        self._db.flush()
        return self._to_domain(orm_account)

    def _locked_row(self, account_id: str) -> AccountORM:
        orm_account = (
            self._db.query(AccountORM)
            .filter(AccountORM.account_id == account_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if orm_account is None:
            raise NotFoundError("Account", account_id)
        return orm_account

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            user_id=orm.user_id,
            account_type=orm.account_type,
            balance=to_money(orm.balance),
            created_at=to_brt(orm.created_at) if orm.created_at else None,
        )
