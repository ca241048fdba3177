"""User and account repository protocols."""

from decimal import Decimal
from typing import Protocol, Optional

from miubank.domain.models import Account, AccountType, User


class UserRepository(Protocol):
    """Interface for user data access."""

    def create(self, user: User) -> User:
        """Persist a new user."""
        ...

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieve user by ID."""
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve user by email."""
        ...

    def get_by_cpf(self, cpf: str) -> Optional[User]:
        """Retrieve user by CPF."""
        ...


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def get_by_user_and_type(
        self,
        user_id: str,
        account_type: AccountType,
        for_update: bool = False,
    ) -> Optional[Account]:
        """Retrieve a user's account of the given type, optionally row-locked."""
        ...

    def list_by_user(self, user_id: str) -> list[Account]:
        """List a user's accounts."""
        ...

    def lock(self, account_ids: list[str]) -> dict[str, Account]:
        """Row-lock accounts in ascending id order and return them by id."""
        ...

    def adjust_balance(self, account_id: str, delta: Decimal) -> Account:
        """Add delta to the balance; raises InsufficientFundsError if it would go negative."""
        ...
