"""User and Account domain models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from miubank.domain.models.enums import AccountType


@dataclass
class User:
    """
    Platform customer.

    Owns exactly two accounts (CORRENTE and INVESTIMENTO). The password hash
    is produced by the authentication layer and stored opaquely.
    """

    user_id: str
    name: str
    email: str
    password_hash: str
    cpf: str
    birth_date: Optional[date] = None
    created_at: Optional[datetime] = field(default=None)


@dataclass
class Account:
    """
    Money container belonging to one user.

    Balance is never negative after a committed operation and is only
    mutated by transfer and trading operations.
    """

    account_id: str
    user_id: str
    account_type: AccountType
    balance: Decimal = field(default_factory=lambda: Decimal("0"))
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.account_type, str):
            self.account_type = AccountType(self.account_type)
