"""User registration and lookup."""

import logging
import re
import uuid
from datetime import date, datetime
from typing import Callable, Optional, Union

from miubank.core.exceptions import ConflictError, NotFoundError, ValidationError
from miubank.core.timezone import now_brt, parse_datetime_brt
from miubank.domain.models import Account, AccountType, User
from miubank.repositories.protocols import LedgerStore

logger = logging.getLogger(__name__)

CPF_PATTERN = re.compile(r"^\d{3}\.\d{3}\.\d{3}-\d{2}$")


class UserService:
    """
    Registers users and answers user and account lookups.

    Credentials are handled by the authentication layer; this service only
    stores the password hash it is given.
    """

    def __init__(self, store: LedgerStore, clock: Callable[[], datetime] = now_brt):
        self._store = store
        self._clock = clock

    def register(
        self,
        name: str,
        email: str,
        password_hash: str,
        cpf: str,
        birth_date: Optional[Union[date, str]] = None,
    ) -> User:
        """
        Create a user with a CORRENTE and an INVESTIMENTO account, both empty.

        Args:
            name: Full name
            email: Unique e-mail address
            password_hash: Hash produced by the authentication layer
            cpf: Unique CPF formatted as NNN.NNN.NNN-NN
            birth_date: Optional date or ISO date string

        Returns:
            Created User instance
        """
        name = (name or "").strip()
        email = (email or "").strip().lower()
        cpf = (cpf or "").strip()
        if not name:
            raise ValidationError("Name is required")
        if not email:
            raise ValidationError("Email is required")
        if not password_hash:
            raise ValidationError("Password hash is required")
        if not CPF_PATTERN.match(cpf):
            raise ValidationError(f"Invalid CPF format: {cpf!r} (expected NNN.NNN.NNN-NN)")
        if isinstance(birth_date, str):
            birth_date = parse_datetime_brt(birth_date).date()

        now = self._clock()
        with self._store.transaction() as ledger:
            if ledger.users.get_by_email(email):
                raise ConflictError(f"Email already registered: {email}")
            if ledger.users.get_by_cpf(cpf):
                raise ConflictError(f"CPF already registered: {cpf}")

            user = ledger.users.create(
                User(
                    user_id=str(uuid.uuid4()),
                    name=name,
                    email=email,
                    password_hash=password_hash,
                    cpf=cpf,
                    birth_date=birth_date,
                    created_at=now,
                )
            )
            for account_type in (AccountType.CORRENTE, AccountType.INVESTIMENTO):
                ledger.accounts.create(
                    Account(
                        account_id=str(uuid.uuid4()),
                        user_id=user.user_id,
                        account_type=account_type,
                        created_at=now,
                    )
                )

        logger.info(f"Registered user {user.user_id}")
        return user

    def get_user(self, user_id: str) -> User:
        """Get user by ID."""
        with self._store.transaction() as ledger:
            user = ledger.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    def get_user_by_cpf(self, cpf: str) -> User:
        """Get user by CPF."""
        with self._store.transaction() as ledger:
            user = ledger.users.get_by_cpf(cpf.strip())
        if not user:
            raise NotFoundError("User", cpf)
        return user

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._store.transaction() as ledger:
            return ledger.users.get_by_email(email.strip().lower())

    def list_accounts(self, user_id: str) -> list[Account]:
        """List the user's accounts."""
        with self._store.transaction() as ledger:
            return ledger.accounts.list_by_user(user_id)
