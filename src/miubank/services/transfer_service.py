"""Transfer service: deposits, withdrawals, internal and external transfers."""

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from miubank.core.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    PendingInvestmentsError,
    RecipientNotFoundError,
    ValidationError,
)
from miubank.core.money import Number, to_money
from miubank.core.timezone import now_brt
from miubank.domain.models import Account, AccountType, Movement, MovementType
from miubank.domain.policies import FeePolicy
from miubank.domain.views import ExternalTransferResult, InternalTransferResult
from miubank.repositories.protocols import LedgerSession, LedgerStore

logger = logging.getLogger(__name__)


class TransferService:
    """
    Moves money into, out of and between accounts.

    Every operation is one ledger transaction: rule checks run first, then
    balances change and movements are appended together. A failure at any
    point leaves balances and movements untouched.
    """

    def __init__(
        self,
        store: LedgerStore,
        fee_policy: Optional[FeePolicy] = None,
        clock: Callable[[], datetime] = now_brt,
    ):
        self._store = store
        self._fees = fee_policy or FeePolicy()
        self._clock = clock

    def deposit(self, user_id: str, amount: Number) -> Account:
        """Credit the user's CORRENTE account."""
        value = self._positive_amount(amount)

        with self._store.transaction() as ledger:
            account = self._require_account(ledger, user_id, AccountType.CORRENTE)
            updated = ledger.accounts.adjust_balance(account.account_id, value)
            ledger.movements.append(
                self._movement(
                    account.account_id,
                    account.account_id,
                    value,
                    MovementType.DEPOSITO,
                    "Deposit",
                )
            )

        logger.info(f"Deposit of {value} into account {updated.account_id}")
        return updated

    def withdraw(self, user_id: str, amount: Number) -> Account:
        """Debit the user's CORRENTE account."""
        value = self._positive_amount(amount)

        with self._store.transaction() as ledger:
            account = self._require_account(ledger, user_id, AccountType.CORRENTE, for_update=True)
            if account.balance < value:
                raise InsufficientFundsError(str(value), str(account.balance))

            updated = ledger.accounts.adjust_balance(account.account_id, -value)
            ledger.movements.append(
                self._movement(
                    account.account_id,
                    account.account_id,
                    value,
                    MovementType.SAQUE,
                    "Withdrawal",
                )
            )

        logger.info(f"Withdrawal of {value} from account {updated.account_id}")
        return updated

    def transfer_internal(
        self,
        user_id: str,
        amount: Number,
        from_type: AccountType,
        to_type: AccountType,
    ) -> InternalTransferResult:
        """
        Move money between the user's own accounts.

        Money cannot leave INVESTIMENTO while the user holds any unsold
        investment.
        """
        from_type = AccountType(from_type)
        to_type = AccountType(to_type)
        if from_type == to_type:
            raise ValidationError("Source and destination accounts must differ")
        value = self._positive_amount(amount)

        with self._store.transaction() as ledger:
            source = self._require_account(ledger, user_id, from_type)
            destination = self._require_account(ledger, user_id, to_type)
            locked = ledger.accounts.lock([source.account_id, destination.account_id])
            source = locked[source.account_id]

            if source.balance < value:
                raise InsufficientFundsError(str(value), str(source.balance))
            if from_type == AccountType.INVESTIMENTO:
                open_positions = ledger.investments.count_open(user_id)
                if open_positions > 0:
                    raise PendingInvestmentsError(open_positions)

            source = ledger.accounts.adjust_balance(source.account_id, -value)
            destination = ledger.accounts.adjust_balance(destination.account_id, value)
            movement = ledger.movements.append(
                self._movement(
                    source.account_id,
                    destination.account_id,
                    value,
                    MovementType.TRANSFERENCIA_INTERNA,
                    f"Transfer from {from_type.value} to {to_type.value}",
                )
            )

        logger.info(
            f"Internal transfer of {value} from {source.account_id} to {destination.account_id}"
        )
        return InternalTransferResult(
            from_account=source,
            to_account=destination,
            movement=movement,
        )

    def transfer_external(
        self,
        sender_user_id: str,
        recipient_cpf: str,
        amount: Number,
    ) -> ExternalTransferResult:
        """
        Send money from the sender's CORRENTE to another user's CORRENTE.

        The sender pays amount plus the external transfer fee; the recipient
        receives amount and the fee is retained by the bank. Two movements are
        written, one booked to each side.
        """
        value = self._positive_amount(amount)
        fee = to_money(value * self._fees.external_transfer_fee_rate)
        total = value + fee
        cpf = (recipient_cpf or "").strip()

        with self._store.transaction() as ledger:
            sender = self._require_account(ledger, sender_user_id, AccountType.CORRENTE)

            recipient_user = ledger.users.get_by_cpf(cpf)
            if recipient_user is None:
                raise RecipientNotFoundError(cpf)
            if recipient_user.user_id == sender_user_id:
                raise ValidationError("Cannot make an external transfer to yourself")
            recipient = ledger.accounts.get_by_user_and_type(
                recipient_user.user_id, AccountType.CORRENTE
            )
            if recipient is None:
                raise RecipientNotFoundError(cpf)

            locked = ledger.accounts.lock([sender.account_id, recipient.account_id])
            sender = locked[sender.account_id]
            if sender.balance < total:
                raise InsufficientFundsError(str(total), str(sender.balance))

            sender = ledger.accounts.adjust_balance(sender.account_id, -total)
            recipient = ledger.accounts.adjust_balance(recipient.account_id, value)

            ledger.movements.append(
                self._movement(
                    sender.account_id,
                    recipient.account_id,
                    total,
                    MovementType.TRANSFERENCIA_EXTERNA,
                    f"Transfer to {cpf} (fee {fee})",
                    booked_account_id=sender.account_id,
                )
            )
            ledger.movements.append(
                self._movement(
                    sender.account_id,
                    recipient.account_id,
                    value,
                    MovementType.TRANSFERENCIA_EXTERNA,
                    "Transfer received",
                    booked_account_id=recipient.account_id,
                )
            )

        logger.info(
            f"External transfer of {value} (fee {fee}) from {sender.account_id} "
            f"to {recipient.account_id}"
        )
        return ExternalTransferResult(
            sender_account=sender,
            recipient_account=recipient,
            amount=value,
            fee=fee,
            total_debited=total,
        )

    @staticmethod
    def _positive_amount(amount: Number) -> Decimal:
        value = to_money(amount)
        if value <= 0:
            raise ValidationError("Amount must be greater than zero")
        return value

    @staticmethod
    def _require_account(
        ledger: LedgerSession,
        user_id: str,
        account_type: AccountType,
        for_update: bool = False,
    ) -> Account:
        account = ledger.accounts.get_by_user_and_type(user_id, account_type, for_update=for_update)
        if account is None:
            raise AccountNotFoundError(user_id, account_type.value)
        return account

    def _movement(
        self,
        from_account_id: str,
        to_account_id: str,
        amount: Decimal,
        movement_type: MovementType,
        description: str,
        booked_account_id: Optional[str] = None,
    ) -> Movement:
        return Movement(
            movement_id=str(uuid.uuid4()),
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
            movement_type=movement_type,
            description=description,
            booked_account_id=booked_account_id,
            created_at=self._clock(),
        )
