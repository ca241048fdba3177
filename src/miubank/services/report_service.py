"""Read-only projections: account statements, investment history, summary and tax report."""

from datetime import date, datetime
from typing import Optional, Union

from miubank.core.exceptions import AccountNotFoundError, NotFoundError
from miubank.core.money import ZERO, to_money
from miubank.core.timezone import end_of_day, start_of_day
from miubank.domain.models import AccountType, AssetType, Movement, MovementType
from miubank.domain.views import (
    AccountStatement,
    InvestmentPosition,
    StatementLine,
    TaxBreakdown,
    TaxReport,
)
from miubank.repositories.protocols import LedgerStore
from miubank.services.market_engine import MarketEngine

DateInput = Union[date, datetime, str]

_SELF_CREDIT_TYPES = (MovementType.DEPOSITO, MovementType.VENDA_ATIVO)


def is_debit_for(movement: Movement, account_id: str) -> bool:
    """Whether a movement reduces the given account's balance."""
    if movement.is_self_referencing:
        return movement.movement_type not in _SELF_CREDIT_TYPES
    return movement.from_account_id == account_id


def _statement_lines(movements: list[Movement], account_id: str) -> list[StatementLine]:
    return [
        StatementLine(
            date=m.created_at,
            movement_type=m.movement_type,
            description=m.description or m.movement_type.value,
            amount=m.amount,
            is_debit=is_debit_for(m, account_id),
            movement_id=m.movement_id,
        )
        for m in movements
    ]


class ReportService:
    """
    Builds statements and reports from the ledger.

    Nothing here writes to the store. Positions are valued at the latest
    persisted asset prices.
    """

    def __init__(self, store: LedgerStore, market: Optional[MarketEngine] = None):
        self._store = store
        self._market = market

    def get_account_statement(
        self,
        user_id: str,
        account_type: AccountType,
        start_date: Optional[DateInput] = None,
        end_date: Optional[DateInput] = None,
        movement_types: Optional[list[MovementType]] = None,
    ) -> AccountStatement:
        """
        Get the signed movement history of one of the user's accounts.

        A date-only end_date includes that whole day. movement_types, when
        given, keeps only movements of those types.
        """
        account_type = AccountType(account_type)
        start = start_of_day(start_date) if start_date is not None else None
        end = end_of_day(end_date) if end_date is not None else None
        types = [MovementType(t) for t in movement_types] if movement_types else None

        with self._store.transaction() as ledger:
            account = ledger.accounts.get_by_user_and_type(user_id, account_type)
            if account is None:
                raise AccountNotFoundError(user_id, account_type.value)
            movements = ledger.movements.list_by_account(
                account.account_id,
                start_date=start,
                end_date=end,
                movement_types=types,
            )

        return AccountStatement(
            account_id=account.account_id,
            account_type=account.account_type,
            current_balance=account.balance,
            lines=_statement_lines(movements, account.account_id),
            start_date=start,
            end_date=end,
        )

    def get_investment_summary(self, user_id: str) -> list[InvestmentPosition]:
        """List the user's open investments valued at current prices."""
        if self._market is not None:
            self._market.sync_prices()

        with self._store.transaction() as ledger:
            investments = ledger.investments.list_by_user(user_id, include_sold=False)
            assets = {a.asset_id: a for a in ledger.assets.list_all()}

        positions = []
        for inv in investments:
            asset = assets[inv.asset_id]
            current_value = to_money(inv.quantity * asset.current_price)
            cost = to_money(inv.quantity * inv.purchase_price)
            positions.append(
                InvestmentPosition(
                    investment_id=inv.investment_id,
                    asset_id=asset.asset_id,
                    asset_label=asset.label,
                    asset_name=asset.name,
                    asset_type=asset.asset_type,
                    quantity=inv.quantity,
                    purchase_price=inv.purchase_price,
                    current_price=asset.current_price,
                    purchase_date=inv.purchase_date,
                    current_value=current_value,
                    profit_or_loss=current_value - cost,
                    tax_paid=inv.tax_paid,
                )
            )
        return positions

    def get_investment_history(self, user_id: str, investment_id: str) -> list[StatementLine]:
        """
        List the purchase and sale movements of one investment.

        Lines are signed from the owner's INVESTIMENTO account: the purchase
        is a debit and each sale is a credit.
        """
        with self._store.transaction() as ledger:
            investment = ledger.investments.get_by_id(investment_id)
            if investment is None or investment.user_id != user_id:
                raise NotFoundError("Investment", investment_id)
            account = ledger.accounts.get_by_user_and_type(user_id, AccountType.INVESTIMENTO)
            if account is None:
                raise AccountNotFoundError(user_id, AccountType.INVESTIMENTO.value)
            movements = ledger.movements.list_by_investment(investment_id)

        return _statement_lines(movements, account.account_id)

    def get_tax_report(self, user_id: str) -> TaxReport:
        """Sum realized profit (net of tax) and tax paid, per asset type."""
        with self._store.transaction() as ledger:
            investments = ledger.investments.list_by_user(user_id)
            assets = {a.asset_id: a for a in ledger.assets.list_all()}

        breakdowns: dict[AssetType, TaxBreakdown] = {}
        for inv in investments:
            asset_type = assets[inv.asset_id].asset_type
            entry = breakdowns.setdefault(asset_type, TaxBreakdown(asset_type=asset_type))
            entry.realized_profit += inv.profit
            entry.tax_paid += inv.tax_paid
            if inv.is_sold:
                entry.closed_positions += 1

        by_type = [breakdowns[t] for t in AssetType if t in breakdowns]
        return TaxReport(
            user_id=user_id,
            total_realized_profit=sum((b.realized_profit for b in by_type), ZERO),
            total_tax_paid=sum((b.tax_paid for b in by_type), ZERO),
            by_asset_type=by_type,
        )
