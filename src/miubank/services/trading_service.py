"""Trading service: buying and selling assets against the investment account."""

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from miubank.core.exceptions import (
    AccountNotFoundError,
    AlreadySoldError,
    InsufficientFundsError,
    InvalidQuantityError,
    NotFoundError,
    ValidationError,
)
from miubank.core.money import Number, ZERO, to_money, to_quantity
from miubank.core.timezone import now_brt
from miubank.domain.models import Account, AccountType, Investment, Movement, MovementType
from miubank.domain.policies import FeePolicy
from miubank.domain.views import PurchaseResult, SaleResult
from miubank.repositories.protocols import LedgerSession, LedgerStore
from miubank.services.market_engine import MarketEngine

logger = logging.getLogger(__name__)


class TradingService:
    """
    Buys and sells assets with money from the user's INVESTIMENTO account.

    Each investment is a single lot: partial sells shrink it in place and
    are always priced against the original purchase_price.
    """

    def __init__(
        self,
        store: LedgerStore,
        market: MarketEngine,
        fee_policy: Optional[FeePolicy] = None,
        clock: Callable[[], datetime] = now_brt,
    ):
        self._store = store
        self._market = market
        self._fees = fee_policy or FeePolicy()
        self._clock = clock

    def buy_asset(self, user_id: str, asset_id: str, quantity: Number) -> PurchaseResult:
        """
        Buy quantity units of an asset at its current price.

        Stock purchases pay the brokerage fee on top of the subtotal.

        Returns:
            PurchaseResult with the new investment, the debited account, the
            fee and the total cost
        """
        qty = to_quantity(quantity)
        if qty <= 0:
            raise ValidationError("Quantity must be greater than zero")

        self._market.sync_prices()

        with self._store.transaction() as ledger:
            asset = ledger.assets.get_by_id(asset_id)
            if asset is None:
                raise NotFoundError("Asset", asset_id)

            price = asset.current_price
            subtotal = to_money(price * qty)
            if subtotal <= 0:
                raise ValidationError("Purchase value must be at least 0.01")
            fee = to_money(subtotal * self._fees.brokerage_rate_for(asset.asset_type))
            total = subtotal + fee

            account = self._require_account(ledger, user_id)
            if account.balance < total:
                raise InsufficientFundsError(str(total), str(account.balance))

            now = self._clock()
            account = ledger.accounts.adjust_balance(account.account_id, -total)
            investment = ledger.investments.create(
                Investment(
                    investment_id=str(uuid.uuid4()),
                    user_id=user_id,
                    asset_id=asset.asset_id,
                    quantity=qty,
                    purchase_price=price,
                    purchase_date=now,
                )
            )
            ledger.movements.append(
                Movement(
                    movement_id=str(uuid.uuid4()),
                    from_account_id=account.account_id,
                    to_account_id=account.account_id,
                    amount=total,
                    movement_type=MovementType.COMPRA_ATIVO,
                    description=f"Purchase of {qty} {asset.label} at {price}",
                    investment_id=investment.investment_id,
                    created_at=now,
                )
            )

        logger.info(
            f"User {user_id} bought {qty} {asset.label} at {price} "
            f"(fee {fee}, total {total})"
        )
        return PurchaseResult(
            investment=investment,
            account=account,
            unit_price=price,
            brokerage_fee=fee,
            total_cost=total,
        )

    def sell_asset(
        self,
        user_id: str,
        investment_id: str,
        quantity: Optional[Number] = None,
    ) -> SaleResult:
        """
        Sell all or part of an investment at the asset's current price.

        Tax is charged on positive gross profit and withheld from the
        proceeds. The investment's profit and tax_paid accumulate across
        sells.

        Args:
            user_id: Owner of the investment
            investment_id: Investment to sell
            quantity: Units to sell; defaults to the whole remaining quantity

        Returns:
            SaleResult with this call's gross figures, tax and net profit
        """
        self._market.sync_prices()

        with self._store.transaction() as ledger:
            investment = ledger.investments.get_by_id(investment_id, for_update=True)
            if investment is None or investment.user_id != user_id:
                raise NotFoundError("Investment", investment_id)
            if investment.is_sold:
                raise AlreadySoldError(investment_id)

            remaining = investment.quantity
            qty = remaining if quantity is None else to_quantity(quantity)
            if qty <= 0 or qty > remaining:
                raise InvalidQuantityError(str(qty), str(remaining))

            asset = ledger.assets.get_by_id(investment.asset_id)
            if asset is None:
                raise NotFoundError("Asset", investment.asset_id)
            account = self._require_account(ledger, user_id)

            price = asset.current_price
            gross_revenue = to_money(qty * price)
            original_cost = to_money(qty * investment.purchase_price)
            gross_profit = gross_revenue - original_cost
            tax = to_money(gross_profit * self._fees.tax_rate_for(asset.asset_type, gross_profit))
            net_revenue = gross_revenue - tax
            realized = gross_profit - tax

            now = self._clock()
            if net_revenue > 0:
                account = ledger.accounts.adjust_balance(account.account_id, net_revenue)

            fully_sold = qty == remaining
            investment = ledger.investments.update(
                replace(
                    investment,
                    quantity=ZERO if fully_sold else remaining - qty,
                    is_sold=fully_sold,
                    sale_price=price if fully_sold else investment.sale_price,
                    sale_date=now if fully_sold else investment.sale_date,
                    profit=investment.profit + realized,
                    tax_paid=investment.tax_paid + tax,
                )
            )

            if net_revenue > 0:
                ledger.movements.append(
                    Movement(
                        movement_id=str(uuid.uuid4()),
                        from_account_id=account.account_id,
                        to_account_id=account.account_id,
                        amount=net_revenue,
                        movement_type=MovementType.VENDA_ATIVO,
                        description=f"Sale of {qty} {asset.label} at {price} (tax {tax})",
                        investment_id=investment.investment_id,
                        created_at=now,
                    )
                )

        logger.info(
            f"User {user_id} sold {qty} {asset.label} at {price} "
            f"(gross {gross_revenue}, tax {tax}, net {net_revenue})"
        )
        return SaleResult(
            investment=investment,
            account=account,
            quantity_sold=qty,
            unit_price=price,
            gross_revenue=gross_revenue,
            gross_profit=gross_profit,
            tax_paid=tax,
            net_revenue=net_revenue,
            profit=realized,
        )

    @staticmethod
    def _require_account(ledger: LedgerSession, user_id: str) -> Account:
        account = ledger.accounts.get_by_user_and_type(
            user_id, AccountType.INVESTIMENTO, for_update=True
        )
        if account is None:
            raise AccountNotFoundError(user_id, AccountType.INVESTIMENTO.value)
        return account
