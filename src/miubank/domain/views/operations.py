"""Result views returned by money-moving operations."""

from dataclasses import dataclass
from decimal import Decimal

from miubank.domain.models import Account, Investment, Movement


@dataclass
class InternalTransferResult:
    """Both accounts after an internal transfer, plus its ledger entry."""

    from_account: Account
    to_account: Account
    movement: Movement


@dataclass
class ExternalTransferResult:
    """Sender and recipient checking accounts after an external transfer."""

    sender_account: Account
    recipient_account: Account
    amount: Decimal
    fee: Decimal
    total_debited: Decimal


@dataclass
class PurchaseResult:
    """Outcome of an asset purchase."""

    investment: Investment
    account: Account
    unit_price: Decimal
    brokerage_fee: Decimal
    total_cost: Decimal


@dataclass
class SaleResult:
    """
    Outcome of a single sell call.

    tax_paid and profit refer to this call only, not the investment's
    cumulative totals. profit is net of tax.
    """

    investment: Investment
    account: Account
    quantity_sold: Decimal
    unit_price: Decimal
    gross_revenue: Decimal
    gross_profit: Decimal
    tax_paid: Decimal
    net_revenue: Decimal
    profit: Decimal
