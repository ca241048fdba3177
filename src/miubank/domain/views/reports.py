"""View models for statements and reports."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from miubank.domain.models import AccountType, AssetType, MovementType


@dataclass
class StatementLine:
    """Single signed entry in an account statement."""

    date: datetime
    movement_type: MovementType
    description: str
    amount: Decimal
    is_debit: bool
    movement_id: Optional[str] = None

    @property
    def signed_amount(self) -> Decimal:
        return -self.amount if self.is_debit else self.amount


@dataclass
class AccountStatement:
    """Account statement for a period."""

    account_id: str
    account_type: AccountType
    current_balance: Decimal
    lines: list[StatementLine] = field(default_factory=list)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @property
    def total_credits(self) -> Decimal:
        return sum((line.amount for line in self.lines if not line.is_debit), Decimal("0"))

    @property
    def total_debits(self) -> Decimal:
        return sum((line.amount for line in self.lines if line.is_debit), Decimal("0"))


@dataclass
class InvestmentPosition:
    """Open investment valued at the current market price."""

    investment_id: str
    asset_id: str
    asset_label: str
    asset_name: str
    asset_type: AssetType
    quantity: Decimal
    purchase_price: Decimal
    current_price: Decimal
    purchase_date: datetime
    current_value: Decimal
    profit_or_loss: Decimal
    tax_paid: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class TaxBreakdown:
    """Realized profit and tax for one asset class."""

    asset_type: AssetType
    realized_profit: Decimal = field(default_factory=lambda: Decimal("0"))
    tax_paid: Decimal = field(default_factory=lambda: Decimal("0"))
    closed_positions: int = 0


@dataclass
class TaxReport:
    """Capital-gains summary across all of a user's investments."""

    user_id: str
    total_realized_profit: Decimal = field(default_factory=lambda: Decimal("0"))
    total_tax_paid: Decimal = field(default_factory=lambda: Decimal("0"))
    by_asset_type: list[TaxBreakdown] = field(default_factory=list)
