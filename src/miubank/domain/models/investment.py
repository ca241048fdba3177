"""Investment and Movement domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from miubank.domain.models.enums import MovementType


@dataclass
class Investment:
    """
    A user's position in one asset.

    Single-lot accounting: partial sells reduce quantity on the same row and
    always price against the original purchase_price. profit and tax_paid
    accumulate across sells (profit is net of tax).
    """

    investment_id: str
    user_id: str
    asset_id: str
    quantity: Decimal
    purchase_price: Decimal
    purchase_date: datetime
    is_sold: bool = False
    sale_price: Optional[Decimal] = None
    sale_date: Optional[datetime] = None
    profit: Decimal = field(default_factory=lambda: Decimal("0"))
    tax_paid: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def cost_basis(self) -> Decimal:
        return self.quantity * self.purchase_price


@dataclass
class Movement:
    """
    Immutable ledger entry (source of truth for statements).

    Deposit, withdraw, buy and sell are self-referencing
    (from_account_id == to_account_id). booked_account_id is only set on the
    one-sided entries of an external transfer and names the account whose
    statement the entry belongs to.
    """

    movement_id: str
    from_account_id: str
    to_account_id: str
    amount: Decimal
    movement_type: MovementType
    description: Optional[str] = None
    investment_id: Optional[str] = None
    booked_account_id: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.movement_type, str):
            self.movement_type = MovementType(self.movement_type)

    @property
    def is_self_referencing(self) -> bool:
        return self.from_account_id == self.to_account_id
