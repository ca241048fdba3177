"""Asset domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from miubank.domain.models.enums import AssetType, RateType


@dataclass
class Asset:
    """
    Tradeable instrument in the simulated market.

    - STOCK: identified by symbol, price follows a random walk
    - CDB/TREASURY: fixed income, price accrues daily from the annual rate
    current_price and last_update are written only by the market engine.
    """

    asset_id: str
    name: str
    asset_type: AssetType
    current_price: Decimal
    last_update: Optional[datetime] = None
    symbol: Optional[str] = None
    rate: Optional[Decimal] = None
    rate_type: Optional[RateType] = None
    maturity: Optional[date] = None
    minimum_investment: Optional[Decimal] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.asset_type, str):
            self.asset_type = AssetType(self.asset_type)
        if isinstance(self.rate_type, str):
            self.rate_type = RateType(self.rate_type)

    @property
    def label(self) -> str:
        """Symbol for stocks, name for fixed income."""
        return self.symbol or self.name
