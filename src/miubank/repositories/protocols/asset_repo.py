"""Asset and investment repository protocols."""

from datetime import datetime
from decimal import Decimal
from typing import Protocol, Optional

from miubank.domain.models import Asset, Investment


class AssetRepository(Protocol):
    """Interface for asset data access."""

    def create(self, asset: Asset) -> Asset:
        """Persist a new asset."""
        ...

    def get_by_id(self, asset_id: str) -> Optional[Asset]:
        """Retrieve asset by ID."""
        ...

    def get_by_symbol(self, symbol: str) -> Optional[Asset]:
        """Retrieve asset by symbol."""
        ...

    def list_all(self, for_update: bool = False) -> list[Asset]:
        """List all assets, optionally row-locked."""
        ...

    def update_price(self, asset_id: str, price: Decimal, as_of: datetime) -> Asset:
        """Set current price and last update time."""
        ...


class InvestmentRepository(Protocol):
    """Interface for investment (position) data access."""

    def create(self, investment: Investment) -> Investment:
        """Persist a new investment."""
        ...

    def get_by_id(self, investment_id: str, for_update: bool = False) -> Optional[Investment]:
        """Retrieve investment by ID, optionally row-locked."""
        ...

    def update(self, investment: Investment) -> Investment:
        """Update quantity, sale and accumulated profit/tax fields."""
        ...

    def list_by_user(self, user_id: str, include_sold: bool = True) -> list[Investment]:
        """List a user's investments ordered by purchase date."""
        ...

    def count_open(self, user_id: str) -> int:
        """Count the user's investments that are not fully sold."""
        ...
