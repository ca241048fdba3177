"""Simulated market: asset registration, price advancement and asset reads."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

from miubank.core.exceptions import ConflictError, NotFoundError, ValidationError
from miubank.core.money import to_decimal, to_money, to_price
from miubank.core.timezone import now_brt
from miubank.domain.models import Asset, AssetType, RateType
from miubank.providers import FixedIncomeAccrualModel, PriceModel, RandomWalkPriceModel
from miubank.repositories.protocols import LedgerStore

logger = logging.getLogger(__name__)


@dataclass
class AssetCreate:
    """Input data for registering an asset."""

    name: str
    asset_type: AssetType
    current_price: Decimal
    symbol: Optional[str] = None
    rate: Optional[Decimal] = None
    rate_type: Optional[RateType] = None
    maturity: Optional[date] = None
    minimum_investment: Optional[Decimal] = None
    description: Optional[str] = None


class MarketEngine:
    """
    Owns Asset.current_price.

    Prices change only through advance_prices(). Reads return the latest
    persisted price unless advance_on_read is enabled, in which case
    sync_prices() advances the market first.
    """

    def __init__(
        self,
        store: LedgerStore,
        stock_model: Optional[PriceModel] = None,
        fixed_income_model: Optional[PriceModel] = None,
        advance_on_read: bool = False,
        clock: Callable[[], datetime] = now_brt,
    ):
        self._store = store
        self._stock_model = stock_model or RandomWalkPriceModel()
        self._fixed_income_model = fixed_income_model or FixedIncomeAccrualModel()
        self._advance_on_read = advance_on_read
        self._clock = clock

    @property
    def advance_on_read(self) -> bool:
        return self._advance_on_read

    def create_asset(self, data: AssetCreate) -> Asset:
        """
        Register a new asset.

        Args:
            data: Asset attributes. STOCK needs a symbol; CDB and TREASURY
                need rate and rate_type.

        Returns:
            Created Asset instance
        """
        asset_type = AssetType(data.asset_type)
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Asset name is required")

        price = to_price(data.current_price)
        if price <= 0:
            raise ValidationError("Asset price must be positive")

        symbol = data.symbol.strip().upper() if data.symbol else None
        if asset_type == AssetType.STOCK and not symbol:
            raise ValidationError("STOCK assets require a symbol")

        rate = to_decimal(data.rate) if data.rate is not None else None
        rate_type = RateType(data.rate_type) if data.rate_type is not None else None
        if asset_type.is_fixed_income and (rate is None or rate_type is None):
            raise ValidationError(f"{asset_type.value} assets require rate and rate_type")
        if rate is not None and rate < 0:
            raise ValidationError("Asset rate cannot be negative")

        now = self._clock()
        with self._store.transaction() as ledger:
            if symbol and ledger.assets.get_by_symbol(symbol):
                raise ConflictError(f"Asset with symbol '{symbol}' already exists")

            asset = Asset(
                asset_id=str(uuid.uuid4()),
                name=name,
                asset_type=asset_type,
                current_price=price,
                last_update=now,
                symbol=symbol,
                rate=rate,
                rate_type=rate_type,
                maturity=data.maturity,
                minimum_investment=(
                    to_money(data.minimum_investment)
                    if data.minimum_investment is not None
                    else None
                ),
                description=data.description,
                created_at=now,
            )
            created = ledger.assets.create(asset)

        logger.info(f"Registered asset {created.label} ({created.asset_type.value}) at {price}")
        return created

    def advance_prices(self) -> list[Asset]:
        """
        Apply one market step to every asset.

        All assets are locked and updated in a single transaction, and every
        asset's last_update moves to now whether or not its price changed.
        """
        now = self._clock()
        with self._store.transaction() as ledger:
            assets = ledger.assets.list_all(for_update=True)
            updated = []
            for asset in assets:
                new_price = self._model_for(asset).next_price(asset)
                updated.append(ledger.assets.update_price(asset.asset_id, new_price, now))

        logger.debug(f"Advanced prices of {len(updated)} asset(s)")
        return updated

    def sync_prices(self) -> None:
        """Advance the market before a read when advance_on_read is enabled."""
        if self._advance_on_read:
            self.advance_prices()

    def get_asset_by_id(self, asset_id: str) -> Asset:
        """Get asset by ID."""
        self.sync_prices()
        with self._store.transaction() as ledger:
            asset = ledger.assets.get_by_id(asset_id)
        if not asset:
            raise NotFoundError("Asset", asset_id)
        return asset

    def get_asset_by_symbol(self, symbol: str) -> Asset:
        """Get asset by symbol (case-insensitive)."""
        self.sync_prices()
        with self._store.transaction() as ledger:
            asset = ledger.assets.get_by_symbol(symbol.strip().upper())
        if not asset:
            raise NotFoundError("Asset", symbol)
        return asset

    def list_assets(self) -> list[Asset]:
        """List all assets."""
        self.sync_prices()
        with self._store.transaction() as ledger:
            return ledger.assets.list_all()

    def _model_for(self, asset: Asset) -> PriceModel:
        if asset.asset_type == AssetType.STOCK:
            return self._stock_model
        return self._fixed_income_model
