"""SQLAlchemy implementations of AssetRepository and InvestmentRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from miubank.core.exceptions import NotFoundError
from miubank.core.money import to_money, to_price, to_quantity, to_decimal
from miubank.core.timezone import to_brt
from miubank.domain.models import Asset, Investment
from miubank.repositories.sqlalchemy.orm_models import AssetORM, InvestmentORM


class SqlAlchemyAssetRepository:
    """SQLAlchemy-backed asset repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, asset: Asset) -> Asset:
        """Persist a new asset."""
        orm_asset = AssetORM(
            asset_id=asset.asset_id,
            name=asset.name,
            asset_type=asset.asset_type,
            symbol=asset.symbol,
            current_price=asset.current_price,
            last_update=asset.last_update,
            rate=asset.rate,
            rate_type=asset.rate_type,
            maturity=asset.maturity,
            minimum_investment=asset.minimum_investment,
            description=asset.description,
            created_at=asset.created_at,
        )
        self._db.add(orm_asset)
        self._db.flush()
        return self._to_domain(orm_asset)

    def get_by_id(self, asset_id: str) -> Optional[Asset]:
        """Retrieve asset by ID."""
        orm_asset = self._db.query(AssetORM).filter(AssetORM.asset_id == asset_id).first()
        return self._to_domain(orm_asset) if orm_asset else None

    def get_by_symbol(self, symbol: str) -> Optional[Asset]:
        """Retrieve asset by symbol."""
        orm_asset = self._db.query(AssetORM).filter(AssetORM.symbol == symbol).first()
        return self._to_domain(orm_asset) if orm_asset else None

    def list_all(self, for_update: bool = False) -> list[Asset]:
        """List all assets ordered by id, optionally row-locked."""
        query = self._db.query(AssetORM).order_by(AssetORM.asset_id)
        if for_update:
            query = query.with_for_update().populate_existing()
        return [self._to_domain(a) for a in query.all()]

    def update_price(self, asset_id: str, price: Decimal, as_of: datetime) -> Asset:
        """Set current price and last update time."""
        orm_asset = self._db.query(AssetORM).filter(AssetORM.asset_id == asset_id).first()
        if orm_asset is None:
            raise NotFoundError("Asset", asset_id)
        orm_asset.current_price = price
        orm_asset.last_update = as_of
        self._db.flush()
        return self._to_domain(orm_asset)

    @staticmethod
    def _to_domain(orm: AssetORM) -> Asset:
        """Convert ORM model to domain model."""
        return Asset(
            asset_id=orm.asset_id,
            name=orm.name,
            asset_type=orm.asset_type,
            current_price=to_price(orm.current_price),
            last_update=to_brt(orm.last_update) if orm.last_update else None,
            symbol=orm.symbol,
            rate=to_decimal(orm.rate) if orm.rate is not None else None,
            rate_type=orm.rate_type,
            maturity=orm.maturity,
            minimum_investment=(
                to_money(orm.minimum_investment) if orm.minimum_investment is not None else None
            ),
            description=orm.description,
            created_at=to_brt(orm.created_at) if orm.created_at else None,
        )


class SqlAlchemyInvestmentRepository:
    """SQLAlchemy-backed investment repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, investment: Investment) -> Investment:
        """Persist a new investment."""
        orm_investment = InvestmentORM(
            investment_id=investment.investment_id,
            user_id=investment.user_id,
            asset_id=investment.asset_id,
            quantity=investment.quantity,
            purchase_price=investment.purchase_price,
            purchase_date=investment.purchase_date,
            is_sold=investment.is_sold,
            sale_price=investment.sale_price,
            sale_date=investment.sale_date,
            profit=investment.profit,
            tax_paid=investment.tax_paid,
        )
        self._db.add(orm_investment)
        self._db.flush()
        return self._to_domain(orm_investment)

    def get_by_id(self, investment_id: str, for_update: bool = False) -> Optional[Investment]:
        """Retrieve investment by ID, optionally row-locked."""
        query = self._db.query(InvestmentORM).filter(
            InvestmentORM.investment_id == investment_id
        )
        if for_update:
            query = query.with_for_update().populate_existing()
        orm_investment = query.first()
        return self._to_domain(orm_investment) if orm_investment else None

    def update(self, investment: Investment) -> Investment:
        """Update quantity, sale and accumulated profit/tax fields."""
        orm_investment = self._db.query(InvestmentORM).filter(
            InvestmentORM.investment_id == investment.investment_id
        ).first()
        if orm_investment is None:
            raise NotFoundError("Investment", investment.investment_id)
        orm_investment.quantity = investment.quantity
        orm_investment.is_sold = investment.is_sold
        orm_investment.sale_price = investment.sale_price
        orm_investment.sale_date = investment.sale_date
        orm_investment.profit = investment.profit
        orm_investment.tax_paid = investment.tax_paid
        self._db.flush()
        return self._to_domain(orm_investment)

    def list_by_user(self, user_id: str, include_sold: bool = True) -> list[Investment]:
        """List a user's investments ordered by purchase date."""
        query = self._db.query(InvestmentORM).filter(InvestmentORM.user_id == user_id)
        if not include_sold:
            query = query.filter(InvestmentORM.is_sold.is_(False))
        orm_investments = query.order_by(
            InvestmentORM.purchase_date, InvestmentORM.investment_id
        ).all()
        return [self._to_domain(i) for i in orm_investments]

    def count_open(self, user_id: str) -> int:
        """Count the user's investments that are not fully sold."""
        return (
            self._db.query(InvestmentORM)
            .filter(
                InvestmentORM.user_id == user_id,
                InvestmentORM.is_sold.is_(False),
            )
            .count()
        )

    @staticmethod
    def _to_domain(orm: InvestmentORM) -> Investment:
        """Convert ORM model to domain model."""
        return Investment(
            investment_id=orm.investment_id,
            user_id=orm.user_id,
            asset_id=orm.asset_id,
            quantity=to_quantity(orm.quantity),
            purchase_price=to_price(orm.purchase_price),
            purchase_date=to_brt(orm.purchase_date),
            is_sold=bool(orm.is_sold),
            sale_price=to_price(orm.sale_price) if orm.sale_price is not None else None,
            sale_date=to_brt(orm.sale_date) if orm.sale_date else None,
            profit=to_money(orm.profit if orm.profit is not None else 0),
            tax_paid=to_money(orm.tax_paid if orm.tax_paid is not None else 0),
        )
