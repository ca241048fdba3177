"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    Boolean,
    Text,
    ForeignKey,
    Numeric,
    CheckConstraint,
    UniqueConstraint,
    Index,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from miubank.core.timezone import now_brt
from miubank.repositories.sqlalchemy.database import Base
from miubank.domain.models.enums import AccountType, AssetType, MovementType, RateType


class UserORM(Base):
    """SQLAlchemy model for User."""

    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    cpf = Column(String(14), unique=True, nullable=False)
    birth_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_brt)

    accounts = relationship("AccountORM", back_populates="user")
    investments = relationship("InvestmentORM", back_populates="user")


class AccountORM(Base):
    """SQLAlchemy model for Account (one CORRENTE and one INVESTIMENTO per user)."""

    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("user_id", "account_type", name="uq_accounts_user_type"),
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    account_id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    account_type = Column(SqlEnum(AccountType), nullable=False)
    balance = Column(Numeric(precision=18, scale=2), nullable=False, default=Decimal("0"))
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_brt)

    user = relationship("UserORM", back_populates="accounts")


class AssetORM(Base):
    """SQLAlchemy model for Asset."""

    __tablename__ = "assets"

    asset_id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    asset_type = Column(SqlEnum(AssetType), nullable=False)
    symbol = Column(String(20), unique=True, nullable=True)
    current_price = Column(Numeric(precision=20, scale=6), nullable=False)
    last_update = Column(DateTime(timezone=True), nullable=True)
    rate = Column(Numeric(precision=10, scale=6), nullable=True)
    rate_type = Column(SqlEnum(RateType), nullable=True)
    maturity = Column(Date, nullable=True)
    minimum_investment = Column(Numeric(precision=18, scale=2), nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_brt)

    investments = relationship("InvestmentORM", back_populates="asset")


class InvestmentORM(Base):
    """SQLAlchemy model for Investment (a user's position in one asset)."""

    __tablename__ = "investments"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_investments_quantity_non_negative"),
        Index("ix_investments_user_open", "user_id", "is_sold"),
    )

    investment_id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    asset_id = Column(String(36), ForeignKey("assets.asset_id"), nullable=False)
    quantity = Column(Numeric(precision=20, scale=8), nullable=False)
    purchase_price = Column(Numeric(precision=20, scale=6), nullable=False)
    purchase_date = Column(DateTime(timezone=True), nullable=False)
    is_sold = Column(Boolean, nullable=False, default=False)
    sale_price = Column(Numeric(precision=20, scale=6), nullable=True)
    sale_date = Column(DateTime(timezone=True), nullable=True)
    profit = Column(Numeric(precision=18, scale=2), nullable=False, default=Decimal("0"))
    tax_paid = Column(Numeric(precision=18, scale=2), nullable=False, default=Decimal("0"))

    user = relationship("UserORM", back_populates="investments")
    asset = relationship("AssetORM", back_populates="investments")


class MovementORM(Base):
    """SQLAlchemy model for Movement (append-only ledger entry)."""

    __tablename__ = "movements"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_movements_amount_positive"),
        Index("ix_movements_from_created", "from_account_id", "created_at"),
        Index("ix_movements_to_created", "to_account_id", "created_at"),
    )

    movement_id = Column(String(36), primary_key=True)
    from_account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    to_account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    amount = Column(Numeric(precision=18, scale=2), nullable=False)
    movement_type = Column(SqlEnum(MovementType), nullable=False)
    description = Column(Text, nullable=True)
    investment_id = Column(String(36), ForeignKey("investments.investment_id"), nullable=True)
    booked_account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_brt)
