"""
Pytest configuration and fixtures for MiuBank tests.

This module provides:
- In-memory SQLite database fixtures
- Ledger store and service fixtures
- Factory helpers for users and assets
- Scripted random sources for deterministic price walks
"""

import itertools
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy.orm import sessionmaker

from miubank.config.settings import reset_settings
from miubank.core.timezone import SAO_PAULO_TZ
from miubank.domain.models import AccountType, Asset, AssetType, RateType, User
from miubank.providers import FixedIncomeAccrualModel, RandomWalkPriceModel
from miubank.repositories.sqlalchemy import (
    Base,
    SqlAlchemyLedgerStore,
    create_db_engine,
    create_session_factory,
    init_db,
)
from miubank.services import (
    AssetCreate,
    MarketEngine,
    ReportService,
    TradingService,
    TransferService,
    UserService,
)


# =============================================================================
# TIME AND RANDOMNESS HELPERS
# =============================================================================


def brt_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in America/Sao_Paulo."""
    return SAO_PAULO_TZ.localize(datetime(year, month, day, hour, minute, second))


class ScriptedRandom:
    """
    Random source that replays a fixed sequence of draws.

    The sequence repeats once exhausted.
    """

    def __init__(self, draws: list[float]):
        self._draws = itertools.cycle(draws)

    def random(self) -> float:
        return next(self._draws)


@pytest.fixture
def scripted_random() -> Callable[[list[float]], ScriptedRandom]:
    """Factory for scripted random sources."""
    return ScriptedRandom


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_db_engine("sqlite:///:memory:")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine) -> sessionmaker:
    """Session factory bound to the test engine."""
    return create_session_factory(test_engine)


@pytest.fixture
def store(session_factory) -> SqlAlchemyLedgerStore:
    """Provide the ledger store."""
    return SqlAlchemyLedgerStore(session_factory)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def market_engine(store) -> MarketEngine:
    """Market engine with a seeded random walk and reads that never advance prices."""
    return MarketEngine(
        store=store,
        stock_model=RandomWalkPriceModel(seed=42),
        fixed_income_model=FixedIncomeAccrualModel(),
    )


@pytest.fixture
def transfer_service(store) -> TransferService:
    """Provide test TransferService."""
    return TransferService(store=store)


@pytest.fixture
def trading_service(store, market_engine) -> TradingService:
    """Provide test TradingService."""
    return TradingService(store=store, market=market_engine)


@pytest.fixture
def user_service(store) -> UserService:
    """Provide test UserService."""
    return UserService(store=store)


@pytest.fixture
def report_service(store, market_engine) -> ReportService:
    """Provide test ReportService."""
    return ReportService(store=store, market=market_engine)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def user_factory(user_service) -> Callable[..., User]:
    """Factory for registering test users with unique email and CPF."""
    counter = itertools.count(1)

    def _create_user(
        name: Optional[str] = None,
        email: Optional[str] = None,
        cpf: Optional[str] = None,
    ) -> User:
        n = next(counter)
        return user_service.register(
            name=name or f"User {n}",
            email=email or f"user{n}@miubank.test",
            password_hash="$2b$10$hashedpassword",
            cpf=cpf or f"{n:03d}.456.789-{n % 100:02d}",
        )

    return _create_user


@pytest.fixture
def funded_user_factory(user_factory, transfer_service) -> Callable[..., User]:
    """Factory for users with money already deposited in CORRENTE."""

    def _create_funded_user(amount: Decimal = Decimal("1000.00"), **kwargs) -> User:
        user = user_factory(**kwargs)
        transfer_service.deposit(user.user_id, amount)
        return user

    return _create_funded_user


@pytest.fixture
def investor_factory(user_factory, transfer_service) -> Callable[..., User]:
    """Factory for users with money already moved into INVESTIMENTO."""

    def _create_investor(amount: Decimal = Decimal("5000.00"), **kwargs) -> User:
        user = user_factory(**kwargs)
        transfer_service.deposit(user.user_id, amount)
        transfer_service.transfer_internal(
            user.user_id, amount, AccountType.CORRENTE, AccountType.INVESTIMENTO
        )
        return user

    return _create_investor


@pytest.fixture
def stock_factory(market_engine) -> Callable[..., Asset]:
    """Factory for STOCK assets."""
    counter = itertools.count(1)

    def _create_stock(
        price: Decimal = Decimal("100.00"),
        symbol: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Asset:
        n = next(counter)
        return market_engine.create_asset(
            AssetCreate(
                name=name or f"Acao Teste {n}",
                asset_type=AssetType.STOCK,
                current_price=price,
                symbol=symbol or f"TST{n}",
            )
        )

    return _create_stock


@pytest.fixture
def fixed_income_factory(market_engine) -> Callable[..., Asset]:
    """Factory for CDB / TREASURY assets."""

    def _create_fixed_income(
        price: Decimal = Decimal("1000.00"),
        rate: Decimal = Decimal("0.1095"),
        rate_type: RateType = RateType.PRE,
        asset_type: AssetType = AssetType.CDB,
        name: str = "CDB Banco A",
    ) -> Asset:
        return market_engine.create_asset(
            AssetCreate(
                name=name,
                asset_type=asset_type,
                current_price=price,
                rate=rate,
                rate_type=rate_type,
            )
        )

    return _create_fixed_income


@pytest.fixture
def set_price(store) -> Callable[[str, Decimal], Asset]:
    """Force an asset's price, standing in for market moves in trading tests."""

    def _set_price(asset_id: str, price: Decimal) -> Asset:
        with store.transaction() as ledger:
            return ledger.assets.update_price(asset_id, price, brt_datetime(2024, 6, 15))

    return _set_price


@pytest.fixture
def balances(store) -> Callable[[str], dict]:
    """Read a user's balances keyed by account type."""

    def _balances(user_id: str) -> dict:
        with store.transaction() as ledger:
            return {a.account_type: a.balance for a in ledger.accounts.list_by_user(user_id)}

    return _balances
