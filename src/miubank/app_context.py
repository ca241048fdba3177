"""Application context for in-process service management.

Builds the database engine, the ledger store and every service from one
Settings instance, and hands them out to callers (the market process
entry point and tests).
"""

from typing import Optional

from sqlalchemy import Engine

from miubank.config.settings import Settings, get_settings
from miubank.providers import FixedIncomeAccrualModel, RandomWalkPriceModel
from miubank.repositories.sqlalchemy import (
    SqlAlchemyLedgerStore,
    create_engine_from_settings,
    create_session_factory,
    init_db,
)
from miubank.services import (
    MarketEngine,
    MarketScheduler,
    ReportService,
    TradingService,
    TransferService,
    UserService,
)


class AppContext:
    """
    Application context providing in-process access to all services.

    Services are created lazily on first access and share one ledger store.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize application context.

        Args:
            settings: Optional settings. If not provided, uses the process settings.
        """
        self._settings = settings
        self._engine: Optional[Engine] = None
        self._store: Optional[SqlAlchemyLedgerStore] = None
        self._initialized = False

        # Service instances (lazy initialized)
        self._market: Optional[MarketEngine] = None
        self._transfers: Optional[TransferService] = None
        self._trading: Optional[TradingService] = None
        self._users: Optional[UserService] = None
        self._reports: Optional[ReportService] = None
        self._scheduler: Optional[MarketScheduler] = None

    def initialize(self) -> None:
        """Create the engine and tables; safe to call again after close()."""
        if self._initialized:
            return

        self._engine = create_engine_from_settings(self.settings)
        init_db(self._engine)
        self._store = SqlAlchemyLedgerStore(create_session_factory(self._engine))
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def engine(self) -> Engine:
        self._ensure_initialized()
        return self._engine

    @property
    def store(self) -> SqlAlchemyLedgerStore:
        self._ensure_initialized()
        return self._store

    # Service accessors
    @property
    def market(self) -> MarketEngine:
        """Get the MarketEngine instance."""
        if self._market is None:
            self._market = MarketEngine(
                store=self.store,
                stock_model=RandomWalkPriceModel(seed=self.settings.price_seed),
                fixed_income_model=FixedIncomeAccrualModel(),
                advance_on_read=self.settings.advance_prices_on_read,
            )
        return self._market

    @property
    def transfers(self) -> TransferService:
        """Get the TransferService instance."""
        if self._transfers is None:
            self._transfers = TransferService(store=self.store)
        return self._transfers

    @property
    def trading(self) -> TradingService:
        """Get the TradingService instance."""
        if self._trading is None:
            self._trading = TradingService(store=self.store, market=self.market)
        return self._trading

    @property
    def users(self) -> UserService:
        """Get the UserService instance."""
        if self._users is None:
            self._users = UserService(store=self.store)
        return self._users

    @property
    def reports(self) -> ReportService:
        """Get the ReportService instance."""
        if self._reports is None:
            self._reports = ReportService(store=self.store, market=self.market)
        return self._reports

    @property
    def scheduler(self) -> MarketScheduler:
        """Get the MarketScheduler instance (not started)."""
        if self._scheduler is None:
            self._scheduler = MarketScheduler(
                market=self.market,
                interval_seconds=self.settings.market_update_interval_seconds,
                timezone=self.settings.timezone,
            )
        return self._scheduler

    def close(self) -> None:
        """Stop the scheduler and dispose of the engine."""
        if self._scheduler is not None:
            self._scheduler.shutdown()
        if self._engine is not None:
            self._engine.dispose()

        self._engine = None
        self._store = None
        self._market = None
        self._transfers = None
        self._trading = None
        self._users = None
        self._reports = None
        self._scheduler = None
        self._initialized = False

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.initialize()
