"""Service layer - business logic orchestration."""

from miubank.services.market_engine import MarketEngine, AssetCreate
from miubank.services.transfer_service import TransferService
from miubank.services.trading_service import TradingService
from miubank.services.user_service import UserService
from miubank.services.report_service import ReportService
from miubank.services.scheduler import MarketScheduler, TickResult

__all__ = [
    "MarketEngine",
    "AssetCreate",
    "TransferService",
    "TradingService",
    "UserService",
    "ReportService",
    "MarketScheduler",
    "TickResult",
]
