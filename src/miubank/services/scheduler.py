"""
Market scheduler.

Runs MarketEngine.advance_prices() on a fixed interval in a background
thread. Missed ticks are coalesced into one and a tick never overlaps the
previous one. A failing tick is logged and recorded; the next tick runs
normally.
"""

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from miubank.core.timezone import now_brt
from miubank.services.market_engine import MarketEngine

logger = logging.getLogger(__name__)

JOB_ID = "advance_market_prices"


@dataclass
class TickResult:
    """Result of one market tick."""

    started_at: datetime
    succeeded: bool
    assets_updated: int = 0
    duration_seconds: float = 0.0
    error: Optional[str] = None


class MarketScheduler:
    """
    Interval scheduler for the simulated market.

    Usage:
        scheduler = MarketScheduler(market, interval_seconds=300)
        scheduler.start()
        ...
        scheduler.shutdown()
    """

    def __init__(
        self,
        market: MarketEngine,
        interval_seconds: int = 300,
        timezone: str = "America/Sao_Paulo",
        max_history: int = 100,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._market = market
        self._interval_seconds = interval_seconds
        self._timezone = timezone
        self._max_history = max_history
        self._history: list[TickResult] = []
        self._lock = threading.Lock()
        self._scheduler: Optional[BackgroundScheduler] = None

    @property
    def is_running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    @property
    def history(self) -> list[TickResult]:
        with self._lock:
            return list(self._history)

    @property
    def last_result(self) -> Optional[TickResult]:
        with self._lock:
            return self._history[-1] if self._history else None

    def start(self) -> None:
        """Start ticking every interval_seconds."""
        if self.is_running:
            logger.warning("Market scheduler already running.")
            return

        self._scheduler = BackgroundScheduler(
            timezone=self._timezone,
            job_defaults={"coalesce": True, "max_instances": 1},
        )
        self._scheduler.add_job(
            self.run_tick,
            IntervalTrigger(seconds=self._interval_seconds, timezone=self._timezone),
            id=JOB_ID,
            name="Advance simulated market prices",
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info(f"Market scheduler started (every {self._interval_seconds}s)")

    def shutdown(self, wait: bool = True) -> None:
        """Stop the scheduler; with wait=True a running tick finishes first."""
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
        self._scheduler = None
        logger.info("Market scheduler stopped")

    def run_tick(self) -> TickResult:
        """Advance all prices once. Never raises."""
        started_at = now_brt()
        start = time.monotonic()
        try:
            updated = self._market.advance_prices()
            result = TickResult(
                started_at=started_at,
                succeeded=True,
                assets_updated=len(updated),
                duration_seconds=round(time.monotonic() - start, 3),
            )
            logger.info(f"Market tick updated {len(updated)} asset(s)")
        except Exception as exc:
            result = TickResult(
                started_at=started_at,
                succeeded=False,
                duration_seconds=round(time.monotonic() - start, 3),
                error=str(exc),
            )
            logger.exception("Market tick failed")

        self._record(result)
        return result

    def _record(self, result: TickResult) -> None:
        with self._lock:
            self._history.append(result)
            if len(self._history) > self._max_history:
                self._history = self._history[-self._max_history:]
