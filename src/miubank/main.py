"""Market process entry point: runs the price scheduler until interrupted."""

import logging
import signal
import threading

from miubank.app_context import AppContext
from miubank.config.logging_config import setup_logging
from miubank.config.settings import get_settings

logger = logging.getLogger(__name__)


def run_market_service(context: AppContext, stop_event: threading.Event) -> None:
    """Start the scheduler and block until stop_event is set."""
    context.initialize()
    scheduler = context.scheduler
    scheduler.start()
    try:
        stop_event.wait()
    finally:
        scheduler.shutdown()
        logger.info("Market service stopped")


def main() -> None:
    """Run the simulated market in the foreground."""
    settings = get_settings()
    setup_logging(settings)
    logger.info(f"Starting {settings.app_name} market service v{settings.app_version}")

    context = AppContext(settings)
    stop_event = threading.Event()

    def _handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, shutting down")
        stop_event.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    try:
        run_market_service(context, stop_event)
    finally:
        context.close()


if __name__ == "__main__":
    main()
