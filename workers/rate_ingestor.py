import asyncio
import logging
import signal

from application.services import ServiceFactory, TaskScheduler
from config.logger import setup_logging
from config.settings import get_settings

logger = logging.getLogger(__name__)


class RateIngestorWorker:
    """
    Background worker that keeps the rate store fresh.

    This runs the polling scheduler independently of the API server, so rates
    are ingested regardless of user request patterns.
    """

    def __init__(self, scheduler: TaskScheduler):
        self.scheduler = scheduler
        self._stop_event = asyncio.Event()

    async def run(self) -> None:
        """Start polling and block until stop() is called"""
        self.scheduler.start()
        logger.info(f"Rate Ingestor Worker started with {len(self.scheduler.tasks)} tasks")

        try:
            await self._stop_event.wait()
        finally:
            self.scheduler.stop()
            await self.scheduler.wait_for_in_flight()
            logger.info("Rate Ingestor Worker stopped")

    def stop(self) -> None:
        """Gracefully stop the worker"""
        logger.info("Stopping Rate Ingestor Worker...")
        self._stop_event.set()


async def main():
    """Entry point for running the worker."""
    settings = get_settings()
    setup_logging(
        level=settings.LOG_LEVEL,
        log_directory=settings.LOG_DIRECTORY if settings.LOG_TO_FILE else None,
    )

    logger.info("=" * 60)
    logger.info("RATE INGESTOR WORKER STARTING")
    logger.info("=" * 60)

    service_factory = ServiceFactory(settings)
    await service_factory.database.create_tables()

    logger.info("Initializing services...")
    worker = RateIngestorWorker(service_factory.create_scheduler())

    loop = asyncio.get_running_loop()

    # Setup graceful shutdown
    def signal_handler(sig, frame):
        logger.info(f"Received signal {sig}, shutting down gracefully...")
        loop.call_soon_threadsafe(worker.stop)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        await worker.run()
    finally:
        await service_factory.cleanup()
        logger.info("Cleanup completed")


if __name__ == "__main__":
    asyncio.run(main())
