import logging

from application.services.scheduler import TaskScheduler
from config.currencies import CURRENCIES, DEFAULT_SOURCE_INTERVAL, SOURCE_INTERVALS
from config.settings import Settings
from infrastructure.persistence.database import Database
from infrastructure.providers import (
    BaseRateSource,
    BinanceP2PSource,
    FawazExchangeSource,
    QuidaxSource,
)

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Factory to create and wire up the ingestion services"""

    def __init__(self, settings: Settings, database: Database | None = None):
        self.settings = settings
        self.database = database or Database(settings.DATABASE_URL)
        self.sources: dict[str, BaseRateSource] = {}
        self.scheduler: TaskScheduler | None = None

    def create_sources(self) -> dict[str, BaseRateSource]:
        timeout = self.settings.REQUEST_TIMEOUT_SECONDS
        sources: list[BaseRateSource] = [
            BinanceP2PSource(self.database, timeout=timeout, rows=self.settings.BINANCE_P2P_ROWS),
            QuidaxSource(self.database, timeout=timeout),
            FawazExchangeSource(self.database, timeout=timeout),
        ]
        self.sources = {source.name: source for source in sources}
        return self.sources

    def create_scheduler(self) -> TaskScheduler:
        """Create the scheduler and register every currency in the polling table"""
        if not self.sources:
            self.create_sources()

        self.scheduler = TaskScheduler(
            source_intervals=SOURCE_INTERVALS,
            default_interval=DEFAULT_SOURCE_INTERVAL,
            tick_seconds=self.settings.SCHEDULER_TICK_SECONDS,
            batch_size=self.settings.SCHEDULER_BATCH_SIZE,
            stagger_seconds=self.settings.SCHEDULER_STAGGER_MS / 1000,
            batch_delay_seconds=self.settings.SCHEDULER_BATCH_DELAY_MS / 1000,
            group_delay_seconds=self.settings.SCHEDULER_GROUP_DELAY_MS / 1000,
        )
        self.scheduler.register_currencies(CURRENCIES, self.sources)

        logger.info(
            f"Scheduler created with {len(self.sources)} sources "
            f"and {len(self.scheduler.tasks)} tasks"
        )
        return self.scheduler

    async def cleanup(self) -> None:
        """Stop polling, let in-flight fetches finish, then close clients and the engine"""
        if self.scheduler is not None:
            self.scheduler.stop()
            await self.scheduler.wait_for_in_flight()

        for source in self.sources.values():
            await source.close()

        await self.database.close()
        logger.info("Services cleaned up successfully")
