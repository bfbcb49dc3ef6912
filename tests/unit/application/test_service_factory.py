# nosec B101


import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from application.services.service_factory import ServiceFactory
from config.currencies import CURRENCIES
from config.settings import Settings
from workers.rate_ingestor import RateIngestorWorker


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'factory.db'}",
        REQUEST_TIMEOUT_SECONDS=3,
        SCHEDULER_TICK_SECONDS=30,
        SCHEDULER_STAGGER_MS=200,
    )


@pytest.mark.asyncio
async def test_create_sources_builds_every_connector(settings):
    factory = ServiceFactory(settings)

    sources = factory.create_sources()

    assert set(sources) == {'binance', 'quidax', 'fawaz-exchange-api'}
    assert all(source.timeout == 3 for source in sources.values())
    await factory.cleanup()


@pytest.mark.asyncio
async def test_create_scheduler_registers_currency_table(settings):
    factory = ServiceFactory(settings)

    scheduler = factory.create_scheduler()

    expected = sum(len(currency.sources) for currency in CURRENCIES)
    assert len(scheduler.tasks) == expected
    assert scheduler.tick_seconds == 30
    assert scheduler.stagger_seconds == 0.2
    assert scheduler.is_started is False
    await factory.cleanup()


@pytest.mark.asyncio
async def test_cleanup_stops_scheduler_and_closes_sources(settings):
    factory = ServiceFactory(settings)
    scheduler = factory.create_scheduler()
    scheduler.start()
    for source in factory.sources.values():
        source.close = AsyncMock()

    await factory.cleanup()

    assert scheduler.is_started is False
    for source in factory.sources.values():
        source.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_worker_runs_scheduler_until_stopped():
    scheduler = Mock()
    scheduler.tasks = []
    scheduler.wait_for_in_flight = AsyncMock()
    worker = RateIngestorWorker(scheduler)

    run = asyncio.create_task(worker.run())
    await asyncio.sleep(0)
    scheduler.start.assert_called_once()

    worker.stop()
    await run

    scheduler.stop.assert_called_once()
    scheduler.wait_for_in_flight.assert_awaited_once()
