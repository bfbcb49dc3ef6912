import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from application.services import RateAggregationService, ServiceFactory, TaskScheduler
from config.settings import get_settings
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.rate import RateRepository

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	factory: ServiceFactory | None = None
	db: Database | None = None
	scheduler: TaskScheduler | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')

	deps.factory = ServiceFactory(get_settings())
	deps.db = deps.factory.database
	deps.factory.create_sources()

	logger.info('Dependencies initialized')


async def bootstrap() -> None:
	"""Create tables and register polling tasks. Called after init_dependencies() at startup."""
	logger.info('Bootstrapping application...')

	if deps.factory is None or deps.db is None:
		raise RuntimeError('Dependencies not initialized. Call init_dependencies() first.')

	await deps.db.create_tables()
	logger.info('Database tables created')

	deps.scheduler = deps.factory.create_scheduler()
	if get_settings().SCHEDULER_ENABLED:
		deps.scheduler.start()
	else:
		logger.info('Scheduler disabled, serving stored rates only')

	logger.info('Bootstrap complete')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.factory:
		await deps.factory.cleanup()

	deps.factory = None
	deps.db = None
	deps.scheduler = None
	logger.info('Cleanup complete')


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
	if deps.db is None:
		raise RuntimeError('Database is not initialized')

	session = deps.db.session_factory()
	try:
		yield session
		await session.commit()
	except Exception:
		await session.rollback()
		raise
	finally:
		await session.close()


def get_scheduler() -> TaskScheduler:
	if deps.scheduler is None:
		raise RuntimeError('Scheduler not initialized')
	return deps.scheduler


async def get_rate_repository(
	session: Annotated[AsyncSession, Depends(get_db_session)],
) -> RateRepository:
	return RateRepository(db_session=session)


async def get_aggregation_service(
	repository: Annotated[RateRepository, Depends(get_rate_repository)],
) -> RateAggregationService:
	return RateAggregationService(repository=repository)
