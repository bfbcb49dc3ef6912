import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from infrastructure.persistence.models.rate import Base

logger = logging.getLogger(__name__)

# Seconds a SQLite writer waits on the file lock; a scheduler batch upserts concurrently
SQLITE_BUSY_TIMEOUT = 30


class Database:
    """Async engine and unit-of-work sessions for the rate store."""

    def __init__(self, db_url: str):
        url = make_url(db_url)
        connect_args = {}
        if url.get_backend_name() == "sqlite":
            connect_args["timeout"] = SQLITE_BUSY_TIMEOUT

        self.engine = create_async_engine(url, connect_args=connect_args)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Rate store ready on {self.engine.url.render_as_string(hide_password=True)}")

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """One transaction: commit on success, roll back and re-raise on any error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logger.debug(f"Rolling back rate store session: {e.__class__.__name__}")
                await session.rollback()
                raise
