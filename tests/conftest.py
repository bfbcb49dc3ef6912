"""
Shared test configuration and fixtures.
"""

from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from infrastructure.persistence.database import Database


@pytest_asyncio.fixture
async def database(tmp_path):
    """File-backed SQLite database with tables created, disposed after the test"""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'rates.db'}")
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.close()


@pytest.fixture
def mock_client():
    return AsyncMock(spec=httpx.AsyncClient)
