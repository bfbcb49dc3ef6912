# nosec B101


import pytest
from sqlalchemy.exc import IntegrityError

from domain.models.rate import RateQuote
from infrastructure.persistence.repositories.rate import RateRepository


def quote(source='A'):
    return RateQuote('GHS', 'USDT', 10.0, 12.0, source)


@pytest.mark.asyncio
async def test_session_commits_on_success(database):
    async with database.session() as session:
        await RateRepository(session).create(quote())

    async with database.session() as session:
        assert await RateRepository(session).find_one('GHS', 'USDT', 'A') is not None


@pytest.mark.asyncio
async def test_session_rolls_back_and_reraises_on_error(database):
    with pytest.raises(RuntimeError):
        async with database.session() as session:
            await RateRepository(session).create(quote())
            raise RuntimeError('write rejected')

    async with database.session() as session:
        assert await RateRepository(session).find_all('USDT') == []


@pytest.mark.asyncio
async def test_rejected_write_does_not_affect_later_sessions(database):
    async with database.session() as session:
        await RateRepository(session).create(quote())

    with pytest.raises(IntegrityError):
        async with database.session() as session:
            # second live row for the same triple violates the partial unique index
            await RateRepository(session).create(quote())

    async with database.session() as session:
        await RateRepository(session).create(quote(source='B'))

    async with database.session() as session:
        records = await RateRepository(session).find_all('USDT')
    assert sorted(r.source_name for r in records) == ['A', 'B']
