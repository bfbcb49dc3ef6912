from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from domain.exceptions.rate import PersistenceFailure
from domain.models.rate import RateQuote, RateRecord
from infrastructure.persistence.models.rate import RateDB


def _as_utc(value: datetime | None) -> datetime | None:
	# SQLite drops tzinfo on read; stored values are always UTC
	if value is None or value.tzinfo is not None:
		return value
	return value.replace(tzinfo=UTC)


def _to_domain(row: RateDB) -> RateRecord:
	return RateRecord(
		id=row.id,
		fiat_code=row.fiat_code,
		stablecoin_code=row.stablecoin_code,
		buy_rate=row.buy_rate,
		sell_rate=row.sell_rate,
		source_name=row.source_name,
		created_at=_as_utc(row.created_at),
		updated_at=_as_utc(row.updated_at),
		deleted_at=_as_utc(row.deleted_at),
	)


class RateRepository:
	"""Keyed snapshot store: one live row per (fiat, stablecoin, source)."""

	def __init__(self, db_session: AsyncSession):
		self.db_session = db_session

	async def _find_active_row(
		self, fiat_code: str, stablecoin_code: str, source_name: str
	) -> RateDB | None:
		stmt = select(RateDB).filter(
			RateDB.fiat_code == fiat_code.upper(),
			RateDB.stablecoin_code == stablecoin_code.upper(),
			RateDB.source_name == source_name,
			RateDB.deleted_at.is_(None),
		)
		result = await self.db_session.execute(stmt)
		return result.scalars().first()

	async def find_one(
		self, fiat_code: str, stablecoin_code: str, source_name: str
	) -> RateRecord | None:
		row = await self._find_active_row(fiat_code, stablecoin_code, source_name)
		return _to_domain(row) if row else None

	async def create(self, quote: RateQuote) -> RateRecord:
		row = RateDB(
			fiat_code=quote.fiat_code.upper(),
			stablecoin_code=quote.stablecoin_code.upper(),
			buy_rate=quote.buy_rate,
			sell_rate=quote.sell_rate,
			source_name=quote.source_name,
		)
		self.db_session.add(row)
		await self.db_session.flush()
		return _to_domain(row)

	async def update(self, existing: RateRecord, buy_rate: float, sell_rate: float) -> RateRecord:
		row = await self.db_session.get(RateDB, existing.id)
		if row is None or row.deleted_at is not None:
			raise PersistenceFailure(f'Rate record {existing.id} no longer exists')

		row.buy_rate = buy_rate
		row.sell_rate = sell_rate
		row.updated_at = datetime.now(UTC)
		await self.db_session.flush()
		return _to_domain(row)

	async def upsert(self, quote: RateQuote) -> RateRecord:
		existing = await self.find_one(quote.fiat_code, quote.stablecoin_code, quote.source_name)
		if existing is None:
			return await self.create(quote)
		return await self.update(existing, quote.buy_rate, quote.sell_rate)

	async def find_all(
		self, stablecoin_code: str, fiat_codes: list[str] | None = None
	) -> list[RateRecord]:
		stmt = select(RateDB).filter(
			RateDB.stablecoin_code == stablecoin_code.upper(),
			RateDB.deleted_at.is_(None),
		)
		if fiat_codes:
			stmt = stmt.filter(RateDB.fiat_code.in_([code.upper() for code in fiat_codes]))

		stmt = stmt.order_by(RateDB.created_at, RateDB.source_name)
		result = await self.db_session.execute(stmt)
		return [_to_domain(row) for row in result.scalars().all()]

	async def soft_delete(self, fiat_code: str, stablecoin_code: str, source_name: str) -> bool:
		row = await self._find_active_row(fiat_code, stablecoin_code, source_name)
		if row is None:
			return False

		row.deleted_at = datetime.now(UTC)
		await self.db_session.flush()
		return True
