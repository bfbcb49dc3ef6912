import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Float, Index, String, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
	pass


def _utcnow() -> datetime:
	return datetime.now(UTC)


class RateDB(Base):
	"""Latest observation per (fiat, stablecoin, source). Soft-deleted rows keep deleted_at."""
	__tablename__ = 'rates'

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
	fiat_code: Mapped[str] = mapped_column(String(5), nullable=False)
	stablecoin_code: Mapped[str] = mapped_column(String(10), nullable=False)
	buy_rate: Mapped[float] = mapped_column(Float, nullable=False)
	sell_rate: Mapped[float] = mapped_column(Float, nullable=False)
	source_name: Mapped[str] = mapped_column(String(50), nullable=False)
	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
	updated_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
	)
	deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

	__table_args__ = (
		Index('idx_rates_stablecoin_fiat', 'stablecoin_code', 'fiat_code'),
		Index(
			'uq_rates_active_triple',
			'fiat_code',
			'stablecoin_code',
			'source_name',
			unique=True,
			sqlite_where=text('deleted_at IS NULL'),
			postgresql_where=text('deleted_at IS NULL'),
		),
	)
