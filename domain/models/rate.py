from dataclasses import dataclass, field
from datetime import datetime

SUPPORTED_STABLECOINS: tuple[str, ...] = ('USDT', 'USDC')


@dataclass(frozen=True)
class RateQuote:
    fiat_code: str
    stablecoin_code: str
    buy_rate: float
    sell_rate: float
    source_name: str


@dataclass(frozen=True)
class RateRecord:
    id: str
    fiat_code: str
    stablecoin_code: str
    buy_rate: float
    sell_rate: float
    source_name: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class AggregatedRate:
    fiat_code: str
    stablecoin_code: str
    sources: list[str]  # Contributing sources, in grouping order
    buy_rate: float
    sell_rate: float
    generated_at: datetime


@dataclass
class FetchOutcome:
    """Result of one connector fetch for a single fiat currency"""
    success: bool
    message: str
    quotes: list[RateQuote] = field(default_factory=list)  # Quotes that were persisted
    errors: list[str] = field(default_factory=list)
