import logging
from datetime import UTC, datetime

from domain.exceptions.rate import UnsupportedStablecoinError
from domain.models.rate import SUPPORTED_STABLECOINS, AggregatedRate, RateRecord
from domain.utils.statistics import median
from infrastructure.persistence.repositories.rate import RateRepository

logger = logging.getLogger(__name__)


class RateAggregationService:
    def __init__(self, repository: RateRepository):
        self.repository = repository

    async def get_rates(
        self, stablecoin_code: str, fiat_codes: list[str] | None = None
    ) -> list[AggregatedRate]:
        """
        Merge the stored per-source rates into one rate per fiat currency.

        A pair backed by a single source is returned as stored. Pairs backed by
        several sources get the median buy rate and median sell rate, computed
        independently. Pairs with no stored data are absent from the result.
        """
        stablecoin_code = stablecoin_code.upper()
        if stablecoin_code not in SUPPORTED_STABLECOINS:
            raise UnsupportedStablecoinError(
                f"Unsupported stablecoin: {stablecoin_code}. "
                f"Supported: {', '.join(SUPPORTED_STABLECOINS)}"
            )

        fiat_codes = [code.strip().upper() for code in fiat_codes or [] if code.strip()]
        records = await self.repository.find_all(stablecoin_code, fiat_codes or None)

        groups: dict[tuple[str, str], list[RateRecord]] = {}
        for record in records:
            groups.setdefault((record.fiat_code, record.stablecoin_code), []).append(record)

        generated_at = datetime.now(UTC)
        aggregated = [
            self._merge(fiat_code, coin, group, generated_at)
            for (fiat_code, coin), group in groups.items()
        ]

        logger.debug(
            f"Aggregated {len(records)} records into {len(aggregated)} rates for {stablecoin_code}"
        )
        return aggregated

    @staticmethod
    def _merge(
        fiat_code: str, stablecoin_code: str, records: list[RateRecord], generated_at: datetime
    ) -> AggregatedRate:
        if len(records) == 1:
            buy_rate, sell_rate = records[0].buy_rate, records[0].sell_rate
        else:
            buy_rate = median(record.buy_rate for record in records)
            sell_rate = median(record.sell_rate for record in records)

        return AggregatedRate(
            fiat_code=fiat_code,
            stablecoin_code=stablecoin_code,
            sources=[record.source_name for record in records],
            buy_rate=buy_rate,
            sell_rate=sell_rate,
            generated_at=generated_at,
        )
