import asyncio
import logging
import math
from abc import ABC, abstractmethod
from typing import Any

import httpx
from sqlalchemy.exc import SQLAlchemyError

from domain.exceptions.rate import (
    MalformedResponse,
    NetworkFailure,
    PersistenceFailure,
    RateSourceError,
)
from domain.models.rate import FetchOutcome, RateQuote
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.rate import RateRepository

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "Mozilla/5.0 (compatible; StablecoinRates/1.0)",
}


class BaseRateSource(ABC):
    """A base class for rate sources, handling HTTP, fan-out and persistence."""

    name: str
    stablecoins: tuple[str, ...]

    def __init__(
        self, database: Database, client: httpx.AsyncClient | None = None, timeout: float = 10
    ):
        self.database = database
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=DEFAULT_HEADERS,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
        )

    @abstractmethod
    async def fetch_quote(self, stablecoin: str, fiat_code: str) -> RateQuote:
        """Fetch one stablecoin/fiat quote. Raises RateSourceError on failure."""
        ...

    async def fetch(self, fiat_code: str) -> FetchOutcome:
        """
        Fetch every supported stablecoin for ``fiat_code`` concurrently and
        persist the quotes that came back. Never raises.
        """
        fiat_code = fiat_code.upper()
        try:
            results = await asyncio.gather(
                *(self.fetch_quote(stablecoin, fiat_code) for stablecoin in self.stablecoins),
                return_exceptions=True,
            )

            quotes: list[RateQuote] = []
            errors: list[str] = []
            for stablecoin, result in zip(self.stablecoins, results, strict=True):
                if isinstance(result, RateQuote):
                    quotes.append(result)
                    continue
                if not isinstance(result, RateSourceError):
                    logger.error(
                        f"Unexpected error fetching {stablecoin}/{fiat_code} from {self.name}",
                        exc_info=result,
                    )
                error_message = f"{stablecoin}/{fiat_code}: {result.__class__.__name__}: {result}"
                logger.warning(f"{self.name} {error_message}")
                errors.append(error_message)

            if not quotes:
                return FetchOutcome(
                    success=False,
                    message=f"No data fetched for {fiat_code} from {self.name}",
                    errors=errors,
                )

            persisted = await self._persist(quotes, errors)
            if not persisted:
                return FetchOutcome(
                    success=False,
                    message=f"Failed to store rates for {fiat_code} from {self.name}",
                    errors=errors,
                )

            return FetchOutcome(
                success=True,
                message=f"Successfully fetched {len(persisted)} rates for {fiat_code} from {self.name}",
                quotes=persisted,
                errors=errors,
            )

        except Exception as e:
            logger.exception(f"{self.name} fetch failed for {fiat_code}")
            return FetchOutcome(
                success=False,
                message=f"Failed to fetch data for {fiat_code} from {self.name}: {e}",
                errors=[str(e)],
            )

    async def _persist(self, quotes: list[RateQuote], errors: list[str]) -> list[RateQuote]:
        """Upsert each quote in its own transaction. Returns the quotes that were stored."""
        persisted = []
        for quote in quotes:
            try:
                async with self.database.session() as session:
                    await RateRepository(session).upsert(quote)
            except (SQLAlchemyError, PersistenceFailure) as e:
                failure = PersistenceFailure(
                    f"Failed to save rate {quote.stablecoin_code}/{quote.fiat_code}: {e}"
                )
                logger.error(f"{self.name} {failure}")
                errors.append(str(failure))
                continue
            persisted.append(quote)
        return persisted

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        """Common HTTP request handling with error classification."""
        try:
            response = await self._client.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()  # Raises HTTPStatusError for 4xx/5xx
        except httpx.HTTPStatusError as e:
            raise NetworkFailure(
                f"HTTP error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.TimeoutException as e:
            raise NetworkFailure(f"Request timed out after {self.timeout}s") from e
        except httpx.RequestError as e:
            raise NetworkFailure(f"Request failed: {e.__class__.__name__}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(f"Invalid JSON: {e}") from e

    @staticmethod
    def _parse_price(value: Any) -> float:
        try:
            price = float(value)
        except (TypeError, ValueError) as e:
            raise MalformedResponse(f"Invalid price {value!r}") from e

        if not math.isfinite(price) or price <= 0:
            raise MalformedResponse(f"Invalid price {value!r}")
        return price

    async def close(self) -> None:
        """Cleanly close the HTTP client."""
        await self._client.aclose()

    def __repr__(self):
        return f"<{self.__class__.__name__}(name={self.name})>"
