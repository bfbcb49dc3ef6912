import asyncio

import httpx

from domain.exceptions.rate import MalformedResponse, NoDataFailure, RateSourceError
from domain.models.rate import RateQuote
from domain.utils.statistics import median
from infrastructure.persistence.database import Database

from .base import BaseRateSource


class BinanceP2PSource(BaseRateSource):
	"""Binance P2P order book. Each side's price is the median of the listed ads."""

	BASE_URL = 'https://p2p.binance.com/bapi/c2c/v2/friendly/c2c/adv/search'
	name = 'binance'
	stablecoins = ('USDT', 'USDC')

	def __init__(
		self,
		database: Database,
		client: httpx.AsyncClient | None = None,
		timeout: float = 10,
		rows: int = 10,
	):
		super().__init__(database, client=client, timeout=timeout)
		self.rows = rows

	async def fetch_quote(self, stablecoin: str, fiat_code: str) -> RateQuote:
		buy, sell = await asyncio.gather(
			self._fetch_side(stablecoin, fiat_code, 'BUY'),
			self._fetch_side(stablecoin, fiat_code, 'SELL'),
			return_exceptions=True,
		)
		for side, result in (('BUY', buy), ('SELL', sell)):
			if isinstance(result, RateSourceError):
				raise type(result)(f'{side} side: {result}') from result
			if isinstance(result, BaseException):
				raise result

		return RateQuote(
			fiat_code=fiat_code,
			stablecoin_code=stablecoin,
			buy_rate=median(buy),
			sell_rate=median(sell),
			source_name=self.name,
		)

	async def _fetch_side(self, stablecoin: str, fiat_code: str, trade_type: str) -> list[float]:
		payload = {
			'asset': stablecoin,
			'fiat': fiat_code,
			'tradeType': trade_type,
			'page': 1,
			'rows': self.rows,
		}
		data = await self._request('POST', self.BASE_URL, json=payload)

		if not isinstance(data, dict):
			raise MalformedResponse('Response is not a JSON object')
		listings = data.get('data')
		if listings is None:
			raise MalformedResponse("Missing 'data' field")
		if not isinstance(listings, list):
			raise MalformedResponse("'data' field is not a list")
		if not listings:
			raise NoDataFailure(f'No {trade_type} ads for {stablecoin}/{fiat_code}')

		prices = []
		for listing in listings:
			try:
				prices.append(self._parse_price(listing['adv']['price']))
			except (KeyError, TypeError, MalformedResponse):
				continue

		if not prices:
			raise MalformedResponse(f'No parseable {trade_type} ad prices for {stablecoin}/{fiat_code}')
		return prices
