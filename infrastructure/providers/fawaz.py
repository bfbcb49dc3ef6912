from domain.exceptions.rate import MalformedResponse, NoDataFailure
from domain.models.rate import RateQuote

from .base import BaseRateSource


class FawazExchangeSource(BaseRateSource):
	"""fawazahmed0 currency-api daily snapshot. One mid rate serves as both buy and sell."""

	BASE_URL = 'https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1/currencies'
	name = 'fawaz-exchange-api'
	stablecoins = ('USDT', 'USDC')

	def _build_request_url(self, stablecoin: str) -> str:
		return f'{self.BASE_URL}/{stablecoin.lower()}.json'

	async def fetch_quote(self, stablecoin: str, fiat_code: str) -> RateQuote:
		data = await self._request('GET', self._build_request_url(stablecoin))

		if not isinstance(data, dict):
			raise MalformedResponse('Response is not a JSON object')
		if not data.get('date'):
			raise MalformedResponse(f"Missing 'date' for {stablecoin}")

		rates = data.get(stablecoin.lower())
		if not isinstance(rates, dict):
			raise MalformedResponse(f"Missing '{stablecoin.lower()}' rates object")

		value = rates.get(fiat_code.lower())
		if value is None:
			raise NoDataFailure(f'No rate for {stablecoin}/{fiat_code}')

		rate = self._parse_price(value)
		return RateQuote(
			fiat_code=fiat_code,
			stablecoin_code=stablecoin,
			buy_rate=rate,
			sell_rate=rate,
			source_name=self.name,
		)
