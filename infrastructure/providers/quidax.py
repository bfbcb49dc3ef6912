from domain.exceptions.rate import MalformedResponse, NoDataFailure
from domain.models.rate import RateQuote

from .base import BaseRateSource


class QuidaxSource(BaseRateSource):
	"""Quidax exchange ticker. Buy and sell come straight from the ticker."""

	BASE_URL = 'https://app.quidax.io/api/v1/markets/tickers'
	name = 'quidax'
	stablecoins = ('USDT',)

	def _build_request_url(self, stablecoin: str, fiat_code: str) -> str:
		return f'{self.BASE_URL}/{stablecoin.lower()}{fiat_code.lower()}'

	async def fetch_quote(self, stablecoin: str, fiat_code: str) -> RateQuote:
		data = await self._request('GET', self._build_request_url(stablecoin, fiat_code))

		if not isinstance(data, dict):
			raise MalformedResponse('Response is not a JSON object')
		if data.get('status') != 'success':
			raise NoDataFailure(
				f"Quidax returned status {data.get('status')!r} for {stablecoin}/{fiat_code}"
			)

		try:
			ticker = data['data']['ticker']
			buy_rate = self._parse_price(ticker['buy'])
			sell_rate = self._parse_price(ticker['sell'])
		except (KeyError, TypeError) as e:
			raise MalformedResponse(f'Missing ticker field: {e}') from e

		return RateQuote(
			fiat_code=fiat_code,
			stablecoin_code=stablecoin,
			buy_rate=buy_rate,
			sell_rate=sell_rate,
			source_name=self.name,
		)
