from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AggregatedRateResponse(BaseModel):
	fiat_code: str = Field(..., description='Fiat currency code')
	stablecoin_code: str = Field(..., description='Stablecoin code')
	sources: list[str] = Field(..., description='Sources that contributed to the rate')
	buy_rate: float = Field(..., description='Fiat units per stablecoin when buying')
	sell_rate: float = Field(..., description='Fiat units per stablecoin when selling')
	generated_at: datetime = Field(..., description='When the aggregate was computed')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'fiat_code': 'GHS',
				'stablecoin_code': 'USDT',
				'sources': ['quidax', 'binance'],
				'buy_rate': 12.15,
				'sell_rate': 11.9,
				'generated_at': '2025-09-27T10:30:00Z',
			}
		}
	)


class SchedulerStatsResponse(BaseModel):
	running: bool = Field(..., description='Whether the polling loop is active')
	total_tasks: int = Field(..., description='Registered (fiat, source) polling tasks')
	tasks_by_interval: dict[str, int] = Field(..., description='Task count per polling interval')
	due_tasks: int = Field(..., description='Tasks due at request time')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'running': True,
				'total_tasks': 242,
				'tasks_by_interval': {'4min': 61, '5min': 90, '10min': 91},
				'due_tasks': 3,
			}
		}
	)
