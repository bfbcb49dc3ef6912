from .responses import AggregatedRateResponse, SchedulerStatsResponse

__all__ = [
	'AggregatedRateResponse',
	'SchedulerStatsResponse',
]
