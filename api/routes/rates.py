from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import get_aggregation_service, get_scheduler
from api.schemas import AggregatedRateResponse, SchedulerStatsResponse
from application.services import RateAggregationService, TaskScheduler

router = APIRouter(prefix='/api', tags=['rates'])


@router.get(
	'/rates/{stablecoin}',
	response_model=list[AggregatedRateResponse],
	status_code=status.HTTP_200_OK,
	summary='Get aggregated fiat rates for a stablecoin',
)
async def get_rates(
	stablecoin: Annotated[
		str,
		Path(
			min_length=3,
			max_length=10,
		),
	],
	service: Annotated[RateAggregationService, Depends(get_aggregation_service)],
	fiats: Annotated[
		str | None,
		Query(description='Comma separated fiat codes, e.g. NGN,GHS'),
	] = None,
) -> list[AggregatedRateResponse]:
	fiat_codes = [code for code in fiats.split(',') if code.strip()] if fiats else None

	rates = await service.get_rates(stablecoin, fiat_codes)
	return [
		AggregatedRateResponse(
			fiat_code=rate.fiat_code,
			stablecoin_code=rate.stablecoin_code,
			sources=rate.sources,
			buy_rate=rate.buy_rate,
			sell_rate=rate.sell_rate,
			generated_at=rate.generated_at,
		)
		for rate in rates
	]


@router.get(
	'/scheduler/stats',
	response_model=SchedulerStatsResponse,
	status_code=status.HTTP_200_OK,
	summary='Polling scheduler statistics',
)
async def get_scheduler_stats(
	scheduler: Annotated[TaskScheduler, Depends(get_scheduler)],
) -> SchedulerStatsResponse:
	stats = scheduler.get_stats()
	return SchedulerStatsResponse(
		running=scheduler.is_started,
		total_tasks=stats.total_tasks,
		tasks_by_interval=stats.tasks_by_interval,
		due_tasks=stats.due_tasks,
	)
