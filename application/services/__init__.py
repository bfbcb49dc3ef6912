from .aggregation_service import RateAggregationService
from .scheduler import ScheduledTask, SchedulerStats, TaskScheduler
from .service_factory import ServiceFactory

__all__ = [
	'RateAggregationService',
	'ScheduledTask',
	'SchedulerStats',
	'ServiceFactory',
	'TaskScheduler',
]
