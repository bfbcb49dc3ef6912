import asyncio
import logging
import random
import re
from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from config.currencies import DEFAULT_SOURCE_INTERVAL, CurrencySchedule, SourceInterval
from infrastructure.providers.base import BaseRateSource

logger = logging.getLogger(__name__)

DEFAULT_PATTERN_INTERVAL_MINUTES = 5
PATTERN_JITTER_SECONDS = 60
FIRST_RUN_GRACE_SECONDS = 60

_STEP_FIELD = re.compile(r"^\*/(\d+)$")


@dataclass(eq=False)
class ScheduledTask:
    """One (fiat, source) polling task. Interval and jitter are fixed at registration."""
    fiat_code: str
    source: BaseRateSource
    interval_minutes: int
    jitter_seconds: int
    last_run_at: datetime | None = None
    registered_at: datetime | None = None


@dataclass(frozen=True)
class SchedulerStats:
    total_tasks: int
    tasks_by_interval: dict[str, int]
    due_tasks: int


def parse_interval_minutes(pattern: str) -> int:
    """
    Read the recurring-minutes cadence from a 5- or 6-field cron pattern.

    ``*/N`` gives N, ``*`` gives 1 and a minute list such as ``1,6,11`` gives the
    gap between its first two entries. Anything else falls back to 5 minutes.
    """
    parts = pattern.split()
    minute_field = {5: 0, 6: 1}.get(len(parts))

    if minute_field is not None:
        minutes = parts[minute_field]
        step = _STEP_FIELD.match(minutes)
        if step and int(step.group(1)) > 0:
            return int(step.group(1))
        if minutes == "*":
            return 1
        if "," in minutes:
            values = minutes.split(",")
            if all(v.isdigit() for v in values) and int(values[1]) > int(values[0]):
                return int(values[1]) - int(values[0])

    logger.warning(
        f"Could not parse interval from pattern: {pattern!r}, "
        f"defaulting to {DEFAULT_PATTERN_INTERVAL_MINUTES} minutes"
    )
    return DEFAULT_PATTERN_INTERVAL_MINUTES


class TaskScheduler:
    """
    Centralized poller for every registered (fiat, source) pair.

    A periodic tick collects the tasks that are due, groups them by source and
    dispatches each group in staggered batches so no upstream sees a burst of
    simultaneous requests. Only one tick runs at a time.
    """

    def __init__(
        self,
        source_intervals: Mapping[str, SourceInterval] | None = None,
        default_interval: SourceInterval = DEFAULT_SOURCE_INTERVAL,
        tick_seconds: float = 22.0,
        batch_size: int = 10,
        stagger_seconds: float = 0.1,
        batch_delay_seconds: float = 0.5,
        group_delay_seconds: float = 0.5,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.source_intervals = dict(source_intervals or {})
        self.default_interval = default_interval
        self.tick_seconds = tick_seconds
        self.batch_size = batch_size
        self.stagger_seconds = stagger_seconds
        self.batch_delay_seconds = batch_delay_seconds
        self.group_delay_seconds = group_delay_seconds
        self.rng = rng or random.Random()
        self.clock = clock or (lambda: datetime.now(UTC))

        self.tasks: list[ScheduledTask] = []
        self._loop_task: asyncio.Task | None = None
        self._tick_tasks: set[asyncio.Task] = set()
        self._in_flight = False

    @property
    def is_started(self) -> bool:
        return self._loop_task is not None

    @property
    def is_ticking(self) -> bool:
        return self._in_flight

    def register_task(
        self, fiat_code: str, source: BaseRateSource, pattern: str | None = None
    ) -> ScheduledTask:
        if pattern:
            interval_minutes = parse_interval_minutes(pattern)
            jitter_seconds = self.rng.randrange(PATTERN_JITTER_SECONDS)
        else:
            config = self.source_intervals.get(source.name, self.default_interval)
            interval_minutes = self.rng.randint(config.min_minutes, config.max_minutes)
            jitter_seconds = self.rng.randint(0, config.max_jitter_seconds)

        task = ScheduledTask(
            fiat_code=fiat_code.upper(),
            source=source,
            interval_minutes=interval_minutes,
            jitter_seconds=jitter_seconds,
            registered_at=self.clock(),
        )
        self.tasks.append(task)
        logger.debug(
            f"Registered {task.fiat_code} on {source.name}: "
            f"every {interval_minutes}min + {jitter_seconds}s"
        )
        return task

    def register_currencies(
        self, currencies: Iterable[CurrencySchedule], sources: Mapping[str, BaseRateSource]
    ) -> int:
        """Register every (fiat, source) entry of the currency table. Returns the task count."""
        registered = 0
        for currency in currencies:
            for entry in currency.sources:
                source = sources.get(entry.source_name)
                if source is None:
                    logger.warning(
                        f"Unknown source {entry.source_name!r} for {currency.fiat_code}, skipping"
                    )
                    continue
                self.register_task(currency.fiat_code, source, entry.pattern)
                registered += 1

        logger.info(f"Registered {registered} polling tasks")
        return registered

    @staticmethod
    def is_task_due(task: ScheduledTask, now: datetime) -> bool:
        if task.last_run_at is None:
            # First run: spread across the minute by jitter instead of bursting at :00
            if now.second >= task.jitter_seconds:
                return True
            # Jitter past :59, or a second the tick cadence never lands on
            if task.registered_at is None:
                return False
            waited = (now - task.registered_at).total_seconds()
            return waited >= FIRST_RUN_GRACE_SECONDS + task.jitter_seconds

        seconds_since_last_run = (now - task.last_run_at).total_seconds()
        return seconds_since_last_run >= task.interval_minutes * 60 + task.jitter_seconds

    def start(self) -> None:
        if self._loop_task is not None:
            logger.warning("Task scheduler already started")
            return

        self._loop_task = asyncio.create_task(self._run())
        logger.info(
            f"Task scheduler started: {len(self.tasks)} tasks, tick every {self.tick_seconds}s"
        )

    def stop(self) -> None:
        """Stop future ticks. Fetches already in flight run to completion."""
        if self._loop_task is None:
            return

        self._loop_task.cancel()
        self._loop_task = None
        logger.info("Task scheduler stopped")

    async def wait_for_in_flight(self) -> None:
        if self._tick_tasks:
            await asyncio.gather(*self._tick_tasks)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            next_tick += self.tick_seconds
            await asyncio.sleep(max(0.0, next_tick - loop.time()))

            # Not awaited: an overrunning tick makes the next one hit the in-flight guard
            tick_task = asyncio.create_task(self.tick())
            self._tick_tasks.add(tick_task)
            tick_task.add_done_callback(self._tick_tasks.discard)

    async def tick(self) -> bool:
        """Run one due-check/dispatch cycle. Returns False if skipped by the reentrancy guard."""
        if self._in_flight:
            logger.debug("Previous scheduler run still in progress, skipping")
            return False

        self._in_flight = True
        try:
            now = self.clock()
            due_tasks = [task for task in self.tasks if self.is_task_due(task, now)]

            if not due_tasks:
                logger.debug(f"Scheduler check at {now.isoformat()} - no tasks due yet")
                return True

            logger.info(f"Found {len(due_tasks)} tasks due for execution")

            groups = self._group_by_source(due_tasks)
            for index, (source_name, source_tasks) in enumerate(groups.items()):
                if index > 0:
                    await asyncio.sleep(self.group_delay_seconds)

                logger.debug(f"Processing {len(source_tasks)} tasks for {source_name}")
                await self._dispatch_group(source_name, source_tasks, now)

            logger.info("Completed all due tasks")
        except Exception:
            logger.exception("Error in scheduler tick")
        finally:
            self._in_flight = False

        return True

    @staticmethod
    def _group_by_source(tasks: list[ScheduledTask]) -> dict[str, list[ScheduledTask]]:
        groups: dict[str, list[ScheduledTask]] = {}
        for task in tasks:
            groups.setdefault(task.source.name, []).append(task)
        return groups

    async def _dispatch_group(
        self, source_name: str, tasks: list[ScheduledTask], now: datetime
    ) -> None:
        for start in range(0, len(tasks), self.batch_size):
            if start > 0:
                await asyncio.sleep(self.batch_delay_seconds)

            batch = tasks[start:start + self.batch_size]
            await asyncio.gather(
                *(self._run_task(task, index, now) for index, task in enumerate(batch))
            )
            logger.debug(f"Completed batch {start // self.batch_size + 1} for {source_name}")

    async def _run_task(self, task: ScheduledTask, index: int, now: datetime) -> None:
        if index > 0:
            await asyncio.sleep(index * self.stagger_seconds)

        try:
            outcome = await task.source.fetch(task.fiat_code)
        except Exception:
            logger.exception(f"Error fetching {task.fiat_code} from {task.source.name}")
        else:
            if outcome.success:
                logger.debug(f"{task.source.name} {task.fiat_code}: {outcome.message}")
            else:
                logger.warning(f"{task.source.name} {task.fiat_code}: {outcome.message}")
        finally:
            # Tick reference time, not completion time; failures wait a full interval too
            task.last_run_at = now

    def get_stats(self) -> SchedulerStats:
        now = self.clock()
        distribution = Counter(f"{task.interval_minutes}min" for task in self.tasks)
        return SchedulerStats(
            total_tasks=len(self.tasks),
            tasks_by_interval=dict(distribution),
            due_tasks=sum(1 for task in self.tasks if self.is_task_due(task, now)),
        )
