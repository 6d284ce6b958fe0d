# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

import asyncio
import time
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from services.exceptions import TrackerBaseException
from utils.logging_utils import get_module_logger

from .runtime import SchedulerRuntime, get_scheduler_runtime

logger = get_module_logger('scheduler.reconciliation')

RESET_READING = "00:01"
FINALIZE_READING = "23:59"
DEFAULT_CHECK_INTERVAL = 60
# Ticks land this many seconds after each interval boundary of the wall clock
TICK_OFFSET = 1.0

# Errors a tick survives; anything else is a bug and is left to propagate
_TICK_ERRORS = (TrackerBaseException, RuntimeError, OSError, AttributeError, TypeError, ValueError, KeyError)

Job = Callable[[datetime], Awaitable[Any]]


def seconds_until_next_tick(timestamp: float, interval: float, offset: float = TICK_OFFSET) -> float:
    """Seconds from *timestamp* to the next interval boundary plus *offset*.

    The result is always in ``(0, interval]``.
    """
    return interval - ((timestamp - offset) % interval)


class ReconciliationService:
    """Periodic loop driving the daily reset and finalize windows.

    One tick runs at a time: the loop awaits the tick, then sleeps until
    just after the next interval boundary of the wall clock.  Extra jobs
    (reminders) run after the windows on every tick.
    """

    def __init__(
        self,
        tracker: Any,
        *,
        check_interval: int = DEFAULT_CHECK_INTERVAL,
        runtime: Optional[SchedulerRuntime] = None,
    ):
        self.tracker = tracker
        self.check_interval = check_interval
        self.runtime = runtime or get_scheduler_runtime()
        self.running = False
        self.task: Optional[asyncio.Task] = None
        self.last_check_time: Optional[float] = None
        self._jobs: List[Tuple[str, Job]] = []
        self.tick_stats = {
            'resets': 0,
            'finalizations': 0,
            'avg_tick_time': 0.0,
        }

    def register_job(self, name: str, job: Job) -> None:
        """Run ``job(now)`` on every tick after the daily windows."""
        self._jobs.append((name, job))

    def start(self) -> bool:
        """Starts the loop as a task on the running event loop."""
        if self.running:
            logger.warning("Reconciliation Service is already running.")
            return False

        self.running = True
        self.task = asyncio.get_running_loop().create_task(self._service_loop())
        logger.info(f"Reconciliation Service started (check interval: {self.check_interval}s)")
        return True

    async def stop(self) -> bool:
        """Stops the loop, waiting for a tick in progress to be cancelled."""
        if not self.running:
            logger.warning("Reconciliation Service is not running.")
            return False

        self.running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
            self.task = None

        stats = self.tick_stats
        logger.info(
            f"Reconciliation Service stopped. Stats: {self.runtime.ticks} ticks, "
            f"{stats['resets']} resets, {stats['finalizations']} finalizations"
        )
        return True

    async def _service_loop(self):
        logger.info(f"Reconciliation loop started (interval: {self.check_interval}s)")

        while self.running:
            start_time = time.monotonic()
            try:
                await self.tick()
            except _TICK_ERRORS as e:
                logger.error(f"Error during reconciliation tick: {e}", exc_info=True)

            execution_time = time.monotonic() - start_time
            self.tick_stats['avg_tick_time'] = (
                (self.tick_stats['avg_tick_time'] * 0.9) + (execution_time * 0.1)
            )
            self.last_check_time = time.time()

            sleep_interval = seconds_until_next_tick(self.last_check_time, self.check_interval)
            logger.debug(f"Tick completed in {execution_time:.2f}s, sleeping for {sleep_interval:.2f}s")
            await asyncio.sleep(sleep_interval)

    async def tick(self, now: Optional[datetime] = None) -> None:
        """Run one reconciliation pass for the instant *now*."""
        clock = self.tracker.clock
        reading = clock.clock_reading(now)
        self.runtime.record_tick(reading)

        if reading == RESET_READING:
            if await self.tracker.reset_for_new_day(now):
                self.tick_stats['resets'] += 1
        elif reading == FINALIZE_READING:
            if await self.tracker.finalize_day(now):
                self.tick_stats['finalizations'] += 1

        local_now = clock.local_now(now)
        for name, job in self._jobs:
            try:
                await job(local_now)
                self.runtime.record_job(name)
            except _TICK_ERRORS as e:
                self.runtime.record_job(name, failed=True)
                logger.error(f"Job {name} failed: {e}", exc_info=True)

    def get_service_stats(self) -> Dict[str, Any]:
        """
        Gets current service statistics for monitoring.

        Returns:
            Dictionary with service statistics
        """
        return {
            'running': self.running,
            'ticks': self.runtime.ticks,
            'last_tick_reading': self.runtime.last_tick_reading,
            'last_check_time': self.last_check_time,
            'check_interval': self.check_interval,
            'last_reset_date': self.runtime.last_reset_date,
            'last_finalize_date': self.runtime.last_finalize_date,
            'jobs': [name for name, _ in self._jobs],
            **self.runtime.job_counters(),
            **self.tick_stats,
        }
