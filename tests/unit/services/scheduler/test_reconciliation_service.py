# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Unit tests for ReconciliationService.

Tests the reset and finalize windows, job execution and the loop lifecycle.
"""

import asyncio
from datetime import datetime, timezone

import pytest

from conftest import DAY_5_NOON
from services.scheduling.reconciliation_service import ReconciliationService, seconds_until_next_tick
from services.tracking.tracker_service import TrackerService

RESET_INSTANT = datetime(2025, 10, 9, 7, 1, tzinfo=timezone.utc)      # 00:01 PDT, day 6
FINALIZE_INSTANT = datetime(2025, 10, 9, 6, 59, tzinfo=timezone.utc)  # 23:59 PDT, day 5


@pytest.fixture
def tracker(gateway, tracker_config, runtime):
    tracker = TrackerService(gateway, tracker_config, runtime=runtime)
    tracker.store.scan_membership(["ava", "bo"], DAY_5_NOON)
    tracker.store.mark_completed("ava", DAY_5_NOON)
    return tracker


@pytest.fixture
def service(tracker, runtime):
    return ReconciliationService(tracker, check_interval=1, runtime=runtime)


class TestWindows:
    @pytest.mark.asyncio
    async def test_reset_window(self, service, tracker):
        await service.tick(RESET_INSTANT)

        assert tracker.get_user_status("ava") is False
        assert service.tick_stats['resets'] == 1
        assert service.runtime.last_reset_date == "2025-10-09"

    @pytest.mark.asyncio
    async def test_reset_fires_once_per_day(self, service):
        await service.tick(RESET_INSTANT)
        await service.tick(RESET_INSTANT)

        assert service.tick_stats['resets'] == 1

    @pytest.mark.asyncio
    async def test_finalize_window(self, service, tracker):
        await service.tick(FINALIZE_INSTANT)

        assert service.tick_stats['finalizations'] == 1
        assert service.tick_stats['resets'] == 0
        assert tracker.get_user_status("ava") is True
        assert service.runtime.last_finalize_date == "2025-10-08"

    @pytest.mark.asyncio
    async def test_other_readings_do_nothing(self, service, tracker):
        await service.tick(DAY_5_NOON)

        assert service.tick_stats['resets'] == 0
        assert service.tick_stats['finalizations'] == 0
        assert tracker.get_user_status("ava") is True
        assert service.runtime.last_tick_reading == "12:00"


class TestJobs:
    @pytest.mark.asyncio
    async def test_jobs_receive_local_time(self, service):
        seen = []

        async def job(now):
            seen.append(now)

        service.register_job("probe", job)
        await service.tick(DAY_5_NOON)

        assert len(seen) == 1
        assert seen[0].strftime("%H:%M %Z") == "12:00 PDT"
        assert service.runtime.job_counters()["runs"] == {"probe": 1}

    @pytest.mark.asyncio
    async def test_failing_job_does_not_stop_the_tick(self, service):
        seen = []

        async def broken(now):
            raise ValueError("boom")

        async def healthy(now):
            seen.append(now)

        service.register_job("broken", broken)
        service.register_job("healthy", healthy)
        await service.tick(DAY_5_NOON)

        assert len(seen) == 1
        assert service.runtime.job_counters() == {"runs": {"healthy": 1}, "failures": {"broken": 1}}


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_and_stop(self, service):
        assert service.start() is True
        assert service.start() is False

        await asyncio.sleep(0.05)
        assert service.runtime.ticks >= 1

        assert await service.stop() is True
        assert service.running is False
        assert service.task is None
        assert await service.stop() is False

    def test_stats(self, service):
        service.register_job("reminders", lambda now: None)

        stats = service.get_service_stats()

        assert stats['running'] is False
        assert stats['check_interval'] == 1
        assert stats['jobs'] == ["reminders"]


class TestTickAlignment:
    MINUTE = datetime(2025, 10, 9, 7, 1, tzinfo=timezone.utc).timestamp()

    @pytest.mark.parametrize("elapsed,expected", [
        (1.0, 60.0),     # tick landed on time
        (1.5, 59.5),
        (3.25, 57.75),   # slow tick or late wake-up
        (0.5, 0.5),      # woke just before the boundary
        (59.0, 2.0),
    ])
    def test_sleeps_to_next_minute_boundary(self, elapsed, expected):
        assert seconds_until_next_tick(self.MINUTE + elapsed, 60) == pytest.approx(expected)

    def test_overshoot_does_not_accumulate(self):
        timestamp = self.MINUTE + 1.0
        readings = []
        for _ in range(180):
            timestamp += seconds_until_next_tick(timestamp, 60) + 0.4
            readings.append(datetime.fromtimestamp(timestamp, timezone.utc).strftime("%H:%M"))

        assert len(set(readings)) == 180
