# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""Shared runtime state for the reconciliation loop.

This module centralises the daily markers that gate the reset and finalize
windows so they fire at most once per calendar day, and the per-job
bookkeeping the loop reports through ``get_service_stats``.  The state is
in-memory only: after a restart a full rebuild from Discord replaces it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from utils.logging_utils import get_module_logger

logger = get_module_logger("scheduler.runtime")


@dataclass
class _SchedulerRuntimeState:
    """Container for the daily markers and tick bookkeeping."""

    last_reset_date: str = ""
    last_finalize_date: str = ""
    last_tick_reading: str = ""
    ticks: int = 0
    job_runs: Dict[str, int] = field(default_factory=dict)
    job_failures: Dict[str, int] = field(default_factory=dict)


class SchedulerRuntime:
    """Mutable runtime state shared by the tracker and the reconciliation loop."""

    def __init__(self) -> None:
        self._state = _SchedulerRuntimeState()

    # ------------------------------------------------------------------
    # Daily markers
    # ------------------------------------------------------------------
    @property
    def last_reset_date(self) -> str:
        return self._state.last_reset_date

    def mark_reset(self, iso_date: str) -> None:
        self._state.last_reset_date = iso_date

    def needs_reset(self, iso_date: str) -> bool:
        return self._state.last_reset_date != iso_date

    @property
    def last_finalize_date(self) -> str:
        return self._state.last_finalize_date

    def mark_finalized(self, iso_date: str) -> None:
        self._state.last_finalize_date = iso_date

    def needs_finalize(self, iso_date: str) -> bool:
        return self._state.last_finalize_date != iso_date

    # ------------------------------------------------------------------
    # Tick bookkeeping
    # ------------------------------------------------------------------
    @property
    def ticks(self) -> int:
        return self._state.ticks

    @property
    def last_tick_reading(self) -> str:
        return self._state.last_tick_reading

    def record_tick(self, reading: str) -> None:
        self._state.ticks += 1
        self._state.last_tick_reading = reading

    def record_job(self, name: str, *, failed: bool = False) -> None:
        counters = self._state.job_failures if failed else self._state.job_runs
        counters[name] = counters.get(name, 0) + 1
        if failed:
            logger.debug("Job %s failed %d time(s)", name, counters[name])

    def job_counters(self) -> Dict[str, Dict[str, int]]:
        return {
            "runs": dict(self._state.job_runs),
            "failures": dict(self._state.job_failures),
        }

    def reset(self) -> None:
        self._state = _SchedulerRuntimeState()


_runtime: Optional[SchedulerRuntime] = None


def get_scheduler_runtime() -> SchedulerRuntime:
    global _runtime
    if _runtime is None:
        _runtime = SchedulerRuntime()
    return _runtime


def reset_scheduler_runtime() -> None:
    global _runtime
    _runtime = None
