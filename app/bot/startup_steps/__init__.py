# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Composable startup routines executed when the Discord bot becomes ready."""

from __future__ import annotations

from typing import Sequence

from ..startup_context import StartupStep
from .commands import load_extensions_step, synchronize_commands_step
from .scheduler import start_scheduler_step
from .sequence import run_startup_sequence
from .tracker import load_alarms_step, load_cheat_days_step, setup_tracker_step

STARTUP_STEPS: Sequence[StartupStep] = (
    load_extensions_step,
    synchronize_commands_step,
    setup_tracker_step,
    load_cheat_days_step,          # after setup_tracker_step so the ledger resolves member aliases
    load_alarms_step,
    start_scheduler_step,
)

__all__ = [
    "STARTUP_STEPS",
    "run_startup_sequence",
    "load_extensions_step",
    "synchronize_commands_step",
    "setup_tracker_step",
    "load_cheat_days_step",
    "load_alarms_step",
    "start_scheduler_step",
]
