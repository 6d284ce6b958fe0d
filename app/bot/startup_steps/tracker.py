# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Startup routines rebuilding the tracker state from Discord."""

from __future__ import annotations

from ..startup_context import StartupContext, as_step


@as_step
async def setup_tracker_step(context: StartupContext) -> None:
    logger = context.logger
    logger.info("Rebuilding statuses and history from existing threads...")
    await context.services.tracker.setup()


@as_step(critical=False)
async def load_cheat_days_step(context: StartupContext) -> None:
    await context.services.cheat.setup()


@as_step(critical=False)
async def load_alarms_step(context: StartupContext) -> None:
    count = await context.services.reminders.load_alarms()
    context.logger.info("Reminder alarms loaded: %d", count)
