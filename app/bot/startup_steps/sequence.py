# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Runs the startup steps in order, timing each one."""

from __future__ import annotations

import time
from typing import List, Sequence

from services.exceptions import TrackerBaseException

from ..startup_context import StartupContext, StartupStep


async def run_startup_sequence(context: StartupContext, steps: Sequence[StartupStep]) -> List[str]:
    """Run *steps* sequentially; returns the names of skipped non-critical steps."""
    logger = context.logger
    skipped = []
    for step in steps:
        step_name = getattr(step, "step_name", getattr(step, "__name__", "unknown"))
        started = time.monotonic()
        logger.info("→ Running startup step: %s", step_name)
        try:
            await step(context)
        except TrackerBaseException as e:
            if getattr(step, "critical", True):
                logger.error("Startup step %s failed: %s", step_name, e, exc_info=True)
                raise
            logger.warning("Skipping startup step %s after error: %s", step_name, e)
            skipped.append(step_name)
            continue
        logger.info("✓ Completed startup step: %s (%.2fs)", step_name, time.monotonic() - started)
    return skipped
