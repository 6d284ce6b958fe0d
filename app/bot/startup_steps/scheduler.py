# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Startup routines for the reconciliation loop."""

from __future__ import annotations

from ..startup_context import StartupContext, as_step


@as_step
async def start_scheduler_step(context: StartupContext) -> None:
    logger = context.logger
    services = context.services
    reconciliation = services.reconciliation

    if "reminders" not in reconciliation.get_service_stats()["jobs"]:
        reconciliation.register_job("reminders", services.reminders.check_and_send_reminders)

    logger.info("Starting Reconciliation Service...")
    if reconciliation.start():
        logger.info("Reconciliation Service started successfully.")
    else:
        logger.warning("Reconciliation Service could not be started or was already running.")
