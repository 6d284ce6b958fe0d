# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Construction of the tracker services shared by startup steps and cogs."""

from __future__ import annotations

from dataclasses import dataclass

import discord

from services.cheat.cheat_service import CheatService
from services.config.config_service import TrackerConfig
from services.discord.error_report_service import ErrorReportService
from services.discord.guild_gateway import GuildGateway
from services.entries.entry_service import EntryService
from services.reminders.reminder_service import ReminderService
from services.scheduling.reconciliation_service import ReconciliationService
from services.scheduling.runtime import get_scheduler_runtime
from services.tracking.tracker_service import TrackerService


@dataclass(frozen=True)
class TrackerServices:
    """Every service instance of the process, built once and passed by reference."""

    gateway: GuildGateway
    tracker: TrackerService
    entries: EntryService
    cheat: CheatService
    reminders: ReminderService
    reconciliation: ReconciliationService
    error_reports: ErrorReportService


def build_services(bot: discord.Bot, config: TrackerConfig) -> TrackerServices:
    gateway = GuildGateway(bot, config)
    runtime = get_scheduler_runtime()
    tracker = TrackerService(gateway, config, runtime=runtime)
    return TrackerServices(
        gateway=gateway,
        tracker=tracker,
        entries=EntryService(gateway, tracker),
        cheat=CheatService(gateway, tracker),
        reminders=ReminderService(gateway, tracker),
        reconciliation=ReconciliationService(
            tracker, check_interval=config.check_interval, runtime=runtime
        ),
        error_reports=ErrorReportService(gateway),
    )
