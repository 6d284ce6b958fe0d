# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Unit tests for the startup sequence run on the first on_ready."""

import logging
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest
import pytz

from app.bot.runtime import BotRuntime
from app.bot.startup import StartupManager
from app.bot.startup_steps import STARTUP_STEPS
from services.exceptions import GatewayError, ReminderServiceError


@pytest.fixture
def bot():
    bot = Mock()
    bot.extensions = {}
    bot.application_commands = [SimpleNamespace(name="cheat"), SimpleNamespace(name="entry")]
    bot.sync_commands = AsyncMock()
    return bot


@pytest.fixture
def runtime(tracker_config, tmp_path):
    return BotRuntime(
        config=tracker_config,
        logger=logging.getLogger("tracker.test.startup"),
        timezone=pytz.timezone("America/Los_Angeles"),
        logs_dir=Path(tmp_path),
    )


@pytest.fixture
def services(tracker_config):
    reconciliation = Mock()
    reconciliation.get_service_stats.return_value = {"jobs": []}
    reconciliation.start.return_value = True
    return SimpleNamespace(
        tracker=SimpleNamespace(
            config=tracker_config, setup=AsyncMock(), rebuild=AsyncMock(), refresh_panels=AsyncMock()
        ),
        cheat=SimpleNamespace(setup=AsyncMock()),
        reminders=SimpleNamespace(load_alarms=AsyncMock(return_value=2), check_and_send_reminders=AsyncMock()),
        reconciliation=reconciliation,
    )


def test_step_order():
    assert [step.step_name for step in STARTUP_STEPS] == [
        "load_extensions_step",
        "synchronize_commands_step",
        "setup_tracker_step",
        "load_cheat_days_step",
        "load_alarms_step",
        "start_scheduler_step",
    ]


@pytest.mark.asyncio
async def test_first_ready_runs_every_step(bot, runtime, services):
    await StartupManager(bot, runtime, services).handle_ready()

    bot.load_extension.assert_called_once_with("cogs.tracker_cog")
    bot.sync_commands.assert_awaited_once_with(guild_ids=[1])
    services.tracker.setup.assert_awaited_once()
    services.cheat.setup.assert_awaited_once()
    services.reminders.load_alarms.assert_awaited_once()
    services.reconciliation.register_job.assert_called_once_with(
        "reminders", services.reminders.check_and_send_reminders
    )
    services.reconciliation.start.assert_called_once()


@pytest.mark.asyncio
async def test_reconnect_only_rebuilds(bot, runtime, services):
    manager = StartupManager(bot, runtime, services)
    await manager.handle_ready()

    await manager.handle_ready()

    services.tracker.setup.assert_awaited_once()
    services.tracker.rebuild.assert_awaited_once()
    services.tracker.refresh_panels.assert_awaited_once()
    assert bot.load_extension.call_count == 1


@pytest.mark.asyncio
async def test_loaded_extension_is_not_loaded_again(bot, runtime, services):
    bot.extensions = {"cogs.tracker_cog": object()}

    await StartupManager(bot, runtime, services).handle_ready()

    bot.load_extension.assert_not_called()


@pytest.mark.asyncio
async def test_failing_optional_step_is_skipped(bot, runtime, services):
    services.reminders.load_alarms.side_effect = ReminderServiceError("alarms channel unreadable")

    await StartupManager(bot, runtime, services).handle_ready()

    services.reconciliation.start.assert_called_once()


@pytest.mark.asyncio
async def test_failing_critical_step_aborts_startup(bot, runtime, services):
    services.tracker.setup.side_effect = GatewayError("guild unavailable")
    manager = StartupManager(bot, runtime, services)

    with pytest.raises(GatewayError):
        await manager.handle_ready()

    services.cheat.setup.assert_not_awaited()
    services.reconciliation.start.assert_not_called()
