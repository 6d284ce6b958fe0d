# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Startup orchestration for the Discord bot."""

from __future__ import annotations

import discord

from .runtime import BotRuntime
from .services import TrackerServices
from .startup_context import StartupContext
from .startup_steps import STARTUP_STEPS, run_startup_sequence


class StartupManager:
    """Coordinate the expensive initialization routines once the bot is ready."""

    def __init__(self, bot: discord.Bot, runtime: BotRuntime, services: TrackerServices):
        self._context = StartupContext(bot=bot, runtime=runtime, services=services)
        self._initial_startup_done = False

    async def handle_ready(self) -> None:
        logger = self._context.logger

        if self._initial_startup_done:
            # on_ready fires again after every reconnect
            logger.info("Reconnected; rebuilding tracker state.")
            await self._context.services.tracker.rebuild()
            await self._context.services.tracker.refresh_panels()
            return

        logger.info("First initialization after start...")

        skipped = await run_startup_sequence(self._context, STARTUP_STEPS)
        if skipped:
            logger.warning("Startup finished without: %s", ", ".join(skipped))

        self._initial_startup_done = True
        logger.info("Initialization complete.")
        logger.info("Tracker is ready.")
