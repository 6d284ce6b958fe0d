# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Event wiring for the Discord bot."""

from __future__ import annotations

import traceback
from typing import Any

import discord

from services.exceptions import TrackerBaseException

from .runtime import BotRuntime
from .services import TrackerServices
from .startup import StartupManager

COMMAND_FAILED_MESSAGE = "Something went wrong while running this command. The error has been reported."


def register_event_handlers(bot: discord.Bot, runtime: BotRuntime, services: TrackerServices) -> None:
    """Attach the core event handlers to the bot instance."""

    startup_manager = StartupManager(bot, runtime, services)
    logger = runtime.logger

    @bot.event
    async def on_ready():
        logger.info("-" * 50)
        user = getattr(bot, "user", None)
        if user is not None:
            logger.info("Logged in as %s (ID: %s)", user.name, user.id)
        else:
            logger.info("Logged in (user unavailable during startup)")
        logger.info("py-cord Version: %s", discord.__version__)
        logger.info("-" * 50)

        await startup_manager.handle_ready()

    @bot.event
    async def on_error(event: str, *args: Any, **kwargs: Any) -> None:
        logger.error("Error in event %s: %s", event, traceback.format_exc())

    @bot.event
    async def on_application_command_error(
        ctx: discord.ApplicationContext, error: discord.DiscordException
    ) -> None:
        original = getattr(error, "original", error)
        command_name = getattr(ctx.command, "qualified_name", ctx.command)
        if isinstance(original, TrackerBaseException):
            logger.error("Command Error in '%s': %s", command_name, original)
        else:
            logger.error(
                "Unexpected Command Error in '%s': %s", command_name, original,
                exc_info=(type(original), original, original.__traceback__),
            )

        await services.error_reports.report(
            original, user_id=getattr(ctx.author, "id", None), context=f"/{command_name}"
        )
        try:
            await ctx.respond(COMMAND_FAILED_MESSAGE, ephemeral=True)
        except discord.HTTPException:
            logger.debug("Could not notify the member about the failed command")
