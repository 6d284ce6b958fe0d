# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Startup routines for loading the cog and synchronising slash commands."""

from __future__ import annotations

import asyncio

import discord

from ..commands import list_registered_command_names
from ..startup_context import StartupContext, as_step

TRACKER_EXTENSION = "cogs.tracker_cog"


@as_step
async def load_extensions_step(context: StartupContext) -> None:
    bot = context.bot
    logger = context.logger

    logger.info("Loading extensions...")
    if TRACKER_EXTENSION in bot.extensions:
        logger.info("Extension %s already loaded, skipping", TRACKER_EXTENSION)
        return

    try:
        bot.load_extension(TRACKER_EXTENSION)
    except discord.DiscordException as e:
        logger.error("Failed to load extension '%s': %s", TRACKER_EXTENSION, e, exc_info=True)
        raise
    logger.info("Successfully loaded extension: %s", TRACKER_EXTENSION)


@as_step
async def synchronize_commands_step(context: StartupContext) -> None:
    bot = context.bot
    logger = context.logger

    guild_id = context.runtime.config.guild_id
    if not guild_id:
        logger.info("No guild ID configured, skipping command synchronization")
        return

    command_names = list(list_registered_command_names(bot))
    logger.info("Synchronizing %d commands for Guild ID %s: %s", len(command_names), guild_id, command_names)

    try:
        await bot.sync_commands(guild_ids=[guild_id])
        logger.info("Commands synchronized successfully")
    except (asyncio.TimeoutError, discord.Forbidden, discord.HTTPException, discord.NotFound) as e:
        logger.error("Error syncing commands: %s", e)
