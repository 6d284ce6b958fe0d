# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Factory helpers for creating the Discord bot client."""

from __future__ import annotations

import discord

from .runtime import BotRuntime


def _build_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.members = True
    intents.presences = False
    intents.typing = False
    intents.message_content = True
    return intents


def create_bot(runtime: BotRuntime) -> discord.Bot:
    """Create the py-cord client, scoping slash commands to the configured guild."""

    logger = runtime.logger
    guild_id = runtime.config.guild_id
    debug_guilds = [guild_id] if guild_id else None

    bot = discord.Bot(intents=_build_intents(), debug_guilds=debug_guilds)
    logger.info("Created bot with discord.Bot (guild scope: %s)", guild_id or "global")
    return bot