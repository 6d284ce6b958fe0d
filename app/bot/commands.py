# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Helpers for managing application command registration."""

from __future__ import annotations

from typing import Iterable

import discord


def list_registered_command_names(bot: discord.Bot) -> Iterable[str]:
    """Names of the application commands the bot currently holds."""
    return [cmd.name for cmd in getattr(bot, "application_commands", [])]
