# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""
Error Report Service

Posts an embed describing a handled error to the configured error channel.
Reporting is best effort: a failure to post is only logged.
"""

from datetime import datetime, timezone
from typing import Any, Optional

import discord

from services.exceptions import GatewayError, MissingConfigError, TrackerBaseException
from utils.logging_utils import get_module_logger

logger = get_module_logger('error_report_service')


def build_error_embed(
    error_type: str, user_id: Optional[int], context: str, error_code: str
) -> discord.Embed:
    embed = discord.Embed(
        title="❈ EXCEPTION",
        color=0x000000,
        timestamp=datetime.now(timezone.utc),
    )
    embed.add_field(name="<T>", value=f"`{error_type}`", inline=True)
    embed.add_field(name="UID", value=f"`{user_id if user_id is not None else '-'}`", inline=True)
    embed.add_field(name="CTX", value=f"`{context}`", inline=False)
    embed.add_field(name="CODE", value=f"```{error_code}```", inline=False)
    return embed


class ErrorReportService:
    """Reports errors raised while serving a member to the error channel."""

    def __init__(self, gateway: Any):
        self.gateway = gateway

    async def report(self, error: Exception, *, user_id: Optional[int] = None, context: str = "") -> bool:
        """Post *error*; returns ``True`` when the report reached the channel."""
        if isinstance(error, TrackerBaseException):
            error_code = error.error_code
        else:
            error_code = type(error).__name__
        embed = build_error_embed(type(error).__name__, user_id, context or str(error), error_code)

        try:
            channel_id = self.gateway.config.require('error_channel_id')
            await self.gateway.send_message(channel_id, embed=embed)
        except (MissingConfigError, GatewayError) as e:
            logger.error(f"Can't send error report for {type(error).__name__}: {e}")
            return False

        logger.error(f"Error encountered and reported: {type(error).__name__} ({context})")
        return True
