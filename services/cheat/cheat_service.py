# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""
Cheat Day Service

Each participant may skip a few days.  Using one:
- decrements the participant's allowance and persists the ledger
- creates an already-archived thread for today so a rebuild counts the day
- marks the participant completed
"""

from datetime import datetime
from typing import Any, Optional, Tuple

import discord

from services.exceptions import GatewayError, MissingConfigError, RenderError
from services.tracking import thread_names
from services.tracking.models import GuildMember
from utils.logging_utils import get_module_logger

from .cheat_ledger import cheat_note, find_ledger_message, parse_ledger, serialize_ledger

logger = get_module_logger('cheat.cheat_service')

LEDGER_SCAN_LIMIT = 5


def member_from_user(user: Any) -> GuildMember:
    return GuildMember(
        id=user.id,
        name=user.name,
        display_name=getattr(user, 'display_name', None) or user.name,
        is_bot=bool(getattr(user, 'bot', False)),
    )


class CheatService:
    """Loads, spends and persists cheat days."""

    def __init__(self, gateway: Any, tracker: Any):
        self.gateway = gateway
        self.tracker = tracker
        self.message_id: Optional[int] = tracker.config.cheat_day_ref_message_id

    async def setup(self) -> None:
        logger.info("Setting up cheat day service.")
        await self.load()
        await self.persist()

    async def load(self) -> int:
        """Apply the ledger found in the reference channel; returns entries loaded."""
        try:
            channel_id = self.tracker.config.require('cheat_day_ref_channel_id')
            messages = await self.gateway.fetch_recent_messages(channel_id, limit=LEDGER_SCAN_LIMIT)
        except (MissingConfigError, GatewayError) as e:
            logger.error(f"Couldn't load cheat days: {e}")
            return 0

        message = find_ledger_message(messages)
        if message is None:
            logger.info("No existing cheat day ledger found; every participant keeps the initial allowance.")
            return 0

        self.message_id = message.id
        ledger = parse_ledger(message.content)
        await self.tracker.load_cheat_days(ledger)
        logger.info(f"Loaded {len(ledger)} cheat day records.")
        return len(ledger)

    async def persist(self) -> None:
        content = serialize_ledger(await self.tracker.cheat_ledger())
        if not content:
            logger.warning("Cheat day ledger is empty; nothing to persist.")
            return

        try:
            channel_id = self.tracker.config.require('cheat_day_ref_channel_id')
            self.message_id = await self.gateway.publish_or_update(channel_id, self.message_id, content)
        except (MissingConfigError, RenderError) as e:
            logger.error(f"Failed to persist cheat day ledger: {e}")

    def get_cheat_days(self, user: Any) -> int:
        return self.tracker.get_cheat_days(member_from_user(user).display_name)

    async def use_cheat_day(self, user: Any, now: Optional[datetime] = None) -> Tuple[bool, int]:
        """Spend one cheat day for *user*; returns ``(used, remaining)``."""
        member = member_from_user(user)
        used, remaining = await self.tracker.consume_cheat_day(member)
        if not used:
            logger.info(f"{member.name} has no cheat days available.")
            return False, remaining

        logger.warning(f"{member.name} used a cheat day. {remaining} remaining.")
        await self.persist()
        await self._create_cheat_thread(user, now)
        await self.tracker.mark_completed(member.display_name, now)
        return True, remaining

    async def _create_cheat_thread(self, user: Any, now: Optional[datetime]) -> None:
        clock = self.tracker.clock
        date_tag = clock.date_tag(now)
        day = clock.current_day_index(now)
        name = thread_names.encode(day, user.name, date_tag, archived=True)

        try:
            thread = await self.gateway.create_daily_thread(name)
            await thread.add_user(user)
            await thread.send(cheat_note(date_tag))
        except (MissingConfigError, GatewayError, discord.Forbidden, discord.NotFound, discord.HTTPException) as e:
            logger.error(f"Failed to create cheat day thread for {user.name}: {e}")
            return
        logger.info(f"Created cheat day thread {name} for {user.name} on day {day}.")
