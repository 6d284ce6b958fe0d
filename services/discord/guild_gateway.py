# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""
Guild Gateway Service

Single access point from the tracker services to the Discord API:
- Member listing for the configured guild
- Active and archived (paginated) thread listing for the entries channel
- Thread mutations (rename, lock, archive)
- Direct messages and panel upserts

Discord errors are translated into :class:`GatewayError`, :class:`DeliveryError`
and :class:`RenderError` so callers never handle ``discord`` exceptions directly.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Union

import discord

from services.config.config_service import TrackerConfig
from services.exceptions import DeliveryError, GatewayError, RenderError
from services.tracking.models import GuildMember
from utils.logging_utils import get_module_logger

logger = get_module_logger('guild_gateway')

_DISCORD_ERRORS = (discord.Forbidden, discord.NotFound, discord.HTTPException)


@dataclass(frozen=True)
class RawResource:
    """A thread as returned by Discord, before its name is decoded."""
    id: int
    name: str
    jump_url: str = ""
    owner_id: Optional[int] = None


@dataclass(frozen=True)
class ArchivedPage:
    """One page of archived threads plus the cursor for the next page."""
    resources: List[RawResource]
    next_cursor: Optional[datetime]

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None


def _to_raw(thread: Any) -> RawResource:
    return RawResource(
        id=thread.id,
        name=thread.name,
        jump_url=getattr(thread, 'jump_url', '') or '',
        owner_id=getattr(thread, 'owner_id', None),
    )


class GuildGateway:
    """Thin async wrapper around the py-cord client for one guild."""

    def __init__(self, bot: discord.Bot, config: TrackerConfig):
        self.bot = bot
        self.config = config

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    async def get_guild(self) -> discord.Guild:
        guild_id = self.config.require('guild_id')
        guild = self.bot.get_guild(guild_id)
        if guild is not None:
            return guild
        try:
            return await self.bot.fetch_guild(guild_id)
        except _DISCORD_ERRORS as e:
            raise GatewayError(f"Guild {guild_id} is not reachable: {e}", details={'guild_id': guild_id})

    async def get_channel(self, channel_id: int) -> Any:
        channel = self.bot.get_channel(channel_id)
        if channel is not None:
            return channel
        try:
            return await self.bot.fetch_channel(channel_id)
        except _DISCORD_ERRORS as e:
            raise GatewayError(f"Channel {channel_id} is not reachable: {e}", details={'channel_id': channel_id})

    async def threads_channel(self) -> discord.TextChannel:
        return await self.get_channel(self.config.require('threads_channel_id'))

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    async def list_group_members(self) -> List[GuildMember]:
        """All guild members, bots included (callers filter on ``is_bot``)."""
        guild = await self.get_guild()
        members = []
        try:
            async for member in guild.fetch_members(limit=None):
                members.append(GuildMember(
                    id=member.id,
                    name=member.name,
                    display_name=member.display_name,
                    is_bot=bool(getattr(member, 'bot', False)),
                ))
        except _DISCORD_ERRORS as e:
            raise GatewayError(f"Could not list members of guild {guild.id}: {e}")
        logger.debug(f"Fetched {len(members)} members from guild {guild.id}")
        return members

    # ------------------------------------------------------------------
    # Threads
    # ------------------------------------------------------------------
    async def list_active_resources(self) -> List[RawResource]:
        channel = await self.threads_channel()
        guild = await self.get_guild()
        try:
            threads = await guild.active_threads()
        except _DISCORD_ERRORS as e:
            raise GatewayError(f"Could not list active threads: {e}")
        return [_to_raw(thread) for thread in threads if thread.parent_id == channel.id]

    async def list_archived_resources(
        self,
        before: Optional[Union[datetime, int]] = None,
        limit: Optional[int] = None,
    ) -> ArchivedPage:
        """Fetch one page of archived threads older than *before*."""
        channel = await self.threads_channel()
        limit = limit or self.config.archived_page_size
        resources: List[RawResource] = []
        last_timestamp = None
        try:
            async for thread in channel.archived_threads(
                private=self.config.private_threads, limit=limit, before=before
            ):
                resources.append(_to_raw(thread))
                last_timestamp = thread.archive_timestamp
        except _DISCORD_ERRORS as e:
            raise GatewayError(f"Could not list archived threads: {e}")

        next_cursor = last_timestamp if len(resources) >= limit else None
        return ArchivedPage(resources=resources, next_cursor=next_cursor)

    async def get_thread(self, resource_id: int) -> discord.Thread:
        return await self.get_channel(resource_id)

    async def _edit_thread(self, resource_id: int, **changes: Any) -> None:
        thread = await self.get_thread(resource_id)
        try:
            await thread.edit(**changes)
        except _DISCORD_ERRORS as e:
            raise GatewayError(
                f"Could not update thread {resource_id}: {e}",
                details={'resource_id': resource_id, 'changes': list(changes)},
            )

    async def rename(self, resource_id: int, new_name: str) -> None:
        await self._edit_thread(resource_id, name=new_name)

    async def set_locked(self, resource_id: int, locked: bool) -> None:
        await self._edit_thread(resource_id, locked=locked)

    async def set_archived(self, resource_id: int, archived: bool) -> None:
        await self._edit_thread(resource_id, archived=archived)

    async def create_daily_thread(self, name: str) -> discord.Thread:
        channel = await self.threads_channel()
        thread_type = (
            discord.ChannelType.private_thread
            if self.config.private_threads
            else discord.ChannelType.public_thread
        )
        try:
            return await channel.create_thread(name=name, type=thread_type)
        except _DISCORD_ERRORS as e:
            raise GatewayError(f"Could not create thread '{name}': {e}", details={'name': name})

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    async def send_direct_message(self, user_id: int, text: str) -> None:
        try:
            user = self.bot.get_user(user_id) or await self.bot.fetch_user(user_id)
            await user.send(text)
        except _DISCORD_ERRORS as e:
            raise DeliveryError(f"Could not DM user {user_id}: {e}", details={'user_id': user_id})

    async def send_message(
        self, channel_id: int, content: Optional[str] = None, embed: Optional[discord.Embed] = None
    ) -> discord.Message:
        channel = await self.get_channel(channel_id)
        try:
            return await channel.send(content=content, embed=embed)
        except _DISCORD_ERRORS as e:
            raise GatewayError(f"Could not send to channel {channel_id}: {e}", details={'channel_id': channel_id})

    async def fetch_recent_messages(self, channel_id: int, limit: int = 50) -> List[discord.Message]:
        channel = await self.get_channel(channel_id)
        try:
            return [message async for message in channel.history(limit=limit)]
        except _DISCORD_ERRORS as e:
            raise GatewayError(f"Could not read channel {channel_id}: {e}", details={'channel_id': channel_id})

    async def publish_or_update(self, channel_id: int, message_id: Optional[int], content: str) -> int:
        """Edit message *message_id* in place, else send *content* as a new message.

        Returns the id of the message now holding *content*.
        """
        try:
            channel = await self.get_channel(channel_id)
        except GatewayError as e:
            raise RenderError(e.message, details={'channel_id': channel_id})

        if message_id:
            try:
                message = await channel.fetch_message(message_id)
                await message.edit(content=content)
                return message.id
            except _DISCORD_ERRORS as e:
                logger.warning(f"Could not edit message {message_id} in {channel_id}, sending a new one: {e}")

        try:
            message = await channel.send(content)
        except _DISCORD_ERRORS as e:
            raise RenderError(
                f"Could not publish to channel {channel_id}: {e}",
                details={'channel_id': channel_id, 'message_id': message_id},
            )
        logger.info(f"Published new panel message {message.id} in channel {channel_id}")
        return message.id
