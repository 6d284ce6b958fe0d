# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Unit tests for GuildGateway.

The py-cord client is replaced by Mock/AsyncMock objects.
"""

from dataclasses import replace
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import discord
import pytest

from services.discord.guild_gateway import GuildGateway, RawResource
from services.exceptions import DeliveryError, GatewayError, MissingConfigError, RenderError


def _not_found():
    return discord.NotFound(Mock(status=404, reason="Not Found"), "Unknown Message")


async def _aiter(items):
    for item in items:
        yield item


def _thread(thread_id, name, parent_id=10, archived_at=None):
    return SimpleNamespace(
        id=thread_id, name=name, parent_id=parent_id, owner_id=None,
        jump_url=f"https://discord.com/channels/1/{thread_id}", archive_timestamp=archived_at,
    )


@pytest.fixture
def channel():
    channel = Mock()
    channel.id = 10
    channel.send = AsyncMock(return_value=SimpleNamespace(id=700))
    channel.fetch_message = AsyncMock()
    channel.create_thread = AsyncMock()
    return channel


@pytest.fixture
def guild():
    guild = Mock()
    guild.id = 1
    guild.active_threads = AsyncMock(return_value=[])
    return guild


@pytest.fixture
def bot(channel, guild):
    bot = Mock()
    bot.get_channel.return_value = channel
    bot.get_guild.return_value = guild
    return bot


@pytest.fixture
def gateway(bot, tracker_config):
    return GuildGateway(bot, tracker_config)


class TestPublishOrUpdate:
    @pytest.mark.asyncio
    async def test_edits_existing_message(self, gateway, channel):
        message = Mock(id=55)
        message.edit = AsyncMock()
        channel.fetch_message.return_value = message

        assert await gateway.publish_or_update(20, 55, "panel") == 55
        message.edit.assert_awaited_once_with(content="panel")
        channel.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sends_new_message_when_edit_fails(self, gateway, channel):
        channel.fetch_message.side_effect = _not_found()

        assert await gateway.publish_or_update(20, 55, "panel") == 700
        channel.send.assert_awaited_once_with("panel")

    @pytest.mark.asyncio
    async def test_sends_when_no_message_known(self, gateway, channel):
        assert await gateway.publish_or_update(20, None, "panel") == 700
        channel.fetch_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_render_error_when_both_fail(self, gateway, channel):
        channel.fetch_message.side_effect = _not_found()
        channel.send.side_effect = _not_found()

        with pytest.raises(RenderError):
            await gateway.publish_or_update(20, 55, "panel")

    @pytest.mark.asyncio
    async def test_render_error_when_channel_unreachable(self, gateway, bot):
        bot.get_channel.return_value = None
        bot.fetch_channel = AsyncMock(side_effect=_not_found())

        with pytest.raises(RenderError):
            await gateway.publish_or_update(20, None, "panel")


class TestThreads:
    @pytest.mark.asyncio
    async def test_active_threads_of_entries_channel_only(self, gateway, guild):
        guild.active_threads.return_value = [_thread(1, "day-5-ava-10-08-25"), _thread(2, "other", parent_id=99)]

        resources = await gateway.list_active_resources()

        assert resources == [RawResource(id=1, name="day-5-ava-10-08-25", jump_url="https://discord.com/channels/1/1")]

    @pytest.mark.asyncio
    async def test_full_archived_page_has_cursor(self, gateway, channel):
        stamp = datetime(2025, 10, 7, tzinfo=timezone.utc)
        calls = []

        def archived_threads(**kwargs):
            calls.append(kwargs)
            return _aiter([_thread(1, "a", archived_at=datetime(2025, 10, 8, tzinfo=timezone.utc)),
                           _thread(2, "b", archived_at=stamp)])

        channel.archived_threads = archived_threads

        page = await gateway.list_archived_resources(limit=2)

        assert [item.id for item in page.resources] == [1, 2]
        assert page.next_cursor == stamp
        assert page.has_more
        assert calls == [{'private': True, 'limit': 2, 'before': None}]

    @pytest.mark.asyncio
    async def test_partial_archived_page_is_last(self, gateway, channel):
        channel.archived_threads = lambda **kwargs: _aiter([_thread(1, "a")])

        page = await gateway.list_archived_resources()

        assert not page.has_more

    @pytest.mark.asyncio
    async def test_create_private_thread(self, gateway, channel):
        await gateway.create_daily_thread("day-5-ava-10-08-25")

        channel.create_thread.assert_awaited_once_with(
            name="day-5-ava-10-08-25", type=discord.ChannelType.private_thread
        )

    @pytest.mark.asyncio
    async def test_failed_rename_raises_gateway_error(self, gateway, channel):
        channel.edit = AsyncMock(side_effect=_not_found())

        with pytest.raises(GatewayError):
            await gateway.rename(1, "archive-day-5-ava-10-08-25")

    @pytest.mark.asyncio
    async def test_missing_threads_channel(self, bot, tracker_config):
        gateway = GuildGateway(bot, replace(tracker_config, threads_channel_id=None))

        with pytest.raises(MissingConfigError):
            await gateway.list_active_resources()


class TestMembersAndMessages:
    @pytest.mark.asyncio
    async def test_members(self, gateway, guild):
        guild.fetch_members = lambda limit=None: _aiter([
            SimpleNamespace(id=1, name="ava_l", display_name="Ava", bot=False),
            SimpleNamespace(id=2, name="helper", display_name="helper", bot=True),
        ])

        members = await gateway.list_group_members()

        assert [(m.name, m.display_name, m.is_bot) for m in members] == [
            ("ava_l", "Ava", False), ("helper", "helper", True)
        ]

    @pytest.mark.asyncio
    async def test_direct_message_failure(self, gateway, bot):
        user = Mock()
        user.send = AsyncMock(side_effect=discord.Forbidden(Mock(status=403, reason="Forbidden"), "Cannot DM"))
        bot.get_user.return_value = user

        with pytest.raises(DeliveryError):
            await gateway.send_direct_message(1, "hello")

    @pytest.mark.asyncio
    async def test_recent_messages(self, gateway, channel):
        channel.history = lambda limit: _aiter([SimpleNamespace(id=1), SimpleNamespace(id=2)][:limit])

        messages = await gateway.fetch_recent_messages(30, limit=1)

        assert [message.id for message in messages] == [1]
