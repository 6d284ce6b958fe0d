# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Slash commands and listeners of the tracker.

Commands are thin: every decision lives in the services built at startup
and attached to the bot as ``bot.tracker_services``.
"""

import discord
from discord.ext import commands

from services.exceptions import (
    EntryServiceError,
    GatewayError,
    InvalidReminderTimeError,
    ReminderServiceError,
)
from utils.logging_utils import get_module_logger

logger = get_module_logger('cogs.tracker_cog')

CHEAT_USED_MESSAGE = "**Cheat day was successfully used.**\nYou have {remaining} cheat day(s) remaining."
NO_CHEAT_DAYS_MESSAGE = "**You have no cheat days available.**"
CHEAT_STATUS_MESSAGE = "You have {count} cheat day(s) available."
REMINDER_SET_MESSAGE = "Reminder successfully set for {time} ({timezone})."
ENTRY_CREATED_MESSAGE = "Your entry for today is ready: {url}"
ENTRY_CREATE_FAILED_MESSAGE = "**ERROR**: Your entry could not be created. Please try again later."
ENTRIES_SENT_MESSAGE = "Check your direct messages."


class TrackerCog(commands.Cog):
    """Member-facing commands of the challenge tracker."""

    cheat = discord.SlashCommandGroup("cheat", "Use or check your cheat days")
    reminder = discord.SlashCommandGroup("reminder", "Daily entry reminders")
    entry = discord.SlashCommandGroup("entry", "Your daily entries")

    def __init__(self, bot: discord.Bot):
        self.bot = bot
        self.services = bot.tracker_services

    # ------------------------------------------------------------------
    # /cheat
    # ------------------------------------------------------------------
    @cheat.command(name="use", description="Use one of your cheat days for today")
    async def cheat_use(self, ctx: discord.ApplicationContext):
        await ctx.defer(ephemeral=True)
        used, remaining = await self.services.cheat.use_cheat_day(ctx.author)
        if used:
            await ctx.followup.send(CHEAT_USED_MESSAGE.format(remaining=remaining), ephemeral=True)
        else:
            await ctx.followup.send(NO_CHEAT_DAYS_MESSAGE, ephemeral=True)

    @cheat.command(name="status", description="Show how many cheat days you have left")
    async def cheat_status(self, ctx: discord.ApplicationContext):
        count = self.services.cheat.get_cheat_days(ctx.author)
        await ctx.respond(CHEAT_STATUS_MESSAGE.format(count=count), ephemeral=True)

    # ------------------------------------------------------------------
    # /reminder
    # ------------------------------------------------------------------
    @reminder.command(name="set", description="Get a direct message at this time if today's entry is open")
    async def reminder_set(
        self,
        ctx: discord.ApplicationContext,
        time: discord.Option(str, description="24-hour time, for example 18:30"),
    ):
        await ctx.defer(ephemeral=True)
        try:
            alarm = await self.services.reminders.set_reminder(ctx.author.id, ctx.author.name, time)
        except InvalidReminderTimeError as e:
            await ctx.followup.send(f"**ERROR**: {e.message}", ephemeral=True)
            return
        except ReminderServiceError as e:
            logger.error(f"Could not set reminder for {ctx.author.name}: {e}")
            await self.services.error_reports.report(e, user_id=ctx.author.id, context="/reminder set")
            await ctx.followup.send("**ERROR**: Your reminder could not be saved.", ephemeral=True)
            return

        timezone_name = self.services.tracker.config.timezone
        await ctx.followup.send(
            REMINDER_SET_MESSAGE.format(time=alarm.time, timezone=timezone_name), ephemeral=True
        )

    # ------------------------------------------------------------------
    # /entry
    # ------------------------------------------------------------------
    @entry.command(name="create", description="Create your entry thread for today")
    async def entry_create(self, ctx: discord.ApplicationContext):
        await ctx.defer(ephemeral=True)
        try:
            thread = await self.services.entries.create_entry(ctx.author)
        except EntryServiceError as e:
            await ctx.followup.send(e.message, ephemeral=True)
            return
        except GatewayError as e:
            logger.error(f"Entry creation failed for {ctx.author.name}: {e}")
            await self.services.error_reports.report(e, user_id=ctx.author.id, context="/entry create")
            await ctx.followup.send(ENTRY_CREATE_FAILED_MESSAGE, ephemeral=True)
            return

        await ctx.followup.send(ENTRY_CREATED_MESSAGE.format(url=thread.jump_url), ephemeral=True)

    @entry.command(name="list", description="Receive a list of your entries by direct message")
    async def entry_list(self, ctx: discord.ApplicationContext):
        await ctx.defer(ephemeral=True)
        await self.services.entries.list_entries(ctx.author)
        await ctx.followup.send(ENTRIES_SENT_MESSAGE, ephemeral=True)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        """Replies inside daily threads are submissions."""
        if message.author.bot or message.reference is None:
            return
        if not isinstance(message.channel, discord.Thread):
            return
        if message.channel.parent_id != self.services.tracker.config.threads_channel_id:
            return

        result = await self.services.entries.handle_reply(message)
        logger.debug(f"Reply {message.id} in {message.channel.name}: {result.outcome.value}")


def setup(bot):
    """Add the cog; py-cord expects a synchronous setup function."""
    bot.add_cog(TrackerCog(bot))
    logger.info("TrackerCog added to bot")
