# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""
Entry Service

Discord side of the daily entries:
- Creating today's private thread with one embed per requirement
- Listing a member's threads by DM
- Checking replies against requirement embeds, striking satisfied ones
- Archiving a thread once every requirement is struck and marking the
  participant completed
"""

import asyncio
import random
from datetime import datetime
from typing import Any, Dict, List, Optional, Set

import discord

from services.config.config_service import RequirementSpec
from services.exceptions import DeliveryError, EntryServiceError, GatewayError
from services.tracking import thread_names
from services.tracking.models import DailyResource
from utils.logging_utils import get_module_logger

from .requirements import (
    DailyEntry,
    RequirementKind,
    RequirementRecord,
    Submission,
    SubmissionOutcome,
    SubmissionResult,
    is_struck,
    strike,
)

logger = get_module_logger('entries.entry_service')

COMPLETED_REACTION = "✅"
INVALID_ENTRY_MESSAGE = "Invalid entry format. Please check the requirements."
ENTRY_EXISTS_MESSAGE = "**ERROR**: You already have an entry for today."
NO_ENTRIES_MESSAGE = "**ERROR**: There were no hard 75 entries found for you."
ENTRY_HISTORY_LIMIT = 100

_EMBED_COLORS = (0x1ABC9C, 0x3498DB, 0x9B59B6, 0xE67E22, 0xE91E63, 0xF1C40F)
_DISCORD_ERRORS = (discord.Forbidden, discord.NotFound, discord.HTTPException)


def requirement_embed(requirement: RequirementSpec, color: Optional[int] = None) -> discord.Embed:
    kind = RequirementKind.parse(requirement.kind)
    embed = discord.Embed(
        title=f"✳ {requirement.name}",
        description=f"☰ {requirement.description}" if requirement.description else None,
        color=color if color is not None else random.choice(_EMBED_COLORS),
    )
    embed.add_field(name="\u200b", value=f"⇥ __{kind.requirement_text}__", inline=False)
    return embed


def record_from_message(message: Any) -> Optional[RequirementRecord]:
    """Requirement record carried by a bot message's first embed, if any."""
    if not message.embeds:
        return None
    embed = message.embeds[0]
    title = embed.title or ""
    field_value = embed.fields[0].value if embed.fields else ""
    return RequirementRecord(
        record_id=message.id,
        title=title.strip("~") if is_struck(title) else title,
        kind=RequirementKind.from_field_value(field_value or ""),
        complete=is_struck(title),
    )


def submission_from_message(message: Any) -> Submission:
    return Submission(
        text=message.content or "",
        attachment_types=tuple(attachment.content_type or "" for attachment in message.attachments),
    )


def format_entry_list(entries: List[Any]) -> str:
    """``DAYNN - url`` lines sorted by day for ``(DailyResource, url)`` pairs."""
    lines = [
        f"DAY{resource.day:02d} - {url}"
        for resource, url in sorted(entries, key=lambda pair: pair[0].day)
    ]
    return "## Entries\n" + "\n".join(lines)


class EntryService:
    """Creates daily threads and turns replies into completions."""

    def __init__(self, gateway: Any, tracker: Any):
        self.gateway = gateway
        self.tracker = tracker
        self._thread_locks: Dict[int, asyncio.Lock] = {}
        self._archived_ids: Set[int] = set()

    @property
    def config(self):
        return self.tracker.config

    # ------------------------------------------------------------------
    # Creation and listing
    # ------------------------------------------------------------------
    async def _member_resources(self, user: Any) -> List[Any]:
        """``(DailyResource, jump_url)`` pairs for every thread belonging to *user*."""
        names = {user.name.casefold(), getattr(user, 'display_name', user.name).casefold()}
        pairs = []
        for raw in await self.tracker.collect_raw_resources():
            resource = thread_names.decode(raw.name, resource_id=raw.id)
            if resource is not None and resource.participant.casefold() in names:
                pairs.append((resource, raw.jump_url))
        return pairs

    async def create_entry(self, member: Any, now: Optional[datetime] = None) -> Any:
        """Create today's thread for *member*.

        Raises:
            EntryServiceError: when the member already has a thread for today
            GatewayError: when Discord refuses the thread
        """
        clock = self.tracker.clock
        date_tag = clock.date_tag(now)
        day = clock.current_day_index(now)

        existing = [
            resource for resource, _ in await self._member_resources(member)
            if resource.date_tag == date_tag
        ]
        if existing:
            raise EntryServiceError(ENTRY_EXISTS_MESSAGE, details={'user_id': member.id, 'day': day})

        name = thread_names.encode(day, member.name, date_tag)
        thread = await self.gateway.create_daily_thread(name)
        try:
            await thread.add_user(member)
            for requirement in self.config.requirements:
                await thread.send(embed=requirement_embed(requirement))
        except _DISCORD_ERRORS as e:
            raise GatewayError(f"Could not prepare thread {name}: {e}", details={'thread_id': thread.id})

        logger.info(f"Created thread: {name} for {member.name}.")
        return thread

    async def list_entries(self, user: Any) -> int:
        """DM *user* the list of their entries; returns how many were listed."""
        pairs = await self._member_resources(user)
        text = format_entry_list(pairs) if pairs else NO_ENTRIES_MESSAGE
        try:
            await self.gateway.send_direct_message(user.id, text)
        except DeliveryError as e:
            logger.error(f"Could not DM entries to user {user.id}: {e}")
        return len(pairs)

    # ------------------------------------------------------------------
    # Replies
    # ------------------------------------------------------------------
    async def load_entry(self, thread: Any, resource: DailyResource) -> DailyEntry:
        records = []
        async for message in thread.history(limit=ENTRY_HISTORY_LIMIT):
            if not message.author.bot:
                continue
            record = record_from_message(message)
            if record is not None:
                records.append(record)
        return DailyEntry(name=thread.name, requirements=records, archived=resource.archived)

    async def handle_reply(self, message: Any) -> SubmissionResult:
        """Check a reply inside a daily thread against the requirement it answers.

        Replies to one thread are handled one at a time, and the records are
        re-read after every strike, so the reply that finishes the entry
        archives it whichever order the replies land in.
        """
        if message.author.bot or message.reference is None or message.reference.message_id is None:
            return SubmissionResult(SubmissionOutcome.IGNORED)

        thread = message.channel
        resource = thread_names.decode(getattr(thread, 'name', ''), resource_id=getattr(thread, 'id', None))
        if resource is None:
            return SubmissionResult(SubmissionOutcome.IGNORED, reason="not a daily thread")

        async with self._thread_lock(thread.id):
            if thread.id in self._archived_ids:
                return SubmissionResult(SubmissionOutcome.IGNORED, reason="entry is archived")

            try:
                entry = await self.load_entry(thread, resource)
                result = entry.submit(message.reference.message_id, submission_from_message(message))

                if result.outcome is SubmissionOutcome.REJECTED:
                    await message.reply(INVALID_ENTRY_MESSAGE)
                elif result.outcome in (SubmissionOutcome.ACCEPTED, SubmissionOutcome.ENTRY_COMPLETE):
                    await self._strike_requirement(thread, result.record)
                    await message.add_reaction(COMPLETED_REACTION)

                if result.outcome in (SubmissionOutcome.ACCEPTED, SubmissionOutcome.ALREADY_COMPLETE):
                    result = await self._recheck_entry(thread, resource, result)
            except _DISCORD_ERRORS as e:
                logger.error(f"Failed to process reply {message.id} in {thread.name}: {e}", exc_info=True)
                return SubmissionResult(SubmissionOutcome.IGNORED, reason=str(e))

            if result.archive_required:
                self._archived_ids.add(thread.id)
                await self.archive(thread.id, thread.name, resource)
        return result

    def _thread_lock(self, thread_id: int) -> asyncio.Lock:
        lock = self._thread_locks.get(thread_id)
        if lock is None:
            lock = self._thread_locks[thread_id] = asyncio.Lock()
        return lock

    async def _recheck_entry(
        self, thread: Any, resource: DailyResource, result: SubmissionResult
    ) -> SubmissionResult:
        """Promote *result* to ENTRY_COMPLETE when the re-read thread has every requirement struck."""
        entry = await self.load_entry(thread, resource)
        if entry.evaluate():
            logger.info(f"Every requirement of {thread.name} is complete.")
            return SubmissionResult(SubmissionOutcome.ENTRY_COMPLETE, result.record)
        return result

    async def _strike_requirement(self, thread: Any, record: RequirementRecord) -> None:
        requirement_message = await thread.fetch_message(record.record_id)
        embed = requirement_message.embeds[0].copy()
        embed.title = strike(embed.title or record.title)
        await requirement_message.edit(embed=embed)

    async def archive(self, thread_id: int, thread_name: str, resource: DailyResource) -> None:
        """Rename, lock and archive a completed thread, then mark its owner completed."""
        try:
            await self.gateway.rename(thread_id, thread_names.archived_name(thread_name))
            await self.gateway.set_locked(thread_id, True)
            await self.gateway.set_archived(thread_id, True)
            logger.info(f"Archived thread {thread_name}.")
        except GatewayError as e:
            logger.error(f"Failed to archive thread {thread_name}: {e}")

        await self.tracker.mark_completed(resource.participant)
