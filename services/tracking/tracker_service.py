# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""
Tracker Service

Owns the progress store and is the single serialization point for every
mutation of it:
- Startup: member scan, rebuild of today's statuses and the history grid
- Incremental: completion marking, cheat day consumption
- Daily: reset (once per date) and finalize (once per date)
- Rendering: status and history panels published through the gateway

A rebuild holds the lock across its Discord round-trips, so a completion
arriving mid-rebuild is applied after it.  Panels are rendered from a
snapshot taken under the lock and published outside it.
"""

import asyncio
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from services.config.config_service import TrackerConfig
from services.exceptions import GatewayError, MissingConfigError, RenderError, ThreadNameParseError
from services.scheduling.runtime import SchedulerRuntime, get_scheduler_runtime
from utils.logging_utils import get_module_logger

from . import thread_names
from .day_clock import DayClock
from .models import DailyResource, GuildMember, Participant
from .progress_store import ProgressStore
from .rendering import render_history_panel, render_status_panel

logger = get_module_logger('tracking.tracker_service')


class TrackerService:
    """Async facade over :class:`ProgressStore` bound to one Discord guild."""

    def __init__(
        self,
        gateway: Any,
        config: TrackerConfig,
        *,
        store: Optional[ProgressStore] = None,
        runtime: Optional[SchedulerRuntime] = None,
    ):
        self.gateway = gateway
        self.config = config
        self.clock = DayClock(config.campaign_start, config.timezone)
        self.store = store or ProgressStore(
            self.clock,
            challenge_days=config.challenge_days,
            initial_cheat_days=config.initial_cheat_days,
        )
        self.runtime = runtime or get_scheduler_runtime()
        self.message_ids: Dict[str, Optional[int]] = {
            'statuses': config.statuses_message_id,
            'history': config.history_message_id,
        }
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------
    async def setup(self, now: Optional[datetime] = None) -> None:
        logger.info("Setting up tracker.")
        await self.scan_all_users(now)
        await self.rebuild(now)
        await self.refresh_panels(now)
        logger.info("Tracker was set up correctly.")

    async def scan_all_users(self, now: Optional[datetime] = None) -> int:
        try:
            members = await self.gateway.list_group_members()
        except (MissingConfigError, GatewayError) as e:
            logger.error(f"Failed to scan users: {e}")
            return 0

        async with self._lock:
            added = self.store.scan_membership(members, now)
        logger.info(f"Scanned {len(members)} users ({added} new).")
        return added

    async def collect_raw_resources(self) -> List[Any]:
        """Every active and archived thread of the entries channel.

        Archived pages are bounded by ``archived_max_pages``; a failing page
        ends pagination with what was collected so far.
        """
        raw = list(await self.gateway.list_active_resources())

        cursor = None
        for page_number in range(self.config.archived_max_pages):
            try:
                page = await self.gateway.list_archived_resources(before=cursor)
            except GatewayError as e:
                logger.warning(f"Stopping archived thread pagination at page {page_number + 1}: {e}")
                break
            raw.extend(page.resources)
            if not page.has_more:
                break
            cursor = page.next_cursor
        else:
            logger.warning(
                f"Archived thread pagination stopped after {self.config.archived_max_pages} pages"
            )
        return raw

    async def collect_resources(self) -> List[DailyResource]:
        """Decoded threads; names matching neither encoding are skipped."""
        resources = []
        for item in await self.collect_raw_resources():
            try:
                resources.append(thread_names.parse(item.name, resource_id=item.id))
            except ThreadNameParseError as e:
                logger.debug(f"Skipping thread: {e.message}")
        return resources

    async def rebuild(self, now: Optional[datetime] = None) -> bool:
        """Recompute statuses and history from Discord; returns ``False`` when nothing was fetched."""
        async with self._lock:
            try:
                resources = await self.collect_resources()
            except (MissingConfigError, GatewayError) as e:
                logger.error(f"Could not rebuild from threads: {e}")
                return False

            current_day = self.clock.current_day_index(now)
            self.store.rebuild_from_resources(resources, now)
            self.store.rebuild_history(resources, current_day)
            self.runtime.mark_reset(self.clock.iso_tag(now))

        logger.info(f"Rebuilt statuses and history from {len(resources)} threads (day {current_day}).")
        return True

    # ------------------------------------------------------------------
    # Incremental updates
    # ------------------------------------------------------------------
    async def mark_completed(self, name: str, now: Optional[datetime] = None) -> None:
        async with self._lock:
            participant = self.store.mark_completed(name, now)
        logger.info(f"Marked {participant.name} as completed.")
        await self.refresh_panels(now)

    async def reset_for_new_day(self, now: Optional[datetime] = None) -> bool:
        """Reset today's statuses unless already done for today's date."""
        iso_date = self.clock.iso_tag(now)
        async with self._lock:
            if not self.runtime.needs_reset(iso_date):
                return False
            self.store.reset_all()
            self.runtime.mark_reset(iso_date)
        logger.info(f"Daily reset completed for {iso_date}.")
        await self.refresh_status_panel(now)
        return True

    async def finalize_day(self, now: Optional[datetime] = None) -> bool:
        """Turn unresolved past days into missed days, once per date."""
        iso_date = self.clock.iso_tag(now)
        async with self._lock:
            if not self.runtime.needs_finalize(iso_date):
                return False
            changed = self.store.finalize_missed_day(now)
            self.runtime.mark_finalized(iso_date)
        logger.info(f"Finalized {iso_date}: {changed} slot(s) marked missed.")
        await self.refresh_history_panel(now)
        return True

    async def consume_cheat_day(self, member: GuildMember) -> Tuple[bool, int]:
        """Take one cheat day from *member*; returns ``(used, remaining)``.

        A member who joined after the last scan is registered first.
        """
        async with self._lock:
            self.store.scan_membership([member])
            used = self.store.use_cheat_day(member.display_name)
            return used, self.store.cheat_days(member.display_name)

    async def load_cheat_days(self, ledger: Mapping[str, int]) -> None:
        async with self._lock:
            self.store.load_cheat_days(ledger)

    async def cheat_ledger(self) -> Dict[str, int]:
        async with self._lock:
            return self.store.cheat_ledger()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_user_status(self, name: str) -> Optional[bool]:
        return self.store.get_status(name)

    def get_cheat_days(self, name: str) -> int:
        return self.store.cheat_days(name)

    def current_day(self, now: Optional[datetime] = None) -> int:
        return self.clock.current_day_index(now)

    async def snapshot(self) -> List[Participant]:
        async with self._lock:
            return self.store.snapshot()

    # ------------------------------------------------------------------
    # Panels
    # ------------------------------------------------------------------
    async def refresh_panels(self, now: Optional[datetime] = None) -> None:
        await self.refresh_status_panel(now)
        await self.refresh_history_panel(now)

    async def refresh_status_panel(self, now: Optional[datetime] = None) -> None:
        participants = await self.snapshot()
        await self._publish('statuses', render_status_panel(participants, self.clock.local_now(now)))

    async def refresh_history_panel(self, now: Optional[datetime] = None) -> None:
        participants = await self.snapshot()
        current_day = self.clock.current_day_index(now)
        await self._publish('history', render_history_panel(participants, current_day))

    async def _publish(self, panel: str, content: str) -> None:
        try:
            channel_id = self.config.require('statuses_channel_id')
        except MissingConfigError as e:
            logger.error(f"Cannot publish {panel} panel: {e}")
            return

        try:
            self.message_ids[panel] = await self.gateway.publish_or_update(
                channel_id, self.message_ids.get(panel), content
            )
        except RenderError as e:
            logger.error(f"Failed to publish {panel} panel, it stays stale until the next update: {e}")
