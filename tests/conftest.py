# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Global pytest configuration and fixtures for all test suites.

Discord is never contacted: services talk to :class:`FakeGateway`, an
in-memory stand-in for ``services.discord.guild_gateway.GuildGateway``.
"""

import os
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Test environment setup
os.environ["TESTING"] = "true"

from services.config.config_service import (  # noqa: E402
    RequirementSpec,
    TrackerConfig,
    reset_config_service,
)
from services.discord.guild_gateway import ArchivedPage, RawResource  # noqa: E402
from services.exceptions import DeliveryError, GatewayError, RenderError  # noqa: E402
from services.scheduling.runtime import SchedulerRuntime, reset_scheduler_runtime  # noqa: E402
from services.tracking.day_clock import DayClock  # noqa: E402
from services.tracking.progress_store import ProgressStore  # noqa: E402

CAMPAIGN_START = date(2025, 10, 4)
TIMEZONE = "America/Los_Angeles"

# Noon in Los Angeles on 2025-10-08, challenge day 5
DAY_5_NOON = datetime(2025, 10, 8, 19, 0, tzinfo=timezone.utc)
DAY_5_TAG = "10-08-25"


class FakeThread:
    """Thread returned by ``FakeGateway.create_daily_thread``."""

    def __init__(self, thread_id: int, name: str):
        self.id = thread_id
        self.name = name
        self.jump_url = f"https://discord.com/channels/1/{thread_id}"
        self.added_users = []
        self.sent = []

    async def add_user(self, user):
        self.added_users.append(user)

    async def send(self, content=None, embed=None):
        self.sent.append(content if embed is None else embed)


class FakeGateway:
    """In-memory guild: members, thread pages, published messages and DMs."""

    def __init__(self, config: TrackerConfig):
        self.config = config
        self.members = []
        self.active: List[RawResource] = []
        self.archived_pages: List[List[RawResource]] = []
        self.fail_archived_from: Optional[int] = None
        self.archived_requests = 0
        self.messages: Dict[int, str] = {}
        self.publish_calls = []
        self.fail_publish = False
        self.recent_messages: Dict[int, list] = {}
        self.direct_messages = []
        self.undeliverable = set()
        self.sent = []
        self.created_threads: List[FakeThread] = []
        self.thread_changes = []
        self._next_id = 5000

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    async def list_group_members(self):
        return list(self.members)

    async def list_active_resources(self):
        return list(self.active)

    async def list_archived_resources(self, before=None, limit=None):
        index = before or 0
        self.archived_requests += 1
        if self.fail_archived_from is not None and index >= self.fail_archived_from:
            raise GatewayError(f"archived page {index} unavailable")
        if index >= len(self.archived_pages):
            return ArchivedPage(resources=[], next_cursor=None)
        next_cursor = index + 1 if index + 1 < len(self.archived_pages) else None
        return ArchivedPage(resources=list(self.archived_pages[index]), next_cursor=next_cursor)

    async def rename(self, resource_id, new_name):
        self.thread_changes.append(("rename", resource_id, new_name))

    async def set_locked(self, resource_id, locked):
        self.thread_changes.append(("locked", resource_id, locked))

    async def set_archived(self, resource_id, archived):
        self.thread_changes.append(("archived", resource_id, archived))

    async def create_daily_thread(self, name):
        thread = FakeThread(self._new_id(), name)
        self.created_threads.append(thread)
        return thread

    async def send_direct_message(self, user_id, text):
        if user_id in self.undeliverable:
            raise DeliveryError(f"Cannot DM user {user_id}")
        self.direct_messages.append((user_id, text))

    async def send_message(self, channel_id, content=None, embed=None):
        self.sent.append((channel_id, content, embed))
        return SimpleNamespace(id=self._new_id())

    async def fetch_recent_messages(self, channel_id, limit=50):
        return list(self.recent_messages.get(channel_id, []))[:limit]

    async def publish_or_update(self, channel_id, message_id, content):
        if self.fail_publish:
            raise RenderError("publish failed")
        if message_id is None or message_id not in self.messages:
            message_id = self._new_id()
        self.messages[message_id] = content
        self.publish_calls.append((channel_id, message_id, content))
        return message_id


def bot_message(message_id: int, content: str, *, bot: bool = True):
    return SimpleNamespace(id=message_id, content=content, author=SimpleNamespace(bot=bot))


def raw(thread_id: int, name: str) -> RawResource:
    return RawResource(id=thread_id, name=name, jump_url=f"https://discord.com/channels/1/{thread_id}")


def participant_of(store, name: str):
    """Copy of the tracked participant *name* taken from the store snapshot."""
    return next((p for p in store.snapshot() if p.name == name), None)


@pytest.fixture(autouse=True)
def reset_shared_services():
    """Module-level services never leak between tests."""
    reset_config_service()
    reset_scheduler_runtime()
    yield
    reset_config_service()
    reset_scheduler_runtime()


@pytest.fixture
def tracker_config() -> TrackerConfig:
    return TrackerConfig(
        guild_id=1,
        threads_channel_id=10,
        statuses_channel_id=20,
        cheat_day_ref_channel_id=30,
        alarms_ref_channel_id=40,
        error_channel_id=50,
        timezone=TIMEZONE,
        campaign_start=CAMPAIGN_START,
        requirements=(
            RequirementSpec(name="Workout", description="45 minutes", kind="either"),
            RequirementSpec(name="Progress picture", kind="image"),
        ),
    )


@pytest.fixture
def clock() -> DayClock:
    return DayClock(CAMPAIGN_START, TIMEZONE)


@pytest.fixture
def store(clock) -> ProgressStore:
    return ProgressStore(clock, challenge_days=75, initial_cheat_days=3)


@pytest.fixture
def runtime() -> SchedulerRuntime:
    return SchedulerRuntime()


@pytest.fixture
def gateway(tracker_config) -> FakeGateway:
    return FakeGateway(tracker_config)
