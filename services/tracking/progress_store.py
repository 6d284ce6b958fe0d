# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""In-memory progress state for every participant.

The store is a materialized view of the daily threads: it can be rebuilt
from scratch at any time with :meth:`ProgressStore.rebuild_from_resources`
and :meth:`ProgressStore.rebuild_history`.  All methods are synchronous and
never raise for bad external data; callers serialize access (see
:mod:`services.tracking.tracker_service`).
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Union

from services.exceptions import DayOutOfRangeError
from utils.logging_utils import get_module_logger

from .day_clock import DayClock
from .models import (
    CHALLENGE_DAYS,
    DEFAULT_CHEAT_DAYS,
    DailyResource,
    DayState,
    GuildMember,
    Participant,
    default_history,
)

logger = get_module_logger("tracking.progress_store")

MemberLike = Union[str, GuildMember]


class ProgressStore:
    """Owns the participant records: today's status, the history grid and cheat days."""

    def __init__(
        self,
        clock: DayClock,
        *,
        challenge_days: int = CHALLENGE_DAYS,
        initial_cheat_days: int = DEFAULT_CHEAT_DAYS,
    ) -> None:
        self._clock = clock
        self._challenge_days = challenge_days
        self._initial_cheat_days = initial_cheat_days
        self._participants: Dict[str, Participant] = {}
        self._aliases: Dict[str, str] = {}
        self._unclaimed_cheat_days: Dict[str, int] = {}

    @property
    def clock(self) -> DayClock:
        return self._clock

    @property
    def challenge_days(self) -> int:
        return self._challenge_days

    def __contains__(self, name: str) -> bool:
        return name in self._participants

    def __len__(self) -> int:
        return len(self._participants)

    def names(self) -> List[str]:
        return sorted(self._participants, key=lambda name: (name.casefold(), name))

    # ------------------------------------------------------------------
    # Participant resolution
    # ------------------------------------------------------------------
    def register_alias(self, alias: str, name: str) -> None:
        if alias:
            self._aliases.setdefault(alias.casefold(), name)

    def resolve_name(self, raw: str) -> str:
        """Map a username or display name (any case) to the tracked participant name."""
        if raw in self._participants:
            return raw
        resolved = self._aliases.get(raw.casefold())
        if resolved is None:
            logger.debug("No participant registered for '%s'; tracking it as-is", raw)
            return raw
        return resolved

    def _ensure(self, name: str, current_day: int) -> Participant:
        participant = self._participants.get(name)
        if participant is None:
            participant = Participant(
                name=name,
                history=default_history(current_day, self._challenge_days),
                cheat_days_available=self._unclaimed_cheat_days.pop(
                    name.casefold(), self._initial_cheat_days
                ),
            )
            self._participants[name] = participant
            self.register_alias(name, name)
        return participant

    def check_day(self, resource: DailyResource, current_day: int) -> None:
        """Raise :class:`DayOutOfRangeError` unless the thread's day is within ``1..min(current_day, challenge_days)``."""
        if resource.day < 1 or resource.day > self._challenge_days or resource.day > current_day:
            raise DayOutOfRangeError(
                f"Day {resource.day} for {resource.participant} is outside 1..{self._challenge_days} "
                f"(current day {current_day})",
                details={'day': resource.day, 'current_day': current_day},
            )

    def _in_range(self, resource: DailyResource, current_day: int) -> bool:
        try:
            self.check_day(resource, current_day)
        except DayOutOfRangeError as e:
            logger.debug("Skipping thread: %s", e.message)
            return False
        return True

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    def scan_membership(self, members: Iterable[MemberLike], now: Optional[datetime] = None) -> int:
        """Create records for members not seen before; returns how many were added.

        Bots are skipped.  Existing participants are left untouched.
        """
        current_day = self._clock.current_day_index(now)
        added = 0

        for member in members:
            if isinstance(member, str):
                name = member
                aliases = [member]
            else:
                if member.is_bot:
                    continue
                name = member.display_name or member.name
                aliases = [name, member.name]

            if name not in self._participants:
                self._ensure(name, current_day)
                added += 1
            for alias in aliases:
                self.register_alias(alias, name)

        if added:
            logger.info("Tracking %d new participant(s); %d total", added, len(self._participants))
        return added

    # ------------------------------------------------------------------
    # Full rebuilds
    # ------------------------------------------------------------------
    def rebuild_from_resources(
        self, resources: Iterable[DailyResource], now: Optional[datetime] = None
    ) -> None:
        """Recompute every participant's status for today from the thread list.

        A participant is completed when any of today's threads for them is
        archived, whatever order the threads arrive in.
        """
        today_tag = self._clock.date_tag(now)
        current_day = self._clock.current_day_index(now)

        for participant in self._participants.values():
            participant.current_status = False

        completed: Dict[str, bool] = {}
        for resource in resources:
            if resource.date_tag != today_tag:
                continue
            if not self._in_range(resource, current_day):
                continue
            name = self.resolve_name(resource.participant)
            completed[name] = completed.get(name, False) or resource.archived

        for name, is_completed in completed.items():
            self._ensure(name, current_day).current_status = is_completed
            logger.debug(
                "Set %s status to %s", name, "COMPLETED" if is_completed else "NOT COMPLETED"
            )

    def rebuild_history(self, resources: Iterable[DailyResource], current_day: int) -> None:
        """Recompute every history grid from the thread list.

        Every thread for a day in ``1..current_day`` marks that day completed;
        later or out-of-range days are ignored.
        """
        for participant in self._participants.values():
            participant.history = default_history(current_day, self._challenge_days)

        for resource in resources:
            if not self._in_range(resource, current_day):
                continue
            participant = self._ensure(self.resolve_name(resource.participant), current_day)
            participant.history[resource.day - 1] = DayState.completed(resource.day)

    # ------------------------------------------------------------------
    # Incremental updates
    # ------------------------------------------------------------------
    def mark_completed(self, name: str, now: Optional[datetime] = None) -> Participant:
        """Flag *name* as completed today and record the previous day's slot."""
        current_day = self._clock.current_day_index(now)
        participant = self._ensure(self.resolve_name(name), current_day)
        participant.current_status = True

        day = current_day - 1
        if 1 <= day <= self._challenge_days:
            participant.history[day - 1] = DayState.completed(day)
        return participant

    def reset_all(self) -> None:
        for participant in self._participants.values():
            participant.current_status = False

    def finalize_missed_day(self, now: Optional[datetime] = None) -> int:
        """Turn unresolved future slots up to yesterday into missed days; returns slots changed."""
        limit = min(self._clock.current_day_index(now) - 1, self._challenge_days)
        changed = 0
        for participant in self._participants.values():
            for index in range(limit):
                if participant.history[index].is_future:
                    participant.history[index] = DayState.missed()
                    changed += 1
        return changed

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_status(self, name: str) -> Optional[bool]:
        participant = self._participants.get(self.resolve_name(name))
        return participant.current_status if participant else None

    def snapshot(self) -> List[Participant]:
        """Copies of every participant, sorted by name."""
        return [self._participants[name].copy() for name in self.names()]

    # ------------------------------------------------------------------
    # Cheat days
    # ------------------------------------------------------------------
    def cheat_days(self, name: str) -> int:
        participant = self._participants.get(self.resolve_name(name))
        if participant is None:
            return self._unclaimed_cheat_days.get(name.casefold(), self._initial_cheat_days)
        return participant.cheat_days_available

    def use_cheat_day(self, name: str) -> bool:
        participant = self._participants.get(self.resolve_name(name))
        if participant is None or participant.cheat_days_available <= 0:
            return False
        participant.cheat_days_available -= 1
        return True

    def load_cheat_days(self, ledger: Mapping[str, int]) -> None:
        """Apply a persisted ledger; names not tracked yet are applied once they appear."""
        for raw_name, available in ledger.items():
            available = max(0, min(int(available), self._initial_cheat_days))
            participant = self._participants.get(self.resolve_name(raw_name))
            if participant is None:
                self._unclaimed_cheat_days[raw_name.casefold()] = available
            else:
                participant.cheat_days_available = available

    def cheat_ledger(self) -> Dict[str, int]:
        return {name: self._participants[name].cheat_days_available for name in self.names()}
